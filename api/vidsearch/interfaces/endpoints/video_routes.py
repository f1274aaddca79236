import asyncio
import contextlib
import logging
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, Request

from vidsearch.application.errors.exceptions import (
    ClientDisconnectedError,
    ContinuationValidationError,
)
from vidsearch.application.services.request_validator import RequestValidator
from vidsearch.application.services.search_dispatcher import SearchDispatcher
from vidsearch.core.config import get_settings
from vidsearch.interfaces.schemas import (
    ErrorDetailsResponse,
    ValidationErrorResponse,
    VideoListMetadata,
    VideoListResponse,
)
from vidsearch.interfaces.service_dependencies import (
    get_request_validator,
    get_search_dispatcher,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["视频模块"])

T = TypeVar("T")


async def _wait_for_disconnect(request: Request, interval: float) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(interval)


async def run_until_disconnected(
    request: Request, awaitable: Awaitable[T], interval: float
) -> T:
    """执行awaitable，客户端提前断开时取消它并抛出ClientDisconnectedError"""
    task = asyncio.ensure_future(awaitable)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request, interval))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        # 请求本身被取消时两个任务都需要清理
        for pending in (task, watcher):
            if not pending.done():
                pending.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await pending

    if task.cancelled():
        logger.info("客户端已断开连接，取消搜索请求: %s", request.url.path)
        raise ClientDisconnectedError()
    return task.result()


@router.get(
    "/videos.json",
    response_model=VideoListResponse,
    summary="分页获取视频搜索结果",
    description="不传continuation时发起新搜索，传入上一页返回的continuation时继续搜索下一页",
    responses={
        400: {"model": ValidationErrorResponse},
        500: {"model": ErrorDetailsResponse},
    },
    openapi_extra={
        "parameters": [
            {
                "name": "continuation",
                "in": "query",
                "required": False,
                "schema": {"type": "string"},
                "description": "上一页返回的base64编码continuation令牌",
            }
        ]
    },
)
async def list_videos(
    request: Request,
    validator: RequestValidator = Depends(get_request_validator),
    dispatcher: SearchDispatcher = Depends(get_search_dispatcher),
) -> VideoListResponse:
    """校验continuation参数并分发搜索请求"""
    # 1.校验查询参数，失败时直接返回400，不会调用搜索提供者
    result = validator.validate(request.query_params)
    if not result.success:
        raise ContinuationValidationError(result.issues)

    # 2.调用搜索并在客户端断开时取消
    settings = get_settings()
    page = await run_until_disconnected(
        request,
        dispatcher.dispatch(result.data),
        settings.disconnect_poll_interval_seconds,
    )

    # 3.组装响应数据
    return VideoListResponse(
        data=page.items,
        metadata=VideoListMetadata(continuation=page.continuation),
    )
