import logging
from typing import Dict

from fastapi import APIRouter

from vidsearch.core.config import get_settings
from vidsearch.interfaces.schemas import Response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/status", tags=["状态模块"])


@router.get(
    "",
    response_model=Response[Dict[str, str]],
    summary="系统健康检查",
    description="检查视频搜索API服务自身的运行状态",
)
async def get_status() -> Response:
    """系统健康检查，服务无状态，只返回fastapi自身状态"""
    settings = get_settings()
    return Response.success(
        msg="系统健康检查成功",
        data={"service": "fastapi", "status": "ok", "env": settings.env},
    )
