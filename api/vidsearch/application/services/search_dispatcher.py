import asyncio
import logging

from vidsearch.application.errors.exceptions import ProviderError
from vidsearch.domain.external.search import SearchProvider
from vidsearch.domain.models.continuation import ContinuationRequest, SearchResultPage
from vidsearch.domain.models.search import ProviderPage, SearchOptions
from vidsearch.domain.services.continuation import (
    encode_continuation,
    validate_continuation,
)

logger = logging.getLogger(__name__)


class SearchDispatcher:
    """根据请求决定发起新搜索还是继续上一次搜索，每次请求只调用一次提供者"""

    def __init__(
        self,
        provider: SearchProvider,
        term: str,
        options: SearchOptions,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._provider = provider
        self._term = term
        self._options = options
        self._timeout_seconds = float(timeout_seconds)

    async def _call_provider(self, request: ContinuationRequest) -> ProviderPage:
        if request.is_fresh:
            logger.info(
                "发起新搜索: term=%s, limit=%d, pages=%d",
                self._term,
                self._options.limit,
                self._options.pages,
            )
            return await self._provider.search(self._term, self._options)

        logger.info("根据continuation继续搜索, 元素数: %d", len(request.continuation))
        return await self._provider.continue_search(request.continuation)

    async def dispatch(self, request: ContinuationRequest) -> SearchResultPage:
        """调用搜索提供者并将下一页的continuation重新编码后返回

        Raises:
            ProviderError: 提供者调用失败、超时或返回了非法的continuation
        """
        # 1.在超时范围内调用提供者，取消信号直接向上传递
        try:
            async with asyncio.timeout(self._timeout_seconds):
                page = await self._call_provider(request)
        except ProviderError:
            raise
        except TimeoutError:
            logger.error("搜索提供者调用超时: %.1fs", self._timeout_seconds)
            raise ProviderError(
                f"Search provider timed out after {self._timeout_seconds:g}s"
            )
        except Exception as e:
            logger.error(f"搜索提供者调用出错: {str(e)}")
            raise ProviderError(str(e) or e.__class__.__name__) from e

        # 2.没有下一页时continuation为null
        if page.continuation is None:
            return SearchResultPage(items=page.items, continuation=None)

        # 3.下一页的continuation同样需要通过结构校验才能返回
        checked = validate_continuation(page.continuation)
        if not checked.success:
            logger.error(
                "搜索提供者返回了非法的continuation, 问题数: %d", len(checked.issues)
            )
            raise ProviderError("Search provider returned an invalid continuation")

        return SearchResultPage(
            items=page.items,
            continuation=encode_continuation(checked.data),
        )
