from typing import Any, List, Protocol

from vidsearch.domain.models.search import ProviderPage, SearchOptions


class SearchProvider(Protocol):
    """视频搜索提供者API接口协议"""

    async def search(self, term: str, options: SearchOptions) -> ProviderPage:
        """传递搜索词+分页参数发起一次新的搜索"""
        ...

    async def continue_search(self, continuation: List[Any]) -> ProviderPage:
        """传递上一页返回的continuation结构继续搜索下一页"""
        ...
