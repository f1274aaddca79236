import logging

from fastapi import Depends

from vidsearch.application.services.request_validator import RequestValidator
from vidsearch.application.services.search_dispatcher import SearchDispatcher
from vidsearch.core.config import get_settings
from vidsearch.domain.external.search import SearchProvider
from vidsearch.domain.models.search import SearchOptions
from vidsearch.infrastructure.external.search.youtube_search import (
    YouTubeSearchProvider,
)

logger = logging.getLogger(__name__)


def get_search_provider() -> SearchProvider:
    """获取视频搜索提供者"""
    settings = get_settings()
    return YouTubeSearchProvider(
        base_url=settings.youtube_base_url,
        hl=settings.youtube_hl,
        gl=settings.youtube_gl,
        client_version=settings.youtube_client_version,
        safe_search_cookie=settings.youtube_safe_search_cookie,
        timeout=settings.search_timeout_seconds,
    )


def get_request_validator() -> RequestValidator:
    """获取请求参数校验器"""
    return RequestValidator()


def get_search_dispatcher(
    provider: SearchProvider = Depends(get_search_provider),
) -> SearchDispatcher:
    """获取搜索分发服务，新搜索的搜索词与分页参数均来自配置"""
    # 1.读取配置中的默认搜索参数
    settings = get_settings()
    options = SearchOptions(
        limit=settings.search_default_limit,
        pages=settings.search_default_pages,
    )

    # 2.创建服务并返回
    logger.debug("加载获取SearchDispatcher")
    return SearchDispatcher(
        provider=provider,
        term=settings.search_default_term,
        options=options,
        timeout_seconds=settings.search_timeout_seconds,
    )
