from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SearchOptions(BaseModel):
    """新搜索的分页参数"""

    limit: int = 10  # 最多返回的条目数
    pages: int = 1  # 最多请求的页数
    safe_search: bool = False  # 是否开启安全搜索


class VideoItem(BaseModel):
    """视频搜索结果条目数据模型"""

    type: str = "video"
    id: str  # 视频ID
    title: str = ""  # 视频标题
    url: str  # 视频播放地址
    thumbnail: Optional[str] = None  # 缩略图地址
    duration: Optional[str] = None  # 视频时长，例如 3:25
    views: Optional[str] = None  # 播放量文本
    author: Optional[str] = None  # 频道名称
    uploaded_at: Optional[str] = None  # 发布时间文本


class ProviderPage(BaseModel):
    """搜索提供者返回的一页数据，continuation为未编码的原始结构"""

    items: List[Dict[str, Any]] = Field(default_factory=list)  # 搜索结果列表
    continuation: Optional[List[Any]] = None  # 下一页的continuation，为空表示没有更多
