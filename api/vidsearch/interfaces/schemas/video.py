from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from vidsearch.domain.models.continuation import ValidationIssue


class VideoListMetadata(BaseModel):
    """视频列表元信息"""

    continuation: Optional[str] = None  # 下一页的continuation令牌，没有下一页时为null


class VideoListResponse(BaseModel):
    """视频列表响应结构"""

    data: List[Any] = Field(default_factory=list)
    metadata: VideoListMetadata = Field(default_factory=VideoListMetadata)


class ValidationErrorResponse(BaseModel):
    """参数校验失败响应结构，zodIssues沿用前端已有的字段名"""

    message: str = "Validation failed"
    zodIssues: List[ValidationIssue] = Field(default_factory=list)


class ErrorDetailsResponse(BaseModel):
    """通用错误响应结构"""

    message: str = "Internal server error"
    details: Dict[str, Any] = Field(default_factory=dict)
