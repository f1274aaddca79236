from .base import Response
from .video import (
    ErrorDetailsResponse,
    ValidationErrorResponse,
    VideoListMetadata,
    VideoListResponse,
)

__all__ = [
    "Response",
    "ErrorDetailsResponse",
    "ValidationErrorResponse",
    "VideoListMetadata",
    "VideoListResponse",
]
