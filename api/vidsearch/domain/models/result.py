from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from vidsearch.domain.models.continuation import ValidationIssue

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """校验结果Domain模型，成功时携带data，失败时携带完整的问题列表"""

    success: bool = True  # 是否校验通过
    data: Optional[T] = None  # 校验通过后的数据
    issues: List[ValidationIssue] = Field(default_factory=list)  # 校验问题列表

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, issues: List[ValidationIssue]) -> "Result[T]":
        return cls(success=False, issues=issues)
