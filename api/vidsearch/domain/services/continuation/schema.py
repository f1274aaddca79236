import json
import logging
from typing import Annotated, Any, List, Union

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from vidsearch.domain.models.continuation import (
    ClientContext,
    IssueCode,
    SearchState,
    ValidationIssue,
)
from vidsearch.domain.models.result import Result

logger = logging.getLogger(__name__)

# 每个元素按 字符串游标 -> 客户端上下文 -> 搜索状态 的顺序尝试匹配，第一个匹配成功的生效
ContinuationElement = Annotated[
    Union[str, ClientContext, SearchState],
    Field(union_mode="left_to_right"),
]

_continuation_adapter = TypeAdapter(List[ContinuationElement])


def _to_issues(error: PydanticValidationError, root: str) -> List[ValidationIssue]:
    return [
        ValidationIssue(
            code=IssueCode.SCHEMA_VIOLATION,
            path=[root, *item["loc"]],
            message=item["msg"],
            type=item["type"],
        )
        for item in error.errors(include_url=False)
    ]


def validate_continuation(value: Any, root: str = "continuation") -> Result[List[Any]]:
    """校验解码后的continuation结构，返回原始值或全部结构问题

    先确认值可以序列化为JSON，再以严格模式校验，不做类型转换。
    校验通过时返回的是传入的原始值而不是模型，保证令牌可以原样往返。
    """
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as e:
        return Result.fail(
            [
                ValidationIssue(
                    code=IssueCode.SCHEMA_VIOLATION,
                    path=[root],
                    message=f"Value is not JSON serializable: {e}",
                )
            ]
        )

    try:
        _continuation_adapter.validate_python(value, strict=True)
    except PydanticValidationError as e:
        issues = _to_issues(e, root)
        logger.debug("continuation结构校验失败, 问题数: %d", len(issues))
        return Result.fail(issues)

    return Result.ok(value)
