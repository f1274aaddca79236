import logging
from typing import Mapping

from vidsearch.domain.models.continuation import (
    ContinuationRequest,
    IssueCode,
    ValidationIssue,
)
from vidsearch.domain.models.result import Result
from vidsearch.domain.services.continuation import (
    MalformedJSONError,
    decode_continuation,
    is_valid_base64,
    validate_continuation,
)

logger = logging.getLogger(__name__)

CONTINUATION_PARAM = "continuation"


class RequestValidator:
    """校验视频列表接口的查询参数，不会调用任何外部服务"""

    def __init__(self, param_name: str = CONTINUATION_PARAM) -> None:
        self._param_name = param_name

    def _issue(self, code: IssueCode, message: str) -> ValidationIssue:
        return ValidationIssue(code=code, path=[self._param_name], message=message)

    def validate(self, params: Mapping[str, str]) -> Result[ContinuationRequest]:
        """按 base64检查 -> JSON解析 -> 结构校验 的顺序校验continuation，任一阶段失败即返回"""
        # 1.continuation参数可选，不存在时表示发起新的搜索
        raw = params.get(self._param_name)
        if raw is None:
            return Result.ok(ContinuationRequest())

        # 2.检查是否为规范的base64字符串
        if not is_valid_base64(raw):
            logger.info("continuation不是合法的base64字符串")
            return Result.fail(
                [self._issue(IssueCode.INVALID_BASE64, "input is not a valid Base64 string")]
            )

        # 3.解码并解析JSON，失败时给出更友好的提示
        try:
            value = decode_continuation(raw)
        except MalformedJSONError as e:
            logger.info("continuation解码后不是合法的JSON: %s", e.detail)
            return Result.fail(
                [
                    self._issue(
                        IssueCode.MALFORMED_JSON,
                        f"Decoded value is not a valid JSON object\n{e.detail}",
                    )
                ]
            )

        # 4.校验continuation结构，收集所有元素上的全部问题
        checked = validate_continuation(value, root=self._param_name)
        if not checked.success:
            logger.info("continuation结构校验失败, 问题数: %d", len(checked.issues))
            return Result.fail(checked.issues)

        return Result.ok(ContinuationRequest(continuation=checked.data))
