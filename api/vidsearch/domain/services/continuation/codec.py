"""continuation令牌的编解码。

令牌是紧凑的ASCII转义JSON文本再做标准base64(带=填充)的结果，
服务端不保存任何分页状态，所有状态都在令牌里往返。
"""

import base64
import binascii
import json
from typing import Any


class ContinuationCodecError(ValueError):
    """continuation编解码异常基类"""


class InvalidBase64Error(ContinuationCodecError):
    """字符串不是规范的base64"""


class MalformedJSONError(ContinuationCodecError):
    """base64解码后的内容无法解析为JSON"""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


def _reject_constant(name: str) -> Any:
    # 严格JSON不允许NaN/Infinity
    raise ValueError(f"Unexpected token {name} in JSON")


def encode_continuation(payload: Any) -> str:
    """将任意可JSON序列化的值编码为continuation令牌"""
    text = json.dumps(payload, separators=(",", ":"))
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def is_valid_base64(token: str) -> bool:
    """只有解码后再编码能得到完全相同的字符串时才视为合法base64"""
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(raw).decode("ascii") == token


def decode_continuation(token: str) -> Any:
    """将continuation令牌解码为JSON值

    Raises:
        InvalidBase64Error: 令牌不是规范的base64
        MalformedJSONError: 解码后的内容不是合法的UTF-8 JSON
    """
    if not is_valid_base64(token):
        raise InvalidBase64Error("input is not a valid Base64 string")

    raw = base64.b64decode(token, validate=True)
    try:
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedJSONError(str(e)) from e
