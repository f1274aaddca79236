from .codec import (
    ContinuationCodecError,
    InvalidBase64Error,
    MalformedJSONError,
    decode_continuation,
    encode_continuation,
    is_valid_base64,
)
from .schema import validate_continuation

__all__ = [
    "ContinuationCodecError",
    "InvalidBase64Error",
    "MalformedJSONError",
    "decode_continuation",
    "encode_continuation",
    "is_valid_base64",
    "validate_continuation",
]
