from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class IssueCode(str, Enum):
    """continuation校验问题类型"""

    INVALID_BASE64 = "invalid_base64"
    MALFORMED_JSON = "malformed_json"
    SCHEMA_VIOLATION = "schema_violation"


class ValidationIssue(BaseModel):
    """单条校验问题，path记录参数名、数组下标与字段"""

    code: IssueCode
    path: List[Union[str, int]] = Field(default_factory=list)
    message: str
    type: Optional[str] = None  # 底层校验器给出的错误类型，例如missing/string_type


class _ContinuationModel(BaseModel):
    # 严格匹配类型，未知字段直接忽略
    model_config = ConfigDict(strict=True, extra="ignore")


class ClientInfo(_ContinuationModel):
    """InnerTube客户端信息"""

    utcOffsetMinutes: float
    gl: str
    hl: str
    clientName: str
    clientVersion: str


class ClientContext(_ContinuationModel):
    """客户端上下文，user/request为开放记录，不做进一步校验"""

    client: ClientInfo
    user: Dict[str, Any]
    request: Dict[str, Any]


class RequestOptions(_ContinuationModel):
    # 字段可以缺省，但出现时必须是字符串，默认值不参与校验
    method: str = None


class SearchQuery(_ContinuationModel):
    gl: str
    hl: str
    search_query: str


class SearchState(_ContinuationModel):
    """一次搜索的状态信息，续页时会原样带回"""

    limit: None = None  # 续页时无上限，序列化为null
    safeSearch: bool
    pages: float
    requestOptions: RequestOptions = None  # 可以缺省，不接受null
    query: SearchQuery
    search: str


class ContinuationRequest(BaseModel):
    """校验通过的请求，continuation为空表示发起新的搜索"""

    continuation: Optional[List[Any]] = None

    @property
    def is_fresh(self) -> bool:
        return self.continuation is None


class SearchResultPage(BaseModel):
    """返回给调用方的一页搜索结果，continuation已经编码为base64"""

    items: List[Any] = Field(default_factory=list)
    continuation: Optional[str] = None
