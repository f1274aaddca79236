from typing import Any, List

from vidsearch.domain.models.continuation import ValidationIssue


class AppException(RuntimeError):
    """基础应用异常类，继承RuntimeError"""

    def __init__(
        self,
        code: int = 400,
        status_code: int = 400,
        msg: str = "应用程序异常",
        data: Any = None,
    ):
        """构造函数，完成错误数据初始化"""
        self.code = code
        self.status_code = status_code
        self.msg = msg
        self.data = data
        super().__init__(msg)


class ContinuationValidationError(AppException):
    """continuation参数校验失败异常，data中携带完整的问题列表"""

    def __init__(
        self, issues: List[ValidationIssue], msg: str = "Validation failed"
    ):
        self.issues = issues
        super().__init__(code=400, status_code=400, msg=msg, data=issues)


class ProviderError(AppException):
    """搜索提供者调用失败异常，不做重试"""

    def __init__(self, error: str):
        self.error = error
        super().__init__(
            code=500,
            status_code=500,
            msg="Internal server error",
            data={"error": error},
        )


class ClientDisconnectedError(AppException):
    """客户端在搜索完成前断开连接"""

    def __init__(self, msg: str = "Client closed request"):
        super().__init__(code=499, status_code=499, msg=msg)
