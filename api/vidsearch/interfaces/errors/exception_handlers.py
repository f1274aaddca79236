import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from vidsearch.application.errors.exceptions import (
    AppException,
    ContinuationValidationError,
    ProviderError,
)
from vidsearch.interfaces.schemas import ErrorDetailsResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """处理项目中所有的异常并进行统一处理，涵盖：参数校验异常、提供者异常、HTTP异常、通用异常"""

    @app.exception_handler(ContinuationValidationError)
    async def continuation_validation_handler(
        request: Request, exc: ContinuationValidationError
    ) -> JSONResponse:
        """continuation校验失败，返回400与完整的问题列表"""

        logger.warning(f"Validation failed: {len(exc.issues)} issue(s)")

        return JSONResponse(
            status_code=exc.status_code,
            content=ValidationErrorResponse(
                message=exc.msg, zodIssues=exc.issues
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(ProviderError)
    async def provider_error_handler(
        request: Request, exc: ProviderError
    ) -> JSONResponse:
        """搜索提供者调用失败，返回500并携带底层错误信息"""

        logger.error(f"Provider error: {exc.error}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetailsResponse(
                message=exc.msg, details={"error": exc.error}
            ).model_dump(),
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """自定义应用异常处理器，捕获AppException并返回标准化响应"""

        logger.error(f"App exception: {exc.msg}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetailsResponse(
                message=exc.msg, details=exc.data or {}
            ).model_dump(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """HTTP异常处理器，捕获HTTPException并返回标准化响应"""

        logger.error(f"HTTP exception: {exc.detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetailsResponse(message=str(exc.detail)).model_dump(),
        )

    @app.exception_handler(Exception)
    async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """通用异常处理器，捕获所有未处理的异常并返回标准化响应, 状态码500"""

        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content=ErrorDetailsResponse(
                details={"error": str(exc) or exc.__class__.__name__}
            ).model_dump(),
        )
