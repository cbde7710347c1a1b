"""HTTP 层错误及其 JSON 响应."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.logging_config import get_logger

logger = get_logger(__name__)


class ProxyHTTPError(Exception):
    """在进入翻译流程之前就需要拒绝的请求."""

    code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(ProxyHTTPError):
    """访问令牌不匹配."""

    code = 401

    def __init__(self, message: str = "Invalid access token"):
        super().__init__(message)


class ConfigurationError(ProxyHTTPError):
    """缺少接口所需的服务端配置."""

    code = 401


def error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse({"code": code, "message": message}, status_code=code)


async def proxy_error_handler(request: Request, exc: ProxyHTTPError) -> JSONResponse:
    return error_response(exc.code, exc.message)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # 路径或方法不匹配都按未找到处理
    if exc.status_code in (404, 405):
        return error_response(404, "Not Found")
    return error_response(exc.status_code, str(exc.detail))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Rejected malformed request to {request.url.path}")
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()
    )
    return error_response(400, f"Invalid request body: {fields}")


def register_exception_handlers(app: FastAPI) -> None:
    """注册统一的 {code, message} 错误响应."""
    app.add_exception_handler(ProxyHTTPError, proxy_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
