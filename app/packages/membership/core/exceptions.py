"""异常处理模块：定义统一的业务异常与响应格式。"""

from typing import Any, Awaitable, Callable, Dict, Type

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.packages.membership.core.logger import logger


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：记录异常堆栈并转换为标准的 500 响应结构。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    payload = {
        "msg": "服务器内部错误",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


def _jsonable_errors(obj: Any) -> Any:
    if isinstance(obj, Exception):
        return str(obj)
    if isinstance(obj, dict):
        return {key: _jsonable_errors(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_jsonable_errors(item) for item in obj]
    return obj


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # pragma: no cover - framework glue
    """请求体或查询参数校验失败时返回 422，并附带逐字段的错误明细。"""
    logger.info("Rejected invalid request on %s %s", request.method, request.url.path)
    payload = {
        "msg": "请求参数验证失败",
        "data": _jsonable_errors(exc.errors()),
        "code": status.HTTP_422_UNPROCESSABLE_ENTITY,
    }
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=payload)


EXCEPTION_HANDLERS: Dict[Type[Exception], Callable[..., Awaitable[JSONResponse]]] = {
    HTTPException: http_exception_handler,
    RequestValidationError: validation_exception_handler,
    Exception: generic_exception_handler,
}
