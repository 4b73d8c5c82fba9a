from fastapi import HTTPException, Request, status

from core.common.errors import AuthError, BoardError, NotFoundError
from core.context import AppContext
from schemas import error_response


def get_context(request: Request) -> AppContext:
    """从应用状态中取出上下文（在 lifespan 中创建）"""
    return request.app.state.context


def http_error(e: BoardError) -> HTTPException:
    """领域错误映射为 HTTP 错误"""
    if isinstance(e, AuthError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response(code=40101, message=e.message),
        )
    if isinstance(e, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_response(code=40401, message=e.message),
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error_response(code=50201, message=e.message),
    )
