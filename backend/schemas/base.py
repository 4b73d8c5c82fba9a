from typing import Any, Optional


def success_response(data=None, message="success"):
    # 统一响应结构 {"code", "message", "data"}，code 为 0 表示成功
    return {"code": 0, "message": message, "data": data}


def error_response(code: int, message: str, data=None):
    return {"code": code, "message": message, "data": data}


def view_response(view: Optional[str], is_authenticated: bool, **extra: Any):
    """页面路由通过守卫后返回的视图描述"""
    return success_response({"view": view, "is_authenticated": is_authenticated, **extra})
