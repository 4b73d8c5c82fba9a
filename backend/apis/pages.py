from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from apis.deps import get_context
from core.context import AppContext
from schemas import view_response

router = APIRouter(tags=["页面"])


async def _render(request: Request, ctx: AppContext):
    path = request.url.path
    full_path = f"{path}?{request.url.query}" if request.url.query else path

    result = await ctx.guard.before_each(path, full_path)
    if not result.allowed:
        return RedirectResponse(result.redirect.url, status_code=307)

    return view_response(
        result.route.name if result.route else None,
        ctx.session_store.is_authenticated,
    )


@router.get("/", summary="首页")
async def home(request: Request, ctx: AppContext = Depends(get_context)):
    return await _render(request, ctx)


@router.get("/login", summary="登录页")
async def login_page(request: Request, ctx: AppContext = Depends(get_context)):
    return await _render(request, ctx)


@router.get("/signup", summary="注册页")
async def signup_page(request: Request, ctx: AppContext = Depends(get_context)):
    return await _render(request, ctx)


@router.get("/dashboard", summary="个人主页")
async def dashboard(request: Request, ctx: AppContext = Depends(get_context)):
    return await _render(request, ctx)
