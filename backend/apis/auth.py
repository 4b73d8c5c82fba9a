from fastapi import APIRouter, Depends

from apis.deps import get_context, http_error
from core.auth import UserCredentials
from core.common.errors import AuthError
from core.context import AppContext
from schemas import success_response


router = APIRouter(prefix="/auth", tags=["认证"])


def _user_payload(session):
    if session is None:
        return None
    return session.model_dump(exclude={"access_token"})


@router.post("/signup", summary="用户注册")
async def signup(credentials: UserCredentials, ctx: AppContext = Depends(get_context)):
    try:
        session = await ctx.session_store.sign_up(credentials.email, credentials.password)
    except AuthError as e:
        raise http_error(e)

    # 开启邮箱确认时注册不会直接产生会话
    return success_response(
        {"user": _user_payload(session), "confirmation_required": session is None}
    )


@router.post("/login", summary="用户登录")
async def login(credentials: UserCredentials, ctx: AppContext = Depends(get_context)):
    try:
        session = await ctx.session_store.sign_in(credentials.email, credentials.password)
    except AuthError as e:
        raise http_error(e)
    return success_response(_user_payload(session))


@router.post("/logout", summary="用户注销")
async def logout(ctx: AppContext = Depends(get_context)):
    try:
        await ctx.session_store.sign_out()
    except AuthError as e:
        raise http_error(e)
    return success_response(message="注销成功")


@router.get("/session", summary="当前会话")
async def current_session(ctx: AppContext = Depends(get_context)):
    store = ctx.session_store
    return success_response(
        {
            "state": store.state.value,
            "is_authenticated": store.is_authenticated,
            "user": _user_payload(store.current_user),
        }
    )
