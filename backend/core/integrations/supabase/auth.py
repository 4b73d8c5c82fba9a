from typing import Any, Callable, Optional

from supabase import Client

from core.auth.model import Session
from core.common.errors import AuthError
from core.common.log import logger


def _event_name(event: Any) -> str:
    # 不同 SDK 版本的事件可能是字符串或枚举
    return str(getattr(event, "value", event))


def to_session(raw: Any) -> Optional[Session]:
    """把 Supabase 的会话对象转换为领域模型"""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    return Session(
        user_id=str(raw.user.id),
        email=raw.user.email,
        access_token=getattr(raw, "access_token", None),
    )


class SupabaseAuthBackend:
    """Supabase Auth 适配器，所有后端拒绝统一转换为 AuthError"""

    def __init__(self, client: Client) -> None:
        self.client = client

    async def get_current_session(self) -> Optional[Session]:
        """读取已持久化的会话，过期会话由 SDK 按需刷新"""
        return to_session(self.client.auth.get_session())

    def on_session_change(self, callback: Callable[[str, Optional[Session]], None]):
        """注册会话变更回调，返回带 unsubscribe() 的订阅对象"""

        def _listener(event: Any, session: Any) -> None:
            callback(_event_name(event), to_session(session))

        return self.client.auth.on_auth_state_change(_listener)

    async def sign_up(self, email: str, password: str) -> Optional[Session]:
        """用户注册；开启邮箱确认时返回的会话为空"""
        try:
            auth_response = self.client.auth.sign_up(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.error(f"用户注册失败: {e}")
            raise AuthError(str(e)) from e

        if not auth_response.user:
            raise AuthError("用户注册失败")

        logger.info(f"用户注册成功: {email}")
        return to_session(auth_response.session)

    async def sign_in(self, email: str, password: str) -> Session:
        """用户登录（邮箱 + 密码）"""
        try:
            auth_response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.error(f"用户登录失败: {e}")
            raise AuthError(str(e)) from e

        session = to_session(auth_response.session)
        if session is None:
            raise AuthError("邮箱或密码错误")

        logger.info(f"用户登录成功: {email}")
        return session

    async def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.error(f"用户登出失败: {e}")
            raise AuthError(str(e)) from e

    def access_token(self) -> Optional[str]:
        """当前会话的 access token，用于对象存储请求"""
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            logger.warning(f"读取会话失败，按匿名请求处理: {e}")
            return None
        return getattr(session, "access_token", None) if session else None
