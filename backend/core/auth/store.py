import asyncio
from typing import Any, Optional

from core.auth.model import Session, SessionChange, SessionState
from core.common.channel import Channel
from core.common.log import logger


class SessionStore:
    """会话存储：持有当前登录身份，负责注册/登录/登出，并订阅后端的会话变更

    - 身份只由会话变更订阅和 sign_out 修改，sign_up/sign_in 成功后由订阅写入
    - initialize 在存储生命周期内只执行一次，完成后 ready 信号置位
    - 每次身份被覆盖都会在 changes 上发布 SessionChange
    """

    def __init__(self, backend: Any) -> None:
        self.backend = backend
        self.changes: Channel[SessionChange] = Channel("session")
        self._session: Optional[Session] = None
        self._state = SessionState.UNINITIALIZED
        self._ready = asyncio.Event()
        self._subscription = None

    @property
    def current_user(self) -> Optional[Session]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    async def wait_until_ready(self) -> None:
        """等待初始化完成（一次性信号）"""
        await self._ready.wait()

    async def initialize(self) -> None:
        """恢复已有会话并注册会话变更订阅，重复调用只等待首次初始化完成"""
        if self._state != SessionState.UNINITIALIZED:
            await self._ready.wait()
            return

        self._state = SessionState.INITIALIZING
        try:
            try:
                session = await self.backend.get_current_session()
            except Exception as e:
                # 恢复失败等同于未登录，不向调用方抛出
                logger.error(f"恢复会话失败，按未登录处理: {e}")
                session = None

            try:
                self._subscription = self.backend.on_session_change(self._on_backend_change)
            except Exception as e:
                logger.error(f"注册会话变更订阅失败: {e}")

            self._set_session(session)
        finally:
            # 被取消时也要落到确定状态并放行等待者
            if self._state == SessionState.INITIALIZING:
                logger.warning("会话初始化被中断，按未登录处理")
                self._set_session(None)
            self._ready.set()
        logger.info(f"会话初始化完成: {self._state.value}")

    def _on_backend_change(self, event: str, session: Optional[Session]) -> None:
        logger.info(f"会话变更: {event}")
        self._set_session(session, event)

    def _set_session(self, session: Optional[Session], event: Optional[str] = None) -> None:
        self._session = session
        self._state = (
            SessionState.AUTHENTICATED if session is not None else SessionState.ANONYMOUS
        )
        if event is not None:
            self.changes.publish(SessionChange(event=event, session=session))

    async def sign_up(self, email: str, password: str) -> Optional[Session]:
        """注册新用户，失败抛出 AuthError"""
        return await self.backend.sign_up(email, password)

    async def sign_in(self, email: str, password: str) -> Session:
        """邮箱密码登录，失败抛出 AuthError"""
        return await self.backend.sign_in(email, password)

    async def sign_out(self) -> None:
        """登出，后端确认后立即清空本地身份，不等待订阅回调"""
        await self.backend.sign_out()
        if self._session is not None:
            self._set_session(None, "SIGNED_OUT")

    def close(self) -> None:
        """应用关闭时释放后端订阅"""
        if self._subscription is not None:
            unsubscribe = getattr(self._subscription, "unsubscribe", None)
            if callable(unsubscribe):
                unsubscribe()
            self._subscription = None
