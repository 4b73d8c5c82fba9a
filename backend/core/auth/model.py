from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserCredentials(BaseModel):
    """用户凭据模型（邮箱/密码）"""
    email: str
    password: str


class Session(BaseModel):
    """当前登录身份"""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


class SessionState(str, Enum):
    """会话存储状态"""

    # 尚未调用 initialize
    UNINITIALIZED = "uninitialized"

    # 正在从后端恢复会话
    INITIALIZING = "initializing"

    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionChange(BaseModel):
    """会话变更事件，event 沿用后端的事件名（SIGNED_IN、SIGNED_OUT、TOKEN_REFRESHED 等）"""
    event: str
    session: Optional[Session] = None
