"""认证领域模块。"""

from core.auth.model import UserCredentials, Session, SessionChange, SessionState
from core.auth.store import SessionStore

__all__ = ["UserCredentials", "Session", "SessionChange", "SessionState", "SessionStore"]
