import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from core.articles import ArticleRepository, ArticleStore
from core.auth import Session, SessionStore
from core.common.errors import AuthError
from core.context import build_context


class FakeSubscription:
    def __init__(self, callbacks: List[Callable], callback: Callable):
        self._callbacks = callbacks
        self._callback = callback

    def unsubscribe(self):
        if self._callback in self._callbacks:
            self._callbacks.remove(self._callback)


class FakeAuthBackend:
    """内存版认证后端，sign_in/sign_up 成功时像 SDK 一样同步触发会话变更回调"""

    def __init__(self):
        self.users: Dict[str, Dict[str, str]] = {}
        self.current: Optional[Session] = None
        self.callbacks: List[Callable] = []
        self.get_session_calls = 0
        self.fail_get_session = False
        self.fail_sign_out = False
        self.notify_on_sign_out = False
        # 设置后 get_current_session 会一直等到该事件置位
        self.gate: Optional[asyncio.Event] = None

    def add_user(self, email: str, password: str, user_id: Optional[str] = None) -> str:
        user_id = user_id or str(uuid.uuid4())
        self.users[email] = {"password": password, "user_id": user_id}
        return user_id

    def emit(self, event: str, session: Optional[Session]):
        self.current = session
        for callback in list(self.callbacks):
            callback(event, session)

    async def get_current_session(self):
        self.get_session_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_get_session:
            raise RuntimeError("network down")
        return self.current

    def on_session_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(self.callbacks, callback)

    async def sign_up(self, email: str, password: str):
        if email in self.users:
            raise AuthError("User already registered")
        user_id = self.add_user(email, password)
        session = Session(user_id=user_id, email=email, access_token="token")
        self.emit("SIGNED_IN", session)
        return session

    async def sign_in(self, email: str, password: str):
        user = self.users.get(email)
        if user is None or user["password"] != password:
            raise AuthError("Invalid login credentials")
        session = Session(user_id=user["user_id"], email=email, access_token="token")
        self.emit("SIGNED_IN", session)
        return session

    async def sign_out(self):
        if self.fail_sign_out:
            raise AuthError("sign out rejected")
        if self.notify_on_sign_out:
            self.emit("SIGNED_OUT", None)
        else:
            self.current = None


class FakeRecordClient:
    """内存版表操作，接口与 SupabaseClient 一致"""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.fail: Dict[str, bool] = {}
        self._tick = 0
        self._base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> str:
        self._tick += 1
        return (self._base + timedelta(seconds=self._tick)).isoformat()

    def _check(self, op: str):
        self.calls.append(op)
        if self.fail.get(op):
            raise RuntimeError(f"{op} failed")

    @staticmethod
    def _match(row, filters):
        return all(row.get(k) == v for k, v in (filters or {}).items())

    async def select(self, table, filters=None, columns="*", order=None, limit=None, offset=None):
        self._check("select")
        rows = [dict(r) for r in self.rows if self._match(r, filters)]
        if order:
            column, _, direction = order.partition(".")
            rows.sort(key=lambda r: r[column], reverse=direction == "desc")
        return rows

    async def insert(self, table, data):
        self._check("insert")
        now = self._now()
        row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **data}
        self.rows.append(row)
        return dict(row)

    async def update(self, table, data, filters):
        self._check("update")
        updated = []
        for row in self.rows:
            if self._match(row, filters):
                row.update(data)
                updated.append(dict(row))
        return updated

    async def delete(self, table, filters):
        self._check("delete")
        deleted = [r for r in self.rows if self._match(r, filters)]
        self.rows = [r for r in self.rows if not self._match(r, filters)]
        return deleted


class FakeStorage:
    bucket = "article-images"
    base_url = "https://demo.supabase.co/storage/v1/object/public"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.fail_upload = False
        self.fail_remove = False
        self.remove_calls: List[List[str]] = []
        self.closed = False

    async def upload_bytes(self, path, data, content_type="application/octet-stream"):
        if self.fail_upload:
            raise RuntimeError("upload failed")
        self.objects[path] = data
        return f"{self.base_url}/{self.bucket}/{path}"

    async def remove(self, paths):
        self.remove_calls.append(list(paths))
        if self.fail_remove:
            raise RuntimeError("remove failed")
        for path in paths:
            self.objects.pop(path, None)

    async def aclose(self):
        self.closed = True


NOW_MS = 1700000000000


@pytest.fixture
def auth_backend():
    return FakeAuthBackend()


@pytest.fixture
def record_client():
    return FakeRecordClient()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def repo(record_client, storage):
    return ArticleRepository(record_client, storage, clock_ms=lambda: NOW_MS)


@pytest.fixture
def session_store(auth_backend):
    return SessionStore(auth_backend)


@pytest.fixture
def article_store(repo, session_store):
    return ArticleStore(repo, session_store)


@pytest.fixture
def context(auth_backend, record_client, storage):
    return build_context(auth_backend, record_client, storage)


async def sign_in_as(store: SessionStore, backend: FakeAuthBackend, email: str, user_id: str):
    """注册用户并通过会话存储登录"""
    backend.add_user(email, "secret", user_id=user_id)
    await store.initialize()
    await store.sign_in(email, "secret")
