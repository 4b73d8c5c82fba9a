import asyncio

import pytest

from core.auth import Session, SessionState
from core.common.errors import AuthError
from core.navigation import NavigationGuard


def test_initialize_without_session_is_anonymous(session_store):
    asyncio.run(session_store.initialize())

    assert session_store.is_ready
    assert session_store.state == SessionState.ANONYMOUS
    assert not session_store.is_authenticated


def test_initialize_recovers_existing_session(session_store, auth_backend):
    auth_backend.current = Session(user_id="u1", email="a@example.com")

    asyncio.run(session_store.initialize())

    assert session_store.state == SessionState.AUTHENTICATED
    assert session_store.current_user.user_id == "u1"


def test_initialize_failure_means_not_logged_in(session_store, auth_backend):
    auth_backend.fail_get_session = True

    asyncio.run(session_store.initialize())

    assert session_store.is_ready
    assert session_store.current_user is None
    assert session_store.state == SessionState.ANONYMOUS


def test_initialize_is_idempotent(session_store, auth_backend):
    async def scenario():
        await asyncio.gather(session_store.initialize(), session_store.initialize())
        await session_store.initialize()

    asyncio.run(scenario())

    assert auth_backend.get_session_calls == 1
    assert len(auth_backend.callbacks) == 1


def test_sign_in_sets_identity_through_subscription(session_store, auth_backend):
    auth_backend.add_user("a@example.com", "secret", user_id="u1")
    changes = []
    session_store.changes.subscribe(changes.append)

    async def scenario():
        await session_store.initialize()
        await session_store.sign_in("a@example.com", "secret")

    asyncio.run(scenario())

    assert session_store.is_authenticated
    assert session_store.current_user.email == "a@example.com"
    assert [c.event for c in changes] == ["SIGNED_IN"]


def test_sign_in_rejected_raises_auth_error(session_store, auth_backend):
    auth_backend.add_user("a@example.com", "secret")

    async def scenario():
        await session_store.initialize()
        await session_store.sign_in("a@example.com", "wrong")

    with pytest.raises(AuthError) as exc_info:
        asyncio.run(scenario())

    assert "Invalid login credentials" in exc_info.value.message
    assert not session_store.is_authenticated


def test_sign_up_existing_account_raises_auth_error(session_store, auth_backend):
    auth_backend.add_user("a@example.com", "secret")

    with pytest.raises(AuthError):
        asyncio.run(session_store.sign_up("a@example.com", "other"))


def test_sign_out_clears_identity_without_notification(session_store, auth_backend):
    auth_backend.add_user("a@example.com", "secret")
    auth_backend.notify_on_sign_out = False

    async def scenario():
        await session_store.initialize()
        await session_store.sign_in("a@example.com", "secret")
        assert session_store.is_authenticated
        await session_store.sign_out()
        return session_store.is_authenticated

    assert asyncio.run(scenario()) is False
    assert session_store.state == SessionState.ANONYMOUS


def test_sign_out_rejected_keeps_identity(session_store, auth_backend):
    auth_backend.add_user("a@example.com", "secret")
    auth_backend.fail_sign_out = True

    async def scenario():
        await session_store.initialize()
        await session_store.sign_in("a@example.com", "secret")
        await session_store.sign_out()

    with pytest.raises(AuthError):
        asyncio.run(scenario())

    assert session_store.is_authenticated


def test_external_session_expiry_clears_identity(session_store, auth_backend):
    auth_backend.current = Session(user_id="u1", email="a@example.com")
    asyncio.run(session_store.initialize())

    auth_backend.emit("SIGNED_OUT", None)

    assert not session_store.is_authenticated


def test_token_refresh_overwrites_identity(session_store, auth_backend):
    auth_backend.current = Session(user_id="u1", email="a@example.com", access_token="old")
    asyncio.run(session_store.initialize())

    auth_backend.emit(
        "TOKEN_REFRESHED", Session(user_id="u1", email="a@example.com", access_token="new")
    )

    assert session_store.current_user.access_token == "new"


def test_close_releases_backend_subscription(session_store, auth_backend):
    asyncio.run(session_store.initialize())
    session_store.close()

    assert auth_backend.callbacks == []


def test_cancelled_initialize_still_releases_waiters(session_store, auth_backend):
    async def scenario():
        auth_backend.gate = asyncio.Event()
        task = asyncio.create_task(session_store.initialize())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        auth_backend.gate.set()

        await asyncio.wait_for(session_store.initialize(), 0.5)
        return await asyncio.wait_for(
            NavigationGuard(session_store).before_each("/dashboard"), 0.5
        )

    result = asyncio.run(scenario())

    assert session_store.is_ready
    assert session_store.state == SessionState.ANONYMOUS
    assert result.redirect.name == "login"
