import json

import httpx
import jwt
import pytest

from myumkm.client import AuthenticationApiError, ServerApiError, SessionStore
from conftest import make_token


@pytest.fixture()
def session_path(tmp_path):
    return tmp_path / "session.json"


@pytest.fixture()
def store(session_path):
    return SessionStore(session_path, cookie_domain="testserver")


def _cookie_tokens(store):
    return [c.value for c in store.cookie_jar if c.name == "token"]


def test_set_credential_writes_both_channels(store, session_path):
    token = make_token()
    store.set_credential(token)

    record = json.loads(session_path.read_text())
    assert record["token"] == token
    assert record["version"] == 1
    assert _cookie_tokens(store) == [token]


def test_cookie_expiry_matches_credential_expiry(store):
    token = make_token(exp_offset=1234)
    store.set_credential(token)

    cookie = next(c for c in store.cookie_jar if c.name == "token")
    assert cookie.expires == jwt.decode(token, options={"verify_signature": False})["exp"]


def test_clearing_removes_both_channels(store, session_path):
    store.set_credential(make_token())
    store.set_credential(None)

    assert json.loads(session_path.read_text())["token"] is None
    assert _cookie_tokens(store) == []
    assert store.get_credential() is None


def test_cookie_only_credential_migrates_into_durable_store(store, session_path):
    token = make_token()
    # As if a response had set the cookie
    httpx.Cookies(store.cookie_jar).set("token", token, domain="testserver")

    assert store.get_credential() == token
    assert json.loads(session_path.read_text())["token"] == token


def test_durable_store_wins_over_diverging_cookie(store):
    durable = make_token(subject_id="user_durable00000")
    store.set_credential(durable)
    httpx.Cookies(store.cookie_jar).set("token", make_token(), domain="elsewhere")

    assert store.get_credential() == durable


def test_write_is_seen_by_store_sharing_the_file(session_path):
    first = SessionStore(session_path)
    second = SessionStore(session_path)
    seen = []
    second.subscribe(seen.append)

    token = make_token()
    first.set_credential(token)

    assert seen == [token]
    assert second.version == first.version
    assert second.get_credential() == token

    first.set_credential(None)
    assert seen == [token, None]
    assert second.get_credential() is None


def test_unsubscribe_stops_notifications(session_path):
    first = SessionStore(session_path)
    second = SessionStore(session_path)
    seen = []
    unsubscribe = second.subscribe(seen.append)
    unsubscribe()

    first.set_credential(make_token())
    assert seen == []


def test_sync_picks_up_writes_from_other_processes(store, session_path):
    seen = []
    store.subscribe(seen.append)
    token = make_token()
    session_path.write_text(json.dumps({"token": token, "version": 7, "updated_at": 0}))

    assert store.sync() is True
    assert seen == [token]
    assert store.sync() is False


def test_unreadable_file_is_treated_as_empty(store, session_path):
    session_path.write_text("{broken")
    assert store.get_credential() is None


@pytest.mark.anyio
async def test_check_auth_confirms_with_server(store):
    token = make_token()
    store.set_credential(token)
    calls = []

    async def fetch(sent):
        calls.append(sent)
        return {"id": "user_000000000001", "email": "a@x.com"}

    identity = await store.check_auth(fetch)

    assert calls == [token]
    assert identity["email"] == "a@x.com"
    assert store.identity == identity


@pytest.mark.anyio
async def test_check_auth_discards_expired_credential_without_round_trip(store):
    store.set_credential(make_token(exp_offset=-10))

    async def fetch(sent):
        raise AssertionError("server must not be called")

    assert await store.check_auth(fetch) is None
    assert store.get_credential() is None


@pytest.mark.anyio
async def test_check_auth_clears_on_401(store):
    store.set_credential(make_token())

    async def fetch(sent):
        raise AuthenticationApiError("API error (401): Invalid or expired token", 401)

    assert await store.check_auth(fetch) is None
    assert store.get_credential() is None


@pytest.mark.anyio
async def test_check_auth_keeps_session_on_server_error(store):
    token = make_token()
    store.set_credential(token)

    async def fetch(sent):
        raise ServerApiError("API error (500): Internal server error", 500)

    with pytest.raises(ServerApiError):
        await store.check_auth(fetch)
    assert store.get_credential() == token


def test_logout_in_one_store_is_not_undone_by_the_other(session_path):
    first = SessionStore(session_path, cookie_domain="testserver")
    second = SessionStore(session_path, cookie_domain="testserver")
    token = make_token()
    second.set_credential(token)
    assert _cookie_tokens(first) == [token]

    first.set_credential(None)

    assert _cookie_tokens(second) == []
    assert second.get_credential() is None
    assert first.get_credential() is None
    assert json.loads(session_path.read_text())["token"] is None


def test_logout_from_other_process_clears_cookie_on_next_read(store, session_path):
    store.set_credential(make_token())
    session_path.write_text(json.dumps({"token": None, "version": 9, "updated_at": 0}))

    assert store.get_credential() is None
    assert _cookie_tokens(store) == []
