import httpx
import pytest

from myumkm.client import (
    AuthenticationApiError,
    ConflictApiError,
    MyUmkmClient,
    NotFoundApiError,
    PendingMessage,
    ServerApiError,
    SessionStore,
    ValidationApiError,
)
from myumkm.client.errors import error_class_for
from conftest import PASSWORD


@pytest.fixture()
def make_client(app, tmp_path):
    transport = httpx.ASGITransport(app=app)

    def factory(name):
        store = SessionStore(tmp_path / f"{name}.json")
        api = MyUmkmClient("http://testserver", store, transport=transport)
        return api

    yield factory


@pytest.mark.parametrize(
    "status, expected",
    [(400, ValidationApiError), (422, ValidationApiError), (401, AuthenticationApiError),
     (404, NotFoundApiError), (409, ConflictApiError), (502, ServerApiError)],
)
def test_error_class_by_status(status, expected):
    assert error_class_for(status) is expected


@pytest.mark.anyio
async def test_login_persists_credential_and_me_confirms_it(make_client):
    api = make_client("alice")
    user = await api.register("Alice Umkm", "a@x.com", PASSWORD)

    logged_in = await api.login("a@x.com", PASSWORD)
    assert logged_in["id"] == user["id"]
    assert api.session.get_credential()

    identity = await api.check_auth()
    assert identity["id"] == user["id"]
    assert api.session.identity == identity
    await api.aclose()


@pytest.mark.anyio
async def test_wrong_password_raises_authentication_error(make_client):
    api = make_client("alice")
    await api.register("Alice Umkm", "a@x.com", PASSWORD)

    with pytest.raises(AuthenticationApiError) as exc_info:
        await api.login("a@x.com", "wrong-pass")
    assert exc_info.value.status_code == 401
    assert api.session.get_credential() is None
    await api.aclose()


@pytest.mark.anyio
async def test_duplicate_register_raises_conflict(make_client):
    api = make_client("alice")
    await api.register("Alice Umkm", "a@x.com", PASSWORD)

    with pytest.raises(ConflictApiError):
        await api.register("Alice Umkm", "A@X.com", PASSWORD)
    await api.aclose()


@pytest.mark.anyio
async def test_conversation_round_trip_with_optimistic_timeline(make_client):
    alice, bob = make_client("alice"), make_client("bob")
    alice_user = await alice.register("Alice Umkm", "a@x.com", PASSWORD)
    bob_user = await bob.register("Bob Warung", "b@x.com", PASSWORD)
    await alice.login("a@x.com", PASSWORD)
    await bob.login("b@x.com", PASSWORD)

    assert [u["id"] for u in await alice.list_users()] == [bob_user["id"]]

    conversation = await alice.open_conversation(bob_user["id"])
    started = await bob.start_conversation(alice_user["id"], content="Halo Alice")
    assert started["conversation"]["id"] == conversation["id"]

    timeline = alice.timeline(conversation["id"], alice_user["id"])
    await alice.refresh_timeline(timeline)
    confirmed = await timeline.submit("Halo Bob")

    assert [e.content for e in timeline.entries] == ["Halo Alice", "Halo Bob"]
    assert not any(isinstance(e, PendingMessage) for e in timeline.entries)

    history = await bob.list_messages(conversation["id"])
    assert history[-1]["id"] == confirmed.id

    listed = await bob.list_conversations()
    assert listed[0]["last_message"]["content"] == "Halo Bob"

    await alice.aclose()
    await bob.aclose()


@pytest.mark.anyio
async def test_failed_send_rolls_back_timeline(make_client):
    alice = make_client("alice")
    alice_user = await alice.register("Alice Umkm", "a@x.com", PASSWORD)
    await alice.login("a@x.com", PASSWORD)

    timeline = alice.timeline("7d3c1f0e-3f1a-4d8e-9a55-0c1b2d3e4f50", alice_user["id"])
    with pytest.raises(NotFoundApiError):
        await timeline.submit("ke mana?")
    assert timeline.entries == []
    await alice.aclose()


@pytest.mark.anyio
async def test_protected_call_without_session_is_rejected(make_client):
    api = make_client("anon")
    with pytest.raises(AuthenticationApiError):
        await api.list_conversations()
    await api.aclose()


@pytest.mark.anyio
async def test_logout_clears_session(make_client):
    api = make_client("alice")
    await api.register("Alice Umkm", "a@x.com", PASSWORD)
    await api.login("a@x.com", PASSWORD)

    await api.logout()

    assert api.session.get_credential() is None
    assert [c for c in api.session.cookie_jar if c.name == "token"] == []
    await api.aclose()


@pytest.mark.anyio
async def test_logout_clears_session_even_when_server_fails(tmp_path, codec):
    def handler(request):
        return httpx.Response(503, json={"error": "Service unavailable"})

    store = SessionStore(tmp_path / "s.json")
    store.set_credential(codec.issue("user_000000000001", "a@x.com"))
    api = MyUmkmClient("http://testserver", store, transport=httpx.MockTransport(handler))

    with pytest.raises(ServerApiError):
        await api.logout()
    assert store.get_credential() is None
    await api.aclose()
