import asyncio

import pytest

from myumkm.application.commands.conversations import (
    ResolveConversationCommand,
    ResolveConversationHandler,
)
from myumkm.domain.entities import Conversation, User
from myumkm.domain.exceptions import DomainValidationError, EntityNotFoundError
from myumkm.domain.value_objects import UserEmail, UserId


async def _add_user(user_repo, name, email):
    user = User.register(name, UserEmail.normalized(email), "sha256$1$00$00")
    await user_repo.add(user)
    return user


@pytest.fixture()
def handler(user_repo, conversation_repo):
    return ResolveConversationHandler(user_repo, conversation_repo)


def test_pair_key_is_order_independent():
    a, b = UserId("user_aaa"), UserId("user_bbb")
    assert Conversation.pair_key_for(a, b) == Conversation.pair_key_for(b, a) == "user_aaa:user_bbb"


@pytest.mark.anyio
async def test_resolve_is_symmetric_and_idempotent(handler, user_repo):
    a = await _add_user(user_repo, "Alice", "a@x.com")
    b = await _add_user(user_repo, "Bob Warung", "b@x.com")

    first = await handler.execute(ResolveConversationCommand(a.id, b.id))
    second = await handler.execute(ResolveConversationCommand(b.id, a.id))
    third = await handler.execute(ResolveConversationCommand(a.id, b.id))

    assert first.created is True
    assert second.created is False and third.created is False
    assert first.conversation.id == second.conversation.id == third.conversation.id
    assert set(second.conversation.participant_ids) == {a.id, b.id}


@pytest.mark.anyio
async def test_concurrent_resolutions_create_one_channel(handler, user_repo, db):
    a = await _add_user(user_repo, "Alice", "a@x.com")
    b = await _add_user(user_repo, "Bob Warung", "b@x.com")

    results = await asyncio.gather(
        *[
            handler.execute(ResolveConversationCommand(x, y))
            for x, y in [(a.id, b.id), (b.id, a.id)] * 5
        ]
    )

    assert len({r.conversation.id for r in results}) == 1
    assert sum(r.created for r in results) == 1
    assert len(db.conversations) == 1


@pytest.mark.anyio
async def test_self_conversation_is_rejected(handler, user_repo):
    a = await _add_user(user_repo, "Alice", "a@x.com")

    with pytest.raises(DomainValidationError):
        await handler.execute(ResolveConversationCommand(a.id, a.id))


@pytest.mark.anyio
async def test_unknown_recipient_is_not_found(handler, user_repo, db):
    a = await _add_user(user_repo, "Alice", "a@x.com")

    with pytest.raises(EntityNotFoundError):
        await handler.execute(ResolveConversationCommand(a.id, UserId("user_missing")))
    assert db.conversations == {}
