from datetime import datetime, timezone

import pytest

from myumkm.application.commands.chat import SendMessageCommand, SendMessageHandler
from myumkm.application.queries.chat import GetChatHistoryHandler, GetChatHistoryQuery
from myumkm.domain.entities import Conversation, Message
from myumkm.domain.exceptions import DomainValidationError, EntityNotFoundError
from myumkm.domain.value_objects import ConversationId, UserId

A = UserId("user_aaaaaaaaaaaa")
B = UserId("user_bbbbbbbbbbbb")
C = UserId("user_cccccccccccc")


@pytest.fixture()
def send(conversation_repo, message_repo):
    return SendMessageHandler(conversation_repo, message_repo)


@pytest.fixture()
def history(conversation_repo, message_repo, user_repo):
    return GetChatHistoryHandler(conversation_repo, message_repo, user_repo)


@pytest.fixture()
async def conversation(conversation_repo):
    conv, _ = await conversation_repo.get_or_create(Conversation.between(A, B))
    return conv


def test_message_timestamp_advances_past_previous():
    frozen = datetime(2026, 1, 1, tzinfo=timezone.utc)
    conv_id = ConversationId.generate()
    first = Message.create(conv_id, A, "halo", now=frozen)
    second = Message.create(conv_id, B, "halo juga", previous=first, now=frozen)

    assert second.created_at > first.created_at


def test_message_content_is_trimmed():
    msg = Message.create(ConversationId.generate(), A, "  halo  ")
    assert msg.content == "halo"


@pytest.mark.anyio
async def test_append_then_list_is_strictly_ordered(send, history, conversation):
    for i in range(20):
        author = A if i % 2 == 0 else B
        await send.execute(SendMessageCommand(conversation.id, author, f"pesan {i}"))

    result = await history.execute(GetChatHistoryQuery(conversation.id, A))
    stamps = [m.created_at for m in result.messages]

    assert [m.content for m in result.messages] == [f"pesan {i}" for i in range(20)]
    assert all(earlier < later for earlier, later in zip(stamps, stamps[1:]))


@pytest.mark.anyio
async def test_new_message_lands_after_previously_listed(send, history, conversation):
    await send.execute(SendMessageCommand(conversation.id, A, "satu"))
    before = await history.execute(GetChatHistoryQuery(conversation.id, B))

    sent = await send.execute(SendMessageCommand(conversation.id, B, "dua"))

    assert all(sent.created_at > m.created_at for m in before.messages)


@pytest.mark.anyio
async def test_append_bumps_conversation_updated_at(send, conversation_repo, conversation):
    sent = await send.execute(SendMessageCommand(conversation.id, A, "halo"))
    stored = await conversation_repo.get_by_id(conversation.id)
    assert stored.updated_at == sent.created_at


@pytest.mark.anyio
@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
async def test_empty_content_is_rejected(send, conversation, content):
    with pytest.raises(DomainValidationError):
        await send.execute(SendMessageCommand(conversation.id, A, content))


@pytest.mark.anyio
async def test_non_participant_cannot_append_or_read(send, history, conversation, message_repo):
    await send.execute(SendMessageCommand(conversation.id, A, "rahasia"))

    with pytest.raises(EntityNotFoundError):
        await send.execute(SendMessageCommand(conversation.id, C, "halo"))
    with pytest.raises(EntityNotFoundError):
        await history.execute(GetChatHistoryQuery(conversation.id, C))

    assert len(await message_repo.get_by_conversation(conversation.id)) == 1


@pytest.mark.anyio
async def test_unknown_conversation_is_not_found(send):
    with pytest.raises(EntityNotFoundError):
        await send.execute(SendMessageCommand(ConversationId.generate(), A, "halo"))
