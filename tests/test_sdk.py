"""Tests for the per-endpoint callers, run against a recording fake transport."""

import asyncio
import json

import pytest
from conftest import REST_BASE, FakeTransport

from discord_rest import Credential, DiscordREST, Failure, Success
from discord_rest.core import (
    Message,
    MessageList,
    NewMessage,
    RequestMethod,
    Response,
    Sticker,
    UnexpectedStatus,
    User,
)

AUTHOR = {"id": "10", "username": "wumpus", "bot": True}


def message_json(message_id: str, content: str = "hi", **extra) -> dict:
    return {"id": message_id, "channel_id": "1", "author": AUTHOR, "content": content, **extra}


@pytest.fixture
def rest(config, bot_credential, transport) -> DiscordREST:
    return DiscordREST(config=config, credential=bot_credential, transport=transport)


def test_credential_can_be_set_later(config) -> None:
    transport = FakeTransport(Response(status=200, body=json.dumps(AUTHOR).encode()))
    rest = DiscordREST(config=config, transport=transport)
    assert rest.credential is None

    rest.credential = Credential(token="user-token")
    result = asyncio.run(rest.users.me())

    assert result == Success(User(id="10", username="wumpus", bot=True))
    assert transport.last.url == f"{REST_BASE}/users/@me"
    assert transport.last.headers["authorization"] == "user-token"


def test_get_sticker(rest, transport) -> None:
    transport.outcomes.append(Response(status=200, body=b'{"id":"123","name":"foo","tags":"cat","format_type":1}'))

    result = asyncio.run(rest.stickers.get("123"))

    assert result == Success(Sticker(id="123", name="foo", tags="cat", format_type=1))
    assert transport.last.url == f"{REST_BASE}/stickers/123"


def test_list_messages(rest, transport) -> None:
    page = [message_json("3"), message_json("2", attachments=[{"id": "7", "filename": "a.png", "size": 3}])]
    transport.outcomes.append(Response(status=200, body=json.dumps(page).encode()))

    result = asyncio.run(rest.messages.list("1", limit=2, before="4"))

    assert isinstance(result, Success)
    assert isinstance(result.value, MessageList)
    assert [message.id for message in result.value] == ["3", "2"]
    assert result.value[1].attachments[0].filename == "a.png"
    assert transport.last.url == f"{REST_BASE}/channels/1/messages?before=4&limit=2"


def test_list_messages_wrong_shape(rest, transport) -> None:
    transport.outcomes.append(Response(status=200, body=b'{"message": "not a list"}'))
    result = asyncio.run(rest.messages.list("1"))
    assert isinstance(result, Failure)
    assert result.error.to_dict()["kind"] == "DecodingFailure"


def test_send_message_with_attachment(rest, transport, tmp_path) -> None:
    attachment = tmp_path / "cat.png"
    attachment.write_bytes(b"meow")
    transport.outcomes.append(Response(status=200, body=json.dumps(message_json("5", "look")).encode()))

    result = asyncio.run(rest.messages.send("1", NewMessage(content="look", nonce="n1"), attachments=[attachment]))

    assert isinstance(result, Success)
    assert isinstance(result.value, Message)
    assert result.value.author.username == "wumpus"
    request = transport.last
    assert request.method is RequestMethod.POST
    assert request.url == f"{REST_BASE}/channels/1/messages"
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=----WebKitFormBoundary")
    assert b'filename="cat.png"' in request.body
    assert b'{"content":"look","tts":false,"nonce":"n1"}' in request.body


def test_send_message_forbidden(rest, transport) -> None:
    transport.outcomes.append(Response(status=403, body=b'{"message": "Missing Permissions", "code": 50013}'))
    result = asyncio.run(rest.messages.send("1", NewMessage(content="hi")))
    assert result == Failure(UnexpectedStatus(403))
    assert transport.last.headers["content-type"] == "application/json"


def test_edit_message(rest, transport) -> None:
    asyncio.run(rest.messages.edit("1", "2", "edited"))
    assert transport.last.method is RequestMethod.PATCH
    assert transport.last.url == f"{REST_BASE}/channels/1/messages/2"
    assert transport.last.body == b'{"content":"edited"}'


def test_delete_message_failure_propagates(rest, transport) -> None:
    transport.outcomes.append(Response(status=404, body=b"{}"))
    with pytest.raises(UnexpectedStatus) as exc_info:
        asyncio.run(rest.messages.delete("1", "2"))
    assert exc_info.value.code == 404
    assert transport.last.method is RequestMethod.DELETE


def test_ack_message(rest, transport) -> None:
    transport.outcomes.append(Response(status=204, body=b""))
    asyncio.run(rest.messages.ack("1", "2"))
    assert transport.last.url == f"{REST_BASE}/channels/1/messages/2/ack"
    assert transport.last.body == b'{"token":null}'


def test_typing(rest, transport) -> None:
    transport.outcomes.append(Response(status=204, body=b""))
    asyncio.run(rest.channels.typing("1"))
    assert transport.last.method is RequestMethod.POST
    assert transport.last.url == f"{REST_BASE}/channels/1/typing"
    assert transport.last.body is None


def test_typing_server_error_propagates(rest, transport) -> None:
    transport.outcomes.append(Response(status=500, body=b"oops"))
    with pytest.raises(UnexpectedStatus):
        asyncio.run(rest.channels.typing("1"))


def test_context_manager(config, bot_credential, transport) -> None:
    async def go():
        async with DiscordREST(config=config, credential=bot_credential, transport=transport) as rest:
            return await rest.users.me()

    transport.outcomes.append(Response(status=200, body=json.dumps(AUTHOR).encode()))
    assert asyncio.run(go()).ok
