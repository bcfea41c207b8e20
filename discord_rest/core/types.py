"""
Core types for Discord REST payloads.

These dataclasses provide type safety and IDE support for API responses.
Required fields raise KeyError/TypeError from ``from_dict`` when missing or
malformed, which the decode step reports as a decoding failure.
"""

from dataclasses import dataclass, field
from typing import Any

Snowflake = str


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' should be a string, got {type(value).__name__}")
    return value


# =============================================================================
# Sticker Types
# =============================================================================


@dataclass
class Sticker:
    """A sticker that can be sent in messages."""

    id: Snowflake
    name: str
    description: str | None = None
    tags: str = ""
    type: int | None = None
    format_type: int | None = None
    pack_id: Snowflake | None = None
    guild_id: Snowflake | None = None
    available: bool | None = None
    sort_value: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sticker":
        """Create from API response dict."""
        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            description=data.get("description"),
            tags=data.get("tags") or "",
            type=data.get("type"),
            format_type=data.get("format_type"),
            pack_id=data.get("pack_id"),
            guild_id=data.get("guild_id"),
            available=data.get("available"),
            sort_value=data.get("sort_value"),
        )


# =============================================================================
# User Types
# =============================================================================


@dataclass
class User:
    """A Discord user."""

    id: Snowflake
    username: str
    discriminator: str = "0"
    global_name: str | None = None
    avatar: str | None = None
    bot: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Create from API response dict."""
        return cls(
            id=_require_str(data, "id"),
            username=_require_str(data, "username"),
            discriminator=data.get("discriminator") or "0",
            global_name=data.get("global_name"),
            avatar=data.get("avatar"),
            bot=data.get("bot", False),
        )


# =============================================================================
# Message Types
# =============================================================================


@dataclass
class MessageAttachment:
    """A file attached to a message, as returned by the API."""

    id: Snowflake
    filename: str
    size: int = 0
    url: str | None = None
    content_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageAttachment":
        """Create from API response dict."""
        return cls(
            id=_require_str(data, "id"),
            filename=_require_str(data, "filename"),
            size=data.get("size", 0),
            url=data.get("url"),
            content_type=data.get("content_type"),
        )


@dataclass
class Message:
    """A message sent in a channel."""

    id: Snowflake
    channel_id: Snowflake
    author: User
    content: str = ""
    timestamp: str | None = None
    edited_timestamp: str | None = None
    attachments: list[MessageAttachment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Create from API response dict."""
        return cls(
            id=_require_str(data, "id"),
            channel_id=_require_str(data, "channel_id"),
            author=User.from_dict(data["author"]),
            content=data.get("content") or "",
            timestamp=data.get("timestamp"),
            edited_timestamp=data.get("edited_timestamp"),
            attachments=[MessageAttachment.from_dict(a) for a in data.get("attachments") or []],
        )


class MessageList(list[Message]):
    """A page of messages, newest first."""

    @classmethod
    def from_dict(cls, data: list[dict[str, Any]]) -> "MessageList":
        """Create from API response list."""
        if not isinstance(data, list):
            raise TypeError(f"Expected a list of messages, got {type(data).__name__}")
        return cls(Message.from_dict(item) for item in data)


@dataclass
class NewMessage:
    """Payload for sending a message."""

    content: str = ""
    nonce: str | None = None
    tts: bool = False
    sticker_ids: list[Snowflake] = field(default_factory=list)
    message_reference: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for the request body."""
        result: dict[str, Any] = {"content": self.content, "tts": self.tts}
        if self.nonce is not None:
            result["nonce"] = self.nonce
        if self.sticker_ids:
            result["sticker_ids"] = self.sticker_ids
        if self.message_reference is not None:
            result["message_reference"] = self.message_reference
        return result


@dataclass
class MessageEdit:
    """Payload for editing a message's content."""

    content: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for the request body."""
        return {"content": self.content}
