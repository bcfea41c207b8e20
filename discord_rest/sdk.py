"""
Discord SDK - Per-endpoint callers with nice ergonomics.

Each method is a thin wrapper over the core APIClient: it picks the path,
method and payload type, and leaves everything else to the request engine.
"""

from collections.abc import Sequence

from discord_rest.core.client import APIClient
from discord_rest.core.config import ClientConfig, Credential
from discord_rest.core.encoding import Attachment
from discord_rest.core.result import Result
from discord_rest.core.transport import HttpImplementation
from discord_rest.core.types import (
    Message,
    MessageEdit,
    MessageList,
    NewMessage,
    Snowflake,
    Sticker,
    User,
)


class DiscordREST:
    """
    High-level Discord REST client with typed methods.

    Example:
        async with DiscordREST(credential=Credential(token, is_bot=True)) as rest:
            result = await rest.stickers.get("749054660769218631")
            if result.ok:
                print(result.value.name)

            await rest.channels.typing(channel_id)
            await rest.messages.send(channel_id, NewMessage(content="hi"), attachments=["cat.png"])

    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        credential: Credential | None = None,
        transport: HttpImplementation | None = None,
    ):
        """
        Initialize the Discord client.

        Args:
            config: Client configuration (defaults mimic the desktop client)
            credential: Token to authenticate with, can be set later
            transport: Optional HttpImplementation, mainly for tests

        """
        self._client = APIClient(config=config, credential=credential, transport=transport)

        # Sub-clients for different resources
        self.stickers = StickerOperations(self._client)
        self.messages = MessageOperations(self._client)
        self.channels = ChannelOperations(self._client)
        self.users = UserOperations(self._client)

    @property
    def client(self) -> APIClient:
        """The underlying request engine."""
        return self._client

    @property
    def credential(self) -> Credential | None:
        """Get the current credential."""
        return self._client.credential

    @credential.setter
    def credential(self, value: Credential) -> None:
        """Set the credential used by subsequent requests."""
        self._client.credential = value

    async def __aenter__(self) -> "DiscordREST":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()


# =============================================================================
# Sticker Operations
# =============================================================================


class StickerOperations:
    """Operations on stickers."""

    def __init__(self, client: APIClient):
        self._client = client

    async def get(self, sticker_id: Snowflake) -> Result[Sticker]:
        """Get a sticker by ID."""
        return await self._client.get(f"stickers/{sticker_id}", into=Sticker)


# =============================================================================
# Message Operations
# =============================================================================


class MessageOperations:
    """Operations on channel messages."""

    def __init__(self, client: APIClient):
        self._client = client

    async def list(
        self,
        channel_id: Snowflake,
        limit: int = 50,
        before: Snowflake | None = None,
    ) -> Result[MessageList]:
        """
        Get messages in a channel.

        Args:
            channel_id: Channel to read from
            limit: Max number of messages (1-100)
            before: Only return messages older than this message ID

        Returns:
            Result with the messages, newest first

        """
        query: list[tuple[str, str | int]] = []
        if before is not None:
            query.append(("before", before))
        query.append(("limit", limit))
        return await self._client.get(f"channels/{channel_id}/messages", query, into=MessageList)

    async def send(
        self,
        channel_id: Snowflake,
        message: NewMessage,
        attachments: Sequence[Attachment] = (),
    ) -> Result[Message]:
        """
        Send a message, optionally with file attachments.

        Args:
            channel_id: Channel to send to
            message: Message payload
            attachments: Paths of files to upload with the message

        Returns:
            Result with the created message

        """
        return await self._client.post(
            f"channels/{channel_id}/messages",
            message,
            attachments,
            into=Message,
        )

    async def edit(self, channel_id: Snowflake, message_id: Snowflake, content: str) -> None:
        """Edit a message's content. Raises RequestError on failure."""
        await self._client.patch(f"channels/{channel_id}/messages/{message_id}", MessageEdit(content=content))

    async def delete(self, channel_id: Snowflake, message_id: Snowflake) -> None:
        """Delete a message. Raises RequestError on failure."""
        await self._client.delete(f"channels/{channel_id}/messages/{message_id}")

    async def ack(self, channel_id: Snowflake, message_id: Snowflake) -> None:
        """Mark a channel as read up to a message. Raises RequestError on failure."""
        await self._client.post_no_content(
            f"channels/{channel_id}/messages/{message_id}/ack",
            {"token": None},
        )


# =============================================================================
# Channel Operations
# =============================================================================


class ChannelOperations:
    """Operations on channels."""

    def __init__(self, client: APIClient):
        self._client = client

    async def typing(self, channel_id: Snowflake) -> None:
        """Show the typing indicator in a channel. Raises RequestError on failure."""
        await self._client.empty_post(f"channels/{channel_id}/typing")


# =============================================================================
# User Operations
# =============================================================================


class UserOperations:
    """Operations on users."""

    def __init__(self, client: APIClient):
        self._client = client

    async def me(self) -> Result[User]:
        """Get the current user."""
        return await self._client.get("users/@me", into=User)
