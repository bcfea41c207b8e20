"""
Client configuration and credentials.

Both are immutable and read by the request engine for the duration of a call.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Any

# Configuration
DEFAULT_REST_BASE = "https://discord.com/api/v9/"
DEFAULT_BASE_URL = "https://discord.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) discord/0.0.283 Chrome/108.0.5359.215 Electron/22.3.12 Safari/537.36"
)
DEFAULT_LOCALE = "en-US"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ClientProperties:
    """Client metadata sent base64-encoded in the x-super-properties header."""

    os: str = "Mac OS X"
    browser: str = "Discord Client"
    release_channel: str = "stable"
    client_version: str = "0.0.283"
    os_version: str = "22.4.0"
    os_arch: str = "arm64"
    system_locale: str = DEFAULT_LOCALE
    client_build_number: int = 199933
    client_event_source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for the header payload."""
        return asdict(self)


@dataclass(frozen=True)
class ClientConfig:
    """
    Process-wide settings consumed by the request engine.

    Attributes:
        rest_base: Base URL that request paths are resolved against
        base_url: Web client origin, sent as the origin header
        user_agent: User agent of the client being mimicked
        properties: Any JSON-serializable record, or an object with to_dict()
        locale: Value of the x-discord-locale header

    """

    rest_base: str = DEFAULT_REST_BASE
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    properties: Any = field(default_factory=ClientProperties)
    locale: str = DEFAULT_LOCALE

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create from DISCORD_REST_BASE / DISCORD_BASE_URL / DISCORD_USER_AGENT env vars."""
        return cls(
            rest_base=os.environ.get("DISCORD_REST_BASE") or DEFAULT_REST_BASE,
            base_url=os.environ.get("DISCORD_BASE_URL") or DEFAULT_BASE_URL,
            user_agent=os.environ.get("DISCORD_USER_AGENT") or DEFAULT_USER_AGENT,
        )


@dataclass(frozen=True)
class Credential:
    """Bearer token plus whether it belongs to a bot account."""

    token: str
    is_bot: bool = False

    def __repr__(self) -> str:
        return f"Credential(token='***', is_bot={self.is_bot})"

    @property
    def authorization(self) -> str:
        """Value of the authorization header."""
        return f"Bot {self.token}" if self.is_bot else self.token

    @classmethod
    def from_env(cls) -> "Credential | None":
        """Create from DISCORD_TOKEN / DISCORD_IS_BOT env vars, or None if no token is set."""
        token = os.environ.get("DISCORD_TOKEN")
        if not token:
            return None
        is_bot = os.environ.get("DISCORD_IS_BOT", "").strip().lower() in _TRUTHY
        return cls(token=token, is_bot=is_bot)
