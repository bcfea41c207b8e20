"""
Discord REST - Layered client for the Discord REST API.

Layers:
- core: Request engine (encode, build, dispatch, classify, decode) and types
- sdk: Per-endpoint callers on top of the core
- cli: Command-line interface
"""

from discord_rest.core import ClientConfig, Credential, Failure, RequestError, Success
from discord_rest.sdk import DiscordREST

__version__ = "0.1.0"
__all__ = ["ClientConfig", "Credential", "DiscordREST", "Failure", "RequestError", "Success"]
