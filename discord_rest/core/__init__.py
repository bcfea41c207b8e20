"""
Core layer - Request engine and types.

This layer provides:
- Typed dataclasses for API payloads
- Request building, body encoding, dispatch and response decoding
- The closed set of request error kinds
"""

from discord_rest.core.client import APIClient, RequestSpec, build_request, classify_response, decode_response
from discord_rest.core.config import ClientConfig, ClientProperties, Credential
from discord_rest.core.encoding import EncodedBody, encode_body, encode_payload
from discord_rest.core.errors import (
    BodyEncodingFailure,
    DecodingFailure,
    GenericFailure,
    HeaderEncodingFailure,
    InvalidResponse,
    RequestError,
    UnexpectedStatus,
)
from discord_rest.core.result import Failure, Result, Success
from discord_rest.core.transport import HttpImplementation, Request, RequestFailed, RequestMethod, Response
from discord_rest.core.types import (
    Message,
    MessageAttachment,
    MessageEdit,
    MessageList,
    NewMessage,
    Snowflake,
    Sticker,
    User,
)

__all__ = [
    "APIClient",
    "BodyEncodingFailure",
    "ClientConfig",
    "ClientProperties",
    "Credential",
    "DecodingFailure",
    "EncodedBody",
    "Failure",
    "GenericFailure",
    "HeaderEncodingFailure",
    "HttpImplementation",
    "InvalidResponse",
    "Message",
    "MessageAttachment",
    "MessageEdit",
    "MessageList",
    "NewMessage",
    "Request",
    "RequestError",
    "RequestFailed",
    "RequestMethod",
    "RequestSpec",
    "Response",
    "Result",
    "Snowflake",
    "Sticker",
    "Success",
    "UnexpectedStatus",
    "User",
    "build_request",
    "classify_response",
    "decode_response",
    "encode_body",
    "encode_payload",
]
