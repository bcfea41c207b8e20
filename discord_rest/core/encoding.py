"""
Request body encoding.

Produces either a JSON body or a multipart/form-data body carrying file
attachments next to the JSON payload. Attachments are read fully into memory.
"""

import dataclasses
import json
import mimetypes
import os
import secrets
import string
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog

from discord_rest.core.errors import BodyEncodingFailure

logger = structlog.get_logger(__name__)

# Exact boundary format used by Electron (WebKit) in the desktop client
BOUNDARY_PREFIX = "----WebKitFormBoundary"
BOUNDARY_LENGTH = 16
_BOUNDARY_ALPHABET = string.ascii_letters + string.digits

JSON_CONTENT_TYPE = "application/json"
DEFAULT_ATTACHMENT_TYPE = "application/octet-stream"

Attachment = str | os.PathLike[str]


@runtime_checkable
class Encodable(Protocol):
    """Anything that can turn itself into a JSON-serializable dict."""

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class EncodedBody:
    content: bytes
    content_type: str


def _to_json_value(obj: Any) -> Any:
    if isinstance(obj, Encodable):
        return obj.to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(value: Any) -> bytes:
    """Compact JSON encoding shared by request bodies and headers."""
    return json.dumps(value, default=_to_json_value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def encode_payload(payload: Any) -> bytes:
    """
    JSON-encode a request payload.

    Raises:
        BodyEncodingFailure: If the payload isn't serializable

    """
    try:
        return to_json(payload)
    except (TypeError, ValueError, RecursionError) as e:
        raise BodyEncodingFailure(f"Couldn't encode request body: {e}") from e


def generate_boundary() -> str:
    """Fresh multipart boundary, never reused across requests."""
    suffix = "".join(secrets.choice(_BOUNDARY_ALPHABET) for _ in range(BOUNDARY_LENGTH))
    return f"{BOUNDARY_PREFIX}{suffix}"


def _quote_filename(name: str) -> str:
    """Escape a filename for a quoted Content-Disposition parameter the way WebKit does."""
    return name.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


def _read_attachment(attachment: Attachment) -> bytes | None:
    try:
        return Path(attachment).read_bytes()
    except OSError as e:
        logger.warning("attachment_unreadable", path=os.fspath(attachment), error=str(e))
        return None


def create_multipart_body(
    payload: bytes | None,
    boundary: str,
    attachments: Sequence[Attachment],
) -> bytes:
    """
    Build a multipart/form-data body.

    Each attachment becomes a ``files[n]`` part, followed by the JSON payload as
    a ``payload_json`` part if there is one.

    Args:
        payload: Already-encoded JSON payload
        boundary: Boundary token shared by every part
        attachments: Paths of the files to attach

    Returns:
        Raw body bytes

    """
    delimiter = f"--{boundary}\r\n".encode()
    body = bytearray()

    for num, attachment in enumerate(attachments):
        data = _read_attachment(attachment)
        if data is None:
            continue
        filename = Path(attachment).name
        mime_type = mimetypes.guess_type(filename)[0] or DEFAULT_ATTACHMENT_TYPE
        quoted = _quote_filename(filename)
        body += delimiter
        body += f'Content-Disposition: form-data; name="files[{num}]"; filename="{quoted}"\r\n'.encode()
        body += f"Content-Type: {mime_type}\r\n\r\n".encode()
        body += data
        body += b"\r\n"

    if payload is not None:
        body += delimiter
        body += b'Content-Disposition: form-data; name="payload_json"\r\n'
        body += f"Content-Type: {JSON_CONTENT_TYPE}\r\n\r\n".encode()
        body += payload
        body += b"\r\n"

    body += f"--{boundary}--\r\n".encode()
    return bytes(body)


def encode_body(payload: bytes | None, attachments: Sequence[Attachment] = ()) -> EncodedBody | None:
    """Pick the body format: multipart with attachments, JSON with a payload, else nothing."""
    if attachments:
        boundary = generate_boundary()
        return EncodedBody(
            content=create_multipart_body(payload, boundary, attachments),
            content_type=f"multipart/form-data; boundary={boundary}",
        )
    if payload is not None:
        return EncodedBody(content=payload, content_type=JSON_CONTENT_TYPE)
    return None
