"""
Core HTTP client for the Discord REST API.

Handles authentication, fingerprinting headers, body encoding, dispatch,
status classification and typed decoding. Every call flows through
``APIClient.make_request`` and comes back as a ``Result``.
"""

import base64
import json
import typing
import urllib.parse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
import structlog

from discord_rest.core.config import ClientConfig, Credential
from discord_rest.core.encoding import Attachment, encode_body, encode_payload, to_json
from discord_rest.core.errors import (
    BodyEncodingFailure,
    DecodingFailure,
    GenericFailure,
    HeaderEncodingFailure,
    InvalidResponse,
    UnexpectedStatus,
)
from discord_rest.core.result import Failure, Result, Success
from discord_rest.core.transport import (
    HttpImplementation,
    Request,
    RequestFailed,
    RequestMethod,
    Response,
    httpx_transport,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

QueryItems = Sequence[tuple[str, Any]]

DEBUG_OPTIONS = "bugReporterEnabled"


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to build one request."""

    path: str
    query: tuple[tuple[str, Any], ...] = ()
    attachments: tuple[Attachment, ...] = ()
    body: bytes | None = None
    method: RequestMethod = RequestMethod.GET


# =============================================================================
# Pipeline stages
# =============================================================================


def build_url(rest_base: str, path: str, query: QueryItems = ()) -> str:
    """Resolve path against the REST base and append query items in order."""
    url = f"{rest_base.rstrip('/')}/{path.lstrip('/')}"
    if query:
        url = f"{url}?{urllib.parse.urlencode(list(query))}"
    return url


def encode_super_properties(properties: Any) -> str:
    """
    Base64 of the JSON-encoded client properties.

    Raises:
        HeaderEncodingFailure: If the properties aren't serializable

    """
    try:
        encoded = to_json(properties)
    except (TypeError, ValueError, RecursionError) as e:
        logger.error("super_properties_encode_failed", error=str(e))
        raise HeaderEncodingFailure() from e
    return base64.b64encode(encoded).decode("ascii")


def build_request(config: ClientConfig, credential: Credential, spec: RequestSpec) -> Request:
    """
    Assemble a request ready for dispatch.

    The header set matches requests sent by the official desktop client.

    Args:
        config: Client configuration (base URLs, user agent, super properties)
        credential: Token used for the authorization header
        spec: Path, query, attachments, body and method of this call

    Returns:
        The built Request

    Raises:
        HeaderEncodingFailure: If the super properties can't be encoded

    """
    headers = {
        "authorization": credential.authorization,
        "origin": config.base_url,
        "user-agent": config.user_agent,
        "sec-fetch-mode": "cors",
        "sec-fetch-site": "same-origin",
        "sec-fetch-dest": "empty",
        "x-discord-locale": config.locale,
        "x-debug-options": DEBUG_OPTIONS,
        "x-super-properties": encode_super_properties(config.properties),
    }

    encoded = encode_body(spec.body, spec.attachments)
    if encoded is not None:
        headers["content-type"] = encoded.content_type

    return Request(
        method=spec.method,
        url=build_url(config.rest_base, spec.path, spec.query),
        headers=headers,
        body=encoded.content if encoded is not None else None,
    )


def classify_response(response: Response) -> Result[bytes]:
    """Pass 2xx bodies through, turn anything else into UnexpectedStatus."""
    if 200 <= response.status < 300:
        return Success(response.body)

    logger.error("unexpected_status", status=response.status)
    logger.debug("raw_response", body=response.body.decode("utf-8", errors="replace"))
    return Failure(UnexpectedStatus(response.status))


def _describe(error: Exception) -> str:
    if isinstance(error, KeyError):
        return f"missing key {error}"
    return f"{type(error).__name__}: {error}"


def _convert(value: Any, into: Any) -> Any:
    """Build ``into`` from a decoded JSON value, raising on shape mismatch."""
    if into is Any:
        return value

    origin = typing.get_origin(into)
    if origin is None:
        from_dict = getattr(into, "from_dict", None)
        if from_dict is not None:
            return from_dict(value)
        origin = into

    if not isinstance(value, origin):
        raise TypeError(f"expected {origin.__name__}, got {type(value).__name__}")

    args = typing.get_args(into)
    if origin is list and args:
        return [_convert(item, args[0]) for item in value]
    if origin is dict and len(args) == 2:
        return {key: _convert(item, args[1]) for key, item in value.items()}
    return value


def decode_response(data: bytes, into: Any = None) -> Result[T]:
    """
    Decode a success body into the requested type.

    Args:
        data: Raw response body
        into: A class with a from_dict classmethod, a plain container type
            (dict, list), a parameterized list/dict of those such as
            list[Sticker], or None for the raw JSON value

    Returns:
        Success with the decoded value, DecodingFailure when the body doesn't
        match the expected shape, GenericFailure for anything else

    """
    try:
        value = json.loads(data)
    except ValueError as e:
        return Failure(DecodingFailure(_describe(e)))
    except RecursionError:
        return Failure(GenericFailure("Response nested too deeply to decode"))

    if into is None:
        return Success(value)

    try:
        return Success(_convert(value, into))
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        return Failure(DecodingFailure(_describe(e)))
    except Exception as e:
        return Failure(GenericFailure(str(e) or type(e).__name__))


# =============================================================================
# Client
# =============================================================================


class APIClient:
    """
    Low-level HTTP client for the Discord REST API.

    Handles:
    - Authentication via bot or user token
    - Fingerprinting headers and super properties
    - JSON and multipart bodies
    - Status classification and typed decoding

    Calls are independent coroutines; the client holds no per-call state.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        credential: Credential | None = None,
        transport: HttpImplementation | None = None,
    ):
        """
        Initialize the API client.

        Args:
            config: Client configuration (defaults mimic the desktop client)
            credential: Token to authenticate with, can be set later
            transport: Coroutine function performing the network call;
                an httpx.AsyncClient owned by this client is used if omitted

        """
        self.config = config or ClientConfig()
        self.credential = credential
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client, if this client created one."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            self._transport = None

    def _ensure_credential(self) -> Credential:
        """Ensure a credential is configured."""
        if self.credential is None:
            raise AssertionError("Credential should not be None. Please set a token before using the REST API.")
        return self.credential

    def _get_transport(self) -> HttpImplementation:
        if self._transport is None:
            self._http = httpx.AsyncClient()
            self._transport = httpx_transport(self._http)
        return self._transport

    async def dispatch(self, request: Request) -> Result[Response]:
        """Send a built request, collapsing any transport fault into InvalidResponse."""
        transport = self._get_transport()
        try:
            return Success(await transport(request))
        except RequestFailed as e:
            error: Exception = e.inner
        except Exception as e:
            error = e
        logger.warning("transport_failed", method=request.method.value, url=request.url, error=str(error))
        return Failure(InvalidResponse())

    async def make_request(
        self,
        path: str,
        query: QueryItems = (),
        attachments: Sequence[Attachment] = (),
        body: bytes | None = None,
        method: RequestMethod = RequestMethod.GET,
    ) -> Result[bytes]:
        """
        Make a Discord REST API request.

        Low level method, meant to be as generic as possible. Prefer the
        get/post/delete/patch wrappers where possible.

        Args:
            path: API endpoint path relative to the configured REST base
            query: Query items, appended in the given order
            attachments: Paths of files to attach; sends multipart/form-data
                if there are any, application/json otherwise
            body: Request body, already JSON-encoded
            method: Method for the request

        Returns:
            Raw response body, or the error kind that stopped the request

        """
        credential = self._ensure_credential()
        logger.debug("making_request", method=method.value, path=path)

        spec = RequestSpec(
            path=path,
            query=tuple(query),
            attachments=tuple(attachments),
            body=body,
            method=method,
        )
        try:
            request = build_request(self.config, credential, spec)
        except HeaderEncodingFailure as e:
            return Failure(e)

        dispatched = await self.dispatch(request)
        if isinstance(dispatched, Failure):
            return dispatched
        return classify_response(dispatched.value)

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    async def get(self, path: str, query: QueryItems = (), *, into: type[T] | None = None) -> Result[T]:
        """Make a GET request and decode the response."""
        result = await self.make_request(path, query=query)
        if isinstance(result, Failure):
            return result
        return decode_response(result.value, into)

    async def post(
        self,
        path: str,
        body: Any = None,
        attachments: Sequence[Attachment] = (),
        *,
        into: type[T] | None = None,
    ) -> Result[T]:
        """Make a POST request with an optional body and attachments, and decode the response."""
        try:
            payload = encode_payload(body) if body is not None else None
        except BodyEncodingFailure as e:
            return Failure(e)

        result = await self.make_request(path, attachments=attachments, body=payload, method=RequestMethod.POST)
        if isinstance(result, Failure):
            return result
        return decode_response(result.value, into)

    async def post_no_content(self, path: str, body: Any) -> None:
        """Make a POST request to an endpoint that returns an empty response."""
        payload = encode_payload(body)
        (await self.make_request(path, body=payload, method=RequestMethod.POST)).unwrap()

    async def empty_post(self, path: str) -> None:
        """Make a POST request with no payload to an endpoint that returns an empty response."""
        (await self.make_request(path, method=RequestMethod.POST)).unwrap()

    async def delete(self, path: str) -> None:
        """Make a DELETE request."""
        (await self.make_request(path, method=RequestMethod.DELETE)).unwrap()

    async def patch(self, path: str, body: Any) -> None:
        """Make a PATCH request. The response body is discarded."""
        payload = encode_payload(body)
        (await self.make_request(path, body=payload, method=RequestMethod.PATCH)).unwrap()
