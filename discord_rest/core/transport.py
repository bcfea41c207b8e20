"""
Transport layer: the request/response envelope and the network call itself.

An ``HttpImplementation`` is any coroutine function taking a ``Request`` and
returning a ``Response``. Implementations signal transport faults by raising
``RequestFailed``.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

import httpx


class RequestMethod(str, Enum):
    """The few supported request methods."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class Request:
    method: RequestMethod
    url: str
    headers: dict[str, str]
    body: bytes | None


@dataclass(frozen=True)
class Response:
    status: int
    body: bytes


@dataclass
class RequestFailed(Exception):
    inner: Exception


HttpImplementation = Callable[[Request], Awaitable[Response]]


def httpx_transport(client: httpx.AsyncClient) -> HttpImplementation:
    """Build an HttpImplementation that sends requests through an httpx client."""

    async def send(request: Request) -> Response:
        try:
            response = await client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise RequestFailed(e) from e
        return Response(status=response.status_code, body=response.content)

    return send
