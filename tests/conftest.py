"""Pytest configuration - shared fixtures and a recording fake transport."""

from collections.abc import Iterator

import pytest
import structlog

from discord_rest.core import APIClient, ClientConfig, ClientProperties, Credential, Request, Response

REST_BASE = "https://discord.com/api/v9"
BASE_URL = "https://discord.com"
USER_AGENT = "TestClient/1.0"


class FakeTransport:
    """HttpImplementation that records requests and replays queued outcomes."""

    def __init__(self, *outcomes: Response | Exception):
        self.outcomes = list(outcomes)
        self.requests: list[Request] = []

    async def __call__(self, request: Request) -> Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else Response(status=200, body=b"{}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def last(self) -> Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        rest_base=REST_BASE,
        base_url=BASE_URL,
        user_agent=USER_AGENT,
        properties=ClientProperties(client_build_number=1234),
    )


@pytest.fixture
def bot_credential() -> Credential:
    return Credential(token="bot-token", is_bot=True)


@pytest.fixture
def user_credential() -> Credential:
    return Credential(token="user-token")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(config: ClientConfig, bot_credential: Credential, transport: FakeTransport) -> APIClient:
    return APIClient(config=config, credential=bot_credential, transport=transport)
