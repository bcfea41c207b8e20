from discord_rest.core.config import DEFAULT_REST_BASE, ClientConfig, ClientProperties, Credential


def test_defaults() -> None:
    config = ClientConfig()
    assert config.rest_base == DEFAULT_REST_BASE
    assert config.base_url == "https://discord.com"
    assert config.locale == "en-US"
    assert isinstance(config.properties, ClientProperties)


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCORD_REST_BASE", "https://canary.discord.com/api/v10")
    monkeypatch.setenv("DISCORD_USER_AGENT", "Agent/2")
    monkeypatch.delenv("DISCORD_BASE_URL", raising=False)

    config = ClientConfig.from_env()

    assert config.rest_base == "https://canary.discord.com/api/v10"
    assert config.user_agent == "Agent/2"
    assert config.base_url == "https://discord.com"


def test_credential_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "abc")
    monkeypatch.setenv("DISCORD_IS_BOT", "true")
    assert Credential.from_env() == Credential(token="abc", is_bot=True)

    monkeypatch.setenv("DISCORD_IS_BOT", "0")
    assert Credential.from_env() == Credential(token="abc", is_bot=False)


def test_credential_from_env_without_token(monkeypatch) -> None:
    monkeypatch.delenv("DISCORD_TOKEN", raising=False)
    assert Credential.from_env() is None


def test_authorization_header_value() -> None:
    assert Credential(token="t", is_bot=True).authorization == "Bot t"
    assert Credential(token="t").authorization == "t"


def test_token_hidden_from_repr() -> None:
    assert "secret" not in repr(Credential(token="secret"))
