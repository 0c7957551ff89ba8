import os
from unittest.mock import patch

import pytest

from sembleflow.client.config import DEFAULT_ENDPOINT
from sembleflow.client.credentials import (
    Credentials,
    EnvCredentialProvider,
    StaticCredentialProvider,
)
from sembleflow.exceptions import ConfigurationError


def test_token_is_hidden_in_repr():
    credentials = Credentials(api_token="super-secret-token")

    assert "super-secret-token" not in repr(credentials)
    assert credentials.base_url == DEFAULT_ENDPOINT


def test_token_preview_is_bounded():
    credentials = Credentials(api_token="abcdefghijklmnop")

    assert credentials.token_preview() == "abcdefgh..."
    assert credentials.token_preview(4) == "abcd..."


@pytest.mark.parametrize(
    "token, expected",
    [("abcdefgh", "abcd..."), ("abc", "a..."), ("a", "...")],
)
def test_token_preview_never_shows_short_tokens_in_full(token, expected):
    assert Credentials(api_token=token).token_preview() == expected


def test_static_provider_returns_same_credentials():
    credentials = Credentials(api_token="abc")
    provider = StaticCredentialProvider(credentials)

    assert provider.get_credentials() is credentials


def test_env_provider_reads_token_and_url():
    env = {"SEMBLE_API_TOKEN": "env-token", "SEMBLE_API_URL": "https://dev/graphql"}
    with patch.dict(os.environ, env, clear=True):
        credentials = EnvCredentialProvider().get_credentials()

    assert credentials.api_token.get_secret_value() == "env-token"
    assert credentials.base_url == "https://dev/graphql"


def test_env_provider_defaults_endpoint():
    with patch.dict(os.environ, {"SEMBLE_API_TOKEN": "env-token"}, clear=True):
        credentials = EnvCredentialProvider().get_credentials()

    assert credentials.base_url == DEFAULT_ENDPOINT


def test_env_provider_requires_token():
    with patch.dict(os.environ, {"SEMBLE_API_TOKEN": "  "}, clear=True):
        with pytest.raises(ConfigurationError) as excinfo:
            EnvCredentialProvider().get_credentials()

    assert "SEMBLE_API_TOKEN" in str(excinfo.value)
