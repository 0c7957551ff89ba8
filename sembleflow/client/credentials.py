import os
from typing import Protocol

from pydantic import BaseModel, ConfigDict, SecretStr

from sembleflow.exceptions import ConfigurationError

from .config import DEFAULT_ENDPOINT


class Credentials(BaseModel):
    """Endpoint and API token for one Semble account."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_ENDPOINT
    api_token: SecretStr

    def token_preview(self, length: int = 8) -> str:
        """Returns at most half of the token, safe for logs."""
        token = self.api_token.get_secret_value()
        return f"{token[: min(length, len(token) // 2)]}..."


class CredentialProvider(Protocol):
    def get_credentials(self) -> Credentials: ...


class StaticCredentialProvider:
    """Hands out the same credentials on every call."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    def get_credentials(self) -> Credentials:
        return self._credentials


class EnvCredentialProvider:
    """
    Reads credentials from environment variables on every call.

    Args:
        token_var (str): Variable holding the API token.
        url_var (str): Variable holding the GraphQL endpoint. Falls back to
            the public Semble endpoint when unset.
    """

    def __init__(
        self, token_var: str = "SEMBLE_API_TOKEN", url_var: str = "SEMBLE_API_URL"
    ):
        self.token_var = token_var
        self.url_var = url_var

    def get_credentials(self) -> Credentials:
        token = os.environ.get(self.token_var, "").strip()
        if not token:
            raise ConfigurationError(
                f"Environment variable {self.token_var} is not set"
            )
        base_url = os.environ.get(self.url_var, "").strip() or DEFAULT_ENDPOINT
        return Credentials(base_url=base_url, api_token=SecretStr(token))
