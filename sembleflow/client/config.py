from pydantic import BaseModel, Field

from sembleflow import __version__

DEFAULT_ENDPOINT = "https://open.semble.io/graphql"


class ClientConfig(BaseModel):
    max_retries: int = Field(
        default=3, ge=0, description="Retries for server errors before giving up"
    )
    base_delay: float = Field(
        default=1.0, ge=0, description="Initial backoff delay in seconds"
    )
    max_delay: float = Field(
        default=10.0, ge=0, description="Upper bound for a single backoff delay"
    )
    timeout: int = Field(default=30, description="Request timeout in seconds")
    token_header: str = Field(
        default="x-token", description="Header carrying the API token"
    )
    user_agent: str = Field(
        default=f"sembleflow/{__version__}",
        description="User-Agent sent with every request",
    )
