from .config import DEFAULT_ENDPOINT, ClientConfig
from .context import DefaultExecutionContext, ExecutionContext
from .credentials import (
    CredentialProvider,
    Credentials,
    EnvCredentialProvider,
    StaticCredentialProvider,
)
from .executor import QueryExecutor, RequestSpec
from .transport import HttpTransport, RequestsTransport

__all__ = [
    "ClientConfig",
    "DEFAULT_ENDPOINT",
    "ExecutionContext",
    "DefaultExecutionContext",
    "CredentialProvider",
    "Credentials",
    "EnvCredentialProvider",
    "StaticCredentialProvider",
    "QueryExecutor",
    "RequestSpec",
    "HttpTransport",
    "RequestsTransport",
]
