__version__ = "0.1.0"

from .client import (
    ClientConfig,
    Credentials,
    DefaultExecutionContext,
    EnvCredentialProvider,
    QueryExecutor,
    RequestSpec,
    RequestsTransport,
    StaticCredentialProvider,
)
from .exceptions import (
    ConfigurationError,
    GraphQLError,
    QueryError,
    SembleError,
    TransportError,
)
from .pagination import (
    PaginationConfig,
    PaginationDriver,
    PaginationResult,
    QuerySpec,
    normalize,
)
from .trigger import PollConfig, Poller


__all__ = [
    "ClientConfig",
    "Credentials",
    "DefaultExecutionContext",
    "EnvCredentialProvider",
    "StaticCredentialProvider",
    "QueryExecutor",
    "RequestSpec",
    "RequestsTransport",
    "PaginationConfig",
    "PaginationDriver",
    "PaginationResult",
    "QuerySpec",
    "normalize",
    "PollConfig",
    "Poller",
    "SembleError",
    "ConfigurationError",
    "QueryError",
    "TransportError",
    "GraphQLError",
]
