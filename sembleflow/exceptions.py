from typing import Any


class SembleError(Exception):
    """Base exception for sembleflow."""

    pass


class ConfigurationError(SembleError):
    """Raised when pagination options or client settings are invalid."""

    pass


class QueryError(SembleError):
    """
    Raised when a GraphQL operation could not be completed.

    Carries enough structured context for the caller to build its own
    user-facing message without re-deriving it.

    Attributes:
        operation (str): Name of the GraphQL operation that failed.
        attempts (int): Number of requests sent before giving up.
        status_code (int | None): HTTP status of the last response, if any.
    """

    kind = "query"

    def __init__(
        self,
        message: str,
        operation: str = "anonymous",
        attempts: int = 1,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.attempts = attempts
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Returns the error context as a plain dictionary."""
        return {
            "kind": self.kind,
            "message": self.message,
            "operation": self.operation,
            "attempts": self.attempts,
            "status_code": self.status_code,
            "cause": str(self.__cause__) if self.__cause__ else None,
        }


class TransportError(QueryError):
    """Raised when the HTTP request fails or retries are exhausted."""

    kind = "transport"

    def __init__(
        self,
        message: str,
        operation: str = "anonymous",
        attempts: int = 1,
        status_code: int | None = None,
        transient: bool = False,
    ):
        super().__init__(message, operation, attempts, status_code)
        self.transient = transient

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["transient"] = self.transient
        return data


class GraphQLError(QueryError):
    """Raised when the API answers with an ``errors`` payload. Never retried."""

    kind = "graphql"

    def __init__(
        self,
        messages: list[str],
        operation: str = "anonymous",
        status_code: int | None = None,
    ):
        self.messages = messages or ["Unknown GraphQL error"]
        super().__init__(
            f"GraphQL Error: {self.messages[0]}",
            operation=operation,
            attempts=1,
            status_code=status_code,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["messages"] = list(self.messages)
        return data
