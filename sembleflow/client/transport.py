from typing import Any, Protocol

import requests


class HttpTransport(Protocol):
    """Sends one JSON POST request and returns the decoded body.

    Implementations raise requests exceptions on transport failures. One that
    carries a ``response`` with a ``status_code`` lets the executor tell server
    errors apart from client and connectivity errors.
    """

    def post(
        self, url: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]: ...


class RequestsTransport:
    """HttpTransport backed by a requests.Session."""

    def __init__(self, timeout: int = 30, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def post(
        self, url: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]:
        response = self.session.post(
            url, json=payload, headers=headers, timeout=self.timeout
        )
        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()

    def close(self) -> None:
        self.session.close()


def status_code_of(exc: BaseException) -> int | None:
    """Returns the HTTP status attached to a transport exception, if any."""
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def is_transient(exc: BaseException) -> bool:
    """Server errors (5xx) are worth retrying, everything else is not."""
    status = status_code_of(exc)
    return status is not None and 500 <= status <= 599
