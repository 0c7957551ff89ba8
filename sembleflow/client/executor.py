"""
Executes single GraphQL operations against the Semble API.

Server errors (5xx) are retried with exponential backoff. GraphQL ``errors``
payloads, client errors and connectivity failures are raised straight away.
"""

import logging
import re
import time
from typing import Any, Callable

import requests
from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from sembleflow.exceptions import GraphQLError, TransportError

from .config import ClientConfig
from .context import ExecutionContext
from .credentials import Credentials
from .transport import HttpTransport, RequestsTransport, is_transient, status_code_of

OPERATION_NAME = re.compile(r"^\s*(?:query|mutation|subscription)\s+(\w+)")


class RequestSpec(BaseModel):
    """One GraphQL operation and how hard to try sending it."""

    model_config = ConfigDict(frozen=True)

    query: str
    variables: dict[str, Any] = Field(default_factory=dict)
    max_retries: int | None = Field(
        default=None, ge=0, description="Overrides ClientConfig.max_retries"
    )
    debug: bool = False
    operation_name: str | None = None

    @property
    def operation(self) -> str:
        if self.operation_name:
            return self.operation_name
        match = OPERATION_NAME.match(self.query)
        return match.group(1) if match else "anonymous"


class QueryExecutor:
    """
    Sends GraphQL requests with credential injection and retry/backoff.

    The executor keeps no per-request state, so one instance can serve any
    number of independent fetches.
    """

    def __init__(
        self,
        context: ExecutionContext,
        transport: HttpTransport | None = None,
        config: ClientConfig | None = None,
        sleep: Callable[[float], None] | None = None,
    ):
        """
        Initializes the executor.

        Args:
            context (ExecutionContext): Provides credentials and logging.
            transport (HttpTransport | None): Transport to send requests with.
                Defaults to a RequestsTransport.
            config (ClientConfig | None): Retry and header settings.
            sleep (Callable[[float], None] | None): Used to wait between
                retries. Defaults to time.sleep.
        """
        self.context = context
        self.config = config if config else ClientConfig()
        self.transport = (
            transport if transport else RequestsTransport(timeout=self.config.timeout)
        )
        self._sleep = sleep

    def execute(self, spec: RequestSpec) -> dict[str, Any]:
        """
        Executes one GraphQL operation.

        Args:
            spec (RequestSpec): Operation text, variables and retry settings.

        Returns:
            dict[str, Any]: The ``data`` member of the response, or an empty
                dict when the server sent none.

        Raises:
            GraphQLError: The response carried an ``errors`` payload.
            TransportError: The request failed terminally, or kept failing
                with server errors until retries ran out.
        """
        credentials = self.context.get_credentials()
        max_retries = (
            spec.max_retries if spec.max_retries is not None else self.config.max_retries
        )
        operation = spec.operation
        headers = self._build_headers(credentials)
        payload = {"query": spec.query, "variables": dict(spec.variables)}

        def log_retry(retry_state: RetryCallState) -> None:
            e = retry_state.outcome.exception()
            self.context.log(
                logging.WARNING,
                f"{operation} failed with status {status_code_of(e)}, "
                f"retrying in {retry_state.next_action.sleep:.2f}s "
                f"(retry {retry_state.attempt_number} of {max_retries})",
            )

        retrying = Retrying(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(
                multiplier=self.config.base_delay, max=self.config.max_delay
            ),
            retry=retry_if_exception(is_transient),
            sleep=self._sleep or time.sleep,
            before_sleep=log_retry,
            reraise=True,
        )

        attempts = 0
        try:
            for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    if spec.debug:
                        self.context.log(
                            logging.DEBUG,
                            f"Sending {operation} to {credentials.base_url} "
                            f"(attempt {attempts}/{max_retries + 1}, "
                            f"token {credentials.token_preview()})",
                        )
                    body = self.transport.post(credentials.base_url, payload, headers)
        except (requests.RequestException, ValueError) as e:
            transient = is_transient(e)
            if transient:
                message = f"{operation} failed after {attempts} attempts: {str(e)}"
            else:
                message = f"{operation} failed: {str(e)}"
            self.context.log(logging.ERROR, message)
            raise TransportError(
                message,
                operation=operation,
                attempts=attempts,
                status_code=status_code_of(e),
                transient=transient,
            ) from e

        return self._unwrap(body, operation)

    def _build_headers(self, credentials: Credentials) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            self.config.token_header: credentials.api_token.get_secret_value(),
        }

    def _unwrap(self, body: Any, operation: str) -> dict[str, Any]:
        if not isinstance(body, dict):
            return {}

        errors = body.get("errors")
        if errors:
            messages = [
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
            self.context.log(
                logging.ERROR, f"{operation} rejected: {'; '.join(messages)}"
            )
            raise GraphQLError(messages, operation=operation)

        data = body.get("data")
        return data if isinstance(data, dict) else {}
