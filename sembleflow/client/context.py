import logging
from typing import Protocol

from sembleflow.log import logger

from .credentials import CredentialProvider, Credentials


class ExecutionContext(Protocol):
    """Capabilities the executor needs from whoever calls it."""

    def get_credentials(self) -> Credentials: ...

    def log(self, level: int, msg: str) -> None: ...


class DefaultExecutionContext:
    """
    Execution context backed by a credential provider and the package logger.

    Args:
        credential_provider (CredentialProvider): Source of credentials.
        log (logging.Logger | None): Logger to write to. Defaults to a child
            of the package logger.
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        log: logging.Logger | None = None,
    ):
        self.credential_provider = credential_provider
        self.logger = log or logger.getChild(self.__class__.__name__)

    def get_credentials(self) -> Credentials:
        return self.credential_provider.get_credentials()

    def log(self, level: int, msg: str) -> None:
        self.logger.log(level, msg)
