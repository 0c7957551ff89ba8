from unittest.mock import MagicMock

import pytest
import requests

from sembleflow.client.config import ClientConfig
from sembleflow.client.context import DefaultExecutionContext
from sembleflow.client.credentials import Credentials, StaticCredentialProvider
from sembleflow.client.executor import QueryExecutor
from sembleflow.pagination.driver import PaginationDriver

ENDPOINT = "https://example.com/graphql"
TOKEN = "test-token-0123456789abcdef"


def http_error(status: int) -> requests.HTTPError:
    """Builds an HTTPError carrying a response with the given status code."""
    response = MagicMock()
    response.status_code = status
    return requests.HTTPError(f"{status} Error for url: {ENDPOINT}", response=response)


def page(records, has_more=None, location="patients"):
    """Builds the ``data`` payload of one page."""
    body = {"data": records}
    if has_more is not None:
        body["pageInfo"] = {"hasMore": has_more}
    return {location: body}


@pytest.fixture
def credentials():
    return Credentials(base_url=ENDPOINT, api_token=TOKEN)


@pytest.fixture
def context(credentials):
    return DefaultExecutionContext(StaticCredentialProvider(credentials))


@pytest.fixture
def transport():
    return MagicMock()


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def executor(context, transport, sleep):
    return QueryExecutor(
        context,
        transport=transport,
        config=ClientConfig(max_retries=3, base_delay=1.0, max_delay=10.0),
        sleep=sleep,
    )


@pytest.fixture
def fake_executor():
    """Executor stand-in whose execute() returns page payloads directly."""
    return MagicMock()


@pytest.fixture
def driver(fake_executor):
    return PaginationDriver(fake_executor)


@pytest.fixture
def make_http_error():
    return http_error


@pytest.fixture
def make_page():
    return page
