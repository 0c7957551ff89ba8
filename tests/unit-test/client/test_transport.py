from unittest.mock import MagicMock

import pytest
import requests

from sembleflow.client.transport import RequestsTransport, is_transient, status_code_of


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def transport(session):
    return RequestsTransport(timeout=15, session=session)


def test_post_sends_json_and_returns_body(transport, session):
    """Test that the payload is posted as JSON with the configured timeout."""
    response = MagicMock()
    response.content = b'{"data": {}}'
    response.json.return_value = {"data": {"ok": True}}
    session.post.return_value = response

    result = transport.post(
        "https://example.com/graphql", {"query": "{ x }"}, {"x-token": "abc"}
    )

    assert result == {"data": {"ok": True}}
    session.post.assert_called_once_with(
        "https://example.com/graphql",
        json={"query": "{ x }"},
        headers={"x-token": "abc"},
        timeout=15,
    )
    response.raise_for_status.assert_called_once()


def test_post_with_empty_body_returns_empty_dict(transport, session):
    response = MagicMock()
    response.content = b""
    session.post.return_value = response

    assert transport.post("https://example.com/graphql", {}, {}) == {}
    response.json.assert_not_called()


def test_post_raises_http_errors(transport, session):
    """Test that HTTP errors propagate for the executor to classify."""
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
    session.post.return_value = response

    with pytest.raises(requests.HTTPError):
        transport.post("https://example.com/graphql", {}, {})


@pytest.mark.parametrize(
    "status, expected",
    [(500, True), (502, True), (503, True), (599, True), (400, False), (429, False)],
)
def test_is_transient_by_status(make_http_error, status, expected):
    assert is_transient(make_http_error(status)) is expected


def test_errors_without_response_are_terminal():
    exc = requests.ConnectionError("Name or service not known")
    assert status_code_of(exc) is None
    assert is_transient(exc) is False


def test_non_requests_errors_are_terminal():
    assert is_transient(ValueError("Expecting value: line 1 column 1")) is False
