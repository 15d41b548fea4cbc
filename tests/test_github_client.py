"""Tests for GitHub API client behavior with mocked HTTP."""

import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gitvaluation.config import GitHubConfig
from gitvaluation.errors import ApiError, AuthenticationError, RepositoryNotFoundError
from gitvaluation.github_client import GitHubClient


def _build_client() -> GitHubClient:
    return GitHubClient(config=GitHubConfig(token="gh-token", timeout_seconds=10))


def _response(status_code: int, payload=None, text: str = "", headers: dict | None = None):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    response.json.return_value = payload if payload is not None else {}
    return response


def test_session_sends_bearer_token_and_json_accept_header():
    """Verify the session is authenticated with the configured bearer token."""
    client = _build_client()

    assert client._session.headers["Authorization"] == "Bearer gh-token"
    assert client._session.headers["Accept"] == "application/vnd.github.v3+json"


def test_list_closed_pull_requests_queries_recently_updated_closed_prs():
    """Verify PR listing requests 20 closed PRs sorted by update time, descending."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(200, payload=[{"number": 1}]))

    prs = client.list_closed_pull_requests("octo", "hello")

    assert prs == [{"number": 1}]
    call = client._session.get.call_args
    assert call.args[0] == "https://api.github.com/repos/octo/hello/pulls"
    assert call.kwargs["params"] == {
        "state": "closed",
        "sort": "updated",
        "direction": "desc",
        "per_page": 20,
    }
    assert call.kwargs["timeout"] == 10


def test_get_pull_request_diff_requests_diff_media_type():
    """Verify diff retrieval overrides the Accept header with the diff media type."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(200, text="diff --git a/x b/x"))

    diff = client.get_pull_request_diff("octo", "hello", 7)

    assert diff == "diff --git a/x b/x"
    call = client._session.get.call_args
    assert call.args[0] == "https://api.github.com/repos/octo/hello/pulls/7"
    assert call.kwargs["headers"] == {"Accept": "application/vnd.github.v3.diff"}


def test_get_first_commit_email_reads_commit_author_email():
    """Verify the first commit's author email is returned from a one-item page."""
    client = _build_client()
    payload = [{"commit": {"author": {"email": "dev@example.com"}}}]
    client._session.get = Mock(return_value=_response(200, payload=payload))

    assert client.get_first_commit_email("octo", "hello", 7) == "dev@example.com"
    assert client._session.get.call_args.kwargs["params"] == {"per_page": 1}


def test_get_first_commit_email_returns_none_for_empty_page():
    """Verify an empty commit list yields no email."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(200, payload=[]))

    assert client.get_first_commit_email("octo", "hello", 7) is None


@pytest.mark.parametrize(
    "payload",
    [
        [None],
        ["abc123"],
        [{"commit": "abc123"}],
        [{"commit": {"author": None}}],
        [{"commit": {"author": "Octo Cat"}}],
    ],
)
def test_get_first_commit_email_returns_none_for_malformed_entries(payload):
    """Verify unexpected commit entry shapes yield no email instead of raising."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(200, payload=payload))

    assert client.get_first_commit_email("octo", "hello", 7) is None


def test_404_raises_repository_not_found():
    """Verify HTTP 404 maps to RepositoryNotFoundError without retrying."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(404, text="Not Found"))

    with pytest.raises(RepositoryNotFoundError, match="Repository not found"):
        client.list_closed_pull_requests("octo", "missing")

    assert client._session.get.call_count == 1


@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_failures_raise_authentication_error(status_code):
    """Verify HTTP 401/403 map to AuthenticationError."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(status_code, text="Bad credentials"))

    with pytest.raises(AuthenticationError, match="GitHub authentication failed"):
        client.list_closed_pull_requests("octo", "hello")


def test_other_client_errors_surface_response_body():
    """Verify non-mapped HTTP errors include the raw response body text."""
    client = _build_client()
    client._session.get = Mock(return_value=_response(422, text="Validation Failed"))

    with pytest.raises(ApiError) as exc_info:
        client.list_closed_pull_requests("octo", "hello")

    assert str(exc_info.value) == "GitHub API error: Validation Failed"
    assert exc_info.value.status_code == 422


def test_get_retries_on_429_and_succeeds():
    """Verify requests retry after HTTP 429 and eventually return the payload."""
    client = _build_client()
    first = _response(429, headers={"Retry-After": "1"})
    second = _response(200, payload=[{"number": 3}])
    client._session.get = Mock(side_effect=[first, second])

    with patch("gitvaluation.github_client.time.sleep") as sleep_mock:
        prs = client.list_closed_pull_requests("octo", "hello")

    assert prs == [{"number": 3}]
    assert client._session.get.call_count == 2
    sleep_mock.assert_called_once_with(1)


def test_get_retries_on_5xx_and_raises_after_max_retries():
    """Verify retryable server errors are retried and raise ApiError after the limit."""
    client = _build_client()
    server_error = _response(503, text="service unavailable")
    client._session.get = Mock(side_effect=[server_error] * client._MAX_RETRIES)

    with patch("gitvaluation.github_client.time.sleep") as sleep_mock:
        with pytest.raises(ApiError):
            client.list_closed_pull_requests("octo", "hello")

    assert client._session.get.call_count == client._MAX_RETRIES
    assert sleep_mock.call_count == client._MAX_RETRIES - 1


def test_connection_errors_raise_api_error_after_retries():
    """Verify transport exceptions are wrapped in ApiError once retries are exhausted."""
    client = _build_client()
    client._session.get = Mock(side_effect=requests.ConnectionError("boom"))

    with patch("gitvaluation.github_client.time.sleep"):
        with pytest.raises(ApiError, match="failed after retries"):
            client.get_pull_request("octo", "hello", 1)


def test_invalid_json_raises_api_error():
    """Verify a non-JSON body on a JSON endpoint raises ApiError."""
    client = _build_client()
    response = _response(200)
    response.json.side_effect = ValueError("no json")
    client._session.get = Mock(return_value=response)

    with pytest.raises(ApiError, match="invalid JSON"):
        client.get_pull_request("octo", "hello", 1)
