"""Tests for merged pull-request retrieval."""

import sys
from pathlib import Path
from unittest.mock import Mock, patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gitvaluation.config import GitHubConfig
from gitvaluation.errors import ApiError, AuthenticationError, RepositoryNotFoundError
from gitvaluation.fetcher import (
    DIFF_CHAR_LIMIT,
    TRUNCATION_MARKER,
    fetch_pull_requests,
    select_merged,
    truncate_diff,
)
from gitvaluation.github_client import GitHubClient


def _listed_pr(number: int, merged: bool = True) -> dict:
    return {
        "number": number,
        "merged_at": f"2026-01-0{number % 9 + 1}T12:00:00Z" if merged else None,
    }


def _detail(number: int, login: str = "octocat", merged_at: str | None = "2026-01-02T12:00:00Z") -> dict:
    return {
        "number": number,
        "title": f"Fix bug {number}",
        "user": {"login": login},
        "created_at": "2026-01-01T08:00:00Z",
        "merged_at": merged_at,
        "additions": 40 + number,
        "deletions": 5,
        "changed_files": 3,
    }


def _client(listed, details=None, diff="diff --git a/x b/x\n", email="dev@example.com") -> Mock:
    details = details or {}
    client = Mock()
    client.list_closed_pull_requests.return_value = listed
    client.get_pull_request.side_effect = lambda owner, repo, number: details.get(number, _detail(number))
    client.get_pull_request_diff.return_value = diff
    client.get_first_commit_email.return_value = email
    return client


def test_truncate_diff_keeps_short_diffs_unchanged():
    """Verify diffs within the limit are returned as-is."""
    diff = "x" * DIFF_CHAR_LIMIT
    assert truncate_diff(diff) == diff


def test_truncate_diff_cuts_long_diffs_and_appends_marker():
    """Verify long diffs keep exactly the first 1000 characters followed by the marker."""
    diff = "".join(chr(ord("a") + i % 26) for i in range(5000))

    truncated = truncate_diff(diff)

    assert truncated.endswith(TRUNCATION_MARKER)
    assert truncated[: -len(TRUNCATION_MARKER)] == diff[:DIFF_CHAR_LIMIT]
    assert len(truncated[: -len(TRUNCATION_MARKER)]) == 1000


def test_select_merged_preserves_api_order_and_caps_at_ten():
    """Verify unmerged PRs are dropped and at most ten merged PRs are kept in API order."""
    listed = [_listed_pr(i, merged=(i % 3 != 0)) for i in range(1, 21)]

    merged = select_merged(listed)

    assert len(merged) == 10
    assert [pr["number"] for pr in merged] == [1, 2, 4, 5, 7, 8, 10, 11, 13, 14]


def test_fetch_builds_commit_records_from_pr_details():
    """Verify records carry API-reported counts, merge time and the commit email."""
    client = _client([_listed_pr(5)])

    result = fetch_pull_requests("https://github.com/octo/hello", client=client)

    assert result.success is True
    assert result.repo_name == "octo/hello"
    record = result.commits[0]
    assert record.sha == "PR-5"
    assert record.author == "octocat"
    assert record.author_email == "dev@example.com"
    assert record.date == "2026-01-02T12:00:00Z"
    assert record.message == "Fix bug 5"
    assert (record.files_changed, record.additions, record.deletions) == (3, 45, 5)


def test_fetch_issues_requests_sequentially_per_pr():
    """Verify detail, diff and email lookups are made once per merged PR."""
    client = _client([_listed_pr(1), _listed_pr(2), _listed_pr(3, merged=False)])

    fetch_pull_requests("octo/hello", client=client)

    assert [c.args for c in client.get_pull_request.call_args_list] == [
        ("octo", "hello", 1),
        ("octo", "hello", 2),
    ]
    assert client.get_pull_request_diff.call_count == 2
    assert client.get_first_commit_email.call_count == 2


def test_fetch_falls_back_to_creation_time_without_merge_time():
    """Verify the record date uses created_at when the detail lacks merged_at."""
    client = _client([_listed_pr(1)], details={1: _detail(1, merged_at=None)})

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.commits[0].date == "2026-01-01T08:00:00Z"


def test_fetch_truncates_long_diffs():
    """Verify a diff longer than 1000 characters is stored truncated with the marker."""
    client = _client([_listed_pr(1)], diff="+" * 4000)

    result = fetch_pull_requests("octo/hello", client=client)

    diff = result.commits[0].diff
    assert diff.endswith(TRUNCATION_MARKER)
    assert len(diff) == DIFF_CHAR_LIMIT + len(TRUNCATION_MARKER)


def test_fetch_uses_login_email_when_commit_lookup_fails():
    """Verify the email defaults to <login>@github.com when the lookup errors."""
    client = _client([_listed_pr(1)], details={1: _detail(1, login="hubot")})
    client.get_first_commit_email.side_effect = ApiError("GitHub API error: boom", status_code=500)

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.commits[0].author_email == "hubot@github.com"


def test_fetch_uses_login_email_when_commit_has_no_email():
    """Verify the email defaults to <login>@github.com when no email is available."""
    client = _client([_listed_pr(1)], details={1: _detail(1, login="hubot")}, email=None)

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.commits[0].author_email == "hubot@github.com"


def test_fetch_uses_login_email_when_commit_entry_is_malformed():
    """Verify a malformed commit list from GitHub falls back to the login email."""
    client = GitHubClient(config=GitHubConfig(token="gh-token"))
    client.list_closed_pull_requests = Mock(return_value=[_listed_pr(1)])
    client.get_pull_request = Mock(return_value=_detail(1, login="hubot"))
    client.get_pull_request_diff = Mock(return_value="diff --git a/x b/x\n")
    commits_response = Mock(status_code=200, headers={})
    commits_response.json.return_value = ["not-a-commit"]
    client._session.get = Mock(return_value=commits_response)

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.success
    assert result.commits[0].author_email == "hubot@github.com"


def test_fetch_skips_prs_whose_detail_or_diff_fails():
    """Verify one failed PR is skipped with a reason while the rest are collected."""
    client = _client([_listed_pr(1), _listed_pr(2), _listed_pr(3)])
    client.get_pull_request_diff.side_effect = [
        "diff one",
        ApiError("GitHub API error: gone", status_code=410),
        "diff three",
    ]

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.success is True
    assert [c.sha for c in result.commits] == ["PR-1", "PR-3"]
    assert [s.key for s in result.skipped] == ["PR-2"]
    assert "gone" in result.skipped[0].reason


def test_fetch_reports_failure_when_every_pr_fetch_fails():
    """Verify losing every PR surfaces a data-unavailable failure."""
    client = _client([_listed_pr(1), _listed_pr(2)])
    client.get_pull_request.side_effect = ApiError("GitHub API error: boom", status_code=500)

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.success is False
    assert result.error == "Could not fetch any PR data. Check repository permissions."
    assert result.commits == []


def test_fetch_reports_no_merged_pull_requests():
    """Verify 20 closed but unmerged PRs produce the no-merged-PRs failure."""
    client = _client([_listed_pr(i, merged=False) for i in range(1, 21)])

    result = fetch_pull_requests("octo/hello", client=client)

    assert result.success is False
    assert result.error == "No merged pull requests found in this repository"
    client.get_pull_request.assert_not_called()


def test_fetch_rejects_invalid_reference_without_network_calls():
    """Verify a malformed reference fails with the expected-format hint before any request."""
    client = _client([])

    result = fetch_pull_requests("not-a-repo", client=client)

    assert result.success is False
    assert "https://github.com/owner/repo" in result.error
    client.list_closed_pull_requests.assert_not_called()


def test_fetch_maps_not_found_and_auth_errors_to_messages():
    """Verify 404 and 401/403 errors from the listing become user-facing messages."""
    client = _client([])
    client.list_closed_pull_requests.side_effect = RepositoryNotFoundError("Repository not found", 404)
    assert fetch_pull_requests("octo/missing", client=client).error == "Repository not found"

    client.list_closed_pull_requests.side_effect = AuthenticationError(
        "GitHub authentication failed. Check your token.", 401
    )
    assert fetch_pull_requests("octo/hello", client=client).error == (
        "GitHub authentication failed. Check your token."
    )


def test_fetch_without_token_fails_before_any_request(monkeypatch):
    """Verify a missing GITHUB_TOKEN is a configuration failure with no client created."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    with patch("gitvaluation.fetcher.GitHubClient") as client_ctor:
        result = fetch_pull_requests("octo/hello")

    assert result.success is False
    assert result.error == "GITHUB_TOKEN environment variable is not set"
    client_ctor.assert_not_called()
