"""Merged pull-request retrieval for developer scoring.

This module turns the most recently updated merged pull requests of a
repository into ``CommitRecord`` objects:
- Only PRs with a merge timestamp are considered, in GitHub's update order.
- Detail, diff, and first-commit email are fetched sequentially per PR.
- A PR whose detail or diff request fails is skipped; the batch continues.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .config import load_github_config
from .errors import (
    ApiError,
    DataUnavailableError,
    EmptyResultError,
    GitValuationError,
    RepositoryReferenceError,
)
from .github_client import GitHubClient
from .models import CommitRecord, FetchResult, RepositoryRef, SkippedItem
from .repository import resolve_repository

logger = logging.getLogger(__name__)

LIST_PAGE_SIZE = 20
MAX_MERGED_PULL_REQUESTS = 10
DIFF_CHAR_LIMIT = 1000
TRUNCATION_MARKER = f"\n... [truncated at {DIFF_CHAR_LIMIT} chars]"


def truncate_diff(diff: str, limit: int = DIFF_CHAR_LIMIT, marker: str = TRUNCATION_MARKER) -> str:
    """Cut ``diff`` to ``limit`` characters, appending ``marker`` when cut."""
    if len(diff) <= limit:
        return diff
    return diff[:limit] + marker


def select_merged(pull_requests: List[Dict[str, Any]], limit: int = MAX_MERGED_PULL_REQUESTS) -> List[Dict[str, Any]]:
    """Keep merged pull requests in API order, up to ``limit``."""
    return [pr for pr in pull_requests if pr.get("merged_at")][:limit]


def _fetch_author_email(client: GitHubClient, ref: RepositoryRef, number: int, login: str) -> str:
    fallback = f"{login or 'unknown'}@github.com"
    try:
        email = client.get_first_commit_email(ref.owner, ref.repo, number)
    except ApiError as exc:
        logger.debug(
            "Falling back to login-based email",
            extra={"pr_number": number, "error": str(exc)},
        )
        return fallback
    return email or fallback


def build_commit_record(detail: Dict[str, Any], diff: str, author_email: str) -> CommitRecord:
    """Build a ``CommitRecord`` from a PR detail payload and its diff text."""
    user = detail.get("user") or {}
    return CommitRecord(
        sha=f"PR-{detail.get('number')}",
        author=str(user.get("login") or "Unknown"),
        author_email=author_email,
        date=str(detail.get("merged_at") or detail.get("created_at") or ""),
        message=str(detail.get("title") or ""),
        diff=truncate_diff(diff),
        files_changed=int(detail.get("changed_files") or 0),
        additions=int(detail.get("additions") or 0),
        deletions=int(detail.get("deletions") or 0),
    )


def collect_commit_records(
    client: GitHubClient,
    ref: RepositoryRef,
    pull_requests: List[Dict[str, Any]],
) -> Tuple[List[CommitRecord], List[SkippedItem]]:
    """Fetch detail, diff and author email for each PR, sequentially.

    Returns ``(records, skipped)``. A PR whose detail or diff request fails is
    recorded in ``skipped`` with the reason instead of aborting the batch.
    """
    records: List[CommitRecord] = []
    skipped: List[SkippedItem] = []

    for pr in pull_requests:
        number = pr.get("number")
        key = f"PR-{number}"

        try:
            detail = client.get_pull_request(ref.owner, ref.repo, int(number))
            diff = client.get_pull_request_diff(ref.owner, ref.repo, int(number))
        except (ApiError, TypeError, ValueError) as exc:
            logger.warning(
                "Skipping pull request after failed fetch",
                extra={"pr": key, "repo": ref.full_name, "error": str(exc)},
            )
            skipped.append(SkippedItem(key=key, reason=f"fetch failed: {exc}"))
            continue

        login = str((detail.get("user") or {}).get("login") or "")
        author_email = _fetch_author_email(client, ref, int(number), login)
        records.append(build_commit_record(detail, diff, author_email))

    logger.info(
        "Collected pull request records",
        extra={
            "repo": ref.full_name,
            "prs_total": len(pull_requests),
            "records": len(records),
            "skipped": len(skipped),
        },
    )

    return records, skipped


def _fetch(repo_reference: str, client: Optional[GitHubClient]) -> FetchResult:
    if client is None:
        client = GitHubClient(config=load_github_config())

    ref = resolve_repository(repo_reference)
    if ref is None:
        raise RepositoryReferenceError(
            "Invalid GitHub repository URL. Use format: https://github.com/owner/repo"
        )

    closed = client.list_closed_pull_requests(ref.owner, ref.repo, per_page=LIST_PAGE_SIZE)
    merged = select_merged(closed)
    if not merged:
        raise EmptyResultError("No merged pull requests found in this repository")

    records, skipped = collect_commit_records(client, ref, merged)
    if not records:
        raise DataUnavailableError("Could not fetch any PR data. Check repository permissions.")

    return FetchResult(success=True, commits=records, repo_name=ref.full_name, skipped=skipped)


def fetch_pull_requests(repo_reference: str, client: Optional[GitHubClient] = None) -> FetchResult:
    """Fetch up to ten recently merged pull requests as ``CommitRecord`` objects.

    Without an explicit ``client`` the GitHub token is read from the
    environment before any network call is made.

    Returns:
        A successful ``FetchResult`` with records and ``owner/repo`` name, or a
        failed one whose ``error`` is a user-facing message.
    """
    try:
        return _fetch(repo_reference, client)
    except GitValuationError as exc:
        logger.warning("Pull request fetch failed", extra={"reference": repo_reference, "error": str(exc)})
        return FetchResult.failed(str(exc))
