"""GitHub REST API client for pull-request data retrieval."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from .config import GitHubConfig
from .errors import ApiError, AuthenticationError, RepositoryNotFoundError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Small, typed client for the GitHub pull request endpoints."""

    _BASE_URL = "https://api.github.com"
    _JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
    _DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
    _USER_AGENT = "GitValuation-App"
    _MAX_RETRIES = 5
    _MAX_BACKOFF_SECONDS = 30

    def __init__(self, config: GitHubConfig) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated GitHub configuration including the bearer token.
        """
        self._config = config
        self._timeout_seconds = config.timeout_seconds

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Accept": self._JSON_MEDIA_TYPE,
                "User-Agent": self._USER_AGENT,
            }
        )

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the API root."""
        return f"{self._BASE_URL}/{path.lstrip('/')}"

    def _extract_backoff_seconds(self, response: requests.Response, attempt: int) -> int:
        """Compute exponential backoff seconds, honoring Retry-After when available."""
        retry_after_header = response.headers.get("Retry-After")
        if retry_after_header:
            try:
                retry_after_seconds = int(retry_after_header)
                return min(self._MAX_BACKOFF_SECONDS, max(1, retry_after_seconds))
            except ValueError:
                pass

        return min(self._MAX_BACKOFF_SECONDS, 2 ** (attempt - 1))

    def _raise_for_status(self, response: requests.Response, url: str) -> None:
        """Map a failed response onto the matching ``ApiError`` subclass."""
        status_code = response.status_code
        if status_code == 404:
            raise RepositoryNotFoundError("Repository not found", status_code=status_code)
        if status_code in (401, 403):
            raise AuthenticationError(
                "GitHub authentication failed. Check your token.", status_code=status_code
            )
        logger.debug(
            "GitHub request failed",
            extra={"url": url, "status_code": status_code},
        )
        raise ApiError(f"GitHub API error: {response.text}", status_code=status_code)

    def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        accept: Optional[str] = None,
    ) -> requests.Response:
        """Execute a GET request with retry logic for 429/5xx responses.

        Raises:
            RepositoryNotFoundError: If GitHub returns 404.
            AuthenticationError: If GitHub returns 401 or 403.
            ApiError: For any other failure, after retries where applicable.
        """
        url = self._build_url(path)
        headers = {"Accept": accept} if accept else None

        last_error: Optional[Exception] = None

        for attempt in range(1, self._MAX_RETRIES + 1):
            try:
                response = self._session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self._timeout_seconds,
                )
            except requests.RequestException as exc:
                last_error = exc
                if attempt == self._MAX_RETRIES:
                    raise ApiError(f"GitHub request failed after retries: GET {url}") from exc
                time.sleep(min(self._MAX_BACKOFF_SECONDS, 2 ** (attempt - 1)))
                continue

            status_code = response.status_code
            is_retryable = status_code == 429 or 500 <= status_code <= 599

            if is_retryable and attempt < self._MAX_RETRIES:
                time.sleep(self._extract_backoff_seconds(response, attempt))
                continue

            if status_code >= 400:
                self._raise_for_status(response, url)

            return response

        raise ApiError(f"GitHub request failed after retries: GET {url}") from last_error

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self._build_url(path)
        response = self._get(path, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON: GET {url}") from exc

    def list_closed_pull_requests(self, owner: str, repo: str, per_page: int = 20) -> List[Dict[str, Any]]:
        """List the most recently updated closed pull requests of a repository."""
        payload = self._get_json(
            f"repos/{owner}/{repo}/pulls",
            params={
                "state": "closed",
                "sort": "updated",
                "direction": "desc",
                "per_page": per_page,
            },
        )
        if not isinstance(payload, list):
            raise ApiError(
                f"GitHub API returned unexpected payload shape: list pulls for {owner}/{repo}"
            )
        return payload

    def get_pull_request(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        """Fetch a single pull request with its addition/deletion/file counts."""
        payload = self._get_json(f"repos/{owner}/{repo}/pulls/{number}")
        if not isinstance(payload, dict):
            raise ApiError(
                f"GitHub API returned unexpected payload shape: pull {owner}/{repo}#{number}"
            )
        return payload

    def get_pull_request_diff(self, owner: str, repo: str, number: int) -> str:
        """Fetch the unified diff text of a pull request."""
        response = self._get(f"repos/{owner}/{repo}/pulls/{number}", accept=self._DIFF_MEDIA_TYPE)
        return response.text

    def get_first_commit_email(self, owner: str, repo: str, number: int) -> Optional[str]:
        """Return the author email of the first commit of a pull request, if any."""
        payload = self._get_json(
            f"repos/{owner}/{repo}/pulls/{number}/commits",
            params={"per_page": 1},
        )
        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            return None

        commit = payload[0].get("commit")
        if not isinstance(commit, dict):
            return None
        author = commit.get("author")
        email = author.get("email") if isinstance(author, dict) else None
        return str(email) if email else None
