"""End-to-end repository analysis: fetch merged PRs, then score their authors."""

from __future__ import annotations

import logging
from typing import Optional

from .fetcher import fetch_pull_requests
from .github_client import GitHubClient
from .llm_client import CompletionClient
from .models import AnalysisResult
from .scoring import score_developers

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "Unknown error occurred"


def analyze_repository(
    repo_reference: str,
    github_client: Optional[GitHubClient] = None,
    completion_client: Optional[CompletionClient] = None,
    model: Optional[str] = None,
) -> AnalysisResult:
    """Fetch merged pull requests for ``repo_reference`` and score their authors.

    Unexpected exceptions are logged and reported as a generic failure.
    """
    try:
        fetched = fetch_pull_requests(repo_reference, client=github_client)
        if not fetched.success:
            return AnalysisResult.failed(fetched.error or UNEXPECTED_ERROR)

        result = score_developers(fetched.commits, completion_client=completion_client, model=model)
        if result.success:
            result.repository = fetched.repo_name
            result.skipped = list(fetched.skipped) + list(result.skipped)
        return result
    except Exception:
        logger.exception("Unexpected error during repository analysis", extra={"reference": repo_reference})
        return AnalysisResult.failed(UNEXPECTED_ERROR)
