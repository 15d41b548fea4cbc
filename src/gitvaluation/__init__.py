"""Developer impact scoring from merged GitHub pull requests."""

from .demo import mock_analysis
from .fetcher import fetch_pull_requests
from .pipeline import analyze_repository
from .report import generate_report
from .repository import resolve_repository
from .scoring import score_developers

__all__ = [
    "analyze_repository",
    "fetch_pull_requests",
    "generate_report",
    "mock_analysis",
    "resolve_repository",
    "score_developers",
]
