"""Custom exception types for GitValuation."""

from __future__ import annotations

from typing import Optional


class GitValuationError(Exception):
    """Base exception for all recoverable analysis errors."""


class ConfigurationError(GitValuationError):
    """Raised when runtime configuration values are missing or invalid."""


class RepositoryReferenceError(GitValuationError):
    """Raised when a repository reference cannot be parsed into owner/repo."""


class ApiError(GitValuationError):
    """Raised when a GitHub API request fails or returns an unexpected response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RepositoryNotFoundError(ApiError):
    """Raised when GitHub reports that the repository does not exist."""


class AuthenticationError(ApiError):
    """Raised when GitHub rejects the configured credentials (401/403)."""


class EmptyResultError(GitValuationError):
    """Raised when a repository has no merged pull requests to analyze."""


class DataUnavailableError(GitValuationError):
    """Raised when every per-PR fetch failed and no commit data was collected."""


class ScoringError(GitValuationError):
    """Raised when a model call or its response fails for a single author."""
