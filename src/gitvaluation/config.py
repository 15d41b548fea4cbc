"""Configuration parsing and validation for GitValuation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_MODEL = "gpt-5-nano"
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class GitHubConfig:
    """Validated settings for GitHub API access."""

    token: str
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class ScoringConfig:
    """Validated settings for the model scoring pass."""

    api_key: str
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None


def _read_timeout() -> int:
    raw = os.getenv("GITVALUATION_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS

    try:
        timeout = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            "Invalid value for 'GITVALUATION_TIMEOUT_SECONDS': expected an integer."
        ) from exc

    if timeout <= 0:
        raise ConfigurationError(
            "Invalid value for 'GITVALUATION_TIMEOUT_SECONDS': expected an integer greater than 0."
        )
    return timeout


def load_github_config() -> GitHubConfig:
    """Build GitHub configuration from the environment.

    Returns:
        A validated ``GitHubConfig`` instance.

    Raises:
        ConfigurationError: If ``GITHUB_TOKEN`` is not configured or the
            timeout override is invalid.
    """
    token: str = os.getenv("GITHUB_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("GITHUB_TOKEN environment variable is not set")

    return GitHubConfig(token=token, timeout_seconds=_read_timeout())


def load_scoring_config(model: Optional[str] = None) -> ScoringConfig:
    """Build model scoring configuration from the environment.

    Args:
        model: Optional model identifier overriding ``GITVALUATION_MODEL``.

    Raises:
        ConfigurationError: If ``OPENAI_API_KEY`` is not configured.
    """
    api_key: str = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY environment variable is not set")

    selected_model = model or os.getenv("GITVALUATION_MODEL", "").strip() or DEFAULT_MODEL
    base_url = os.getenv("OPENAI_BASE_URL", "").strip() or None

    return ScoringConfig(api_key=api_key, model=selected_model, base_url=base_url)
