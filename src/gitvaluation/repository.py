"""Parsing of user-supplied GitHub repository references."""

from __future__ import annotations

import re
from typing import Optional

from .models import RepositoryRef

_URL_PATTERN = re.compile(r"github\.com[/:]([^/\s]+)/([^/\s]+?)(?:\.git)?(?:/.*)?$")
_BARE_PATTERN = re.compile(r"^([^/\s]+)/([^/\s]+?)(?:\.git)?/?$")


def resolve_repository(reference: str) -> Optional[RepositoryRef]:
    """Extract ``(owner, repo)`` from a GitHub URL or ``owner/repo`` string.

    Accepts URLs containing ``github.com/<owner>/<repo>`` with an optional
    ``.git`` suffix, trailing slash, or further path segments, and bare
    ``<owner>/<repo>`` strings.

    Returns:
        The parsed reference, or ``None`` when neither form matches.
    """
    text = (reference or "").strip()
    if not text:
        return None

    for pattern in (_URL_PATTERN, _BARE_PATTERN):
        match = pattern.search(text)
        if match:
            owner, repo = match.group(1), match.group(2)
            if repo.endswith(".git"):
                repo = repo[: -len(".git")]
            if owner and repo:
                return RepositoryRef(owner=owner, repo=repo)

    return None
