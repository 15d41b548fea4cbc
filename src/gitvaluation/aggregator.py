"""Grouping of commit records by author identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import CommitRecord


@dataclass(slots=True)
class AuthorGroup:
    """All commit records attributed to one author key."""

    name: str
    email: str
    commits: List[CommitRecord] = field(default_factory=list)

    @property
    def total_additions(self) -> int:
        return sum(commit.additions for commit in self.commits)

    @property
    def total_deletions(self) -> int:
        return sum(commit.deletions for commit in self.commits)


def author_key(commit: CommitRecord) -> str:
    """Return the grouping key: the author email, or the author name without one."""
    return commit.author_email or commit.author


def group_commits_by_author(commits: Iterable[CommitRecord]) -> Dict[str, AuthorGroup]:
    """Partition commit records by author key, in order of first appearance."""
    groups: Dict[str, AuthorGroup] = {}
    for commit in commits:
        key = author_key(commit)
        group = groups.get(key)
        if group is None:
            group = AuthorGroup(name=commit.author, email=commit.author_email)
            groups[key] = group
        group.commits.append(commit)
    return groups
