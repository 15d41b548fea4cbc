"""Domain models for pull-request scoring.

These dataclasses model only the subset of GitHub and model-response fields that
the scoring pipeline consumes. ``to_dict`` methods produce the camelCase shape
read by the dashboard front end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """An owner/repo pair parsed from a user-supplied reference."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(slots=True)
class CommitRecord:
    """One merged pull request, treated as a single unit of contribution."""

    sha: str
    author: str
    author_email: str
    date: str
    message: str
    diff: str
    files_changed: int
    additions: int
    deletions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sha": self.sha,
            "author": self.author,
            "authorEmail": self.author_email,
            "date": self.date,
            "message": self.message,
            "diff": self.diff,
            "filesChanged": self.files_changed,
            "additions": self.additions,
            "deletions": self.deletions,
        }


@dataclass(frozen=True, slots=True)
class Archetype:
    """A fixed contribution-style label with display metadata."""

    key: str
    name: str
    description: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "color": self.color}


@dataclass(slots=True)
class CommitGrade:
    """Model-assigned grade for one commit of a developer."""

    short_sha: str
    grade: int
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sha": self.short_sha, "grade": self.grade, "reasoning": self.reasoning}


@dataclass(slots=True)
class DeveloperAssessment:
    """Scored summary of one developer's merged pull requests."""

    name: str
    email: str
    impact_gpa: float
    archetype: Archetype
    assessment: str
    commit_count: int
    total_additions: int
    total_deletions: int
    net_lines_changed: int
    confidence_score: int
    complexity_score: int
    deletion_value: int
    strategic_impact: int
    commits: List[CommitGrade] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "impactGPA": self.impact_gpa,
            "archetype": self.archetype.name,
            "archetypeInfo": self.archetype.to_dict(),
            "assessment": self.assessment,
            "commitCount": self.commit_count,
            "totalAdditions": self.total_additions,
            "totalDeletions": self.total_deletions,
            "netLinesChanged": self.net_lines_changed,
            "confidenceScore": self.confidence_score,
            "complexityScore": self.complexity_score,
            "deletionValue": self.deletion_value,
            "strategicImpact": self.strategic_impact,
            "commits": [commit.to_dict() for commit in self.commits],
        }


@dataclass(frozen=True, slots=True)
class SkippedItem:
    """A pull request or author dropped from processing, with the reason."""

    key: str
    reason: str


@dataclass(slots=True)
class FetchResult:
    """Outcome of fetching merged pull requests for a repository."""

    success: bool
    commits: List[CommitRecord] = field(default_factory=list)
    repo_name: Optional[str] = None
    skipped: List[SkippedItem] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "FetchResult":
        return cls(success=False, error=error)


@dataclass(slots=True)
class AnalysisResult:
    """Outcome of a scoring run: either developers or an error message."""

    success: bool
    analyzed_at: Optional[str] = None
    total_commits: Optional[int] = None
    developers: List[DeveloperAssessment] = field(default_factory=list)
    repository: Optional[str] = None
    skipped: List[SkippedItem] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "AnalysisResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}

        payload: Dict[str, Any] = {
            "success": True,
            "analyzedAt": self.analyzed_at,
            "totalCommits": self.total_commits,
            "developers": [developer.to_dict() for developer in self.developers],
        }
        if self.repository is not None:
            payload["repository"] = self.repository
        return payload
