"""Per-developer scoring through a chat-completion model.

For each author group this module:
- builds a prompt from the author's commits and requests a JSON verdict,
- parses the verdict, tolerating missing numeric fields (treated as ``0``),
- resolves the archetype label against the fixed archetype table,
- computes ``strategic_impact`` locally from the three sub-scores.

An author whose call or parse fails is skipped and logged; the remaining
authors are still scored.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .aggregator import AuthorGroup, group_commits_by_author
from .archetypes import resolve_archetype
from .assembler import assemble_result
from .config import load_scoring_config
from .errors import GitValuationError, ScoringError
from .llm_client import CompletionClient
from .models import AnalysisResult, CommitGrade, CommitRecord, DeveloperAssessment, SkippedItem
from .prompts import SHORT_SHA_LENGTH, SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

CONFIDENCE_WEIGHT = 0.4
COMPLEXITY_WEIGHT = 0.35
DELETION_WEIGHT = 0.25
MAX_GPA = 4.0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up."""
    return int(math.floor(value + 0.5))


def compute_strategic_impact(confidence: int, complexity: int, deletion_value: int) -> int:
    """Weighted composite of the three sub-scores, on the 0-100 scale."""
    return round_half_up(
        CONFIDENCE_WEIGHT * confidence
        + COMPLEXITY_WEIGHT * complexity
        + DELETION_WEIGHT * deletion_value
    )


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_score(value: Any) -> int:
    """Coerce a model-supplied sub-score to an int in ``[0, 100]``; missing is 0."""
    return max(0, min(MAX_SCORE, round_half_up(_as_number(value))))


def coerce_gpa(value: Any) -> float:
    """Coerce a model-supplied GPA to ``[0.0, 4.0]``, rounded to 2 decimals."""
    return round(max(0.0, min(MAX_GPA, _as_number(value))), 2)


def parse_json_object(text: str) -> Dict[str, Any]:
    """Parse a JSON object from model output.

    Falls back to the outermost ``{...}`` span when the text carries prose
    around the object.

    Raises:
        ScoringError: If no JSON object can be parsed.
    """
    candidates = [text]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            payload = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(payload, dict):
            return payload

    raise ScoringError("Model response does not contain a JSON object.")


def parse_commit_grades(items: Any) -> List[CommitGrade]:
    """Read the per-commit ``{shortSha, grade, reasoning}`` entries, in order."""
    if not isinstance(items, list):
        return []

    grades: List[CommitGrade] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        short_sha = item.get("shortSha") or item.get("sha") or ""
        grades.append(
            CommitGrade(
                short_sha=str(short_sha)[:SHORT_SHA_LENGTH],
                grade=coerce_score(item.get("grade")),
                reasoning=str(item.get("reasoning") or ""),
            )
        )
    return grades


def build_assessment(group: AuthorGroup, analysis: Dict[str, Any]) -> DeveloperAssessment:
    """Merge a parsed model verdict with locally computed totals."""
    confidence = coerce_score(analysis.get("confidenceScore"))
    complexity = coerce_score(analysis.get("complexityScore"))
    deletion_value = coerce_score(analysis.get("deletionValue"))
    total_additions = group.total_additions
    total_deletions = group.total_deletions

    return DeveloperAssessment(
        name=group.name,
        email=group.email or "",
        impact_gpa=coerce_gpa(analysis.get("impactGPA")),
        archetype=resolve_archetype(analysis.get("archetype")),
        assessment=str(analysis.get("assessment") or ""),
        commit_count=len(group.commits),
        total_additions=total_additions,
        total_deletions=total_deletions,
        net_lines_changed=total_additions - total_deletions,
        confidence_score=confidence,
        complexity_score=complexity,
        deletion_value=deletion_value,
        strategic_impact=compute_strategic_impact(confidence, complexity, deletion_value),
        commits=parse_commit_grades(analysis.get("commits")),
    )


def score_author(group: AuthorGroup, completion_client: CompletionClient) -> DeveloperAssessment:
    """Score one author with a single completion call.

    Raises:
        ScoringError: If the call fails or its response cannot be parsed.
    """
    content = completion_client.complete_json(SYSTEM_PROMPT, build_user_prompt(group))
    return build_assessment(group, parse_json_object(content))


def score_groups(
    groups: Dict[str, AuthorGroup],
    completion_client: CompletionClient,
) -> Tuple[List[DeveloperAssessment], List[SkippedItem]]:
    """Score every author group sequentially, collecting failures as skipped items."""
    assessments: List[DeveloperAssessment] = []
    skipped: List[SkippedItem] = []

    for key, group in groups.items():
        if not group.commits:
            continue
        try:
            assessments.append(score_author(group, completion_client))
        except ScoringError as exc:
            logger.warning(
                "Skipping developer after failed scoring",
                extra={"author": key, "error": str(exc)},
            )
            skipped.append(SkippedItem(key=key, reason=str(exc)))

    logger.info(
        "Scored developers",
        extra={"authors_total": len(groups), "scored": len(assessments), "skipped": len(skipped)},
    )
    return assessments, skipped


def score_developers(
    commits: Sequence[CommitRecord],
    completion_client: Optional[CompletionClient] = None,
    model: Optional[str] = None,
) -> AnalysisResult:
    """Score each author of ``commits`` and assemble the sorted result.

    Without an explicit ``completion_client`` the OpenAI key is read from the
    environment first; a missing key fails the whole pass before any request.
    """
    try:
        if completion_client is None:
            completion_client = CompletionClient(config=load_scoring_config(model=model))

        if not commits:
            return AnalysisResult.failed("No commits provided for analysis")

        groups = group_commits_by_author(commits)
        assessments, skipped = score_groups(groups, completion_client)
        return assemble_result(assessments, total_commits=len(commits), skipped=skipped)
    except GitValuationError as exc:
        logger.warning("Scoring pass failed", extra={"error": str(exc)})
        return AnalysisResult.failed(str(exc))
