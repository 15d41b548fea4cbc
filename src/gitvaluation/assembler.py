"""Assembly of scored developers into an analysis result."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from .models import AnalysisResult, DeveloperAssessment, SkippedItem

logger = logging.getLogger(__name__)

NO_DEVELOPERS_ERROR = "Failed to analyze any developers. Check API keys and try again."


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def assemble_result(
    assessments: Iterable[DeveloperAssessment],
    total_commits: int,
    repository: Optional[str] = None,
    skipped: Sequence[SkippedItem] = (),
) -> AnalysisResult:
    """Sort assessments by impact GPA and wrap them in an ``AnalysisResult``.

    ``total_commits`` is the number of input commit records, not the number of
    scored developers. An empty assessment list is reported as a failure.
    """
    developers: List[DeveloperAssessment] = sorted(
        assessments, key=lambda developer: developer.impact_gpa, reverse=True
    )

    if not developers:
        logger.warning(
            "No developers could be scored",
            extra={"total_commits": total_commits, "skipped": len(skipped)},
        )
        return AnalysisResult.failed(NO_DEVELOPERS_ERROR)

    return AnalysisResult(
        success=True,
        analyzed_at=utc_now_iso(),
        total_commits=total_commits,
        developers=developers,
        repository=repository,
        skipped=list(skipped),
    )
