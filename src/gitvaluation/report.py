"""Letter grades and plain-text rendering of analysis results.

This module provides utilities for:
- Mapping a 0.0-4.0 impact GPA to a letter grade.
- Building a human-readable report of every scored developer.
"""

from __future__ import annotations

from typing import List, Tuple

from .models import AnalysisResult, DeveloperAssessment

_GRADE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (3.9, "A+"),
    (3.7, "A"),
    (3.3, "A-"),
    (3.0, "B+"),
    (2.7, "B"),
    (2.3, "B-"),
    (2.0, "C+"),
    (1.7, "C"),
    (1.3, "C-"),
    (1.0, "D"),
)


def letter_grade(gpa: float) -> str:
    """Map an impact GPA to a letter grade.

    Args:
        gpa: Impact GPA on the 0.0-4.0 scale.

    Returns:
        ``"A+"`` through ``"D"`` by threshold, ``"F"`` below ``1.0``.
    """
    for threshold, grade in _GRADE_THRESHOLDS:
        if gpa >= threshold:
            return grade
    return "F"


def format_gpa(gpa: float) -> str:
    """Format a GPA with two decimals."""
    return f"{gpa:.2f}"


def _developer_lines(rank: int, developer: DeveloperAssessment) -> List[str]:
    lines = [
        f"{rank}) {developer.name} <{developer.email}>",
        f"   Grade: {letter_grade(developer.impact_gpa)} (GPA {format_gpa(developer.impact_gpa)})",
        f"   Archetype: {developer.archetype.name} - {developer.archetype.description}",
        f"   Strategic Impact: {developer.strategic_impact}"
        f" | Confidence: {developer.confidence_score}"
        f" | Complexity: {developer.complexity_score}"
        f" | Deletion Value: {developer.deletion_value}",
        f"   Commits: {developer.commit_count}"
        f" | +{developer.total_additions} / -{developer.total_deletions}"
        f" (net {developer.net_lines_changed:+d})",
    ]
    if developer.assessment:
        lines.append(f"   Assessment: {developer.assessment}")
    for commit in developer.commits:
        lines.append(f"     - {commit.short_sha}: {commit.grade} {commit.reasoning}")
    return lines


def generate_report(result: AnalysisResult) -> str:
    """Generate a human-readable report for an analysis result.

    Failed results render as a single ``Analysis failed`` line.

    Args:
        result: Assembled analysis result.

    Returns:
        Formatted multi-line text report.
    """
    if not result.success:
        return f"Analysis failed: {result.error}"

    lines = [
        f"Repository: {result.repository or 'n/a'}",
        "Developer Impact Report",
        f"Analyzed at: {result.analyzed_at}",
        f"Commits analyzed: {result.total_commits}",
    ]
    for rank, developer in enumerate(result.developers, start=1):
        lines.append("")
        lines.extend(_developer_lines(rank, developer))

    if result.skipped:
        lines.append("")
        lines.append(f"Skipped: {len(result.skipped)}")
        for item in result.skipped:
            lines.append(f"   {item.key}: {item.reason}")

    return "\n".join(lines)
