"""Fixed sample analysis shown when no live repository is requested."""

from __future__ import annotations

import time
from typing import Callable, List, Tuple

from .archetypes import ARCHETYPES
from .assembler import utc_now_iso
from .models import AnalysisResult, CommitGrade, DeveloperAssessment

DEMO_REPOSITORY = "acme-corp/enterprise-platform"
DEMO_TOTAL_COMMITS = 247
DEMO_DELAY_SECONDS = 2.0

# name, email, gpa, archetype key, assessment, commit count, additions, deletions,
# confidence, complexity, deletion value, strategic impact, commit grades
_SAMPLE_DEVELOPERS: Tuple[tuple, ...] = (
    (
        "Sarah Chen", "sarah.chen@acme.corp", 3.87, "ARCHITECT",
        "High strategic value; designed core authentication system and API gateway.",
        47, 4823, 2156, 94, 91, 78, 89,
        (("a1b2c3d", 95, "Implemented OAuth2 flow with PKCE"),
         ("e4f5g6h", 88, "Refactored database connection pooling")),
    ),
    (
        "Marcus Johnson", "marcus.j@acme.corp", 3.52, "SURGEON",
        "Precise fixes; eliminated 3 critical security vulnerabilities with minimal code.",
        38, 1247, 1089, 89, 82, 85, 85,
        (("i7j8k9l", 92, "Fixed SQL injection in user search"),
         ("m0n1o2p", 85, "Patched XSS vulnerability in comments")),
    ),
    (
        "Aisha Patel", "aisha.p@acme.corp", 3.21, "JANITOR",
        "Exceptional cleanup; deleted 4,200 lines of legacy code safely.",
        52, 892, 4234, 82, 68, 95, 80,
        (("q3r4s5t", 88, "Removed deprecated payment processor"),
         ("u6v7w8x", 82, "Cleaned up unused utility functions")),
    ),
    (
        "David Mueller", "david.m@acme.corp", 2.84, "FEATURE_FACTORY",
        "High output but concerning patterns; 40% of commits are bug fixes.",
        67, 8923, 1245, 65, 71, 32, 58,
        (("y9z0a1b", 72, "Added user dashboard, some edge cases"),
         ("c2d3e4f", 58, "Fixed bug introduced in previous commit")),
    ),
    (
        "Emma Wilson", "emma.w@acme.corp", 2.31, "FIREFIGHTER",
        "Reactive pattern detected; 60% of bug fixes are for self-introduced issues.",
        45, 3456, 2890, 52, 58, 45, 52,
        (("g5h6i7j", 45, "Hotfix for production crash (self-caused)"),
         ("k8l9m0n", 62, "Fixed race condition in checkout flow")),
    ),
    (
        "James O'Brien", "james.ob@acme.corp", 1.89, "COASTER",
        "Low strategic value; 70% of commits are documentation and formatting.",
        34, 1567, 234, 38, 25, 22, 30,
        (("o1p2q3r", 35, "Updated README formatting"),
         ("s4t5u6v", 28, "Added console.log statements for debugging")),
    ),
)


def _sample_developers() -> List[DeveloperAssessment]:
    developers = []
    for (name, email, gpa, archetype_key, assessment, commit_count, additions, deletions,
         confidence, complexity, deletion_value, strategic_impact, grades) in _SAMPLE_DEVELOPERS:
        developers.append(
            DeveloperAssessment(
                name=name,
                email=email,
                impact_gpa=gpa,
                archetype=ARCHETYPES[archetype_key],
                assessment=assessment,
                commit_count=commit_count,
                total_additions=additions,
                total_deletions=deletions,
                net_lines_changed=additions - deletions,
                confidence_score=confidence,
                complexity_score=complexity,
                deletion_value=deletion_value,
                strategic_impact=strategic_impact,
                commits=[CommitGrade(short_sha=sha, grade=grade, reasoning=reason) for sha, grade, reason in grades],
            )
        )
    return developers


def mock_analysis(
    delay_seconds: float = DEMO_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> AnalysisResult:
    """Return the illustrative sample result after a simulated delay.

    The content is hard-coded demo data and is not derived from any input.
    """
    if delay_seconds > 0:
        sleep(delay_seconds)

    return AnalysisResult(
        success=True,
        analyzed_at=utc_now_iso(),
        total_commits=DEMO_TOTAL_COMMITS,
        developers=_sample_developers(),
        repository=DEMO_REPOSITORY,
    )
