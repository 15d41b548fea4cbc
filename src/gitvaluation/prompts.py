"""Prompt text for the per-developer scoring call."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .aggregator import AuthorGroup
from .archetypes import ARCHETYPES
from .fetcher import truncate_diff

PROMPT_DIFF_CHAR_LIMIT = 1000
PROMPT_TRUNCATION_MARKER = "\n... [truncated]"
SHORT_SHA_LENGTH = 7

_ARCHETYPE_GUIDE = {
    "ARCHITECT": "Designs systems, makes foundational decisions that scale",
    "SURGEON": "Precise, high-impact changes with minimal code footprint",
    "JANITOR": "Valuable! Cleans up technical debt, improves maintainability",
    "FEATURE_FACTORY": "Churns out features, quantity over quality concerns",
    "FIREFIGHTER": "Fixes bugs reactively, often fixing issues they created",
    "COASTER": "Minimal strategic impact, surface-level changes only",
    "PERFECTIONIST": "Over-engineers solutions, endless refactoring",
    "RISING_STAR": "Shows improvement trajectory, high potential",
}

ARCHETYPE_NAMES = ", ".join(archetype.name for archetype in ARCHETYPES.values())

SYSTEM_PROMPT = (
    "You are a Principal Software Architect at a Private Equity firm. Your job is to audit "
    "a codebase to find the '10x Engineers' versus the 'Coasters'.\n"
    "\n"
    "Analyze each commit diff and assign a grade (0-100) based on:\n"
    "\n"
    "1. **Confidence**: Does the code solve the root cause or just patch a symptom?\n"
    "   - 90-100: Addresses fundamental architectural issues, prevents future bugs\n"
    "   - 70-89: Solid implementation that solves the stated problem correctly\n"
    "   - 50-69: Works but may have edge cases or technical debt\n"
    "   - 30-49: Patches symptoms, likely to cause future issues\n"
    "   - 0-29: Band-aid fix, creates more problems than it solves\n"
    "\n"
    "2. **Complexity**: Is this a difficult architectural change or just a text change?\n"
    "   - 90-100: System-wide architectural changes, complex algorithms, critical infrastructure\n"
    "   - 70-89: Multi-component changes requiring deep domain knowledge\n"
    "   - 50-69: Standard feature implementation with some complexity\n"
    "   - 30-49: Simple CRUD operations, straightforward changes\n"
    "   - 0-29: Trivial changes (typos, formatting, comments only)\n"
    "\n"
    "3. **Net Negative Value**:\n"
    "   - Deleting unnecessary code = HIGH VALUE (cleaning technical debt)\n"
    "   - Adding essential features with minimal code = HIGH VALUE\n"
    "   - Adding whitespace, excessive logging, boilerplate = LOW VALUE\n"
    "   - Large additions without clear purpose = NEGATIVE VALUE\n"
    "\n"
    "Developer Archetypes to assign:\n"
    + "".join(
        f'- "{ARCHETYPES[key].name}": {guide}\n' for key, guide in _ARCHETYPE_GUIDE.items()
    )
    + "\n"
    "IMPORTANT: Be ruthlessly honest. Private equity needs accurate assessments, not "
    "feel-good evaluations. Look for:\n"
    "- Patterns of introducing then fixing bugs (red flag)\n"
    "- Deleting more code than adding (often positive)\n"
    "- Changes to core business logic vs. peripheral code\n"
    "- Evidence of understanding the broader system\n"
    "\n"
    "Return your analysis as a valid JSON object."
)

_RESPONSE_SCHEMA = (
    "{\n"
    '  "impactGPA": <number 0.0-4.0>,\n'
    f'  "archetype": "<one of: {ARCHETYPE_NAMES}>",\n'
    '  "assessment": "<one-line assessment, max 200 chars>",\n'
    '  "confidenceScore": <number 0-100>,\n'
    '  "complexityScore": <number 0-100>,\n'
    '  "deletionValue": <number 0-100>,\n'
    '  "commits": [\n'
    "    {\n"
    f'      "shortSha": "<{SHORT_SHA_LENGTH}-char sha>",\n'
    '      "grade": <number 0-100>,\n'
    '      "reasoning": "<brief reasoning>"\n'
    "    }\n"
    "  ]\n"
    "}"
)


def summarize_commits(group: AuthorGroup) -> List[Dict[str, Any]]:
    """Build the per-commit summaries embedded in the user prompt."""
    return [
        {
            "sha": commit.sha[:SHORT_SHA_LENGTH],
            "message": commit.message,
            "date": commit.date,
            "additions": commit.additions,
            "deletions": commit.deletions,
            "filesChanged": commit.files_changed,
            "diff": truncate_diff(commit.diff, PROMPT_DIFF_CHAR_LIMIT, PROMPT_TRUNCATION_MARKER),
        }
        for commit in group.commits
    ]


def build_user_prompt(group: AuthorGroup) -> str:
    """Compose the user message for one developer's commits."""
    commits_json = json.dumps(summarize_commits(group), indent=2)
    return (
        "You are analyzing commit diffs for one developer.\n"
        "\n"
        f'Developer: "{group.name}" ({group.email or "unknown"})\n'
        "\n"
        "Here are their commits (JSON):\n"
        "\n"
        f"{commits_json}\n"
        "\n"
        "Return ONLY a single JSON object with this exact structure, and nothing else:\n"
        "\n"
        f"{_RESPONSE_SCHEMA}"
    )
