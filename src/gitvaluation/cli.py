"""Command-line argument parsing for GitValuation."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for a developer impact analysis.

    Returns:
        Parsed CLI arguments containing the repository reference (``None`` for
        the demo result), output format, verbosity, and model override.
    """
    parser = argparse.ArgumentParser(
        prog="gitvaluation",
        description=(
            "Score developer contributions from recent merged GitHub pull requests "
            "using a language model."
        ),
    )

    parser.add_argument(
        "--repo",
        default=None,
        help="GitHub repository URL or owner/repo. Omit to show the demo analysis.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis result as JSON instead of a text report.",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model identifier override (default: GITVALUATION_MODEL or gpt-5-nano).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
