"""Application entry point for GitValuation."""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional, Sequence

from .cli import parse_args
from .demo import mock_analysis
from .pipeline import analyze_repository
from .report import generate_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_ANALYSIS_FAILED = 2


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def orchestrate_analysis(argv: Optional[Sequence[str]] = None) -> int:
    """Run one analysis and print its report.

    Returns:
        ``0`` on success, ``2`` when the analysis reports failure, ``1`` on any
        unexpected error.
    """
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)

        if args.repo:
            print(f"Analyzing repository '{args.repo}'...", file=sys.stderr)
            result = analyze_repository(args.repo, model=args.model)
        else:
            print("No repository given; showing demo analysis...", file=sys.stderr)
            result = mock_analysis()

        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print(generate_report(result))

        return EXIT_OK if result.success else EXIT_ANALYSIS_FAILED
    except Exception:
        logger.exception("Unexpected error while generating the developer report")
        return EXIT_UNEXPECTED


def main() -> None:
    sys.exit(orchestrate_analysis())


if __name__ == "__main__":
    main()
