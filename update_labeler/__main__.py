"""One-shot labeler run, for invocation from a scheduled CI workflow.

Usage:
    python -m update_labeler [--column-id N] [--dry-run]

Reads GITHUB_TOKEN, GITHUB_REPOSITORY and PROJECT_COLUMN_ID from the
environment (or .env), runs one pass over the column and prints the run
report as JSON. Exits non-zero if the run could not start or any issue failed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from update_labeler.main import setup_logging

logger = logging.getLogger("update_labeler")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="update_labeler",
        description="Relabel project-column issues by assignee activity.",
    )
    parser.add_argument(
        "--column-id",
        type=int,
        default=None,
        help="Project column to scan (default: PROJECT_COLUMN_ID)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log label and comment changes without applying them",
    )
    return parser.parse_args(argv)


async def _run(column_id: int | None, dry_run: bool | None) -> int:
    from update_labeler.services.github import close_github_client
    from update_labeler.services.labeler import run_update_labeler

    try:
        report = await run_update_labeler(column_id=column_id, dry_run=dry_run)
    except ValueError as e:
        logger.error(f"Cannot start labeler: {e}")
        return 2
    finally:
        await close_github_client()

    print(json.dumps(asdict(report), indent=2))
    return 1 if report.issues_failed else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    # stdout carries the JSON report
    setup_logging(stream=sys.stderr)
    return asyncio.run(_run(args.column_id, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
