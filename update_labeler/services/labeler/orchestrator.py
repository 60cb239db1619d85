"""Update-label orchestrator for the weekly labeler run.

Main entry point for the scheduled job. Walks the issues of a project
column, classifies each issue's timeline, and applies the matching label
changes, asking assignees for an update when the issue has gone stale.

Issues are processed one at a time; a failure on one issue is logged and
counted, and the run moves on to the next.
"""

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from update_labeler.config import settings
from update_labeler.services.classifier import (
    ActivityWindows,
    ClassificationResult,
    classify,
)
from update_labeler.services.github import GitHubAPIError, GitHubService
from update_labeler.services.labeler.comments import load_template, render_update_comment
from update_labeler.services.labeler.policy import LabelAction, LabelPolicy

logger = logging.getLogger(__name__)

# Safety caps
ISSUE_TIMEOUT_SECONDS = 60
TOTAL_JOB_TIMEOUT_SECONDS = 1800  # 30 minutes max


@dataclass
class LabelRunReport:
    """Summary of a labeler run (for logging/monitoring)."""

    issues_checked: int = 0
    issues_labeled: int = 0  # a label was removed or added
    issues_failed: int = 0
    skipped_no_assignee: int = 0
    comments_posted: int = 0
    results: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    dry_run: bool = False
    duration_seconds: float = 0.0


class UpdateLabeler:
    """Orchestrator that relabels the issues of one project column."""

    def __init__(
        self,
        github: GitHubService,
        owner: str,
        repo: str,
        policy: LabelPolicy | None = None,
        windows: ActivityWindows | None = None,
        template: str | None = None,
        timezone: str = "America/Los_Angeles",
        dry_run: bool = False,
    ) -> None:
        self.github = github
        self.owner = owner
        self.repo = repo
        self.policy = policy or LabelPolicy()
        self.windows = windows or ActivityWindows()
        self.template = template
        self.timezone = timezone
        self.dry_run = dry_run

    @classmethod
    def from_settings(cls, dry_run: bool | None = None) -> "UpdateLabeler":
        """Build a labeler from application settings."""
        return cls(
            github=GitHubService(settings.github_token),
            owner=settings.repo_owner,
            repo=settings.repo_name,
            policy=LabelPolicy.from_settings(),
            windows=ActivityWindows(
                update_days=settings.update_days,
                inactive_days=settings.inactive_days,
            ),
            template=load_template(settings.comment_template_path or None),
            timezone=settings.comment_timezone,
            dry_run=settings.dry_run if dry_run is None else dry_run,
        )

    async def run(self, column_id: int, now: datetime | None = None) -> LabelRunReport:
        """
        Main entry point for the job.

        1. List issue numbers in the column
        2. For each issue, classify its timeline and apply label changes
        3. Return a report of what was labeled/skipped/failed

        Args:
            column_id: Project board column to scan
            now: Reference time for the activity windows (default: current UTC time)
        """
        start = time.monotonic()
        now = now or datetime.now(UTC)
        report = LabelRunReport(dry_run=self.dry_run)
        results: Counter[str] = Counter()

        logger.info(
            f"[labeler] Scanning column {column_id} of {self.owner}/{self.repo}"
            f"{' (dry run)' if self.dry_run else ''}"
        )

        try:
            async with asyncio.timeout(TOTAL_JOB_TIMEOUT_SECONDS):
                async for issue_number in self.github.list_column_issue_numbers(column_id):
                    report.issues_checked += 1
                    try:
                        async with asyncio.timeout(ISSUE_TIMEOUT_SECONDS):
                            result = await self.process_issue(issue_number, now, report)
                        if result is not None:
                            results[result.value] += 1

                    except TimeoutError:
                        error_msg = f"Issue #{issue_number}: timeout ({ISSUE_TIMEOUT_SECONDS}s)"
                        logger.error(f"[labeler] {error_msg}")
                        report.errors.append(error_msg)
                        report.issues_failed += 1
                    except Exception as e:
                        error_msg = f"Issue #{issue_number}: {e}"
                        logger.exception(f"[labeler] {error_msg}")
                        report.errors.append(error_msg)
                        report.issues_failed += 1
        except TimeoutError:
            error_msg = f"Total job timeout ({TOTAL_JOB_TIMEOUT_SECONDS}s) exceeded"
            logger.error(f"[labeler] {error_msg}")
            report.errors.append(error_msg)
        except GitHubAPIError as e:
            # Listing the column itself failed; issues already seen keep their labels
            error_msg = f"Column {column_id}: {e}"
            logger.error(f"[labeler] {error_msg}")
            report.errors.append(error_msg)

        report.results = dict(results)
        report.duration_seconds = round(time.monotonic() - start, 2)

        logger.info(
            f"[labeler] Completed: {report.issues_checked} checked, "
            f"{report.issues_labeled} labeled, "
            f"{report.skipped_no_assignee} without assignee, "
            f"{report.issues_failed} failed "
            f"({report.duration_seconds}s)"
        )

        return report

    async def process_issue(
        self,
        issue_number: int,
        now: datetime,
        report: LabelRunReport,
    ) -> ClassificationResult | None:
        """
        Classify one issue and apply its label changes.

        Returns:
            The classification, or None if the issue has no assignee
        """
        issue = await self.github.get_issue(self.owner, self.repo, issue_number)
        if not issue.assignees:
            logger.info(f"[labeler] Assignee not found, skipping issue #{issue_number}")
            report.skipped_no_assignee += 1
            return None

        timeline = await self.github.get_timeline(self.owner, self.repo, issue_number)
        result = classify(timeline, issue_number, issue.assignees, now, self.windows)
        logger.info(f"[labeler] Issue #{issue_number}: {result.value}")

        action = self.policy.action_for(result)
        if await self._apply(issue_number, issue.labels, action):
            report.issues_labeled += 1

        if action.request_update:
            await self._request_update(issue_number, issue.assignees, action.add[0], now)
            report.comments_posted += 1

        return result

    async def _apply(
        self,
        issue_number: int,
        current_labels: list[str],
        action: LabelAction,
    ) -> bool:
        """
        Remove stale status labels, then add the new one.

        Returns:
            True if any label was removed or added (or would be, in a dry run)
        """
        changed = False
        for label in action.remove:
            if label not in current_labels:
                continue
            if self.dry_run:
                logger.info(f'[labeler] Would remove "{label}" from issue #{issue_number}')
                changed = True
                continue
            try:
                await self.github.remove_label(self.owner, self.repo, issue_number, label)
                changed = True
            except GitHubAPIError as e:
                logger.error(f'[labeler] Failed to remove "{label}" from issue #{issue_number}: {e}')

        if not action.add:
            return changed
        if self.dry_run:
            logger.info(f"[labeler] Would add {list(action.add)} to issue #{issue_number}")
            return True
        await self.github.add_labels(self.owner, self.repo, issue_number, list(action.add))
        return True

    async def _request_update(
        self,
        issue_number: int,
        assignees: list[str],
        label: str,
        now: datetime,
    ) -> None:
        """Post the update-request comment addressed to the assignees."""
        logger.info(f"[labeler] Going to ask for an update now for issue #{issue_number}")
        body = render_update_comment(
            assignees,
            label,
            cutoff=now - timedelta(days=self.windows.update_days),
            template=self.template,
            timezone=self.timezone,
        )
        if self.dry_run:
            logger.info(f"[labeler] Would comment on issue #{issue_number}:\n{body}")
            return
        await self.github.create_comment(self.owner, self.repo, issue_number, body)


async def run_update_labeler(
    column_id: int | None = None,
    dry_run: bool | None = None,
) -> LabelRunReport:
    """
    Run the labeler once using application settings.

    Raises:
        ValueError: If GitHub access or the project column is not configured
    """
    if not settings.github_enabled:
        raise ValueError("GITHUB_TOKEN and GITHUB_REPOSITORY (owner/repo) must be set")

    column_id = column_id if column_id is not None else settings.project_column_id
    if column_id is None:
        raise ValueError("No project column configured (PROJECT_COLUMN_ID)")

    labeler = UpdateLabeler.from_settings(dry_run=dry_run)
    return await labeler.run(column_id)
