from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub - token needs issues:write and read access to classic projects
    github_token: str = ""
    # Repository the project column belongs to, as "owner/repo"
    github_repository: str = ""
    # Project board column to scan (e.g. the "In progress" column)
    project_column_id: int | None = None

    # Labels applied per classification result
    label_updated: str = "Status: Updated"
    label_to_update: str = "To Update !"
    label_inactive: str = "2 weeks inactive"

    # Activity windows (days)
    update_days: int = 7
    inactive_days: int = 14

    # Update-request comment
    # Empty string = packaged templates/update_instructions.md
    comment_template_path: str = ""
    # Timezone used to print the cutoff time in comments
    comment_timezone: str = "America/Los_Angeles"

    # Log intended label/comment changes without writing to GitHub
    dry_run: bool = False

    # Application
    debug: bool = False

    # Internal API security — shared secret for cron-triggered endpoints
    # Generate with: python -c "import secrets; print(secrets.token_urlsafe(32))"
    cron_secret: str = ""

    # Scheduler settings
    # Enable/disable the internal APScheduler (set False when driven by an external cron)
    scheduler_enabled: bool = True
    # Day of week to run the labeler (default: fri)
    labeler_day: str = "fri"
    # Hour (UTC) to run the labeler (default: 7 AM UTC)
    labeler_hour: int = 7

    @property
    def repo_owner(self) -> str:
        """Owner part of github_repository."""
        return self.github_repository.partition("/")[0]

    @property
    def repo_name(self) -> str:
        """Name part of github_repository."""
        return self.github_repository.partition("/")[2]

    @property
    def github_enabled(self) -> bool:
        """Check if GitHub access is configured (token and repository)."""
        return bool(self.github_token and self.repo_owner and self.repo_name)


settings = Settings()
