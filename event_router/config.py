"""Event router configuration."""

import logging
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from event_router.utils.github import parse_repository

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment or .env."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # GitHub
    github_token: str = ""
    github_repository: str = ""
    github_api_url: str = "https://api.github.com"

    # Application
    log_level: str = "INFO"

    # -----------------------------------
    # Field Validators
    # -----------------------------------

    @field_validator("github_token", "github_repository")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level against the standard level names.

        Args:
            v: The log level from environment or config.

        Returns:
            The upper-cased level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(sorted(VALID_LOG_LEVELS))}, got '{v}'"
            )
        return level

    # -----------------------------------
    # Computed Properties
    # -----------------------------------

    @property
    def owner(self) -> str:
        """Repository owner from GITHUB_REPOSITORY, empty if unset or malformed."""
        return self._split_repository()[0]

    @property
    def repo(self) -> str:
        """Repository name from GITHUB_REPOSITORY, empty if unset or malformed."""
        return self._split_repository()[1]

    def _split_repository(self) -> tuple[str, str]:
        if not self.github_repository:
            return "", ""
        try:
            return parse_repository(self.github_repository)
        except ValueError:
            return "", ""


class EventEnvironment(BaseSettings):
    """Event details handed over by the workflow through environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    issue_title: Optional[str] = None
    pr_title: Optional[str] = None
    comment_body: Optional[str] = None
    comment_author: Optional[str] = None
    issue_labels: Optional[str] = None


def create_settings() -> Settings:
    """Load and validate application settings from environment variables.

    Returns:
        Settings: Validated settings instance.

    Raises:
        SystemExit: Exits with code 1 if validation fails (e.g., bad LOG_LEVEL).
    """
    try:
        return Settings()
    except ValidationError as e:
        for err in e.errors():
            logger.error(f"  {err['msg']}")
        raise SystemExit(1)
