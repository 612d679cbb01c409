from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
import os

from seo_analyzer.constants import (
    DEFAULT_USER_AGENT,
    PAGE_TIMEOUT_SECONDS,
    ROBOTS_TIMEOUT_SECONDS,
    LINK_CHECK_TIMEOUT_SECONDS,
    AMP_PROBE_TIMEOUT_SECONDS,
    MAX_REDIRECTS,
    MAX_LINK_CHECKS,
    MAX_EXTERNAL_LINK_CHECKS,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
)

load_dotenv()  # Loads variables from .env file


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///seo_analyses.db")  # Default to SQLite

    # Storage backend: 'local' (SQLite) or 'memory'
    DB_BACKEND = os.getenv("DB_BACKEND", "local")


settings = Settings()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


@dataclass
class Config:
    """Configuration for the page analyzer."""
    user_agent: str = DEFAULT_USER_AGENT
    page_timeout: float = PAGE_TIMEOUT_SECONDS
    robots_timeout: float = ROBOTS_TIMEOUT_SECONDS
    link_check_timeout: float = LINK_CHECK_TIMEOUT_SECONDS
    amp_probe_timeout: float = AMP_PROBE_TIMEOUT_SECONDS
    max_redirects: int = MAX_REDIRECTS
    max_link_checks: int = MAX_LINK_CHECKS
    max_external_link_checks: int = MAX_EXTERNAL_LINK_CHECKS
    max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS
    analysis_timeout: Optional[float] = None  # Overall budget for one analyze() call
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        return cls(
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            page_timeout=float(os.getenv("PAGE_TIMEOUT", str(PAGE_TIMEOUT_SECONDS))),
            robots_timeout=float(os.getenv("ROBOTS_TIMEOUT", str(ROBOTS_TIMEOUT_SECONDS))),
            link_check_timeout=float(
                os.getenv("LINK_CHECK_TIMEOUT", str(LINK_CHECK_TIMEOUT_SECONDS))
            ),
            amp_probe_timeout=float(
                os.getenv("AMP_PROBE_TIMEOUT", str(AMP_PROBE_TIMEOUT_SECONDS))
            ),
            max_redirects=int(os.getenv("MAX_REDIRECTS", str(MAX_REDIRECTS))),
            max_link_checks=int(os.getenv("MAX_LINK_CHECKS", str(MAX_LINK_CHECKS))),
            max_external_link_checks=int(
                os.getenv("MAX_EXTERNAL_LINK_CHECKS", str(MAX_EXTERNAL_LINK_CHECKS))
            ),
            max_concurrent_requests=int(
                os.getenv("MAX_CONCURRENT_REQUESTS", str(DEFAULT_MAX_CONCURRENT_REQUESTS))
            ),
            analysis_timeout=_optional_float(os.getenv("ANALYSIS_TIMEOUT")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }
