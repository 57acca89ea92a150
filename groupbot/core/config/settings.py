"""
Settings for the groupbot GroupMe backend.

Simple, reliable environment variable configuration. Credentials are only
validated when the server starts so the package stays importable in tests
and from the command line.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & General Configuration
        # ================================================================
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # GroupMe Configuration
        # ================================================================
        self.groupme_bot_id: str | None = os.getenv("GROUPME_BOT_ID")
        self.groupme_access_token: str | None = os.getenv("GROUPME_ACCESS_TOKEN")
        self.groupme_group_id: str | None = os.getenv("GROUPME_GROUP_ID")
        self.groupme_api_url: str = os.getenv(
            "GROUPME_API_URL", "https://api.groupme.com/v3"
        )

        # ================================================================
        # Bot Behaviour
        # ================================================================
        self.command_prefix: str = os.getenv("COMMAND_PREFIX", "/")
        self.max_message_length: int = int(os.getenv("MAX_MESSAGE_LENGTH", "1000"))
        self.pog_image_url: str = os.getenv(
            "POG_IMAGE_URL",
            "https://i.groupme.com/128x128.png.89c49b2a867c42f3a2d8f077f9c8681b",
        )

        # ================================================================
        # Persistent Store Configuration
        # ================================================================
        self.store_type: str = os.getenv("STORE_TYPE", "memory")
        self.json_store_dir: str = os.getenv("JSON_STORE_DIR", "./data")
        self.redis_url: str | None = os.getenv("REDIS_URL")
        self.redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "groupbot")
        self.redis_max_connections: int = int(os.getenv("REDIS_MAX_CONNECTIONS", "16"))

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if len(self.command_prefix) != 1:
            raise ValueError("COMMAND_PREFIX must be a single character")
        if self.max_message_length < 10:
            raise ValueError("MAX_MESSAGE_LENGTH must be at least 10")

    def validate_groupme_credentials(self) -> None:
        """Validate required GroupMe credentials (called on server startup)."""
        if not self.groupme_bot_id:
            raise ValueError("GROUPME_BOT_ID is required")
        if not self.groupme_access_token:
            raise ValueError("GROUPME_ACCESS_TOKEN is required")
        if not self.groupme_group_id:
            raise ValueError("GROUPME_GROUP_ID is required")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"


# Global settings instance
settings = Settings()
