"""Configuration for the Reclaim MCP server."""

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_BASE_URL = "https://api.app.reclaim.ai/api/"


class ConfigError(Exception):
    """Raised when the server configuration is missing or invalid."""


class ReclaimConfig(BaseModel):
    """Settings needed to talk to the Reclaim API."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    api_key: str = Field(..., description="Reclaim API bearer token", min_length=1)
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base URL of the Reclaim REST API")
    timeout: float = Field(default=30.0, description="Request timeout in seconds", gt=0)
    log_level: str = Field(default="INFO", description="Logging level name")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ReclaimConfig":
        """
        Build a configuration from environment variables.

        When no mapping is given, a `.env` file is loaded into the process
        environment first (existing variables win).

        Args:
            environ: Optional mapping to read instead of os.environ

        Returns:
            ReclaimConfig instance

        Raises:
            ConfigError: If RECLAIM_API_KEY is missing or a value is invalid
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        api_key = environ.get("RECLAIM_API_KEY", "").strip()
        if not api_key:
            raise ConfigError(
                "RECLAIM_API_KEY environment variable is not set. "
                "Create a .env file with RECLAIM_API_KEY=your_api_token or export it."
            )

        values: dict[str, str] = {"api_key": api_key}
        optional = {
            "base_url": "RECLAIM_API_BASE_URL",
            "timeout": "RECLAIM_TIMEOUT",
            "log_level": "RECLAIM_LOG_LEVEL",
        }
        for field_name, env_name in optional.items():
            value = environ.get(env_name)
            if value:
                values[field_name] = value

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid Reclaim configuration: {e}") from e
