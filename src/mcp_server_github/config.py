"""Server configuration bound to environment variables"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .credentials import DEFAULT_TOKEN_FILE

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_TIMEOUT = 30.0


class ServerConfig(BaseModel):
    log_level: str = "INFO"
    structured_logs: bool = True
    log_file: Optional[Path] = None
    github_api_url: str = DEFAULT_API_URL
    github_api_timeout: float = Field(default=DEFAULT_API_TIMEOUT, gt=0)
    git_timeout: Optional[float] = Field(default=None, gt=0)
    token_file_name: str = DEFAULT_TOKEN_FILE

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"invalid log level: {value}")
        return value

    @field_validator("github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ServerConfig":
        """Build configuration from environment variables.

        Keyword overrides (typically from CLI options) win over the
        environment. Unset or empty variables fall back to the defaults.
        """
        environ = os.environ if environ is None else environ
        mapping = {
            "log_level": "LOG_LEVEL",
            "github_api_url": "GITHUB_API_URL",
            "github_api_timeout": "GITHUB_API_TIMEOUT",
            "git_timeout": "GIT_COMMAND_TIMEOUT",
            "token_file_name": "GITHUB_TOKEN_FILE",
        }
        values = {
            field: environ[var]
            for field, var in mapping.items()
            if environ.get(var, "").strip()
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
