"""Environment settings for the Gemini provider.

Reads the API key and default model from the process environment,
optionally after populating it from a .env file.

Example:
    >>> from execution_gemini.config import load_settings
    >>> settings = load_settings()
    >>> settings.default_model
    'gemini-1.5-pro'
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-pro"


class ConfigError(Exception):
    """Raised when environment settings fail validation."""

    pass


class GeminiSettings(BaseSettings):
    """Environment variables loader using pydantic-settings.

    Only the prefixed variables are read. ``GEMINI_API_KEY`` is the primary
    key source; ``GOOGLE_API_KEY`` is used when the primary is unset or empty.

    Example:
        >>> settings = GeminiSettings(GEMINI_API_KEY="", GOOGLE_API_KEY="AIza...")
        >>> settings.api_key
        'AIza...'
    """

    model_config = SettingsConfigDict(extra="ignore")

    gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    google_api_key: str | None = Field(default=None, validation_alias="GOOGLE_API_KEY")
    default_model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        validation_alias="GEMINI_DEFAULT_MODEL",
    )

    @property
    def api_key(self) -> str | None:
        """First non-empty key, primary before alias."""
        return self.gemini_api_key or self.google_api_key or None


def load_settings(env_file: Path | None = None) -> GeminiSettings:
    """Load settings from the environment.

    Uses python-dotenv to load ``env_file`` into os.environ first,
    then pydantic-settings reads from there.

    Args:
        env_file: Path to .env file, or None to read os.environ only.

    Returns:
        GeminiSettings instance with loaded values.

    Raises:
        ConfigError: If an environment value fails validation.
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file, override=True)

    try:
        settings = GeminiSettings()
    except ValidationError as e:
        errors = e.errors()
        if errors:
            err = errors[0]
            field = ".".join(str(loc) for loc in err["loc"])
            raise ConfigError(f"Config error: {field} {err['msg']}") from e
        raise ConfigError(f"Validation error in Gemini settings: {e}") from e

    logger.debug(
        "Settings loaded: default_model=%s, api_key=%s",
        settings.default_model,
        "***" if settings.api_key else "None",
    )
    return settings
