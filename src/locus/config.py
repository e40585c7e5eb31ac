"""locus configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid.

    This exception provides clear, actionable error messages when
    configuration values required by a specific operation are not set.

    Example:
        >>> Settings(_env_file=None).require_proximity_threshold()  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        ConfigError: Proximity threshold not configured. Set it in .env file or
        PROXIMITY_THRESHOLD environment variable.
    """

    def __init__(self, key_name: str, env_var: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the missing key.
            env_var: Environment variable name to set.
        """
        self.key_name = key_name
        self.env_var = env_var
        message = (
            f"{key_name} not configured. "
            f"Set it in .env file or {env_var} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Proximity
    PROXIMITY_METRIC: Literal["euclidean", "conjunctive"] = "euclidean"
    PROXIMITY_THRESHOLD: float | None = None  # Same units as spot centroids

    def require_proximity_threshold(self) -> float:
        """Get the proximity threshold, raising ConfigError if not set.

        Returns:
            The raw (not yet validated) threshold value.

        Raises:
            ConfigError: If PROXIMITY_THRESHOLD is not configured.
        """
        if self.PROXIMITY_THRESHOLD is None:
            raise ConfigError("Proximity threshold", "PROXIMITY_THRESHOLD")
        return self.PROXIMITY_THRESHOLD


# Singleton instance for import convenience
settings = Settings()
