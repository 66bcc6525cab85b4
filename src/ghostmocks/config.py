"""Configuration management with pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GhostmocksSettings(BaseSettings):
    """ghostmocks application settings loaded from environment variables.

    All settings use the GHOSTMOCKS_ prefix for environment variables.
    """

    # Output layout
    output_dir: Path = Field(
        default=Path("."),
        description="Base directory that receives the mocks and tests directories",
    )
    mocks_subdir: str = Field(
        default="mocks",
        description="Directory under output_dir for JSON fixtures",
    )
    tests_subdir: str = Field(
        default="tests",
        description="Directory under output_dir for generated test specs",
    )
    duplicate_policy: Literal["overwrite", "suffix", "reject"] = Field(
        default="overwrite",
        description="What to do when two responses map to the same endpoint name",
    )

    # Generated test template
    app_url: str = Field(
        default="http://localhost:4200",
        description="URL the generated tests navigate to",
    )
    list_selector: str = Field(
        default="li",
        description="Selector matching one rendered list item",
    )
    wait_timeout_ms: int = Field(
        default=5000,
        description="How long generated tests wait for the list to render",
    )

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="console", description="Log format: console or json")

    model_config = SettingsConfigDict(
        env_prefix="GHOSTMOCKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def mocks_dir(self) -> Path:
        """Get the fixture output directory."""
        return self.output_dir / self.mocks_subdir

    @property
    def tests_dir(self) -> Path:
        """Get the test spec output directory."""
        return self.output_dir / self.tests_subdir


# Global settings instance
_settings: GhostmocksSettings | None = None


def get_settings() -> GhostmocksSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = GhostmocksSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
