"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use INKPAGE_ prefix (e.g., INKPAGE_STRICT_SOURCES=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use INKPAGE_ prefix.

    Examples:
        INKPAGE_SOURCES_DIR=src_story
        INKPAGE_OUTPUT_FILE=index.html
        INKPAGE_RUNTIME_BUNDLE=/opt/blotter/build/blotter.js
    """

    model_config = SettingsConfigDict(
        env_prefix="INKPAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Project layout
    sources_dir: str = Field(
        default="sources",
        description="Directory holding the project sources (relative to the working directory)",
    )

    output_file: str = Field(
        default="out.html",
        description="Filename of the built document, written to the working directory",
    )

    # Asset configuration
    runtime_bundle: Optional[str] = Field(
        default=None,
        description="Path to the auxiliary runtime bundle. Defaults to the package assets/blotter.js",
    )

    # Build configuration
    strict_sources: bool = Field(
        default=False,
        description="Strict mode: abort the build when required sources are missing",
    )

    # Watch configuration
    watch_debounce_ms: int = Field(
        default=0,
        ge=0,
        description="Delay before a triggered rebuild starts, letting bursts of writes settle",
    )

    def sourcesDir_get(self, cwd: Optional[Path] = None) -> Path:
        """
        Resolve the sources directory against a working directory.

        Args:
            cwd: Working directory (default: process cwd)

        Returns:
            Absolute path to the sources directory
        """
        base = Path(cwd) if cwd is not None else Path.cwd()
        return base / self.sources_dir

    def outputPath_get(self, cwd: Optional[Path] = None) -> Path:
        """Resolve the output document path against a working directory."""
        base = Path(cwd) if cwd is not None else Path.cwd()
        return base / self.output_file

    def runtimeBundle_get(self) -> Path:
        """Path of the runtime bundle, read but never written."""
        if self.runtime_bundle:
            return Path(self.runtime_bundle)
        return PACKAGE_ROOT / "assets" / "blotter.js"


# Singleton instance - import this in your code
appsettings = AppSettings()
