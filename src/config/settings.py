"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use RSTAUDIT_ prefix (e.g., RSTAUDIT_MANIFEST_FILENAME=snooty.toml).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use RSTAUDIT_ prefix.

    Examples:
        RSTAUDIT_TESTED_PATH_MARKER=/tested/
        RSTAUDIT_CORPUS_BOUNDARY_DIRNAME=content
        RSTAUDIT_RSTSPEC_PATH=~/.rstaudit/rstspec.toml
    """

    model_config = SettingsConfigDict(
        env_prefix="RSTAUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Corpus layout
    tested_path_marker: str = Field(
        default="/tested/",
        description="Path fragment identifying code examples backed by automated tests",
    )

    manifest_filename: str = Field(
        default="snooty.toml",
        description="Per-project manifest holding composable overrides",
    )

    corpus_boundary_dirname: str = Field(
        default="content",
        description="Directory name at which the upward manifest search stops",
    )

    source_dirname: str = Field(
        default="source",
        description="Project directory that absolute include paths are resolved against",
    )

    # Shell product detection
    shell_content_dir: str = Field(
        default="mongodb-shell",
        description="Content directory whose pages are shell-product pages",
    )

    shell_interface_id: str = Field(
        default="mongosh",
        description="Composable interface value that marks a shell-product context",
    )

    shell_product: str = Field(
        default="MongoDB Shell",
        description="Display name of the shell product",
    )

    # Canonical mappings
    tabset_id: str = Field(
        default="drivers",
        description="Tabset in the canonical specification whose tab IDs name products",
    )

    rstspec_path: Path = Field(
        default=Path.home() / ".rstaudit" / "rstspec.toml",
        description="Local copy of the canonical directive specification",
    )

    # Output configuration
    report_filename: str = Field(
        default="testable-code.json",
        description="Name of the JSON report written to the output directory",
    )

    def testedPath_is(self, path: str) -> bool:
        """
        Check whether a referenced file path points at tested code.

        Example:
            >>> settings = AppSettings()
            >>> settings.testedPath_is('/code-examples/tested/python/insert.py')
            True
        """
        return bool(path) and self.tested_path_marker in path


# Singleton instance - import this in your code
appsettings = AppSettings()
