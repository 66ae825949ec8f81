"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TERMAGE_ prefix (e.g., TERMAGE_TERMINAL_WIDTH=120).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TERMAGE_ prefix.

    Examples:
        TERMAGE_TERMINAL_WIDTH=100
        TERMAGE_THEME_NAME=midnight
        TERMAGE_THEMES_DIR=/etc/termage/themes
    """

    model_config = SettingsConfigDict(
        env_prefix="TERMAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Terminal configuration
    terminal_width: Optional[int] = Field(
        default=None,
        ge=1,
        description="Force a terminal width instead of querying the OS",
    )

    fallback_width: int = Field(
        default=80,
        ge=1,
        description="Column count used when the terminal size cannot be determined",
    )

    # Theme configuration
    theme_name: str = Field(
        default="default",
        description="Name of the theme loaded by the process-wide default theme",
    )

    themes_dir: Optional[str] = Field(
        default=None,
        description="Directory holding <name>/theme.yaml themes (defaults to the package themes)",
    )

    # Rendering configuration
    debug_mode: bool = Field(
        default=False,
        description="Enable debug output (raises CLI verbosity to trace level)",
    )

    def width_resolve(self, queried: Optional[int]) -> int:
        """
        Pick the effective terminal width.

        Args:
            queried: Width reported by the OS, or None when unknown

        Returns:
            The configured override if set, else the queried width, else the
            fallback width

        Example:
            >>> AppSettings(terminal_width=None).width_resolve(132)
            132
            >>> AppSettings(terminal_width=40).width_resolve(132)
            40
        """
        if self.terminal_width:
            return self.terminal_width
        if queried and queried > 0:
            return queried
        return self.fallback_width


# Singleton instance - import this in your code
appsettings = AppSettings()
