"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TAGTINT_ prefix (e.g., TAGTINT_COLOR_SYSTEM=256).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.color import ColorSystem


ColorSystemName = Literal["truecolor", "256", "standard", "windows", "none"]

_COLOR_SYSTEMS: dict[str, Optional[ColorSystem]] = {
    "truecolor": ColorSystem.TRUECOLOR,
    "256": ColorSystem.EIGHT_BIT,
    "standard": ColorSystem.STANDARD,
    "windows": ColorSystem.WINDOWS,
    "none": None,
}


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TAGTINT_ prefix.

    Examples:
        TAGTINT_PARSE_ENABLED=false
        TAGTINT_ESCAPE_MARKER=^
        TAGTINT_COLOR_SYSTEM=standard
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGTINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Parser configuration
    parse_enabled: bool = Field(
        default=True,
        description="Initial enabled state of newly created tag parsers",
    )

    escape_marker: str = Field(
        default="~",
        description="Character that suppresses an adjacent tag delimiter",
    )

    # Rendering configuration
    color_system: ColorSystemName = Field(
        default="truecolor",
        description="Terminal color system used to render styles ('none' disables styling)",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output while parsing",
    )

    # Output configuration
    output_suffix: str = Field(
        default=".ansi",
        description="Extension appended to the input name when no output file is given",
    )

    @field_validator("escape_marker")
    @classmethod
    def escapeMarker_validate(cls, value: str) -> str:
        """The escape marker must be exactly one character"""
        if len(value) != 1:
            raise ValueError("escape_marker must be a single character")
        return value

    def colorSystem_get(self, name: Optional[str] = None) -> Optional[ColorSystem]:
        """
        Resolve a color system name to a rich ColorSystem.

        Args:
            name: Color system name; defaults to the configured color_system

        Returns:
            Matching ColorSystem, or None for "none" (render without styling)

        Raises:
            ValueError: If name is not a known color system

        Example:
            >>> settings = AppSettings()
            >>> settings.colorSystem_get("256")
            <ColorSystem.EIGHT_BIT: 2>
        """
        key = self.color_system if name is None else name
        if key not in _COLOR_SYSTEMS:
            raise ValueError(
                f"Unknown color system '{key}'. Expected one of: {', '.join(_COLOR_SYSTEMS)}"
            )
        return _COLOR_SYSTEMS[key]


# Singleton instance - import this in your code
appsettings = AppSettings()
