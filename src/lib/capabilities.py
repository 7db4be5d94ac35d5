"""
Style capability table

Maps a resolved tag (core name, background, bright) to a function that wraps
text in terminal escape sequences. Rendering is done by rich's Style, so the
same table can target truecolor, 256-color, 16-color or legacy Windows
terminals, or emit plain text for color_system "none".

The table is explicit: every supported combination is registered up front
and anything else is "not found" (None), which the styler treats as a no-op.
"""

import re
from typing import Callable, Dict, List, Optional

from rich.color import Color, ColorParseError, ColorSystem
from rich.style import Style

from ..models.tags import CapabilityKey


Renderer = Callable[[str], str]

COLOR_NAMES: List[str] = [
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
]

# gray is already the bright variant of black, so it has no bright form
GRAY_NAMES: List[str] = ["gray", "grey"]

# "#rgb" shorthand, read as "#rrggbb"
SHORT_HEX = re.compile(r"#([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])")

MODIFIER_STYLES: Dict[str, Style] = {
    "bold": Style(bold=True),
    "dim": Style(dim=True),
    "italic": Style(italic=True),
    "underline": Style(underline=True),
    "overline": Style(overline=True),
    "inverse": Style(reverse=True),
    "hidden": Style(conceal=True),
    "strikethrough": Style(strike=True),
}


class CapabilityRegistry:
    """
    Registry of styling capabilities

    Maps CapabilityKey objects to rich Styles and hands out renderers bound
    to the configured color system.
    """

    def __init__(self, color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR) -> None:
        """
        Initialize the registry and register all built-in styles

        Args:
            color_system: rich color system to render with; None renders
                          every style as plain text
        """
        self.color_system = color_system
        self.styles: Dict[CapabilityKey, Style] = {}
        self.colorStyles_register()
        self.grayStyles_register()
        self.modifierStyles_register()

    @classmethod
    def fromSettings(cls, color_system: Optional[str] = None) -> "CapabilityRegistry":
        """
        Build a registry using the application settings

        Args:
            color_system: Optional color system name overriding the setting
        """
        from ..config import appsettings
        return cls(color_system=appsettings.colorSystem_get(color_system))

    def register(self, key: CapabilityKey, style: Style) -> None:
        """Register a style for a key, replacing any existing entry"""
        self.styles[key] = style

    def colorStyles_register(self) -> None:
        """Register the eight base colors in all four variants"""
        for name in COLOR_NAMES:
            self.register(CapabilityKey(name), Style(color=name))
            self.register(CapabilityKey(name, bright=True), Style(color=f"bright_{name}"))
            self.register(CapabilityKey(name, background=True), Style(bgcolor=name))
            self.register(
                CapabilityKey(name, background=True, bright=True),
                Style(bgcolor=f"bright_{name}"),
            )

    def grayStyles_register(self) -> None:
        """Register gray/grey for foreground and background"""
        for name in GRAY_NAMES:
            self.register(CapabilityKey(name), Style(color="bright_black"))
            self.register(CapabilityKey(name, background=True), Style(bgcolor="bright_black"))

    def modifierStyles_register(self) -> None:
        """Register text decorations (foreground only)"""
        for name, style in MODIFIER_STYLES.items():
            self.register(CapabilityKey(name), style)

    def renderer_make(self, style: Style) -> Renderer:
        """Bind a style to this registry's color system"""
        color_system = self.color_system

        def render(text: str) -> str:
            return style.render(text, color_system=color_system)

        return render

    def get(self, key: CapabilityKey) -> Optional[Renderer]:
        """
        Get the renderer for a key

        Args:
            key: Capability key built from a resolved tag

        Returns:
            Renderer function, or None if the combination is not supported

        Example:
            >>> registry = CapabilityRegistry()
            >>> registry.get(CapabilityKey("red"))("x")
            '\\x1b[31mx\\x1b[0m'
            >>> registry.get(CapabilityKey("bold", background=True)) is None
            True
        """
        style = self.styles.get(key)
        if style is None:
            return None
        return self.renderer_make(style)

    def hex_get(self, code: str, background: bool = False) -> Optional[Renderer]:
        """
        Get a renderer for a "#RRGGBB" or "#RGB" color literal

        Args:
            code: Hex color including the leading "#"
            background: Color the background instead of the foreground

        Returns:
            Renderer function, or None if code is not a valid hex color
        """
        short = SHORT_HEX.fullmatch(code)
        if short:
            code = "#" + "".join(digit * 2 for digit in short.groups())
        try:
            color = Color.parse(code)
        except ColorParseError:
            return None
        style = Style(bgcolor=color) if background else Style(color=color)
        return self.renderer_make(style)

    def keys(self) -> List[CapabilityKey]:
        """All registered keys, in registration order"""
        return list(self.styles)

    def __contains__(self, key: CapabilityKey) -> bool:
        return key in self.styles
