"""
Tag markup data models

Type-safe structures passed between the scanner, the escape resolver,
the tag stack and the segment styler.
"""

from dataclasses import dataclass


@dataclass
class Token:
    """
    One scanned step of tagged text: a literal run followed by a tag group

    Returned by TagParser.tokens_scan() and by escape_resolve(). Joining
    ``literal + tag`` over every scanned token rebuilds the input exactly.

    Attributes:
        literal: Plain text before the tag (may be empty)
        tag: The whole bracketed group (e.g. "<red bold>", "</bg>"), or ""
             for the trailing token that has no tag

    Example:
        For source "Hi <b>there":
        [Token(literal="Hi ", tag="<b>"), Token(literal="there", tag="")]
    """
    literal: str
    tag: str = ""


@dataclass
class ResolvedTag:
    """
    A single tag word broken into its qualifiers and core name

    Returned by styler.tag_resolve(). Qualifiers are detected as substrings
    anywhere in the raw word, so "bright:bg:red" and "bg:bright:red" resolve
    identically.

    Attributes:
        raw: The tag word as written (e.g. "bg:bright:red", "b", "#123456")
        core_name: Name with qualifiers stripped and shorthand expanded
                   ("b" -> "bold", "i" -> "italic")
        is_background: "bg:" was present
        is_bright: "bright:" was present
        is_dark: "dark:" was present (accepted, has no styling effect)
        is_foreground_explicit: "fg:" was present

    Example:
        ResolvedTag(raw="bg:bright:red", core_name="red",
                    is_background=True, is_bright=True)
    """
    raw: str
    core_name: str
    is_background: bool = False
    is_bright: bool = False
    is_dark: bool = False
    is_foreground_explicit: bool = False

    @property
    def is_hex(self) -> bool:
        """True for "#RRGGBB" style color literals"""
        return self.core_name.startswith("#")


@dataclass(frozen=True)
class CapabilityKey:
    """
    Lookup key into the capability table

    Attributes:
        name: Core style name (e.g. "red", "bold")
        background: Style the background instead of the foreground
        bright: Use the bright variant of a color
    """
    name: str
    background: bool = False
    bright: bool = False

    @property
    def label(self) -> str:
        """Human readable key, e.g. "background-bright-red" """
        parts = []
        if self.background:
            parts.append("background")
        if self.bright:
            parts.append("bright")
        parts.append(self.name)
        return "-".join(parts)
