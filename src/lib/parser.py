"""
Parser for <tag> markup

Turns text with inline style tags into text with terminal escape sequences.

The parser works in one pass:
1. Scanning: split the source into (literal, tag group) tokens
2. Escaping: let the escape marker cancel tags written against it
3. Styling: style each literal with the tags open at that point
4. Stack update: apply the tag group to the open tag stack

Key features:
- Several tags per group: <red bold>
- Prefix closing: </bg> closes bg:red and bg:bright:blue, </> closes all
- Escape marker: ~<b> prints "<b>", ~~<b> prints "~" and opens bold
- Unknown tags and unmatched closes are silently ignored

Example:
    >>> parser = TagParser()
    >>> parser.parse("<red>Error</red> done") == styles_compose("Error", ["red"]) + " done"
    True
"""

import re
from typing import List, Optional

from ..models.tags import Token
from .capabilities import CapabilityRegistry
from .escape import escape_resolve
from .log import LOG, verbosity_get
from .stack import TagStack
from .styler import registry_default, styles_compose


# Shortest run from "<" to the next ">", newlines included
TAG_PATTERN = re.compile(r"<.*?>", re.DOTALL)


class TagParser:
    """
    Parser for tag markup with its own enabled switch

    Each instance carries the state that would otherwise be process wide:
    whether parsing is enabled, the escape marker and the capability table.
    Independent instances never affect each other.
    """

    def __init__(
        self,
        registry: Optional[CapabilityRegistry] = None,
        enabled: Optional[bool] = None,
        marker: Optional[str] = None,
    ) -> None:
        """
        Initialize the parser

        Args:
            registry: Capability table; defaults to one built from settings
            enabled: Initial enabled state; defaults to settings.parse_enabled
            marker: Escape marker character; defaults to settings.escape_marker

        Raises:
            ValueError: If marker is not exactly one character
        """
        from ..config import appsettings

        self.registry = registry if registry is not None else registry_default()
        self.enabled = appsettings.parse_enabled if enabled is None else enabled
        self.marker = appsettings.escape_marker if marker is None else marker

        if len(self.marker) != 1:
            raise ValueError(f"Escape marker must be a single character, got {self.marker!r}")

    def stop(self) -> None:
        """Disable parsing; parse() returns its input unchanged"""
        self.enabled = False

    def resume(self) -> None:
        """Enable parsing again (the default state)"""
        self.enabled = True

    def tokens_scan(self, text: str) -> List[Token]:
        """
        Split text into literal/tag tokens

        A "<" with no later ">" is ordinary text. The last token never has
        a tag; its literal may be empty.

        Args:
            text: Source text

        Returns:
            Tokens whose literal + tag concatenation rebuilds text

        Example:
            >>> TagParser().tokens_scan("a<b>c")
            [Token(literal='a', tag='<b>'), Token(literal='c', tag='')]
        """
        tokens = []
        pos = 0

        for match in TAG_PATTERN.finditer(text):
            tokens.append(Token(literal=text[pos:match.start()], tag=match.group()))
            pos = match.end()

        tokens.append(Token(literal=text[pos:]))
        return tokens

    def parse(self, text: str) -> str:
        """
        Render tag markup in text

        Args:
            text: Text containing tag markup

        Returns:
            Text with tags replaced by styling. Returned unchanged when the
            parser is disabled or text has no "<".
        """
        if not self.enabled or "<" not in text:
            return text

        stack = TagStack()
        result = []

        for scanned in self.tokens_scan(text):
            token = escape_resolve(scanned.literal, scanned.tag, self.marker)
            if verbosity_get() >= 3:
                LOG(f"Token {scanned} -> {token}", level=3)

            if token.literal:
                result.append(styles_compose(token.literal, stack.snapshot(), self.registry))

            if token.tag:
                stack.apply(token.tag)

        return "".join(result)

    def __call__(self, text: str) -> str:
        return self.parse(text)


_default_parser: Optional[TagParser] = None


def parser_default() -> TagParser:
    """The module level parser used when no parser is passed explicitly"""
    global _default_parser
    if _default_parser is None:
        _default_parser = TagParser()
    return _default_parser


def tags_parse(text: str, parser: Optional[TagParser] = None) -> str:
    """
    Render tag markup with the given or the default parser

    Example:
        >>> tags_parse("No tags")
        'No tags'
    """
    return (parser or parser_default()).parse(text)


def tagParsing_stop(parser: Optional[TagParser] = None) -> None:
    """Disable tag parsing on the given or the default parser"""
    (parser or parser_default()).stop()


def tagParsing_resume(parser: Optional[TagParser] = None) -> None:
    """Enable tag parsing on the given or the default parser"""
    (parser or parser_default()).resume()
