"""
tagtint - Inline tag markup for terminal styling

Converts "<red bold>text</>" style markup embedded in plain text into
ANSI styled output.
"""

__version__ = "1.0.0"

from .lib import (
    TagParser,
    TagStack,
    CapabilityRegistry,
    tags_parse,
    tagParsing_stop,
    tagParsing_resume,
    console_applyTags,
    console_restore,
    escape_resolve,
    styles_compose,
    tag_resolve,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "TagParser",
    "TagStack",
    "CapabilityRegistry",
    "tags_parse",
    "tagParsing_stop",
    "tagParsing_resume",
    "console_applyTags",
    "console_restore",
    "escape_resolve",
    "styles_compose",
    "tag_resolve",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
