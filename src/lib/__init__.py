"""
tagtint - Inline tag markup for terminal styling

Write "<bold red>Error:</> details" instead of calling a styling API.
"""

__version__ = "1.0.0"

from .parser import TagParser, tags_parse, tagParsing_stop, tagParsing_resume, parser_default
from .stack import TagStack
from .escape import escape_resolve
from .styler import styles_compose, tag_resolve
from .capabilities import CapabilityRegistry
from .console import console_applyTags, console_restore
from .log import LOG, state_connectToLogger

__all__ = [
    "TagParser",
    "tags_parse",
    "tagParsing_stop",
    "tagParsing_resume",
    "parser_default",
    "TagStack",
    "escape_resolve",
    "styles_compose",
    "tag_resolve",
    "CapabilityRegistry",
    "console_applyTags",
    "console_restore",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
