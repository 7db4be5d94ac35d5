"""
Pygments lexer for tag markup

Highlights <tag> groups in tagged text so markup sources can be previewed
in a terminal before rendering.

Token types:
- Punctuation: "<", "</" and ">" delimiters
- Name.Tag: Tag names (red, bold, b, italic)
- Name.Attribute: Qualifiers (fg:, bg:, bright:, dark:)
- Number.Hex: Hex color literals (#123456)
- String.Escape: Escape markers and escaped tags (~<b>, ~~)
- Text: Everything else
"""

import re
from functools import lru_cache
from typing import Dict, List, Optional

from pygments.lexer import RegexLexer
from pygments.token import Text, Punctuation, Name, Number, String, Whitespace

from ..config import appsettings
from .escape import DEFAULT_MARKER


def rules_make(marker: str) -> Dict[str, List[tuple]]:
    """Token rules for markup escaped with the given marker character"""
    m = re.escape(marker)
    return {
        'root': [
            # Marker runs that only cancel other markers; the tag stays live
            (rf'{m}{m}+(?=<)', String.Escape),

            # A single marker prints the whole tag literally
            (rf'{m}<[^>]*>', String.Escape),

            # Closing and opening groups (need a ">" somewhere ahead)
            (r'</(?=[^>]*>)', Punctuation, 'group'),
            (r'<(?=[^>]*>)', Punctuation, 'group'),

            (rf'[^<{m}]+', Text),
            (rf'<|{m}', Text),
        ],

        'group': [
            (r'>', Punctuation, '#pop'),
            (r'\s+', Whitespace),
            (r'</', Punctuation),
            (r'(fg|bg|bright|dark):', Name.Attribute),
            (r'#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-zA-Z])', Number.Hex),
            (r'[^\s>:#<]+', Name.Tag),
            (r'[:#<]', Name.Tag),
        ],
    }


class TagMarkupLexer(RegexLexer):
    """
    Lexer for tag markup

    Example:
        <red bg:bright:blue>Alert</bg> ~<b>

    Tokens:
        < → Punctuation
        red → Name.Tag
        bg: bright: → Name.Attribute
        blue → Name.Tag
        Alert → Text
        ~<b> → String.Escape
    """

    name = 'Tag markup'
    aliases = ['tagtint', 'tt-markup']
    filenames = ['*.tagged']

    tokens = rules_make(DEFAULT_MARKER)


@lru_cache(maxsize=None)
def lexerClass_get(marker: str) -> type:
    """TagMarkupLexer, or a subclass whose escape rules use another marker"""
    if marker == DEFAULT_MARKER:
        return TagMarkupLexer
    return type('TagMarkupLexer', (TagMarkupLexer,), {'tokens': rules_make(marker)})


def get_lexer(marker: Optional[str] = None) -> TagMarkupLexer:
    """
    Get a lexer for tag markup

    Args:
        marker: Escape marker character; defaults to settings.escape_marker

    Returns:
        Lexer instance ready for use with Pygments
    """
    return lexerClass_get(marker or appsettings.escape_marker)()
