"""
Escape marker resolution

A marker character (``~`` by default) written directly against a tag
delimiter keeps that tag from being interpreted:

    ~<b>Text~</b>     -> "<b>Text</b>"  (both tags printed literally)
    ~~<b>Text~~</b>   -> "~" + bold("Text~")  (one marker consumed per side)
    ~~~<b>            -> "~~" then bold opens

Each scanned (literal, tag) pair is corrected independently; the tag stack
never sees a tag that was escaped.
"""

from ..models.tags import Token


DEFAULT_MARKER = "~"


def escape_resolve(literal: str, tag: str, marker: str = DEFAULT_MARKER) -> Token:
    """
    Correct one scanned (literal, tag) pair for escape markers

    Rules, first match wins:
        1. Literal starts (or else ends) with a doubled marker: drop one
           marker from that end and keep the tag live.
        2. Literal is exactly one marker and a tag follows: the tag becomes
           the literal text and no tag is applied.
        3. Literal ends with one marker and a tag follows: the marker is
           replaced by the tag text and no tag is applied.
        4. Otherwise the pair is unchanged.

    Args:
        literal: Text scanned before the tag
        tag: Bracketed tag group following the literal, or "" at end of input
        marker: Escape marker character

    Returns:
        Token holding the corrected literal and the tag still to apply

    Example:
        >>> escape_resolve("Fine ~", "<b>")
        Token(literal='Fine <b>', tag='')
        >>> escape_resolve("Fine ~~", "<b>")
        Token(literal='Fine ~', tag='<b>')
    """
    doubled = marker * 2

    if literal.startswith(doubled):
        return Token(literal=literal[len(marker):], tag=tag)
    if literal.endswith(doubled):
        return Token(literal=literal[:-len(marker)], tag=tag)

    if not tag.startswith("<"):
        return Token(literal=literal, tag=tag)

    if literal == marker:
        return Token(literal=tag, tag="")
    if literal.endswith(marker):
        return Token(literal=literal[:-len(marker)] + tag, tag="")

    return Token(literal=literal, tag=tag)
