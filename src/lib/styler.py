"""
Segment styling

Resolves raw tag words into qualifiers and a core name, then folds the open
tags over a literal chunk. Tags are applied oldest first, so a later tag
wraps the output of an earlier one.
"""

import re
from functools import reduce
from typing import Iterable, Optional

from ..models.tags import CapabilityKey, ResolvedTag
from .capabilities import CapabilityRegistry, Renderer


# Qualifiers count anywhere in the word, not only as prefixes
QUALIFIER_PATTERN = re.compile(r"fg:|bg:|bright:|dark:")

SHORTHANDS = {
    "b": "bold",
    "i": "italic",
}

_default_registry: Optional[CapabilityRegistry] = None


def registry_default() -> CapabilityRegistry:
    """Lazily built registry using the application settings"""
    global _default_registry
    if _default_registry is None:
        _default_registry = CapabilityRegistry.fromSettings()
    return _default_registry


def tag_resolve(raw: str) -> ResolvedTag:
    """
    Split a raw tag word into qualifiers and core name

    Args:
        raw: Tag word as written inside the brackets

    Returns:
        ResolvedTag with qualifier flags and the normalized core name

    Example:
        >>> tag_resolve("bg:bright:red")
        ResolvedTag(raw='bg:bright:red', core_name='red', is_background=True, is_bright=True, is_dark=False, is_foreground_explicit=False)
        >>> tag_resolve("b").core_name
        'bold'
    """
    core_name = QUALIFIER_PATTERN.sub("", raw)
    if not core_name.startswith("#"):
        core_name = SHORTHANDS.get(core_name, core_name)

    return ResolvedTag(
        raw=raw,
        core_name=core_name,
        is_background="bg:" in raw,
        is_bright="bright:" in raw,
        is_dark="dark:" in raw,
        is_foreground_explicit="fg:" in raw,
    )


def renderer_lookup(tag: ResolvedTag, registry: CapabilityRegistry) -> Optional[Renderer]:
    """Find the renderer for a resolved tag, or None if unrecognized"""
    if tag.is_hex:
        return registry.hex_get(tag.core_name, background=tag.is_background)
    key = CapabilityKey(tag.core_name, background=tag.is_background, bright=tag.is_bright)
    return registry.get(key)


def tag_apply(text: str, raw: str, registry: CapabilityRegistry) -> str:
    """Style text with a single raw tag word; unknown tags leave it as is"""
    renderer = renderer_lookup(tag_resolve(raw), registry)
    if renderer is None:
        return text
    return renderer(text)


def styles_compose(
    text: str, tags: Iterable[str], registry: Optional[CapabilityRegistry] = None
) -> str:
    """
    Apply every open tag, oldest first, to a literal chunk

    Args:
        text: Literal text to style
        tags: Raw tag words in open order
        registry: Capability table; defaults to one built from settings

    Returns:
        Styled text ("" stays "")

    Example:
        With tags ("red", "bold") the result is bold(red(text)).
    """
    if not text:
        return text
    if registry is None:
        registry = registry_default()
    return reduce(lambda styled, raw: tag_apply(styled, raw, registry), tags, text)
