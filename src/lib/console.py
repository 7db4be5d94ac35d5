"""
Console integration

Routes print() and loguru messages through a TagParser so markup can be
used directly in output calls:

    restore = console_applyTags()
    print("<green>ok</green>", count)     # arguments joined with sep, then parsed
    logger.info("<b>loaded</b> config")   # message parsed before handlers run
    restore()

The hooks are installed once. Further applications only push their parser;
output is always parsed once, by the parser of the innermost application.
"""

import builtins
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .parser import TagParser, parser_default


_hook_active: ContextVar[bool] = ContextVar('tagtint_hook_active', default=False)


@dataclass(eq=False)
class Application:
    """One console_applyTags() call; compared by identity"""
    parser: TagParser


_applications: List[Application] = []

# What was in place before the hooks went in
_print_before: Optional[Callable[..., None]] = None
_patcher_before: Optional[Callable[[Dict[str, Any]], None]] = None


def parser_current() -> Optional[TagParser]:
    """Parser of the innermost active application"""
    return _applications[-1].parser if _applications else None


def guarded_parse(text: str) -> str:
    """Parse text unless already inside a hook (the parser itself may log)"""
    parser = parser_current()
    if parser is None or _hook_active.get():
        return text
    marker = _hook_active.set(True)
    try:
        return parser.parse(text)
    finally:
        _hook_active.reset(marker)


def print_make(original: Callable[..., None]) -> Callable[..., None]:
    """Build a print() replacement that parses its joined arguments"""

    def print_tagged(*args: Any, sep: Optional[str] = " ", end: Optional[str] = "\n",
                     file: Any = None, flush: bool = False) -> None:
        joiner = " " if sep is None else sep
        text = joiner.join(str(arg) for arg in args)
        original(guarded_parse(text), end=end, file=file, flush=flush)

    return print_tagged


def patcher_make(previous: Optional[Callable[[Dict[str, Any]], None]]) -> Callable[[Dict[str, Any]], None]:
    """Build a loguru patcher that runs the previous one, then parses the message"""

    def patch_record(record: Dict[str, Any]) -> None:
        if previous is not None:
            previous(record)
        record["message"] = guarded_parse(record["message"])

    return patch_record


def hooks_install() -> None:
    global _print_before, _patcher_before
    _print_before = builtins.print
    # loguru has no public getter for the configured patcher
    _patcher_before = getattr(logger._core, "patcher", None)
    builtins.print = print_make(_print_before)
    logger.configure(patcher=patcher_make(_patcher_before))


def hooks_remove() -> None:
    global _print_before, _patcher_before
    if _print_before is not None:
        builtins.print = _print_before
    # configure() ignores patcher=None, so an empty slot gets a no-op
    logger.configure(patcher=_patcher_before or (lambda record: None))
    _print_before = None
    _patcher_before = None


def console_applyTags(parser: Optional[TagParser] = None) -> Callable[[], None]:
    """
    Make print() and loguru apply tag markup automatically

    Args:
        parser: Parser to route output through; defaults to the module
                parser, so tagParsing_stop() also silences these hooks

    Returns:
        Function undoing this application. Once every application is
        undone, print() and the loguru patcher are back as they were.
    """
    if not console_isTagged():
        hooks_install()

    application = Application(parser or parser_default())
    _applications.append(application)

    def restore() -> None:
        if application not in _applications:
            return
        _applications.remove(application)
        if not _applications:
            hooks_remove()

    return restore


def console_restore() -> None:
    """Undo the most recent console_applyTags(); no-op if none is active"""
    if _applications:
        _applications.pop()
        if not _applications:
            hooks_remove()


def console_isTagged() -> bool:
    """True while print() is routed through a tag parser"""
    return bool(_applications)
