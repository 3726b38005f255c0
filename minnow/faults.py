"""
Minnow faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain (declarations, switches, positionals, values, warnings).
- AppException / AppWarning: base types that carry a message plus read-only
  options (title, code, hint, token, index, ...) and know how to render
  themselves with rich.
- trigger(): the single entry point to surface a fault. Outside shell mode errors
  are raised and warnings go through the warnings module; in shell mode both are
  printed on the stderr console and errors exit with status 1.

UX goals
- Position-first messages: parse faults name the ordinal position of the token.
- Short titles, one-sentence bodies, a single actionable hint.

Host hooks (read from __main__)
- __styles__: palette overrides for the renderers.
- __prog__: program name shown in fault headers.
- __codes__: relabelling of FaultCode values.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declarations (1010x): EMPTY_NAME, DUPLICATE_NAME, DUPLICATE_SHORT_NAME
    - switches (1111x): MALFORMED_OPTION, UNRECOGNIZED_OPTION, MISSING_VALUE
    - positionals (1112x): INDEX_OUT_OF_RANGE
    - values (1113x): TYPE_COERCION, TYPE_MISMATCH
    - warnings (12xxx): REPEATED_OPTION
    """
    # --- declaration errors (10xxx) ---
    EMPTY_NAME           = 10101
    DUPLICATE_NAME       = 10102
    DUPLICATE_SHORT_NAME = 10103

    # --- switch errors (11xxx) ---
    MALFORMED_OPTION     = 11111
    UNRECOGNIZED_OPTION  = 11112
    MISSING_VALUE        = 11113

    # --- positional errors (11xxx) ---
    INDEX_OUT_OF_RANGE   = 11121

    # --- value errors (11xxx) ---
    TYPE_COERCION        = 11131
    TYPE_MISMATCH        = 11132

    # --- warnings (12xxx) ---
    REPEATED_OPTION      = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, prefix, /):
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    tool = options.get("tool")
    prog = getattr(main, "__prog__", getattr(tool, "name", None) or "PROG")

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(options["code"].normalize() if "code" in options else "?", styler("code")),
        " | ",
        text(options.get("title", prefix).title(), styler(prefix + "-title")),
        " ]"
    )
    message = text(fault.message, styler(prefix + "-message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class _Fault:
    """
    Shared shape of errors and warnings.

    The positional message is what str() shows; keyword options are kept in a
    read-only mapping and drive rendering (title, code, hint) or carry context
    for callers (token, index, name, kind, ...).
    """
    __palette__ = {}
    __prefix__ = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, self.__palette__, self.__prefix__)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **self.options | overrides)


class AppException(_Fault, Exception):
    """
    Base class of every minnow error.
    """
    __prefix__ = "error"
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class DuplicateNameError(AppException, ValueError): ...
class EmptyNameError(DuplicateNameError): ...
class DuplicateShortNameError(AppException, ValueError): ...
class UnrecognizedOptionError(AppException): ...
class MissingValueError(AppException): ...
class MalformedOptionError(AppException): ...
class IndexOutOfRangeError(AppException, IndexError): ...
class TypeCoercionError(AppException, ValueError): ...
class TypeMismatchError(AppException, TypeError): ...


class AppWarning(_Fault, Warning):
    """
    Base class of every minnow warning.
    """
    __prefix__ = "warning"
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    def __trigger__(self):
        if self.options.get("shell", False):
            return console.print(self)
        warnings.warn(self, stacklevel=len(inspect.stack()))


class RepeatedOptionWarning(AppWarning): ...


def trigger(fault, /, **options):
    """
    Surface a fault with runtime options (tool, shell, colorful, fancy).

    The options are merged into a copy of the fault through copy.replace(), and
    the copy is triggered: errors are raised (or printed and exit 1 in shell
    mode), warnings are warned (or printed).
    """
    if not all(callable(getattr(fault, hook, None)) for hook in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "AppException",
    "DuplicateNameError",
    "EmptyNameError",
    "DuplicateShortNameError",
    "UnrecognizedOptionError",
    "MissingValueError",
    "MalformedOptionError",
    "IndexOutOfRangeError",
    "TypeCoercionError",
    "TypeMismatchError",
    "AppWarning",
    "RepeatedOptionWarning",
    "trigger",
)
