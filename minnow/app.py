"""
Minnow application layer: declare, parse, query, and render help.

What this module provides
- App: the single object a host program talks to.
  • Declaration API: declare_argument / declare_option / declare_flag.
  • Parse entry points: parse (string or token iterable), parse_line, parse_argv.
  • Typed accessors: get_argument / get_option / get_flag.
  • Help: format_help (rich Text) and help (print to stderr).

Quick start
    from minnow import App, Outcome

    app = App("calc", "A tiny calculator")
    app.declare_argument("op1", "first operation")
    app.declare_option("left", "l", "left operand", 20)
    app.declare_flag("verbose", "v", "talk more")

    if app.parse_argv() is Outcome.HELP_REQUESTED:
        app.help()
    else:
        left = app.get_option("left")          # int, 20 unless given
        op = app.get_argument(0)               # str
        loud = app.get_flag("verbose")         # bool

Parse semantics
- Every parse runs against a private namespace and commits it only when the
  whole token sequence was classified; a failing parse changes nothing.
- Committing replaces the previous parsed state, unless merge=True is given, in
  which case the new entries are appended after the existing ones.
- "-h"/"--help" stops the parse and returns Outcome.HELP_REQUESTED without
  committing anything.

Runtime switches
- shell: behave like a finished CLI. Help requests print the help and exit with
  status 0; faults print the help and the fault on stderr and exit with status 1.
  Without shell, nothing is printed, faults are raised and warnings go through
  the warnings module.
- colorful: style help and faults with the palette (see minnow.helper).
- fancy: wrap help and faults in rich panels.
"""
import logging
import os.path
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import helper
from .declarations import *
from .faults import *
from .namespace import Namespace
from .parser import *
from .registry import Registry
from .utils import *
from .values import Kind, cast

logger = logging.getLogger(__name__)


class App:
    """
    Command-line surface of a host program.

    Parameters
    - name: Unset | str, program name shown in usage; taken from argv[0] by
      parse_argv() when not given.
    - descr: Unset | str | Text, one-line description shown first in help.
    - shell, colorful, fancy: runtime switches (see module documentation).

    The help flag ("help"/"h") is declared on construction, so hosts can never
    declare those names themselves.
    """

    def __init__(self, name=Unset, descr=Unset, /, *, shell=False, colorful=True, fancy=False):
        if not isinstance(name, str | Unset):
            raise TypeError("app name must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("app name cannot be empty")
        if not isinstance(descr, str | Text | Unset):
            raise TypeError("app 'descr' must be a string")

        self._name = coalesce(name)
        self._descr = coalesce(descr)
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

        self._registry = Registry()
        self._namespace = Namespace()

        self._registry.add(Flag("help", "h", "Print help information"))

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def registry(self):
        return self._registry

    @property
    def namespace(self):
        return self._namespace

    # declarations

    def declare_argument(self, name=Unset, /, descr=Unset, *, kind=Kind.TEXT):
        """
        Declare the next positional argument and return its declaration.

        Raises
        - EmptyNameError: name is "".
        - DuplicateNameError: another argument already uses the name.
        """
        return self._registry.add(Argument(name, descr, kind=kind))

    def declare_option(self, name, short=Unset, /, descr=Unset, default=Unset, *, kind=Unset):
        """
        Declare a value-bearing option and return its declaration.

        The kind is taken from `kind`, else inferred from `default`, else TEXT.

        Raises
        - EmptyNameError: name is "".
        - DuplicateNameError / DuplicateShortNameError: name or short is taken
          by another option or flag.
        - TypeMismatchError: default does not fit the kind.
        """
        return self._registry.add(Option(name, short, descr, default, kind=kind))

    def declare_flag(self, name, short=Unset, /, descr=Unset):
        """
        Declare a presence-only flag and return its declaration.

        Raises
        - EmptyNameError, DuplicateNameError, DuplicateShortNameError
        """
        return self._registry.add(Flag(name, short, descr))

    # parsing

    def parse(self, prompt, /, *, merge=False):
        """
        Parse a whitespace-delimited string or an iterable of tokens.

        Returns
        - Outcome.CONTINUE or Outcome.HELP_REQUESTED
        """
        return self._parseargs(tokenize(prompt), merge=merge)

    def parse_line(self, line, /, *, merge=False):
        """
        Parse a single whitespace-delimited line.
        """
        if not isinstance(line, str):
            raise TypeError("parse_line() argument must be a string")
        return self._parseargs(tokenize(line), merge=merge)

    def parse_argv(self, argv=Unset, /, *, merge=False):
        """
        Parse a process argument vector (sys.argv when omitted).

        argv[0] is the program path: it is skipped, and its base name becomes the
        app name when the app has none.
        """
        if isinstance(argv, str):
            raise TypeError("parse_argv() argument must be a sequence of strings")
        tokens = tokenize(sys.argv if argv is Unset else argv)
        if tokens and self._name is None:
            self._name = os.path.basename(tokens[0]) or tokens[0]
        return self._parseargs(tokens[1:], merge=merge)

    def _parseargs(self, tokens, *, merge):
        try:
            outcome, namespace, faults = Parser(self._registry, prog=self._name or "PROG").parse(
                tokens, self._namespace if merge else Unset
            )
        except AppException as fault:
            return self.trigger(fault)

        if outcome is Outcome.HELP_REQUESTED:
            if self.shell:
                self.help()
                sys.exit(0)
            return outcome

        self._namespace = self._namespace.merge(namespace) if merge else namespace
        logger.debug("committed %r", self._namespace)

        for fault in faults:
            self.trigger(fault)

        return outcome

    # accessors

    def get_argument(self, key, /, type=Unset):
        """
        Return a parsed positional argument, coerced to a kind.

        Parameters
        - key: int position, or the name of a declared argument.
        - type: Kind | bool | int | float | str; defaults to the declared kind of
          the argument at that position (TEXT past the declared ones).
          Builtin types resolve against that kind as in get_option().

        Raises
        - IndexOutOfRangeError: no positional was parsed at that position, or no
          argument carries that name.
        - TypeCoercionError: the token does not read as the kind.
        """
        match key:
            case bool():
                raise TypeError("get_argument() key must be an integer or a string")
            case int():
                index = key
            case str():
                if (index := self._registry.position(key)) is None:
                    return self.trigger(IndexOutOfRangeError(
                        "no positional argument is named %r" % key,
                        title="unknown argument",
                        code=FaultCode.INDEX_OUT_OF_RANGE,
                        name=key,
                        hint="try '%s --help' to see the declared arguments" % (self._name or "PROG"),
                    ))
            case _:
                raise TypeError("get_argument() key must be an integer or a string")

        arguments = self._namespace.arguments
        if not 0 <= index < len(arguments):
            declaration = self._registry.argument(index) if index >= 0 else None
            return self.trigger(IndexOutOfRangeError(
                "missing %s positional argument%s (%d given)" % (
                    ordinal(index + 1) if index >= 0 else "negative",
                    " %s" % declaration.metavar if declaration is not None else "",
                    len(arguments),
                ),
                title="missing argument",
                code=FaultCode.INDEX_OUT_OF_RANGE,
                index=index,
                hint="try '%s --help' to see the expected arguments" % (self._name or "PROG"),
            ))

        declaration = self._registry.argument(index)
        kind = declaration.kind if declaration is not None else Kind.TEXT
        if type is not Unset:
            kind = Kind.resolve(type, kind)

        return self._cast(kind, arguments[index], index=index)

    def get_option(self, name, /, type=Unset):
        """
        Return an option value, coerced to a kind, or None when absent.

        Lookup order
        1. the first occurrence of the option in the parsed state, coerced;
        2. the declared default, which must be exactly of the requested kind;
        3. None.

        Parameters
        - name: option name (without dashes).
        - type: Kind | bool | int | float | str; defaults to the declared kind. A
          builtin type of the declared kind's payload reads that kind (int on an
          INT64 option reads INT64); otherwise see Kind.resolve().

        Raises
        - TypeCoercionError: the parsed token does not read as the kind.
        - TypeMismatchError: the default is of another kind.
        """
        if (declaration := self._registry.option(name)) is None:
            logger.debug("option %r is not declared", name)
            return None

        kind = declaration.kind if type is Unset else Kind.resolve(type, declaration.kind)

        if (token := self._namespace.first(name)) is not Unset:
            return self._cast(kind, token, option=name)

        if (default := declaration.default) is None:
            return None

        if default.kind is not kind:
            return self.trigger(TypeMismatchError(
                "default of option %r is %s, not %s" % ("--" + name, default.kind.value, kind.value),
                title="mismatched default",
                code=FaultCode.TYPE_MISMATCH,
                option=name,
                kind=kind,
                payload=default.payload,
                hint="read the option as %s" % default.kind.value,
            ))
        return default.payload

    def get_flag(self, name, /):
        """
        Return True when the flag was parsed at least once.
        """
        return self._namespace.present(name)

    def _cast(self, kind, token, /, **context):
        try:
            return cast(kind, token)
        except TypeCoercionError as fault:
            return self.trigger(fault, **context)

    # help and faults

    def format_help(self):
        """
        Return the help block as rich Text (see minnow.helper).
        """
        return helper.render(self._registry, self._name, self._descr, colorful=self.colorful)

    def help(self, console=Unset, /):
        """
        Print the help block, on a stderr console unless one is given.
        """
        console = coalesce(console) or Console(stderr=True)
        renderable = self.format_help()
        renderable.rstrip()
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self._name or 'PROG'} HELP".upper(), " ", "]"),
                title_align="left",
            )
        console.print(renderable)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this app's runtime switches.

        Errors never return: they are raised, or in shell mode printed after the
        help and followed by exit status 1. Warnings return None.
        """
        if self.shell and isinstance(fault, AppException):
            self.help()
        trigger(fault, **options, tool=self, shell=self.shell, colorful=self.colorful, fancy=self.fancy)

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "arguments", self._registry.arguments
        yield "options", self._registry.options
        yield "flags", self._registry.flags

    def __repr__(self):
        return "app(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "App",
)
