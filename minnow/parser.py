"""
Minnow tokenizer and classifier.

Turns a token sequence into a Namespace by walking it once, left to right,
consulting a Registry for every option-looking token.

Classification, per token
1. "-h" / "--help" exactly: stop; the outcome is Outcome.HELP_REQUESTED.
2. "--name": a declared option takes the next token as its value (which must
   exist and must not start with "-"); a declared flag is recorded. The inline
   spelling "--name=value" is accepted for options and lets values start with
   "-" (e.g. "--med=-100").
3. "-c": same as 2 keyed by short name. Exactly one character may follow the
   dash; "-vx" is rejected rather than read as "-v".
4. anything else is a positional argument.

Faults are raised as soon as they are found (see minnow.faults); the Namespace
under construction is private to the call, so a failing parse produces nothing.
Warnings are collected and handed back with the result so the caller can
surface them once the parse is known to have succeeded.
"""
import difflib
import logging
from collections.abc import Iterable
from enum import Enum

from .declarations import Flag
from .faults import *
from .namespace import Namespace
from .utils import *

logger = logging.getLogger(__name__)

HELP_TOKENS = ("-h", "--help")


class Outcome(Enum):
    """
    what a successful parse asks the host to do next.
    """
    CONTINUE = "continue"
    HELP_REQUESTED = "help-requested"


def tokenize(prompt, /):
    """
    Normalize a parse input into a list of tokens.

    - str: split on runs of whitespace (empty fragments are dropped).
    - Iterable[str]: used as-is, in order.

    Raises
    - TypeError: prompt is neither, or an item is not a string.
    """
    if isinstance(prompt, str):
        return prompt.split()
    elif isinstance(prompt, Iterable):
        tokens = []
        for item in prompt:
            if not isinstance(item, str):
                raise TypeError("tokens must be strings, not %s" % type(item).__name__)
            tokens.append(item)
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser:
    """
    Single-pass classifier bound to a registry.

    Parameters
    - registry: Registry consulted for names and short names.
    - prog: program name used in hints ("try 'PROG --help'").
    """

    def __init__(self, registry, /, prog="PROG"):
        self._registry = registry
        self._prog = prog

    def parse(self, tokens, /, base=Unset):
        """
        Classify tokens into a fresh Namespace.

        When the result is to be merged after `base`, options already set in
        `base` are reported as repeated too.

        Returns
        - (Outcome, Namespace, list[AppWarning])

        Raises
        - MalformedOptionError, UnrecognizedOptionError, MissingValueError
        """
        namespace = Namespace()
        faults = []
        tokens = list(tokens)
        index = 0

        logger.debug("parsing %d token(s): %r", len(tokens), tokens)

        while index < len(tokens):
            token = tokens[index]

            if token in HELP_TOKENS:
                logger.debug("help requested at %s position", ordinal(index + 1))
                return Outcome.HELP_REQUESTED, namespace, faults

            if token.startswith("--"):
                declaration, value = self._resolve_long(token, index)
            elif token.startswith("-"):
                declaration, value = self._resolve_short(token, index)
            else:
                namespace.add_argument(token)
                index += 1
                continue

            if isinstance(declaration, Flag):
                namespace.add_flag(declaration)
                index += 1
                continue

            if any(seen.first(declaration.name) is not Unset for seen in (base, namespace) if seen is not Unset):
                faults.append(RepeatedOptionWarning(
                    "option %r is repeated at %s position; its first value is kept" % (token, ordinal(index + 1)),
                    title="repeated option",
                    code=FaultCode.REPEATED_OPTION,
                    token=token,
                    index=index,
                    hint="pass '--%s' only once" % declaration.name,
                ))

            if value is Unset:
                value = self._getvalue(token, tokens, index)
                index += 1

            namespace.add_option(value, declaration)
            index += 1

        return Outcome.CONTINUE, namespace, faults

    def _resolve_long(self, token, index, /):
        """
        resolve a "--name" or "--name=value" token into (declaration, value or Unset).
        """
        if token == "--":
            raise MalformedOptionError(
                "bare '--' at %s position" % ordinal(index + 1),
                title="malformed option",
                code=FaultCode.MALFORMED_OPTION,
                token=token,
                index=index,
                hint="write an option name after the dashes (for example: --name)",
            )

        name, equals, value = token[2:].partition("=")

        if (declaration := self._registry.switch(name)) is None:
            suggestions = difflib.get_close_matches(name, self._registry.names(), 5)
            try:
                hint = "did you mean '--%s'? you can also run '%s --help' to see all options" % (suggestions[0], self._prog)
            except IndexError:
                hint = "try '%s --help' to see all available options" % self._prog
            raise UnrecognizedOptionError(
                "unknown option %r at %s position" % ("--" + name, ordinal(index + 1)),
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_OPTION,
                token=token,
                index=index,
                suggestions=suggestions,
                hint=hint,
            )

        if not equals:
            return declaration, Unset

        if isinstance(declaration, Flag):
            raise MalformedOptionError(
                "flag %r at %s position cannot have a value" % ("--" + name, ordinal(index + 1)),
                title="flag cannot take a value",
                code=FaultCode.MALFORMED_OPTION,
                token=token,
                index=index,
                hint="remove everything from '=' (for example: --%s)" % name,
            )
        if not value:
            raise MissingValueError(
                "option %r at %s position has an empty value" % ("--" + name, ordinal(index + 1)),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                token=token,
                index=index,
                hint="add a value after '=' (for example: --%s=<value>)" % name,
            )
        return declaration, value

    def _resolve_short(self, token, index, /):
        """
        resolve a "-c" token into (declaration, Unset).
        """
        if token == "-":
            raise MalformedOptionError(
                "bare '-' at %s position" % ordinal(index + 1),
                title="malformed option",
                code=FaultCode.MALFORMED_OPTION,
                token=token,
                index=index,
                hint="write a short name after the dash (for example: -v)",
            )
        if len(token) > 2:
            raise MalformedOptionError(
                "short option %r at %s position has trailing characters" % (token, ordinal(index + 1)),
                title="malformed option",
                code=FaultCode.MALFORMED_OPTION,
                token=token,
                index=index,
                hint="pass one short name per token (for example: %s)" % " ".join("-" + char for char in token[1:]),
            )

        if (declaration := self._registry.short(token[1])) is None:
            raise UnrecognizedOptionError(
                "unknown option %r at %s position" % (token, ordinal(index + 1)),
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_OPTION,
                token=token,
                index=index,
                suggestions=[],
                hint="try '%s --help' to see all available options" % self._prog,
            )
        return declaration, Unset

    def _getvalue(self, token, tokens, index, /):
        """
        take the token after an option as its value.
        """
        try:
            value = tokens[index + 1]
        except IndexError:
            value = None

        if value is None or value.startswith("-"):
            raise MissingValueError(
                "option %r at %s position requires a value" % (token, ordinal(index + 1)),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                token=token,
                index=index,
                hint="pass the value right after the option (for example: %s <value>)" % token,
            )
        return value


__all__ = (
    "Outcome",
    "Parser",
    "tokenize",
)
