"""
Minnow parsed state.

A Namespace records what one parse recognized, in encounter order:
- arguments: raw positional tokens;
- options: (raw value token, Option) pairs, repeated options included;
- flags: matched Flag declarations, repeats included.

Lookups follow first-match semantics: the first occurrence of an option is its
value, any occurrence of a flag means it is set.
"""
from .utils import *


class Namespace:
    arguments = mirror("arguments")
    options = mirror("options")
    flags = mirror("flags")

    def __init__(self):
        self._arguments = []
        self._options = []
        self._flags = []

    def add_argument(self, token, /):
        self._arguments.append(token)

    def add_option(self, token, option, /):
        self._options.append((token, option))

    def add_flag(self, flag, /):
        self._flags.append(flag)

    def first(self, name, /):
        """
        Return the raw token of the first occurrence of an option, or Unset.
        """
        for token, option in self._options:
            if option.name == name:
                return token
        return Unset

    def present(self, name, /):
        return any(flag.name == name for flag in self._flags)

    def merge(self, other, /):
        """
        Return a new namespace holding this namespace's entries followed by other's.
        """
        merged = type(self)()
        merged._arguments = self._arguments + other._arguments
        merged._options = self._options + other._options
        merged._flags = self._flags + other._flags
        return merged

    def __rich_repr__(self):
        yield "arguments", self._arguments
        yield "options", [(token, option.name) for token, option in self._options]
        yield "flags", [flag.name for flag in self._flags]

    def __repr__(self):
        return "namespace(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Namespace",
)
