"""
Minnow declaration registry.

The registry owns every declaration of an App, in declaration order, and
enforces the naming rules that cannot be checked on a single declaration:

- options and flags share one namespace: a name, and separately a short name,
  may belong to at most one option-or-flag;
- argument names live in their own namespace and are unique among arguments;
- both lookup tables are append-only: nothing is ever removed or replaced.

A declaration is accepted only when all of its names are free; a rejected
declaration leaves the registry untouched.
"""
import logging

from .declarations import *
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class Registry:
    """
    Ordered store of Argument, Option and Flag declarations.

    Lookup tables
    - switches: name → Option | Flag
    - shorts: short name → Option | Flag
    - cardinals: argument name → position
    """

    arguments = mirror("arguments")
    options = mirror("options")
    flags = mirror("flags")

    def __init__(self):
        self._arguments = []
        self._options = []
        self._flags = []
        self._switches = {}
        self._shorts = {}
        self._cardinals = {}

    def add(self, declaration, /):
        """
        Register a declaration and return it.

        Raises
        - DuplicateNameError: the name is already taken in its namespace.
        - DuplicateShortNameError: the short name is already taken.
        - TypeError: the object is not a declaration.
        """
        match declaration:
            case Argument():
                if declaration.name is not None and declaration.name in self._cardinals:
                    raise DuplicateNameError(
                        "argument name %r is already declared" % declaration.name,
                        title="duplicate name",
                        code=FaultCode.DUPLICATE_NAME,
                        name=declaration.name,
                        hint="give every positional argument a distinct name",
                    )
                if declaration.name is not None:
                    self._cardinals[declaration.name] = len(self._arguments)
                self._arguments.append(declaration)

            case Option() | Flag():
                if (other := self._switches.get(declaration.name)) is not None:
                    raise DuplicateNameError(
                        "name %r is already declared by %s %r" % (declaration.name, type(other).__typename__, "--" + other.name),
                        title="duplicate name",
                        code=FaultCode.DUPLICATE_NAME,
                        name=declaration.name,
                        hint="options and flags share their names; pick another one",
                    )
                if declaration.short is not None and (other := self._shorts.get(declaration.short)) is not None:
                    raise DuplicateShortNameError(
                        "short name %r is already declared by %s %r" % (declaration.short, type(other).__typename__, "--" + other.name),
                        title="duplicate short name",
                        code=FaultCode.DUPLICATE_SHORT_NAME,
                        name=declaration.short,
                        hint="options and flags share their short names; pick another one",
                    )
                self._switches[declaration.name] = declaration
                if declaration.short is not None:
                    self._shorts[declaration.short] = declaration
                (self._options if isinstance(declaration, Option) else self._flags).append(declaration)

            case _:
                raise TypeError("add() argument must be an argument, an option or a flag")

        logger.debug("declared %r", declaration)
        return declaration

    def switch(self, name, /):
        """
        Return the option or flag declared under a name, or None.
        """
        return self._switches.get(name)

    def short(self, short, /):
        """
        Return the option or flag declared under a short name, or None.
        """
        return self._shorts.get(short)

    def names(self):
        return self._switches.keys()

    def position(self, name, /):
        """
        Return the position of a named argument, or None.
        """
        return self._cardinals.get(name)

    def argument(self, index, /):
        """
        Return the argument declared at a position, or None past the declared ones.
        """
        try:
            return self._arguments[index]
        except IndexError:
            return None

    def option(self, name, /):
        """
        Return the option (never a flag) declared under a name, or None.
        """
        declaration = self._switches.get(name)
        return declaration if isinstance(declaration, Option) else None

    def __repr__(self):
        return "%s(arguments=%d, options=%d, flags=%d)" % (
            type(self).__name__.lower(), len(self._arguments), len(self._options), len(self._flags)
        )


__all__ = (
    "Registry",
)
