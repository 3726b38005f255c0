r"""
Minnow declarations: what a host program says its command line looks like.

Overview
- Argument: positional, value-bearing input identified by declaration order
  (optional display name, optional description, value kind).
- Option: named, value-bearing input (e.g. --left 5 / -l 5) with an optional
  single-character short alias and an optional default Value.
- Flag: named, presence-only input (e.g. --verbose / -v).

Declarations are immutable once built: every field lives in a private slot and
is exposed through a read-only property (see DeclarationType).

Metadata (sanitized on construction)
- descr: Unset | str | Text, trimmed, non-empty when provided (None otherwise).
- name (Option/Flag): required str, non-empty, typed as "--name" on the command
  line, so it cannot start with "-" nor contain whitespace or "=".
- name (Argument): optional str, non-empty when provided.
- short: Unset | str of exactly one character that is not "-", "=" or whitespace.
- kind (Argument/Option): Kind or bool/int/float/str.
- default (Option): any object Value.of() accepts; checked against the kind.

Uniqueness across declarations is not checked here; see minnow.registry.
"""
import functools
import operator
import re

from rich.text import Text

from .faults import *
from .utils import *
from .values import Kind, Value


class DeclarationType(type):
    """
    Metaclass giving declarations stable reprs and read-only introspection.

    Responsibilities
    - Derive __typename__ from the class name ("Option" → "option") for messages.
    - Expose every name in __introspectable__ as a read-only property mirroring
      the private "_<name>" field.
    - Provide __repr__/__rich_repr__ built from __introspectable__.
    - Seal declaration classes against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option(name='left', short='l', descr=None, kind=Kind.INT32, default=Value(int32, 20))
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the 'descr' field shared by every declaration.

    Raises
    - TypeError: descr is neither a string nor rich Text.
    - ValueError: descr is an empty string after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)


def _empty(cls, /):
    return EmptyNameError(
        f"{cls.__typename__} name cannot be empty",
        title="empty name",
        code=FaultCode.EMPTY_NAME,
        hint=f"give the {cls.__typename__} a non-empty name",
    )


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate 'name' and 'short' of options and flags.

    Rules
    - name: str, non-empty (EmptyNameError), matching r"[^\s=-][^\s=]*".
    - short: Unset or one character that is not "-", "=" or whitespace.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not name:
        raise _empty(cls)
    elif not re.fullmatch(r"[^\s=-][^\s=]*", name):
        raise ValueError(f"{cls.__typename__} name {name!r} cannot start with '-' nor contain whitespace or '='")

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} short name must be a string")
    elif isinstance(short, str) and not re.fullmatch(r"[^\s=-]", short):
        raise ValueError(f"{cls.__typename__} short name {short!r} must be a single character other than '-' and '='")

    metadata["short"] = coalesce(short)


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: resolve 'kind' and, for options, check 'default' against it.

    - kind Unset: inferred from the default when there is one, TEXT otherwise.
    - default Unset: stored as None (no default).
    - a default that does not fit the kind raises TypeMismatchError.
    """
    default = metadata.get("default", Unset)
    if (kind := metadata["kind"]) is not Unset:
        kind = Kind.resolve(kind)
    if default is not Unset:
        default = Value.of(default, kind)
        kind = default.kind

    metadata["kind"] = coalesce(kind, Kind.TEXT)
    if "default" in metadata:
        metadata["default"] = coalesce(default)


class Argument(metaclass=DeclarationType):
    """
    Positional argument declaration.

    Properties
    - name: str | None, display name used in usage and by-name lookups.
    - descr: str | Text | None
    - kind: Kind read back by App.get_argument() when no type is requested.
    """

    __introspectable__ = (
        "name",
        "descr",
        "kind",
    )

    def __new__(cls, name=Unset, /, descr=Unset, *, kind=Kind.TEXT):
        metadata = {
            "name": name,
            "descr": descr,
            "kind": kind,
        }
        if not isinstance(name, str | Unset):
            raise TypeError(f"{cls.__typename__} name must be a string")
        elif isinstance(name, str) and not name:
            raise _empty(cls)
        metadata["name"] = coalesce(name)

        _sanitize_metadata(cls, metadata)
        _sanitize_valued_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def metavar(self):
        return "<%s>" % (self._name or "ARG")


class Option(metaclass=DeclarationType):
    """
    Named, value-bearing option declaration.

    Properties
    - name: str, matched by "--name" tokens.
    - short: str | None, matched by "-s" tokens.
    - descr: str | Text | None
    - kind: Kind of the value; inferred from the default when not given.
    - default: Value | None
    """

    __introspectable__ = (
        "name",
        "short",
        "descr",
        "kind",
        "default",
    )

    def __new__(cls, name, short=Unset, /, descr=Unset, default=Unset, *, kind=Unset):
        metadata = {
            "name": name,
            "short": short,
            "descr": descr,
            "kind": kind,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_valued_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def switches(self):
        """
        Command-line spellings, short first: ("-l", "--left") or ("--left",).
        """
        return (("-" + self._short,) if self._short else ()) + ("--" + self._name,)


class Flag(metaclass=DeclarationType):
    """
    Named, presence-only flag declaration.

    Properties
    - name: str, matched by "--name" tokens.
    - short: str | None, matched by "-s" tokens.
    - descr: str | Text | None
    """

    __introspectable__ = (
        "name",
        "short",
        "descr",
    )

    def __new__(cls, name, short=Unset, /, descr=Unset):
        metadata = {
            "name": name,
            "short": short,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def switches(self):
        return (("-" + self._short,) if self._short else ()) + ("--" + self._name,)


__all__ = (
    "Argument",
    "Option",
    "Flag",
)

del DeclarationType
