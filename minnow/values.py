r"""
Minnow value model: the closed set of scalar kinds and strict token casting.

Overview
- Kind: enumeration of every scalar kind an option default or a parsed value may
  take (boolean, signed/unsigned integers of 16/32/64 bits, single/double precision
  floats, single characters and text).
- Value: immutable (kind, payload) pair used for declared defaults.
- cast(kind, word): read a raw token as a payload of the given kind.

Casting rules (whole token, nothing left over)
- BOOL: exactly "true" or "false" (case-sensitive).
- INT*/UINT*: optional sign followed by ASCII digits ("-" never allowed for the
  unsigned kinds), range-checked against the kind's width.
- FLOAT32/FLOAT64: decimal literal with optional exponent, finite; FLOAT32
  payloads are narrowed to single precision.
- CHAR: exactly one character.
- TEXT: the token itself.

Textual form
- str(Value) renders the payload the way cast() reads it back, so for every value
  Value.parse(value.kind, str(value)) == value.

Quick example:
    >>> cast(Kind.INT32, "42")
    42
    >>> str(Value(Kind.BOOL, True))
    'true'
    >>> Value.of(2.5)
    Value(float64, 2.5)
"""
import math
import re
import struct
from enum import Enum
from typing import final

from .faults import *
from .utils import *


class Kind(Enum):
    """
    closed set of scalar kinds.

    the enumeration value is the lowercase label used in messages and reprs.
    """
    BOOL    = "bool"
    INT16   = "int16"
    UINT16  = "uint16"
    INT32   = "int32"
    UINT32  = "uint32"
    INT64   = "int64"
    UINT64  = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    CHAR    = "char"
    TEXT    = "text"

    @classmethod
    def resolve(cls, object, /, preferred=Unset):
        """
        Map a requested type to a kind.

        Accepts a Kind or one of the builtin types bool, int (INT32),
        float (FLOAT64) and str (TEXT). A builtin type matching the payload type
        of `preferred` resolves to `preferred` instead, so int asked of an INT64
        option reads INT64.
        """
        if isinstance(object, cls):
            return object
        if preferred is not Unset and object is _PAYLOADS[preferred]:
            return preferred
        try:
            return {
                bool: cls.BOOL,
                int: cls.INT32,
                float: cls.FLOAT64,
                str: cls.TEXT,
            }[object]
        except (KeyError, TypeError):
            raise TypeError("kind must be a Kind or one of bool, int, float, str, not %r" % (object,)) from None

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


_PAYLOADS = {
    Kind.BOOL: bool,
    Kind.INT16: int,
    Kind.UINT16: int,
    Kind.INT32: int,
    Kind.UINT32: int,
    Kind.INT64: int,
    Kind.UINT64: int,
    Kind.FLOAT32: float,
    Kind.FLOAT64: float,
    Kind.CHAR: str,
    Kind.TEXT: str,
}

_BOUNDS = {
    Kind.INT16: (-2 ** 15, 2 ** 15 - 1),
    Kind.UINT16: (0, 2 ** 16 - 1),
    Kind.INT32: (-2 ** 31, 2 ** 31 - 1),
    Kind.UINT32: (0, 2 ** 32 - 1),
    Kind.INT64: (-2 ** 63, 2 ** 63 - 1),
    Kind.UINT64: (0, 2 ** 64 - 1),
}

_SIGNED = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)


def _narrow(number):
    # Past the single precision range the result is infinite.
    return struct.unpack("f", struct.pack("f", number))[0]


def _uncastable(kind, word, reason, /):
    return TypeCoercionError(
        "cannot read %r as %s: %s" % (word, kind.value, reason),
        title="uncastable value",
        code=FaultCode.TYPE_COERCION,
        token=word,
        kind=kind,
        hint="pass a value of kind %s" % kind.value,
    )


def _mismatch(kind, payload, reason, /):
    return TypeMismatchError(
        "%r is not a %s value: %s" % (payload, kind.value, reason),
        title="mismatched value",
        code=FaultCode.TYPE_MISMATCH,
        payload=payload,
        kind=kind,
        hint="declare the value with a matching kind",
    )


def cast(kind, word, /):
    """
    Read a raw token as a payload of the given kind.

    Parameters
    - kind: Kind (or a builtin type accepted by Kind.resolve)
    - word: str, the raw token

    Returns
    - bool | int | float | str depending on the kind.

    Raises
    - TypeCoercionError: the whole token is not a valid literal of the kind.
    - TypeError: word is not a string.
    """
    kind = Kind.resolve(kind)
    if not isinstance(word, str):
        raise TypeError("cast() second argument must be a string")

    match kind:
        case Kind.BOOL:
            try:
                return {"true": True, "false": False}[word]
            except KeyError:
                raise _uncastable(kind, word, "expected 'true' or 'false'") from None

        case Kind.INT16 | Kind.INT32 | Kind.INT64 | Kind.UINT16 | Kind.UINT32 | Kind.UINT64:
            pattern = _SIGNED if _BOUNDS[kind][0] < 0 else _UNSIGNED
            if not pattern.fullmatch(word):
                raise _uncastable(kind, word, "not an integer literal")
            number = int(word)
            lower, upper = _BOUNDS[kind]
            if not lower <= number <= upper:
                raise _uncastable(kind, word, "out of range [%d, %d]" % (lower, upper))
            return number

        case Kind.FLOAT32 | Kind.FLOAT64:
            if not _DECIMAL.fullmatch(word):
                raise _uncastable(kind, word, "not a decimal literal")
            number = float(word)
            if not math.isfinite(number):
                raise _uncastable(kind, word, "out of range")
            if kind is Kind.FLOAT32 and not math.isfinite(number := _narrow(number)):
                raise _uncastable(kind, word, "out of single precision range")
            return number

        case Kind.CHAR:
            if len(word) != 1:
                raise _uncastable(kind, word, "expected exactly one character")
            return word

        case Kind.TEXT:
            return word

        case _:
            raise TypeError("cast() first argument must be a kind")


def _validate(kind, payload, /):
    """
    Check a Python payload against a kind and return its canonical form.
    """
    match kind:
        case Kind.BOOL:
            if not isinstance(payload, bool):
                raise _mismatch(kind, payload, "expected True or False")
            return payload

        case Kind.INT16 | Kind.INT32 | Kind.INT64 | Kind.UINT16 | Kind.UINT32 | Kind.UINT64:
            if isinstance(payload, bool) or not isinstance(payload, int):
                raise _mismatch(kind, payload, "expected an integer")
            lower, upper = _BOUNDS[kind]
            if not lower <= payload <= upper:
                raise _mismatch(kind, payload, "out of range [%d, %d]" % (lower, upper))
            return payload

        case Kind.FLOAT32 | Kind.FLOAT64:
            if isinstance(payload, bool) or not isinstance(payload, int | float):
                raise _mismatch(kind, payload, "expected a number")
            if not math.isfinite(payload := float(payload)):
                raise _mismatch(kind, payload, "expected a finite number")
            if kind is Kind.FLOAT32 and not math.isfinite(payload := _narrow(payload)):
                raise _mismatch(kind, payload, "out of single precision range")
            return payload

        case Kind.CHAR:
            if not isinstance(payload, str) or len(payload) != 1:
                raise _mismatch(kind, payload, "expected exactly one character")
            return payload

        case Kind.TEXT:
            if not isinstance(payload, str):
                raise _mismatch(kind, payload, "expected a string")
            return payload

        case _:
            raise TypeError("kind must be a Kind")


@final
class Value:
    """
    Immutable tagged scalar: a kind plus a payload that fits it.

    Construction validates the payload (TypeMismatchError when it does not fit)
    and canonicalizes it (FLOAT32 payloads are narrowed to single precision,
    FLOAT64 payloads given as int become float).
    """
    __slots__ = ("_kind", "_payload")

    def __init__(self, kind, payload, /):
        kind = Kind.resolve(kind)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_payload", _validate(kind, payload))

    @classmethod
    def of(cls, object, /, kind=Unset):
        """
        Build a Value from a Python object, inferring the kind when not given.

        inference: bool → BOOL, int → INT32 (INT64 when it does not fit),
        float → FLOAT64, str → TEXT. An existing Value is returned as-is when
        its kind agrees.
        """
        if isinstance(object, cls):
            if kind is not Unset and Kind.resolve(kind) is not object.kind:
                raise _mismatch(Kind.resolve(kind), object.payload, "declared as %s" % object.kind.value)
            return object
        if kind is not Unset:
            return cls(kind, object)
        match object:
            case bool():
                return cls(Kind.BOOL, object)
            case int():
                lower, upper = _BOUNDS[Kind.INT32]
                return cls(Kind.INT32 if lower <= object <= upper else Kind.INT64, object)
            case float():
                return cls(Kind.FLOAT64, object)
            case str():
                return cls(Kind.TEXT, object)
            case _:
                raise TypeError("cannot infer a kind for %r" % (object,))

    @classmethod
    def parse(cls, kind, word, /):
        return cls(kind, cast(kind, word))

    @property
    def kind(self):
        return self._kind

    @property
    def payload(self):
        return self._payload

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    def __hash__(self):
        return hash((self._kind, self._payload))

    def __str__(self):
        match self._kind:
            case Kind.BOOL:
                return "true" if self._payload else "false"
            case Kind.FLOAT32 | Kind.FLOAT64:
                return repr(self._payload)
            case _:
                return str(self._payload)

    def __repr__(self):
        return f"{type(self).__name__}({self._kind.value}, {self._payload!r})"

    def __rich_repr__(self):
        yield self._kind.value
        yield self._payload

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return type(self), (self._kind, self._payload)


__all__ = (
    "Kind",
    "Value",
    "cast",
)
