"""
Argot parameter keys.

A parameter key names one spelling of a parameter on the command line:
- Short("s") is the single-character form, written "-s".
- Long("size") is the multi-character form, written "--size" (or "size=..." for settings).

Two keys are equal only when they have the same form and the same payload, so
Short("s") and Long("s") are different keys. One logical parameter may be
registered under a Short key, a Long key, or both.

resolve() turns user-facing strings into keys with the same rule used at
registration: one character means Short, any other string (even "") means Long.
"""
from rich.text import Text


class Param:
    """
    Base type for parameter keys (use Short or Long).

    Keys are immutable and hashable; they are the keys of the parser registry
    and the items of its invalid-parameter record.
    """
    __slots__ = ("_payload",)
    __prefix__ = ""

    def __new__(cls, payload, /):
        if cls is Param:
            raise TypeError("type 'Param' cannot be instantiated directly, use Short or Long")
        self = super().__new__(cls)
        object.__setattr__(self, "_payload", cls.__validate__(payload))
        return self

    @classmethod
    def __validate__(cls, payload):
        return payload

    @property
    def payload(self):
        return self._payload

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other):
        if not isinstance(other, Param):
            return NotImplemented
        return type(self) is type(other) and self._payload == other._payload

    def __hash__(self):
        return hash((type(self).__name__, self._payload))

    def __str__(self):
        return type(self).__prefix__ + self._payload

    def __repr__(self):
        return f"{type(self).__name__}({self._payload!r})"

    def __rich__(self):
        return Text(str(self), style="bold")

    def __reduce__(self):
        return type(self), (self._payload,)


class Short(Param):
    """Single-character key, rendered as '-c'."""
    __slots__ = ()
    __prefix__ = "-"

    @classmethod
    def __validate__(cls, payload):
        if not isinstance(payload, str):
            raise TypeError("Short() argument must be a string")
        elif len(payload) != 1:
            raise ValueError("Short() argument must be exactly one character")
        return payload


class Long(Param):
    """Multi-character key, rendered as '--name'."""
    __slots__ = ()
    __prefix__ = "--"

    @classmethod
    def __validate__(cls, payload):
        # empty names are legal here: "--=x" and "=x" are recorded as Long("")
        if not isinstance(payload, str):
            raise TypeError("Long() argument must be a string")
        return payload


def resolve(key, /):
    """
    Normalize an accessor key into a Param.

    - Param instances pass through unchanged.
    - A one-character string becomes Short; any other string becomes Long,
      including "" (the key recorded for "--=x" and "=x").
      Pass Long("x") explicitly to reach a single-character long name.
    """
    if isinstance(key, Param):
        return key
    elif not isinstance(key, str):
        raise TypeError("parameter key must be a string or a Param")
    return Short(key) if len(key) == 1 else Long(key)


__all__ = (
    "Param",
    "Short",
    "Long",
    "resolve",
)
