"""
Dashdash value kinds and typed defaults.

Every flag and positional argument is declared with a default value that fixes
what the parser may bind to it. Instead of discovering types at runtime on every
bind, the default is classified once, at registration, into a tagged variant:

- Kind: the supported scalar kinds (bool, string, int, float64, timestamp, duration).
- Default: a kind plus either a single reference scalar or a non-empty choice set.

Coercion (dashdash.coercion) and validation (dashdash.validation) dispatch on
Default.kind rather than on the Python type of whatever value happens to be there.

Examples
    >>> Default.of(False).kind
    <Kind.BOOL: 'bool'>
    >>> Default.of(["manager", "student"]).choices
    ('manager', 'student')
"""
from collections.abc import Sequence
from datetime import datetime, timedelta
from enum import Enum


class Kind(Enum):
    """
    supported scalar kinds.

    the value of each member is the label used in messages and hints.
    """
    BOOL = "bool"
    STRING = "string"
    INT = "int"
    FLOAT = "float64"
    TIMESTAMP = "timestamp"
    DURATION = "duration"

    @property
    def type(self):
        """
        the concrete python type that values of this kind are stored as.
        """
        return {
            Kind.BOOL: bool,
            Kind.STRING: str,
            Kind.INT: int,
            Kind.FLOAT: float,
            Kind.TIMESTAMP: datetime,
            Kind.DURATION: timedelta,
        }[self]

    @classmethod
    def of(cls, object, /):
        """
        classify a python scalar into its kind.

        bool is tested before int (bool is an int subclass in python), and only
        exact floats count as float64 so an int never passes for one.

        raises TypeError for anything outside the supported kinds.
        """
        match object:
            case bool():
                return cls.BOOL
            case str():
                return cls.STRING
            case int():
                return cls.INT
            case float():
                return cls.FLOAT
            case datetime():
                return cls.TIMESTAMP
            case timedelta():
                return cls.DURATION
        raise TypeError(f"unsupported value kind {type(object).__name__!r}")


class Default:
    """
    Typed default of a declaration: a kind, a reference scalar, and a choice set.

    Modes
    - scalar: choices is empty; scalar is the declared default value and only the
      kind of a bound value is checked.
    - choice set: choices holds the allowed values (all of one kind, in declaration
      order); scalar is the first choice and bound values must equal one choice.
    """
    __slots__ = ("_kind", "_scalar", "_choices")

    def __init__(self, kind, scalar, choices=(), /):
        self._kind = kind
        self._scalar = scalar
        self._choices = tuple(choices)

    @property
    def kind(self):
        return self._kind

    @property
    def scalar(self):
        return self._scalar

    @property
    def choices(self):
        return self._choices

    @property
    def multiple(self):
        """
        True when this default is a choice set.
        """
        return bool(self._choices)

    @classmethod
    def of(cls, object, /):
        """
        Build a Default from a python value given at registration.

        - a scalar of a supported kind becomes a scalar default.
        - a list or tuple becomes a choice set; it must be non-empty, of a single
          kind, and free of duplicates.

        Raises
        - TypeError: unsupported kind, or mixed kinds in a choice set.
        - ValueError: empty or duplicated choice set.
        """
        if isinstance(object, Default):
            return object

        if isinstance(object, Sequence) and not isinstance(object, str):
            if not object:
                raise ValueError("choice set cannot be empty")
            kinds = set(map(Kind.of, object))
            if len(kinds) != 1:
                raise TypeError("choice set must hold values of a single kind")
            if len(set(object)) != len(object):
                raise ValueError("choice set cannot contain duplicates")
            return cls(kinds.pop(), object[0], object)

        return cls(Kind.of(object), object)

    def __eq__(self, other):
        if not isinstance(other, Default):
            return NotImplemented
        return (self._kind, self._scalar, self._choices) == (other._kind, other._scalar, other._choices)

    def __hash__(self):
        return hash((self._kind, self._scalar, self._choices))

    def __repr__(self):
        if self._choices:
            return f"default(kind={self._kind.value!r}, choices={self._choices!r})"
        return f"default(kind={self._kind.value!r}, scalar={self._scalar!r})"

    def __rich_repr__(self):
        yield "kind", self._kind.value
        if self._choices:
            yield "choices", self._choices
        else:
            yield "scalar", self._scalar


__all__ = (
    "Kind",
    "Default",
)
