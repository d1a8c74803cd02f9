"""
Dashdash faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse error.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ParseError: base type that carries message + options and knows how to render itself
  in a friendly, lowercased, and actionable way.
- UnknownCommandError / UnknownFlagError / BadArgumentError: the three fault kinds
  reported by the parser; BadArgumentError has one subclass per cause.
- trigger(): central entry point to surface a fault (raise, or render and exit in shell mode).

UX goals
- Position-first messages: every message names the ordinal position of the offending
  token so users can learn by trying ("at third position", etc.).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The parser raises the first fault it meets; there is no accumulation.
- dashdash.commands.invoke() catches faults and calls trigger(fault, shell=..., ...).
- The host application can set __prog__, __styles__, __codes__ and __docs__ in
  __main__ to tune rendering.
"""
import os.path
import sys
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
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - flags (1111x)
      • MALFORMED_FLAG, UNKNOWN_FLAG, INVERTED_FLAG, MISSING_VALUE
    - values (1112x)
      • UNEXPECTED_ARGUMENT, INVALID_CHOICE, MISSING_ARGUMENT,
        UNCASTABLE_VALUE, TYPE_MISMATCH

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- flag errors (11xxx) ---
    MALFORMED_FLAG              = 11111
    UNKNOWN_FLAG                = 11112
    INVERTED_FLAG               = 11113
    MISSING_VALUE               = 11117

    # --- value errors (11xxx) ---
    UNEXPECTED_ARGUMENT         = 11121
    INVALID_CHOICE              = 11124
    MISSING_ARGUMENT            = 11125
    UNCASTABLE_VALUE            = 11126
    TYPE_MISMATCH               = 11127

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base type of every fault raised while parsing.

    the message is kept as the exception argument (str(fault) is the message) and
    every other piece of context lives in the read-only options mapping, which is
    also readable through attributes (fault.name, fault.token, fault.argument, ...).

    common options
    - title, code, hint: rendering metadata.
    - index: 1-based position of the offending raw token, when one exists.
    - shell, fancy, colorful: runtime flags merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        if name.startswith("__") or name in ("message", "options"):
            raise AttributeError(name)
        try:
            return self.options[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __reduce__(self):
        return _restore, (type(self), self.message, dict(self.options))

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

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

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "dashdash"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options.get("code", FaultCode.UNKNOWN_FLAG).normalize(), styler("code")),
            " | ",
            text(self.options.get("title", "parse error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def _restore(cls, message, options):
    return cls(message, **options)


class UnknownCommandError(ParseError): ...
class UnknownFlagError(ParseError): ...
class MalformedFlagError(UnknownFlagError): ...

class BadArgumentError(ParseError): ...
class MissingValueError(BadArgumentError): ...
class InvertedFlagError(BadArgumentError): ...
class UncastableValueError(BadArgumentError): ...
class TypeMismatchError(BadArgumentError): ...
class InvalidChoiceError(BadArgumentError): ...
class UnexpectedArgumentError(BadArgumentError): ...
class MissingArgumentError(BadArgumentError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits with 1;
      otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParseError",
    "UnknownCommandError",
    "UnknownFlagError",
    "MalformedFlagError",
    "BadArgumentError",
    "MissingValueError",
    "InvertedFlagError",
    "UncastableValueError",
    "TypeMismatchError",
    "InvalidChoiceError",
    "UnexpectedArgumentError",
    "MissingArgumentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
