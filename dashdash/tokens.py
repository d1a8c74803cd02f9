r"""
token classification and normalization.

classifier
- isflag(token): at least two characters and a leading '-'.
- isshort(token): a flag of exactly two characters whose second one is not '-'.
- ismalformed(token): a flag that is neither '-x' nor '--xx…' ('---foo', '--', '-=', '-=foo').

normalizer
- normalize(tokens) rewrites the raw vector into the one fixed grammar the binder
  understands:
    '--name=value' → '--name' 'value'
    '-n=value'     → '-n' 'value'
    '-abc'         → '-a' '-b' '-c'
  everything else passes through unchanged. the emitted Token objects remember the
  1-based position of the raw token they came from (for position-first messages) and
  whether they are inline values split from an assignment, so that a value such as
  '--pattern=-x' is never mistaken for a flag later on.
"""
import logging

from .faults import FaultCode, MalformedFlagError, getdoc
from .utils import ordinal

logger = logging.getLogger(__name__)


class Token(str):
    """
    a normalized token: a plain string with two extra read-only attributes.

    - index: 1-based position of the raw token this one was produced from.
    - inline: True when the token is the value part of a 'name=value' assignment.

    equality, hashing and slicing are the ones of str, so normalized sequences
    compare equal to plain lists of strings.
    """
    def __new__(cls, text, /, index=0, *, inline=False):
        self = super().__new__(cls, text)
        self._index = index
        self._inline = inline
        return self

    @property
    def index(self):
        return self._index

    @property
    def inline(self):
        return self._inline

    def __repr__(self):
        return f"token({str.__repr__(self)}, index={self._index!r}, inline={self._inline!r})"


def isflag(token, /):
    """
    true iff token has at least two characters and starts with '-'.
    """
    return len(token) >= 2 and token[0] == "-"


def isshort(token, /):
    """
    true iff token is a flag of exactly two characters, the second not being '-'.
    """
    return isflag(token) and len(token) == 2 and token[1] != "-"


def ismalformed(token, /):
    """
    true iff token looks like a flag but has no valid flag shape.

    valid shapes
    - '-x'    (x is neither '-' nor '=')
    - '--xx…' (third character is neither '-' nor '=')

    anything else starting with '-' is malformed: '--', '---foo', '-=', and the
    single-dash long form '-foo' when it reaches this check without having been
    expanded as a cluster (i.e. '-foo=bar').
    """
    if not isflag(token):
        return False
    if len(token) == 2:
        return token[1] in "-="
    return not (token[1] == "-" and token[2] not in "-=")


def _malformed(text, index, /):
    return MalformedFlagError(
        "bad form of flag %r at %s position" % (text, ordinal(index)),
        title="malformed flag",
        code=FaultCode.MALFORMED_FLAG,
        hint="use '-x' for short flags and '--name' or '--name=value' for long ones",
        name=text,
        token=text,
        short=False,
        index=index,
        docs=getdoc(FaultCode.MALFORMED_FLAG),
    )


def normalize(tokens, /):
    """
    expand clusters and split assignments, then reject malformed flags.

    parameters
    - tokens: Iterable[str], the raw argument vector without the program name.

    returns
    - list[Token] in encounter order.

    raises
    - MalformedFlagError (an UnknownFlagError) for the first malformed flag found;
      nothing has been bound at that point.
    """
    normalized = []

    for index, token in enumerate(tokens, start=1):
        if not isinstance(token, str):
            raise TypeError("normalize() argument must be an iterable of strings")

        if isflag(token) and ("=" in token or token.startswith("--")):
            # assignment or long form: split once, the value keeps any further '='
            name, _, value = token.partition("=")
            if not isflag(name):
                # only a dash before the "=": keep it whole so it is rejected below
                normalized.append(Token(token, index))
                continue
            normalized.append(Token(name, index))
            if value:
                normalized.append(Token(value, index, inline=True))
        elif isflag(token) and len(token) > 2:
            normalized.extend(Token("-" + char, index) for char in token[1:])
        else:
            normalized.append(Token(token, index))

    for token in normalized:
        if not token.inline and ismalformed(token):
            raise _malformed(str(token), token.index)

    logger.debug("normalized tokens into %r", normalized)
    return normalized


__all__ = (
    "Token",
    "isflag",
    "isshort",
    "ismalformed",
    "normalize",
)
