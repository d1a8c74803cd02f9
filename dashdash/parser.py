"""
Dashdash parsing engine: command resolution and binding.

phases
- normalize: raw tokens → Token list (see dashdash.tokens); malformed flags fail here.
- resolve: pick the command schema (root, or the sub-command named by the first token).
- bind: one pass over the remaining tokens with a single token of lookahead.
    • flag tokens bind to flag declarations (short names, "no-" inversion, values).
    • other tokens bind, in declaration order, to positional arguments; the trailing
      variadic argument collects everything left.
    • every consumed value is coerced (dashdash.coercion) then validated
      (dashdash.validation) right away.
- commit: values live in a staging dict keyed by declaration while binding, and are
  written into the schema only when the whole vector was accepted.

faults
- the first fault stops the parse and is raised; nothing is accumulated.
- UnknownCommandError, UnknownFlagError (MalformedFlagError), and BadArgumentError
  subclasses, each carrying the offending token position.

threading
- parse() seals and then mutates the registry's schemas without locks; do not run it
  concurrently on the same registry.
"""
import difflib
import logging
from collections import deque

from .coercion import coerce
from .faults import *
from .tokens import Token, isflag, isshort, normalize
from .utils import ordinal
from .validation import validate

logger = logging.getLogger(__name__)


def _suggest(name, candidates, /):
    """
    closest known names for an unknown one, best first (at most five).
    """
    return difflib.get_close_matches(name, list(candidates), 5)


def resolve(registry, tokens, /):
    """
    split off the command name and return (schema, remaining tokens).

    the root command ("") is selected when
    - there are no tokens, or
    - the first token is a flag, or
    - the first token is not a registered command and the root command declares at
      least one positional argument (so the token is the root's first positional).
    otherwise the first token is consumed as the command name.

    raises
    - UnknownCommandError: the selected name (possibly the root) is not registered.
    """
    tokens = list(tokens)
    root = registry.get("")

    if (
        not tokens or
        isflag(first := tokens[0]) or
        (first not in registry or not first) and root is not None and root.order
    ):
        name, remaining = "", tokens
    else:
        name, remaining = str(first), tokens[1:]

    try:
        schema = registry[name]
    except KeyError:
        suggestions = _suggest(name, filter(None, registry.keys()))
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "use one of the registered commands: %s" % (" · ".join(filter(None, registry.keys())) or "(none)")
        raise UnknownCommandError(
            "unknown command %r at first position" % name if name else "no root command is registered",
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint=hint,
            name=name,
            index=1,
            suggestions=suggestions,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        ) from None

    logger.debug("resolved command %r with %d remaining tokens", name, len(remaining))
    return schema, remaining


def _coerce(declaration, token):
    """
    coerce a value token for a declaration, reporting failures as faults.
    """
    try:
        return coerce(token, declaration.default)
    except ValueError as exception:
        kind = declaration.default.kind.value
        raise UncastableValueError(
            "value %r for %s at %s position cannot be converted to %s (%s)" % (
                str(token), declaration.label, ordinal(token.index), kind, exception
            ),
            title="conversion error",
            code=FaultCode.UNCASTABLE_VALUE,
            hint="use a valid %s for %s" % (kind, declaration.label),
            argument=declaration,
            token=str(token),
            index=token.index,
            docs=getdoc(FaultCode.UNCASTABLE_VALUE),
        ) from exception


def _bind_flag(schema, token, tokens, staged):
    """
    bind one flag token, consuming its value token from 'tokens' when it takes one.
    """
    name = token.lstrip("-")

    if isshort(token):
        short, inverted = True, False
        flag = schema.flags.get(schema.shorts.get(name))
    else:
        short, inverted = False, name.startswith("no-")
        flag = schema.flags.get(name := name.removeprefix("no-"))

    if flag is None:
        suggestions = _suggest(name, schema.shorts if short else schema.flags)
        try:
            hint = "did you mean %r?" % (("-" if short else "--") + suggestions[0])
        except IndexError:
            hint = "remove it or declare it on the %s" % (
                "command %r" % schema.name if schema.name else "root command"
            )
        raise UnknownFlagError(
            "unknown flag %r at %s position" % (str(token), ordinal(token.index)),
            title="unknown flag",
            code=FaultCode.UNKNOWN_FLAG,
            hint=hint,
            name=name,
            short=short,
            token=str(token),
            index=token.index,
            suggestions=suggestions,
            docs=getdoc(FaultCode.UNKNOWN_FLAG),
        )

    if flag.boolean:
        if tokens and tokens[0].inline:
            if inverted:
                raise InvertedFlagError(
                    "inverted %s at %s position cannot take a value" % (flag.label, ordinal(token.index)),
                    title="inverted flag with value",
                    code=FaultCode.INVERTED_FLAG,
                    hint="use either '--no-%s' or '--%s=<bool>'" % (flag.name, flag.name),
                    argument=flag,
                    token=str(token),
                    index=token.index,
                    docs=getdoc(FaultCode.INVERTED_FLAG),
                )
            staged[flag] = _coerce(flag, value := tokens.popleft())
        else:
            staged[flag] = not inverted
            value = token
        validate(flag, staged[flag], token=value)
        logger.debug("bound %s to %r", flag.label, staged[flag])
        return

    if inverted:
        raise InvertedFlagError(
            "%s at %s position is not boolean and cannot be inverted" % (flag.label, ordinal(token.index)),
            title="invalid inversion",
            code=FaultCode.INVERTED_FLAG,
            hint="only boolean flags accept the 'no-' prefix; use '--%s <value>'" % flag.name,
            argument=flag,
            token=str(token),
            index=token.index,
            docs=getdoc(FaultCode.INVERTED_FLAG),
        )

    if not tokens:
        raise MissingValueError(
            "%s at %s position requires a value" % (flag.label, ordinal(token.index)),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a %s after it (for example: --%s <value> or --%s=<value>)" % (
                flag.default.kind.value, flag.name, flag.name
            ),
            argument=flag,
            token=str(token),
            index=token.index,
            docs=getdoc(FaultCode.MISSING_VALUE),
        )

    if tokens[0].inline or not isflag(tokens[0]):
        staged[flag] = _coerce(flag, value := tokens.popleft())
        validate(flag, staged[flag], token=value)
        logger.debug("bound %s to %r", flag.label, staged[flag])
    else:
        # followed by another flag: this occurrence stays unbound
        logger.debug("%s at %s position is followed by a flag; left unbound", flag.label, ordinal(token.index))


def _bind_positional(schema, token, staged):
    """
    bind one non-flag token to the next free positional argument.
    """
    for argument in schema.arguments():
        if argument.variadic:
            staged.setdefault(argument, []).append(_coerce(argument, token))
            validate(argument, staged[argument], token=token)
            logger.debug("appended %r to %s", staged[argument][-1], argument.label)
            return
        if argument not in staged:
            staged[argument] = _coerce(argument, token)
            validate(argument, staged[argument], token=token)
            logger.debug("bound %s to %r", argument.label, staged[argument])
            return

    raise UnexpectedArgumentError(
        "unexpected positional argument %r at %s position" % (str(token), ordinal(token.index)),
        title="unexpected positional",
        code=FaultCode.UNEXPECTED_ARGUMENT,
        hint="remove this extra value; %s accepts %d positional argument%s" % (
            "command %r" % schema.name if schema.name else "the root command",
            len(schema.order),
            "" if len(schema.order) == 1 else "s",
        ),
        argument=None,
        token=str(token),
        index=token.index,
        docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
    )


def bind(schema, tokens, /):
    """
    bind normalized tokens against a schema and return the staged values.

    parameters
    - schema: CommandSchema to bind against (left untouched).
    - tokens: iterable of Token (plain strings are accepted and treated as
      non-inline tokens at their position in the iterable).

    returns
    - dict[ArgDecl | FlagDecl, object]: one entry per bound declaration; variadic
      arguments map to a list.
    """
    staged = {}
    tokens = deque(
        token if isinstance(token, Token) else Token(token, index)
        for index, token in enumerate(tokens, start=1)
    )

    while tokens:
        token = tokens.popleft()
        if not token.inline and isflag(token):
            _bind_flag(schema, token, tokens, staged)
        else:
            _bind_positional(schema, token, staged)

    return staged


def parse(registry, tokens, /):
    """
    parse a token vector (program name excluded) against a registry.

    behavior
    - seals the registry (no registration after the first parse).
    - normalizes, resolves the command, binds every token, then commits the staged
      values into the resolved schema: every declaration of that schema ends up
      either bound by this parse or Unset.

    returns
    - the resolved CommandSchema (the live, registry-owned object).

    raises
    - TypeError: tokens is a plain string instead of a sequence of strings.
    - UnknownCommandError, UnknownFlagError, BadArgumentError (first fault only);
      the schema keeps whatever values it had before this call.
    """
    if isinstance(tokens, str):
        raise TypeError("parse() tokens must be a sequence of strings, not a string")

    registry._seal()

    schema, remaining = resolve(registry, normalize(tokens))
    staged = bind(schema, remaining)
    schema._commit(staged)

    logger.debug("committed %d values into command %r", len(staged), schema.name)
    return schema


__all__ = (
    "resolve",
    "bind",
    "parse",
)
