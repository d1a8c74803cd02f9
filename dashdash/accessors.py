"""
typed accessors over parsed declarations.

every accessor takes a declaration (ArgDecl or FlagDecl, e.g. schema.flag("verbose"))
and returns its bound value, or its declared default when nothing was bound:

    scalar      sequence (variadic)   kind
    as_bool     as_bools              bool
    as_string   as_strings            string
    as_int      as_ints               int
    as_float    as_floats             float64
    as_timestamp as_timestamps        timestamp
    as_duration as_durations          duration

fallback policy
- an unbound scalar falls back to its default; for a choice set, the first choice.
- an unbound variadic argument falls back to an empty list.
- required=True turns an unbound declaration into a MissingArgumentError instead.

asking for the wrong kind (as_int on a string flag) or the wrong shape (as_string
on a variadic argument) is a programming error and raises TypeError.
"""
from .faults import FaultCode, MissingArgumentError, getdoc
from .kinds import Kind
from .utils import Unset


def valueof(declaration, /):
    """
    return the bound value of a declaration or its fallback (see module notes).
    """
    if declaration.value is not Unset:
        return declaration.value
    if declaration.variadic:
        return []
    return declaration.default.scalar


def _access(declaration, kind, /, *, variadic, required):
    if declaration.default.kind is not kind:
        raise TypeError(
            "%s holds %s values, not %s" % (declaration.label, declaration.default.kind.value, kind.value)
        )
    if declaration.variadic is not variadic:
        shape = "a sequence" if declaration.variadic else "a single value"
        raise TypeError("%s holds %s" % (declaration.label, shape))

    if required and declaration.value is Unset:
        raise MissingArgumentError(
            "%s was not supplied" % declaration.label,
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            hint="supply a value for %s" % declaration.label,
            argument=declaration,
            docs=getdoc(FaultCode.MISSING_ARGUMENT),
        )
    return valueof(declaration)


def as_bool(declaration, /, *, required=False):
    return _access(declaration, Kind.BOOL, variadic=False, required=required)


def as_string(declaration, /, *, required=False):
    return _access(declaration, Kind.STRING, variadic=False, required=required)


def as_int(declaration, /, *, required=False):
    return _access(declaration, Kind.INT, variadic=False, required=required)


def as_float(declaration, /, *, required=False):
    return _access(declaration, Kind.FLOAT, variadic=False, required=required)


def as_timestamp(declaration, /, *, required=False):
    return _access(declaration, Kind.TIMESTAMP, variadic=False, required=required)


def as_duration(declaration, /, *, required=False):
    return _access(declaration, Kind.DURATION, variadic=False, required=required)


def as_bools(declaration, /, *, required=False):
    return _access(declaration, Kind.BOOL, variadic=True, required=required)


def as_strings(declaration, /, *, required=False):
    return _access(declaration, Kind.STRING, variadic=True, required=required)


def as_ints(declaration, /, *, required=False):
    return _access(declaration, Kind.INT, variadic=True, required=required)


def as_floats(declaration, /, *, required=False):
    return _access(declaration, Kind.FLOAT, variadic=True, required=required)


def as_timestamps(declaration, /, *, required=False):
    return _access(declaration, Kind.TIMESTAMP, variadic=True, required=required)


def as_durations(declaration, /, *, required=False):
    return _access(declaration, Kind.DURATION, variadic=True, required=required)


__all__ = (
    "valueof",
    "as_bool",
    "as_string",
    "as_int",
    "as_float",
    "as_timestamp",
    "as_duration",
    "as_bools",
    "as_strings",
    "as_ints",
    "as_floats",
    "as_timestamps",
    "as_durations",
)
