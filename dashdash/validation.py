"""
Dashdash validation of bound values against their declarations.

- check(default, object): pure predicate.
    • scalar default  → the object's kind equals the default's kind (structural match).
    • choice set      → the object has the choices' kind and equals one of them.
- validate(declaration, value): raises the matching BadArgumentError subclass.
    • variadic declarations are validated element by element, never as a unit.
    • Unset values are skipped; absence is not a parse error.
"""
from .faults import FaultCode, InvalidChoiceError, TypeMismatchError, getdoc
from .kinds import Kind
from .utils import Unset, coalesce, ordinal


def _kindof(object):
    try:
        return Kind.of(object)
    except TypeError:
        return None


def check(default, object, /):
    """
    return True when object satisfies default (see module notes).
    """
    if _kindof(object) is not default.kind:
        return False
    if default.multiple:
        return object in default.choices
    return True


def validate(declaration, value=Unset, /, *, token=Unset):
    """
    validate a bound value (or every element of a variadic one).

    parameters
    - declaration: ArgDecl | FlagDecl, the owner of the value.
    - value: the value to validate; defaults to declaration.value.
    - token: the raw Token the value came from (used for its position only).

    raises
    - TypeMismatchError: an element's kind differs from the declared kind.
    - InvalidChoiceError: an element is outside the declared choice set.
    """
    value = coalesce(value, declaration.value)
    if value is Unset:
        return

    default = declaration.default
    where = " at %s position" % ordinal(token.index) if getattr(token, "index", 0) else ""

    for object in (value if declaration.variadic else (value,)):
        if check(default, object):
            continue
        if _kindof(object) is not default.kind:
            raise TypeMismatchError(
                "value %r for %s%s is not a %s" % (object, declaration.label, where, default.kind.value),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint="use a %s value for %s" % (default.kind.value, declaration.label),
                argument=declaration,
                token=coalesce(token, None),
                value=object,
                index=getattr(token, "index", None),
                docs=getdoc(FaultCode.TYPE_MISMATCH),
            )
        raise InvalidChoiceError(
            "value %r for %s%s is not a valid choice" % (object, declaration.label, where),
            title="invalid choice",
            code=FaultCode.INVALID_CHOICE,
            hint="use one of: %s" % " · ".join(map(str, default.choices)),
            argument=declaration,
            token=coalesce(token, None),
            value=object,
            choices=default.choices,
            index=getattr(token, "index", None),
            docs=getdoc(FaultCode.INVALID_CHOICE),
        )


__all__ = (
    "check",
    "validate",
)
