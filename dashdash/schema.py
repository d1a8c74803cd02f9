r"""
Dashdash schema: registry, commands and their declarations.

Overview
- Registry: read-only mapping of command name → CommandSchema ("" is the root command).
  Commands are added through register(); parse() runs the parser against it.
- CommandSchema: one command's flags (long name → FlagDecl, plus the derived short
  name → long name map) and positional arguments (name → ArgDecl, plus their
  declaration order, which is the binding order).
- ArgDecl: a positional argument; optionally variadic (declared as "name...").
- FlagDecl: a flag; an ArgDecl plus an optional one-character short name.

Registration rules
- Flag and argument names must match r"[^\W\d_](-?[^\W_]+)*" (arguments may end with
  "..." to become variadic). Duplicate long names, short names, or argument names
  raise ValueError.
- A boolean flag declared as "no-<name>" is stored as "<name>", so "--no-<name>"
  inverts it and "--<name>" sets it. Non-boolean "no-" flags are rejected.
- At most one argument may be variadic and it must be the last one declared.
- The default value fixes the kind of a declaration; a list or tuple default is a
  choice set (see dashdash.kinds.Default).

Lifecycle
- Declarations start unbound (value is Unset).
- The first parse seals the registry and every schema in it; later registration
  raises RuntimeError.
- A successful parse commits the values of the resolved schema all at once; a failed
  parse leaves it untouched.

Example
    >>> registry = Registry()
    >>> info = registry.register("info")
    >>> info.add_arg("category", ["manager", "student"]).add_arg("subjects...")
    >>> info.add_flag("verbose", "v", False)
"""
import functools
import operator
import re
from collections.abc import Mapping

from .accessors import valueof
from .kinds import Default, Kind
from .parser import parse
from .utils import *


class DeclarationType(type):
    """
    Metaclass that makes schema objects introspectable.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics (rich.pretty.pprint renders a parsed schema nicely).

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            **options,
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag-decl(name='verbose', short='v', default=..., value=True)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


_NAME = re.compile(r"[^\W\d_](-?[^\W_]+)*")
_SHORT = re.compile(r"[^-=\s]")
_VARIADIC = "..."


def _sanitize_name(cls, name, /):
    """
    Internal: validate a flag or argument name (without dashes or "..." suffix).

    Raises
    - TypeError: when the name is not a string.
    - ValueError: when the name is empty or not a valid name.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} name cannot be empty")
    elif not _NAME.fullmatch(name):
        raise ValueError(f"{cls.__typename__} name {name!r} must be letters, digits and inner dashes")
    return name


def _sanitize_short(cls, short, /):
    """
    Internal: validate an optional one-character short name.
    """
    if short is Unset:
        return None
    if not isinstance(short, str):
        raise TypeError(f"{cls.__typename__} short name must be a string")
    elif not _SHORT.fullmatch(short):
        raise ValueError(f"{cls.__typename__} short name {short!r} must be a single character other than '-' or '='")
    return short


class ArgDecl(metaclass=DeclarationType):
    """
    Declaration of a positional argument.

    Fields (read-only)
    - name: the argument name (without the "..." marker).
    - variadic: True when the argument collects all remaining positional tokens.
    - default: the Default fixing kind and, optionally, the choice set.
    - value: Unset until bound; a scalar, or a list for a variadic argument.
    """
    __introspectable__ = (
        "name",
        "variadic",
        "default",
        "value",
    )

    def __init__(self, name, /, default="", *, variadic=False):
        self._name = _sanitize_name(type(self), name)
        self._default = Default.of(default)
        self._variadic = bool(variadic)
        self._value = Unset

    @property
    def bound(self):
        """
        True once a value has been committed by a parse.
        """
        return self._value is not Unset

    @property
    def label(self):
        """
        Human-readable designation used in fault messages.
        """
        return "argument %r" % self._name


class FlagDecl(ArgDecl):
    """
    Declaration of a flag.

    Fields (read-only)
    - name: the long name, without dashes (and without a "no-" prefix for booleans).
    - short: the one-character short name, or None.
    - default: the Default fixing kind and, optionally, the choice set.
    - value: Unset until bound.

    A flag is boolean iff its default kind is bool; boolean flags only consume an
    inline value ("--force=false") and accept the "--no-<name>" inversion.
    """
    __introspectable__ = (
        "name",
        "short",
        "default",
        "value",
    )

    def __init__(self, name, /, short=Unset, default=""):
        super().__init__(name, default)
        self._short = _sanitize_short(type(self), short)

    @property
    def boolean(self):
        return self._default.kind is Kind.BOOL

    @property
    def label(self):
        return "flag %r" % ("--" + self._name)


class CommandSchema(metaclass=DeclarationType):
    """
    Flags and positional arguments of one command.

    Fields (read-only views; declarations themselves are the live objects)
    - name: the command name ("" for the root command).
    - flags: long name → FlagDecl.
    - shorts: short name → long name.
    - args: argument name → ArgDecl.
    - order: argument names in declaration (= binding) order.
    - sealed: True once a parse has begun on the owning registry.

    Registration methods return the schema itself so calls can be chained.
    """
    __introspectable__ = (
        "name",
        "flags",
        "shorts",
        "args",
        "order",
        "sealed",
    )

    __displayable__ = (
        "name",
        "flags",
        "args",
    )

    def __init__(self, name="", /):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        self._name = name
        self._flags = {}
        self._shorts = {}
        self._args = {}
        self._order = []
        self._sealed = False

    def _ensure_open(self):
        if self._sealed:
            raise RuntimeError(f"{type(self).__typename__} {self._name!r} is sealed; register before parsing")

    def add_flag(self, name, /, short=Unset, default=""):
        """
        Declare a flag.

        Parameters
        - name: long name without dashes (e.g. "verbose", "no-clean").
        - short: optional single character (e.g. "v").
        - default: value fixing the kind (False/True makes a boolean flag); a list
          or tuple restricts values to its elements.

        Raises
        - ValueError: invalid or duplicated long/short name, or a non-boolean "no-" flag.
        - TypeError: unsupported default kind.
        - RuntimeError: the schema is sealed.
        """
        self._ensure_open()

        flag = FlagDecl(name, short, default)
        if flag.name.startswith("no-"):
            if not flag.boolean:
                raise ValueError(f"{type(self).__typename__} flag {name!r} starts with 'no-' but is not boolean")
            flag = FlagDecl(flag.name.removeprefix("no-"), short, flag.default)

        if flag.name in self._flags:
            raise ValueError(f"{type(self).__typename__} flag name {flag.name!r} is already in use")
        if flag.short is not None and flag.short in self._shorts:
            raise ValueError(f"{type(self).__typename__} flag short name {flag.short!r} is already in use")

        self._flags[flag.name] = flag
        if flag.short is not None:
            self._shorts[flag.short] = flag.name
        return self

    def add_arg(self, name, /, default=""):
        """
        Declare a positional argument.

        Parameters
        - name: argument name; a trailing "..." makes it variadic (collects every
          remaining positional token, in order).
        - default: value fixing the kind; a list or tuple restricts values to its
          elements (each element, for a variadic argument).

        Raises
        - ValueError: invalid or duplicated name, or an argument declared after a
          variadic one.
        - TypeError: unsupported default kind.
        - RuntimeError: the schema is sealed.
        """
        self._ensure_open()

        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} argument name must be a string")

        variadic = name.endswith(_VARIADIC)
        argument = ArgDecl(name.removesuffix(_VARIADIC), default, variadic=variadic)

        if argument.name in self._args:
            raise ValueError(f"{type(self).__typename__} argument name {argument.name!r} is already in use")
        if self._order and self._args[self._order[-1]].variadic:
            raise ValueError(
                f"{type(self).__typename__} variadic argument {self._order[-1]!r} must be the last argument"
            )

        self._args[argument.name] = argument
        self._order.append(argument.name)
        return self

    def flag(self, name, /):
        """
        Return the FlagDecl for a long name (or a short name); KeyError when unknown.
        """
        try:
            return self._flags[name]
        except KeyError:
            return self._flags[self._shorts[name]]

    def arg(self, name, /):
        """
        Return the ArgDecl for an argument name; KeyError when unknown.
        """
        return self._args[name]

    def declarations(self):
        """
        Yield every flag then every argument declaration (arguments in binding order).
        """
        yield from self._flags.values()
        yield from map(self._args.__getitem__, self._order)

    def arguments(self):
        """
        Return the argument declarations in binding order.
        """
        return [self._args[name] for name in self._order]

    def namespace(self):
        """
        Return a plain dict of every declaration name → bound value or default.

        Unbound choice sets fall back to their first choice and unbound variadic
        arguments to an empty list (see dashdash.accessors).
        """
        return {declaration.name: valueof(declaration) for declaration in self.declarations()}

    def _seal(self):
        self._sealed = True

    def _commit(self, staged, /):
        """
        Replace every declaration's value with its staged value (or Unset).
        """
        for declaration in self.declarations():
            declaration._value = staged.get(declaration, Unset)


class Registry(Mapping):
    """
    Read-only mapping of command name → CommandSchema.

    - register(name) adds (or returns) a command; "" is the root command.
    - parse(tokens) resolves and binds a token vector, returning the live schema.

    The registry is a plain mutable structure without locking: parse it from one
    thread at a time, or build one registry per concurrent parse.
    """

    def __init__(self):
        self._commands = {}
        self._sealed = False

    @property
    def sealed(self):
        return self._sealed

    @property
    def root(self):
        """
        The root command schema, or None when it was never registered.
        """
        return self._commands.get("")

    def register(self, name="", /):
        """
        Register a command and return its schema.

        The empty name is the root command. If the name is already registered,
        the existing schema is returned unchanged.

        Raises
        - ValueError: the name is not empty and not a valid command name.
        - RuntimeError: the registry is sealed and the name is new.
        """
        try:
            return self._commands[name]
        except KeyError:
            pass
        except TypeError:
            raise TypeError("registry command name must be a string") from None

        if self._sealed:
            raise RuntimeError(f"registry is sealed; cannot register command {name!r} after parsing")
        if not isinstance(name, str):
            raise TypeError("registry command name must be a string")
        if name and not _NAME.fullmatch(name):
            raise ValueError(f"registry command name {name!r} must be letters, digits and inner dashes")

        schema = self._commands[name] = CommandSchema(name)
        return schema

    def parse(self, tokens, /):
        """
        Parse a token vector (program name excluded) against this registry.

        Returns the resolved CommandSchema with its values committed; raises a
        ParseError subclass otherwise (see dashdash.parser.parse).
        """
        return parse(self, tokens)

    def _seal(self):
        self._sealed = True
        for schema in self._commands.values():
            schema._seal()

    def __getitem__(self, name, /):
        return self._commands[name]

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return f"registry(commands={list(self._commands)!r}, sealed={self._sealed!r})"

    def __rich_repr__(self):
        yield "commands", self._commands
        yield "sealed", self._sealed


__all__ = (
    "ArgDecl",
    "FlagDecl",
    "CommandSchema",
    "Registry",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del DeclarationType
