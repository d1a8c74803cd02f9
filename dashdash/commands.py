"""
Dashdash command runner: parse a prompt the way a command-line program would.

What this module provides
- invoke(registry, prompt): normalize a prompt into tokens, parse them against a
  registry, and either return the resolved schema or surface the fault.

Prompt forms
- Unset: read tokens from sys.argv[1:].
- str: shell-like string, split with shlex.split.
- Iterable[str]: pre-tokenized sequence; each element is trimmed and empty ones dropped.

Runtime options
- shell: when True, faults are rendered on stderr through rich and the process
  exits with status 1; when False (default), faults are raised.
- fancy: render faults inside a rounded panel.
- colorful: use the color styles (overridable through __styles__ in __main__).

Quick start
    from dashdash import Registry, invoke

    registry = Registry()
    registry.register().add_arg("output").add_flag("verbose", "v", False)

    if __name__ == "__main__":
        schema = invoke(registry, shell=True)
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from .faults import ParseError, trigger
from .utils import Unset

logger = logging.getLogger(__name__)


def _tokenize(prompt):
    """
    Normalize a prompt into a list[str] of tokens (see module notes).

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str], or when an
      iterable contains a non-string element.
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        def _sanitized(iterable):
            """
            Yield trimmed string items from an iterable, validating element types.
            """
            for item in iterable:
                if not isinstance(item, str):
                    raise TypeError("invoke() prompt must be a string or an iterable of strings")
                if item := item.strip():
                    yield item
        return list(_sanitized(prompt))
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def invoke(registry, prompt=Unset, /, *, shell=False, fancy=False, colorful=True):
    """
    Parse a prompt against a registry and return the resolved CommandSchema.

    Parameters
    - registry: the Registry holding every command.
    - prompt: Unset | str | Iterable[str] (see module notes).
    - shell, fancy, colorful: rendering options forwarded to trigger().

    Behavior
    - In shell mode a fault is printed to stderr and the process exits with status 1.
    - Otherwise the fault is raised (its options carry shell/fancy/colorful so a
      caller can still render it later with rich).
    """
    tokens = _tokenize(prompt)
    logger.debug("invoking with tokens %r", tokens)

    try:
        return registry.parse(tokens)
    except ParseError as fault:
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful)


__all__ = (
    "invoke",
)
