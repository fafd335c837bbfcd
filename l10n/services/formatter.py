"""Placeholder substitution.

Templates use ``{0}``/``{1}`` for indexed arguments and ``{name}`` for
named ones.  Placeholders with no matching argument (or a ``None``
value) stay in the output verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

Primitive = Union[str, int, float, bool, None]

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


@dataclass(frozen=True)
class IndexedArgs:
    """Positional arguments, substituted as ``{0}``, ``{1}``, ..."""

    values: tuple[Primitive, ...] = ()

    def get(self, name: str) -> Primitive:
        if not (name.isascii() and name.isdigit()):
            return None
        index = int(name)
        # "{01}" is not "{1}".
        if name != str(index) or index >= len(self.values):
            return None
        return self.values[index]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class NamedArgs:
    """Named arguments, substituted as ``{name}``."""

    values: Mapping[str, Primitive] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, name: str) -> Primitive:
        return self.values.get(name)

    def __len__(self) -> int:
        return len(self.values)


Args = Union[IndexedArgs, NamedArgs]
Formatter = Callable[[str, Args], str]

NO_ARGS = IndexedArgs()


def as_args(value: Args | Sequence[Primitive] | Mapping[str, Primitive] | None) -> Args:
    """Coerce a raw sequence / mapping into its tagged variant."""
    if value is None:
        return NO_ARGS
    if isinstance(value, (IndexedArgs, NamedArgs)):
        return value
    if isinstance(value, Mapping):
        return NamedArgs(MappingProxyType(dict(value)))
    if isinstance(value, (str, bytes)):
        raise TypeError("args must be a sequence or a mapping, not a string")
    return IndexedArgs(tuple(value))


def to_text(value: Primitive) -> str:
    """Render a substitution value the way bundle authors expect."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_message(template: str, args: Args) -> str:
    """Default formatter: fill ``{...}`` placeholders in *template*."""
    if not args:
        return template

    def _replace(match: re.Match[str]) -> str:
        value = args.get(match.group(1))
        return match.group(0) if value is None else to_text(value)

    return _PLACEHOLDER_RE.sub(_replace, template)
