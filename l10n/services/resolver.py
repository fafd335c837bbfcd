"""Message resolution: descriptor → lookup key → template → final text.

``translate`` never raises for a missing bundle, a missing key or an
unmatched placeholder; all three fall back silently.

Lookup keys::

    "Open file"                         # no comment
    "Open file/Menu item in the toolbar" # message + "/" + "".join(comment)

Multi-line comments are joined with no separator, which is what the
extraction tooling emits.  ``["ab", "c"]`` and ``["a", "bc"]`` therefore
produce the same key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from l10n.bundle.models import template_for
from l10n.bundle.store import BundleStore, get_store
from l10n.services.formatter import NO_ARGS, Args, IndexedArgs, NamedArgs, Primitive, as_args

logger = logging.getLogger(__name__)


class MessageDescriptor(BaseModel):
    """A message plus its optional translator comment and arguments."""

    model_config = ConfigDict(frozen=True)

    message: str
    comment: tuple[str, ...] | None = None
    # Always an IndexedArgs or NamedArgs once validated.
    args: Any = NO_ARGS

    @field_validator("comment", mode="before")
    @classmethod
    def _comment_lines(cls, v: object) -> object:
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("args", mode="before")
    @classmethod
    def _tag_args(cls, v: object) -> Args:
        return as_args(v)  # type: ignore[arg-type]

    @property
    def key(self) -> str:
        return lookup_key(self.message, self.comment)


def lookup_key(message: str, comment: Sequence[str] | str | None = None) -> str:
    """Return the bundle key for *message* disambiguated by *comment*."""
    if not comment:
        return message
    if isinstance(comment, str):
        return f"{message}/{comment}"
    return f"{message}/{''.join(comment)}"


def _descriptor(
    first: str | MessageDescriptor | Mapping[str, object],
    args: tuple[Primitive | Mapping[str, Primitive], ...],
    named: Mapping[str, Primitive],
) -> MessageDescriptor:
    if isinstance(first, str):
        if named:
            if args:
                raise TypeError("Pass either positional or keyword arguments, not both")
            return MessageDescriptor(message=first, args=NamedArgs(dict(named)))
        if len(args) == 1 and isinstance(args[0], (Mapping, list, tuple)):
            return MessageDescriptor(message=first, args=args[0])
        return MessageDescriptor(message=first, args=IndexedArgs(args))  # type: ignore[arg-type]

    if args or named:
        raise TypeError("A structured descriptor carries its own args")
    if isinstance(first, MessageDescriptor):
        return first
    return MessageDescriptor.model_validate(dict(first))


def translate(
    message: str | MessageDescriptor | Mapping[str, object],
    /,
    *args: Primitive | Mapping[str, Primitive],
    **named: Primitive,
) -> str:
    """Return the localized, substituted text for *message*.

    Accepted call shapes::

        t("Hello {0}", "Ada")
        t("Hello {name}", {"name": "Ada"})
        t("Hello {name}", name="Ada")
        t({"message": "Hello {0}", "comment": ["Greeting"], "args": ["Ada"]})
        t(MessageDescriptor(message="Hello", comment=("Greeting",)))

    Every keyword is a named argument, including ``message`` and ``store``.
    """
    return translate_with(get_store(), message, *args, **named)


def translate_with(
    store: BundleStore,
    message: str | MessageDescriptor | Mapping[str, object],
    /,
    *args: Primitive | Mapping[str, Primitive],
    **named: Primitive,
) -> str:
    """Like ``translate`` but resolves against an explicit *store*."""
    descriptor = _descriptor(message, args, named)
    state = store.state

    value = state.lookup(descriptor.key)
    if value is None:
        if state.bundle is not None:
            logger.debug("No translation for %r", descriptor.key)
        template = descriptor.message
    else:
        template = template_for(value)

    return state.formatter(template, descriptor.args)


t = translate
