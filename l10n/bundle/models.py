"""Pydantic models for translation bundles.

Two JSON shapes are accepted:

- **flat**: ``{"<lookup key>": "<text>" | {"message": ..., "comment": [...]}}``
- **wrapped**: ``{"version": "1.0.0", "contents": {"<bundle id>": <flat>}}``
  (recognized only when ``version`` is a string)

``normalize_bundle()`` reduces either shape to a flat ``TranslationBundle``.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field, TypeAdapter


class TranslationEntry(BaseModel):
    """A translated message stored together with its translator comment."""

    message: str
    comment: list[str] = Field(default_factory=list)


TranslationValue = Union[str, TranslationEntry]
TranslationBundle = dict[str, TranslationValue]


class WrappedBundle(BaseModel):
    """Bundle file with a version header and named inner bundles."""

    version: str
    contents: dict[str, TranslationBundle]


_FLAT_ADAPTER: TypeAdapter[TranslationBundle] = TypeAdapter(TranslationBundle)


def normalize_bundle(data: Any) -> TranslationBundle:
    """Return the flat bundle contained in *data*.

    A top-level ``contents`` object next to a ``version`` string marks the
    wrapped schema; its first inner bundle is used.  Anything else is
    validated as a flat bundle.

    Raises:
        pydantic.ValidationError: *data* matches neither shape.
    """
    if (
        isinstance(data, dict)
        and isinstance(data.get("version"), str)
        and isinstance(data.get("contents"), dict)
    ):
        wrapped = WrappedBundle.model_validate(data)
        # By convention there is exactly one inner bundle.
        return next(iter(wrapped.contents.values()), {})
    return _FLAT_ADAPTER.validate_python(data)


def template_for(value: TranslationValue) -> str:
    """Return the replacement text carried by a bundle value."""
    if isinstance(value, TranslationEntry):
        return value.message
    return value
