"""Process-wide bundle state and the configuration operations.

``BundleStore`` holds exactly one immutable ``StoreState`` (bundle +
formatter).  Configuration builds a complete new state first and then
swaps the reference, so readers see either the old bundle or the new
one, never a mix.  A failed load leaves the previous state in place.

Usage::

    import l10n

    l10n.configure(fs_path="/opt/app/l10n/bundle.l10n.de.json")
    await l10n.configure_async(uri="https://cdn.example.com/bundle.json")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import httpx

from l10n.bundle.models import TranslationValue
from l10n.bundle.sources import UriLike, fetch_uri, read_contents, read_fs_path, read_location, uri_text
from l10n.core.errors import ConfigurationConflictError, ConfigurationSourceError
from l10n.services.formatter import Formatter, format_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreState:
    """Snapshot of the active configuration.

    ``bundle`` is ``None`` in the EMPTY state.
    """

    bundle: Mapping[str, TranslationValue] | None = None
    formatter: Formatter = field(default=format_message)

    @property
    def loaded(self) -> bool:
        return self.bundle is not None

    def lookup(self, key: str) -> TranslationValue | None:
        """Return the bundle value for *key*, or ``None`` on a miss."""
        if self.bundle is None:
            return None
        return self.bundle.get(key)


_EMPTY = StoreState()


class BundleStore:
    """Holder of the active bundle and formatter.

    One instance is shared process-wide via ``get_store()``; callers that
    prefer explicit wiring may create their own and use ``translate_with``.
    """

    def __init__(self, state: StoreState = _EMPTY) -> None:
        self._state = state

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state.loaded

    def replace(self, bundle: Mapping[str, TranslationValue] | None, formatter: Formatter | None = None) -> None:
        """Swap in a new bundle (``None`` for EMPTY) and formatter."""
        frozen = None if bundle is None else MappingProxyType(dict(bundle))
        self._state = StoreState(bundle=frozen, formatter=formatter or format_message)

    def reset(self) -> None:
        """Return to the EMPTY state with the default formatter."""
        self._state = _EMPTY


# ---------------------------------------------------------------------------
# Default store
# ---------------------------------------------------------------------------

_default_store: BundleStore | None = None


def get_store() -> BundleStore:
    """Return the process-wide store, creating it on first use.

    When ``L10N_BUNDLE_LOCATION`` is set the bundle at that path (or
    ``file:`` URI) is loaded synchronously on creation.  A bundle that
    cannot be loaded is logged and the store starts EMPTY, so ``t()``
    keeps falling back to source text.
    """
    global _default_store
    if _default_store is None:
        from l10n.core.config import get_settings

        store = BundleStore()
        location = get_settings().BUNDLE_LOCATION
        if location:
            try:
                bundle = read_location(location)
            except ConfigurationSourceError as exc:
                _log_failed(exc)
            else:
                store.replace(bundle)
                _log_loaded("environment", location, bundle)
        _default_store = store
    return _default_store


def reset(store: BundleStore | None = None) -> None:
    """Clear the active bundle; every lookup falls back to the source text."""
    (store or get_store()).reset()
    logger.info("Bundle store reset", extra={"event": "bundle_reset"})


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _check_single_source(**sources: Any) -> None:
    given = [name for name, value in sources.items() if value is not None]
    if len(given) > 1:
        raise ConfigurationConflictError(
            f"Only one bundle source may be given, got: {', '.join(given)}"
        )


def _log_loaded(source: str, location: str | None, bundle: Mapping[str, Any]) -> None:
    logger.info(
        "Bundle loaded from %s",
        source,
        extra={
            "event": "bundle_loaded",
            "source": source,
            "location": location,
            "key_count": len(bundle),
        },
    )


def _log_failed(exc: ConfigurationSourceError) -> None:
    logger.warning(
        "Bundle load failed: %s",
        exc,
        extra={
            "event": "bundle_load_failed",
            "source": exc.source,
            "location": exc.location,
            "error": type(exc.__cause__ or exc).__name__,
        },
    )


def configure(
    *,
    contents: Any = None,
    fs_path: str | Path | None = None,
    formatter: Formatter | None = None,
    store: BundleStore | None = None,
    **unsupported: Any,
) -> None:
    """Configure the store synchronously.

    Args:
        contents: A flat or wrapped bundle already in memory.
        fs_path: Path to a bundle JSON file, read immediately.
        formatter: Replacement for the default placeholder formatter.
        store: Target store; defaults to ``get_store()``.

    With neither *contents* nor *fs_path* the store becomes EMPTY (only
    *formatter*, if given, is kept).

    Raises:
        ConfigurationConflictError: Both sources were given.
        BundleFileError: *fs_path* is missing or unreadable.
        ConfigurationSourceError: The bundle is malformed.
        TypeError: ``uri`` was passed; use ``configure_async``.
    """
    if "uri" in unsupported:
        raise TypeError("uri bundles load asynchronously; use 'await configure_async(uri=...)'")
    if unsupported:
        raise TypeError(f"Unexpected configuration option(s): {', '.join(sorted(unsupported))}")

    _check_single_source(contents=contents, fs_path=fs_path)
    target = store or get_store()

    try:
        if contents is not None:
            bundle, source, location = read_contents(contents), "contents", None
        elif fs_path is not None:
            bundle, source, location = read_fs_path(fs_path), "fs_path", str(fs_path)
        else:
            target.replace(None, formatter)
            logger.info("Bundle store reset", extra={"event": "bundle_reset"})
            return
    except ConfigurationSourceError as exc:
        _log_failed(exc)
        raise

    target.replace(bundle, formatter)
    _log_loaded(source, location, bundle)


async def configure_async(
    *,
    uri: UriLike | None = None,
    contents: Any = None,
    fs_path: str | Path | None = None,
    formatter: Formatter | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    store: BundleStore | None = None,
) -> None:
    """Configure the store, awaiting the bundle fetch for *uri*.

    ``file:`` URIs are read from disk; ``http(s):`` URIs are fetched with
    httpx (*client* and *timeout* apply to those).  *contents* and
    *fs_path* are accepted too and behave as in ``configure``.  The store
    is only touched once the bundle has been fully loaded, so ``t()``
    keeps serving the previous bundle while the fetch is in flight.

    Raises:
        ConfigurationConflictError: More than one source was given.
        ConfigurationSourceError: The fetch failed or the bundle is
            malformed.
    """
    _check_single_source(uri=uri, contents=contents, fs_path=fs_path)
    if uri is None:
        configure(contents=contents, fs_path=fs_path, formatter=formatter, store=store)
        return

    try:
        bundle = await fetch_uri(uri, client=client, timeout=timeout)
    except ConfigurationSourceError as exc:
        _log_failed(exc)
        raise

    (store or get_store()).replace(bundle, formatter)
    _log_loaded("uri", uri_text(uri), bundle)
