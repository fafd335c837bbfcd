"""Bundle sources: in-memory contents, local files and URIs.

Each reader returns a flat ``TranslationBundle`` or raises
``ConfigurationSourceError``.  ``read_contents`` and ``read_fs_path`` are
synchronous; ``fetch_uri`` is the only coroutine and the only path that
touches the network (via httpx).
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any
from urllib.parse import ParseResult, SplitResult, urlsplit
from urllib.request import url2pathname

import httpx
from pydantic import ValidationError

from l10n.bundle.models import TranslationBundle, normalize_bundle
from l10n.core.errors import BundleFileError, ConfigurationSourceError

logger = logging.getLogger(__name__)

UriLike = str | SplitResult | ParseResult | httpx.URL

_HTTP_SCHEMES = frozenset({"http", "https"})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_bundle(raw: bytes | str, *, source: str, location: str | None = None) -> TranslationBundle:
    """Decode JSON *raw* and normalize it to a flat bundle."""
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationSourceError(
            f"Bundle is not valid JSON: {exc}", source=source, location=location
        ) from exc
    return _normalize(data, source=source, location=location)


def _normalize(data: Any, *, source: str, location: str | None) -> TranslationBundle:
    try:
        return normalize_bundle(data)
    except ValidationError as exc:
        raise ConfigurationSourceError(
            f"Bundle has an invalid shape: {exc.error_count()} validation error(s)",
            source=source,
            location=location,
        ) from exc


# ---------------------------------------------------------------------------
# Synchronous sources
# ---------------------------------------------------------------------------


def read_contents(contents: Any) -> TranslationBundle:
    """Normalize an in-memory bundle (flat or wrapped)."""
    return _normalize(contents, source="contents", location=None)


def read_fs_path(path: str | Path) -> TranslationBundle:
    """Read and parse the bundle file at *path*.

    Raises:
        BundleFileError: The file is missing or unreadable.
        ConfigurationSourceError: The file is not a valid bundle.
    """
    location = str(path)
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise BundleFileError(
            f"Cannot read bundle file {location}: {exc.strerror or exc}",
            source="fs_path",
            location=location,
        ) from exc
    return parse_bundle(raw, source="fs_path", location=location)


def uri_text(uri: UriLike) -> str:
    """Return *uri* as a URL string."""
    if isinstance(uri, (SplitResult, ParseResult)):
        return uri.geturl()
    return str(uri)


def file_uri_to_path(uri: UriLike) -> Path:
    """Convert a ``file:`` URI to a local path."""
    parts = urlsplit(uri_text(uri))
    if parts.scheme != "file":
        raise ValueError(f"Not a file URI: {uri}")
    path = url2pathname(parts.path)
    if parts.netloc and parts.netloc != "localhost":
        # UNC share: file://server/share/bundle.json
        path = f"//{parts.netloc}{path}"
    return Path(path)


def read_location(location: str) -> TranslationBundle:
    """Read a bundle from a local path or ``file:`` URI, synchronously."""
    if urlsplit(location).scheme == "file":
        return read_fs_path(file_uri_to_path(location))
    return read_fs_path(location)


# ---------------------------------------------------------------------------
# Asynchronous source
# ---------------------------------------------------------------------------


async def fetch_uri(
    uri: UriLike,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> TranslationBundle:
    """Fetch and parse the bundle at *uri*.

    ``file:`` URIs are read from disk in a worker thread; ``http(s):``
    URIs are fetched with httpx.  A caller-supplied *client* is used as
    is and never closed here.

    Raises:
        ConfigurationSourceError: Unsupported scheme, transport failure,
            non-2xx response or invalid bundle body.
    """
    location = uri_text(uri)
    scheme = urlsplit(location).scheme.lower()

    if scheme == "file":
        path = file_uri_to_path(location)
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise BundleFileError(
                f"Cannot read bundle file {path}: {exc.strerror or exc}",
                source="uri",
                location=location,
            ) from exc
        return parse_bundle(raw, source="uri", location=location)

    if scheme not in _HTTP_SCHEMES:
        raise ConfigurationSourceError(
            f"Unsupported bundle URI scheme: {scheme or '<none>'}",
            source="uri",
            location=location,
        )

    t0 = time.monotonic()
    try:
        if client is not None:
            if timeout is None:
                response = await client.get(location)
            else:
                response = await client.get(location, timeout=timeout)
        else:
            if timeout is None:
                from l10n.core.config import get_settings

                timeout = get_settings().FETCH_TIMEOUT_SECONDS
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own:
                response = await own.get(location)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ConfigurationSourceError(
            f"Bundle request failed with HTTP {exc.response.status_code}",
            source="uri",
            location=location,
        ) from exc
    except httpx.HTTPError as exc:
        raise ConfigurationSourceError(
            f"Bundle request failed: {exc!r}",
            source="uri",
            location=location,
        ) from exc

    logger.debug(
        "Fetched bundle %s",
        location,
        extra={
            "event": "bundle_fetched",
            "location": location,
            "status_code": response.status_code,
            "latency_ms": int((time.monotonic() - t0) * 1000),
        },
    )
    return parse_bundle(response.content, source="uri", location=location)
