"""Shared fixtures.

Every test starts with a fresh, EMPTY default store and an uncached
``Settings`` so configuration never bleeds between tests.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

import l10n.bundle.store as store_mod
from l10n.bundle.store import BundleStore
from l10n.core.config import get_settings

FLAT_BUNDLE = {"message": "translated message"}
WRAPPED_BUNDLE = {"version": "1.0.0", "contents": {"bundle": {"message": "translated message"}}}


@pytest.fixture(autouse=True)
def fresh_store(monkeypatch: pytest.MonkeyPatch) -> Iterator[BundleStore]:
    """Install an empty default store for the duration of a test."""
    monkeypatch.delenv("L10N_BUNDLE_LOCATION", raising=False)
    get_settings.cache_clear()
    store = BundleStore()
    monkeypatch.setattr(store_mod, "_default_store", store)
    yield store
    get_settings.cache_clear()


@pytest.fixture
def write_bundle(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes *data* as a JSON bundle file."""

    def _write(data: object, name: str = "bundle.l10n.json") -> Path:
        path = tmp_path / name
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bundle_server() -> Iterator[Callable[[str, int], str]]:
    """Serve a fixed body over real HTTP on localhost.

    Yields a function ``serve(body, status=200) -> base_url``.
    """
    servers: list[ThreadingHTTPServer] = []

    def _serve(body: str, status: int = 200) -> str:
        payload = body.encode("utf-8")

        class _Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:  # noqa: N802
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, *args: object) -> None:
                pass

        server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}/bundle.l10n.json"

    yield _serve

    for server in servers:
        server.shutdown()
        server.server_close()
