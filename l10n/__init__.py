"""Runtime string localization.

Configure a bundle once, then call ``t()`` anywhere::

    import l10n

    l10n.configure(fs_path="bundle.l10n.de.json")
    l10n.t("Hello {0}", "Ada")                       # → "Hallo Ada"
    l10n.t({"message": "Open", "comment": ["verb"]})  # → "Öffnen"

Without a bundle every message is returned as written (placeholders
still substituted).
"""

from __future__ import annotations

from l10n.bundle.models import TranslationBundle, TranslationEntry
from l10n.bundle.store import BundleStore, configure, configure_async, get_store, reset
from l10n.core.errors import (
    BundleFileError,
    ConfigurationConflictError,
    ConfigurationSourceError,
    L10nError,
)
from l10n.services.formatter import Formatter, IndexedArgs, NamedArgs, format_message
from l10n.services.resolver import MessageDescriptor, lookup_key, t, translate, translate_with

__all__ = [
    "BundleFileError",
    "BundleStore",
    "ConfigurationConflictError",
    "ConfigurationSourceError",
    "Formatter",
    "IndexedArgs",
    "L10nError",
    "MessageDescriptor",
    "NamedArgs",
    "TranslationBundle",
    "TranslationEntry",
    "configure",
    "configure_async",
    "format_message",
    "get_store",
    "lookup_key",
    "reset",
    "t",
    "translate",
    "translate_with",
]
