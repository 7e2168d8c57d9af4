"""Localized phrases for recommendation text.

The recommendation step depends on a ``PhraseLookup``: any callable
``(locale, key, variables) -> str | None``. A lookup returns None when it
cannot resolve the key; lookups raising ``LookupError`` are treated the
same way by the rule engine. ``PhraseCatalog`` is the bundled lookup,
backed by the JSON catalogs in ``audit_engine/locales``.
"""

import json
import logging
import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from importlib import resources
from typing import Any

from .config import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

PhraseLookup = Callable[[str, str, Mapping[str, Any]], "str | None"]

SUPPORTED_LOCALES = ("en", "fr", "nl")

_LOCALE_ALIASES = {
    "fr": ("fr", "french", "français", "francais"),
    "nl": ("nl", "dutch", "nederlands"),
    "en": ("en", "english"),
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def normalize_locale(locale: str | None, default: str = DEFAULT_LOCALE) -> str:
    """Map a locale tag ('fr_BE', 'nl-NL', 'Dutch') to a catalog language."""
    if not locale:
        return default
    language = re.split(r"[-_]", locale.strip().lower(), maxsplit=1)[0]
    for code, aliases in _LOCALE_ALIASES.items():
        if language in aliases:
            return code
    return default


def render(template: str, variables: Mapping[str, Any]) -> str:
    """Fill ``{name}`` placeholders; unknown placeholders are left intact."""
    def replace(match: re.Match) -> str:
        name = match.group(1)
        return str(variables[name]) if name in variables else match.group(0)

    return _PLACEHOLDER.sub(replace, template)


@lru_cache(maxsize=None)
def load_bundled_catalog(language: str) -> dict[str, Any]:
    """Load one of the JSON catalogs shipped with the package."""
    path = resources.files("audit_engine") / "locales" / f"{language}.json"
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


class PhraseCatalog:
    """Dotted-key phrase lookup over nested per-language dictionaries."""

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, Any]] | None = None,
        default_locale: str = DEFAULT_LOCALE,
    ):
        if catalogs is None:
            catalogs = {lang: load_bundled_catalog(lang) for lang in SUPPORTED_LOCALES}
        self.catalogs = dict(catalogs)
        self.default_locale = default_locale

    def _resolve(self, language: str, key: str) -> str | None:
        node: Any = self.catalogs.get(language)
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
        return node if isinstance(node, str) and node else None

    def __call__(self, locale: str, key: str, variables: Mapping[str, Any] | None = None) -> str | None:
        language = normalize_locale(locale, self.default_locale)
        template = self._resolve(language, key)
        if template is None and language != self.default_locale:
            logger.debug("Phrase %r missing for %r, falling back to %r", key, language, self.default_locale)
            template = self._resolve(self.default_locale, key)
        if template is None:
            return None
        return render(template, variables or {})


@lru_cache(maxsize=1)
def default_catalog() -> PhraseCatalog:
    return PhraseCatalog()
