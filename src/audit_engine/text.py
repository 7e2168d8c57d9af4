"""Text normalization shared by the analyzers."""

import re
import unicodedata

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[\W_]+", re.UNICODE)
_MARKUP = re.compile(r"<[a-zA-Z!/][^>]*>")


def strip_diacritics(text: str) -> str:
    """Remove accents: 'Café Crème' -> 'Cafe Creme'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str | None) -> str:
    """Lowercase, strip diacritics and collapse whitespace."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", strip_diacritics(text).lower()).strip()


def normalize_slug(text: str | None) -> str:
    """Like normalize_text, but punctuation (e.g. URL separators) becomes spaces."""
    return _WHITESPACE.sub(" ", _NON_WORD.sub(" ", normalize_text(text))).strip()


def plain_text(text: str | None) -> str:
    """Return readable text, dropping markup if the input looks like HTML."""
    if not text:
        return ""
    if not _MARKUP.search(text):
        return text
    soup = BeautifulSoup(text, "lxml")
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text(" ", strip=True)


def words(text: str | None) -> list[str]:
    return normalize_text(text).split()


def count_words(text: str | None) -> int:
    return len(words(text))


def count_occurrences(haystack: str, needle: str) -> int:
    """Non-overlapping occurrences of an already-normalized needle."""
    if not needle:
        return 0
    return haystack.count(needle)
