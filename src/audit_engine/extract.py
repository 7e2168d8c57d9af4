"""Extract RawSignals from page markup."""

from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from .models import RawSignals
from .text import count_words

# Page chrome that should not count as content
CHROME_TAGS = ["script", "style", "noscript", "nav", "footer", "header", "aside"]


def _is_internal(href: str, base_url: str) -> bool | None:
    """True for same-host links, False for other hosts, None for non-links."""
    href = href.strip()
    if not href or href.startswith(("#", "javascript:", "mailto:", "tel:")):
        return None
    if not base_url:
        return not urlparse(href).netloc
    absolute = urlparse(urljoin(base_url, href))
    if absolute.scheme not in ("http", "https"):
        return None
    base_host = urlparse(base_url).netloc.lower().removeprefix("www.")
    return absolute.netloc.lower().removeprefix("www.") == base_host


def raw_signals_from_html(html: str, url: str = "", load_time: float | None = None) -> RawSignals:
    """Build RawSignals from an already-fetched HTML document.

    Measures what a crawler would report for the page:
    - title, meta description and canonical link
    - h1/h2/h3 heading texts
    - images and images without alt text
    - internal vs external links (by host)
    - visible body text and its word count
    """
    soup = BeautifulSoup(html or "", "lxml")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    desc_tag = soup.find("meta", attrs={"name": "description"})
    description = (desc_tag.get("content") or "").strip() if desc_tag else ""

    canonical = soup.find("link", rel="canonical")
    canonical_href = (canonical.get("href") or "").strip() if canonical else ""

    images = soup.find_all("img")
    missing_alt = sum(1 for img in images if not (img.get("alt") or "").strip())

    internal = external = 0
    for link in soup.find_all("a", href=True):
        kind = _is_internal(link["href"], url)
        if kind is True:
            internal += 1
        elif kind is False:
            external += 1

    headings = {
        level: [h.get_text(" ", strip=True) for h in soup.find_all(level)]
        for level in ("h1", "h2", "h3")
    }

    # Headings and links count the full page, body text excludes page chrome
    for tag in soup.find_all(CHROME_TAGS):
        tag.decompose()
    body = soup.body or soup
    body_text = body.get_text(" ", strip=True)

    raw: RawSignals = {
        "url": url,
        "title": title,
        "description": description,
        "headings": headings,
        "images": len(images),
        "images_missing_alt": missing_alt,
        "internal_links": internal,
        "external_links": external,
        "word_count": count_words(body_text),
        "canonical": canonical_href,
        "body_text": body_text,
    }
    if load_time is not None:
        raw["load_time"] = load_time
    return raw
