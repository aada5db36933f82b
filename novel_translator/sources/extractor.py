"""Article extraction from web pages using BeautifulSoup."""

import logging
import re
from urllib.parse import urlsplit

import httpx
from bs4 import BeautifulSoup

from novel_translator.config import ACCEPT_LANGUAGE, FETCH_TIMEOUT, USER_AGENT
from novel_translator.errors import ExtractError
from novel_translator.models import Article
from novel_translator.sources.pixiv import (
    fetch_pixiv_novel,
    is_pixiv,
    pixiv_headers,
    pixiv_novel_id,
)

logger = logging.getLogger(__name__)

NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "form"]
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
TRAILING_SPACES_RE = re.compile(r"[ \t]+\n")


def _clean_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\xa0", " ")
    text = TRAILING_SPACES_RE.sub("\n", text)
    return EXCESS_NEWLINES_RE.sub("\n\n", text).strip()


def _extract_title(soup: BeautifulSoup) -> str:
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title and og_title.get("content", "").strip():
        return og_title["content"].strip()
    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)
    h1 = soup.find("h1")
    return h1.get_text(strip=True) if h1 else ""


def extract_article(html: str, base_url: str | None = None) -> Article:
    """Pull the title and readable body text out of an HTML page.

    Navigation, scripts and other page chrome are dropped; the body comes
    from ``<article>``, then ``<main>``, then ``<body>``. Line breaks
    between block elements are kept so paragraphs survive.

    Args:
        html: Page HTML
        base_url: URL the page was fetched from (kept on the result)

    Returns:
        Article with title and text (text may be empty)
    """
    soup = BeautifulSoup(html, "html.parser")
    title = _extract_title(soup)

    for tag in soup(NOISE_TAGS):
        tag.decompose()

    container = soup.find("article") or soup.find("main") or soup.body or soup
    for br in container.find_all("br"):
        br.replace_with("\n")

    text = _clean_text(container.get_text(separator="\n"))

    logger.debug(f"📄 Extracted {len(text)} chars from {base_url or 'html'}")
    return Article(title=title, text=text, url=base_url)


def _validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ExtractError("URL is empty", ExtractError.INVALID_URL)
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ExtractError(f"Not a valid URL: {url}", ExtractError.INVALID_URL)
    return url


def fetch_article(url: str, cookie: str | None = None) -> Article:
    """Download a page and extract its article.

    Pixiv needs a logged-in session cookie; novel pages go through the
    Pixiv ajax endpoint, other Pixiv pages are fetched with the cookie.

    Raises:
        ExtractError: INVALID_URL, PIXIV_COOKIE_REQUIRED, FETCH_FAILED or
            EXTRACT_EMPTY
    """
    url = _validate_url(url)
    headers = {"user-agent": USER_AGENT, "accept-language": ACCEPT_LANGUAGE}

    if is_pixiv(url):
        cookie = (cookie or "").strip()
        if not cookie:
            raise ExtractError(
                "A Pixiv login cookie is required to load the body. "
                "Paste your Pixiv cookie in the settings and try again.",
                ExtractError.PIXIV_COOKIE_REQUIRED,
            )
        novel_id = pixiv_novel_id(url)
        if novel_id:
            return fetch_pixiv_novel(novel_id, cookie)
        headers = pixiv_headers(cookie)

    try:
        resp = httpx.get(url, headers=headers, timeout=FETCH_TIMEOUT, follow_redirects=True)
    except httpx.HTTPError as e:
        raise ExtractError(f"Fetch failed: {e}", ExtractError.FETCH_FAILED) from e

    if resp.status_code >= 400:
        raise ExtractError(
            f"Fetch failed: {resp.status_code} {resp.reason_phrase}",
            ExtractError.FETCH_FAILED,
        )

    article = extract_article(resp.text, base_url=str(resp.url))
    if not article.text:
        raise ExtractError(
            "Could not extract the body text from the page.",
            ExtractError.EXTRACT_EMPTY,
        )

    logger.info(f"📄 Extracted {len(article.text)} chars from {url}")
    return article
