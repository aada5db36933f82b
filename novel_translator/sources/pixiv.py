"""Pixiv novel fetching.

Pixiv pages are rendered client-side, so the body is read from the site's
internal ``/ajax/novel/<id>`` endpoint instead of the HTML. The response
shape is undocumented and changes without notice; anything unexpected is
reported as EXTRACT_EMPTY rather than guessed at.
"""

import logging
import re
from urllib.parse import parse_qs, urlsplit

import httpx

from novel_translator.config import (
    ACCEPT_LANGUAGE,
    FETCH_TIMEOUT,
    PIXIV_BASE_URL,
    USER_AGENT,
)
from novel_translator.errors import ExtractError
from novel_translator.models import Article

logger = logging.getLogger(__name__)

NOVEL_PATH_RE = re.compile(r"/novel/(\d+)")
NEWPAGE_RE = re.compile(r"\s*\[newpage\]\s*")
CHAPTER_RE = re.compile(r"\[chapter:\s*(.*?)\]")
RUBY_RE = re.compile(r"\[\[rb:\s*(.*?)\s*>\s*.*?\]\]")
JUMPURI_RE = re.compile(r"\[\[jumpuri:\s*(.*?)\s*>\s*.*?\]\]")
DROPPED_TAG_RE = re.compile(r"\[(?:pixivimage|uploadedimage|jump):[^\]]*\]")


def is_pixiv(url: str) -> bool:
    host = urlsplit(url).hostname or ""
    return host == "pixiv.net" or host.endswith(".pixiv.net")


def pixiv_novel_id(url: str) -> str | None:
    """Novel id from ``novel/show.php?id=N`` or ``/novel/N`` style URLs."""
    parts = urlsplit(url)
    ids = parse_qs(parts.query).get("id")
    if ids and ids[0].isdigit() and "novel" in parts.path:
        return ids[0]
    match = NOVEL_PATH_RE.search(parts.path)
    return match.group(1) if match else None


def pixiv_headers(cookie: str) -> dict[str, str]:
    return {
        "user-agent": USER_AGENT,
        "accept-language": ACCEPT_LANGUAGE,
        "cookie": cookie,
        "referer": f"{PIXIV_BASE_URL}/",
        "origin": PIXIV_BASE_URL,
    }


def clean_pixiv_markup(content: str) -> str:
    """Replace Pixiv novel markup with plain text.

    Example:
        >>> clean_pixiv_markup("[[rb:漢字 > かんじ]]です[newpage]次")
        '漢字です\\n\\n次'
    """
    text = content.replace("\r\n", "\n")
    text = RUBY_RE.sub(r"\1", text)
    text = JUMPURI_RE.sub(r"\1", text)
    text = CHAPTER_RE.sub(r"\1", text)
    text = DROPPED_TAG_RE.sub("", text)
    text = NEWPAGE_RE.sub("\n\n", text)
    return text.strip()


def fetch_pixiv_novel(novel_id: str, cookie: str) -> Article:
    """Fetch a novel body through the ajax endpoint.

    Raises:
        ExtractError: FETCH_FAILED on HTTP errors, EXTRACT_EMPTY when the
            response does not carry a title/content body
    """
    url = f"{PIXIV_BASE_URL}/ajax/novel/{novel_id}"
    try:
        resp = httpx.get(
            url,
            headers=pixiv_headers(cookie),
            timeout=FETCH_TIMEOUT,
            follow_redirects=True,
        )
    except httpx.HTTPError as e:
        raise ExtractError(f"Fetch failed: {e}", ExtractError.FETCH_FAILED) from e

    if resp.status_code >= 400:
        raise ExtractError(
            f"Fetch failed: {resp.status_code} {resp.reason_phrase}",
            ExtractError.FETCH_FAILED,
        )

    try:
        data = resp.json()
    except ValueError:
        data = None

    body = data.get("body") if isinstance(data, dict) and not data.get("error") else None
    content = body.get("content") if isinstance(body, dict) else None
    if not isinstance(content, str) or not content.strip():
        raise ExtractError(
            "Could not extract the novel body. The cookie may have expired, "
            "the work may be restricted, or Pixiv changed its response format.",
            ExtractError.EXTRACT_EMPTY,
        )

    title = body.get("title") if isinstance(body.get("title"), str) else ""
    text = clean_pixiv_markup(content)
    logger.info(f"📄 Fetched Pixiv novel {novel_id} ({len(text)} chars)")
    return Article(
        title=title.strip(),
        text=text,
        url=f"{PIXIV_BASE_URL}/novel/show.php?id={novel_id}",
    )
