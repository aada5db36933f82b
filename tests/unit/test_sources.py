"""Tests for novel_translator.sources package."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from novel_translator.errors import ExtractError
from novel_translator.sources import (
    clean_pixiv_markup,
    extract_article,
    fetch_article,
    is_pixiv,
    pixiv_novel_id,
)

ARTICLE_HTML = """
<html>
  <head>
    <title>Page Title</title>
    <meta property="og:title" content="Episode 3">
    <script>var tracking = 1;</script>
  </head>
  <body>
    <nav>Menu Home About</nav>
    <article>
      <p>첫 문단입니다.</p>
      <p>둘째 문단<br>다음 줄.</p>
    </article>
    <footer>Copyright notice</footer>
  </body>
</html>
"""


def _response(status_code=200, text="", json_data=None, url="https://example.com/1"):
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = "Forbidden" if status_code == 403 else "OK"
    response.text = text
    response.url = url
    response.json.return_value = json_data
    return response


class TestExtractArticle:
    """Tests for extract_article function."""

    def test_extracts_article_body(self):
        article = extract_article(ARTICLE_HTML, base_url="https://example.com/1")
        assert article.title == "Episode 3"
        assert "첫 문단입니다." in article.text
        assert "다음 줄." in article.text
        assert "Menu" not in article.text
        assert "Copyright" not in article.text
        assert "tracking" not in article.text
        assert article.url == "https://example.com/1"

    def test_title_fallbacks(self):
        assert extract_article("<title>T</title><p>x</p>").title == "T"
        assert extract_article("<body><h1>H</h1><p>x</p></body>").title == "H"
        assert extract_article("<p>x</p>").title == ""

    def test_main_used_without_article(self):
        html = "<body><div>sidebar</div><main><p>본문</p></main></body>"
        assert extract_article(html).text == "본문"

    def test_collapses_blank_runs(self):
        html = "<body><p>a</p>\n\n\n\n<p>b</p></body>"
        assert "\n\n\n" not in extract_article(html).text


class TestPixivHelpers:
    """Tests for Pixiv URL and markup helpers."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.pixiv.net/novel/show.php?id=123", True),
            ("https://pixiv.net/artworks/1", True),
            ("https://notpixiv.net/novel/1", False),
            ("https://example.com", False),
        ],
    )
    def test_is_pixiv(self, url, expected):
        assert is_pixiv(url) is expected

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.pixiv.net/novel/show.php?id=123", "123"),
            ("https://www.pixiv.net/novel/456", "456"),
            ("https://www.pixiv.net/novel/series/77", None),
            ("https://www.pixiv.net/artworks/1", None),
        ],
    )
    def test_novel_id(self, url, expected):
        assert pixiv_novel_id(url) == expected

    def test_clean_markup(self):
        content = (
            "[chapter:第一章]\n[[rb:漢字 > かんじ]]です[pixivimage:99]"
            "[newpage]次の[[jumpuri:リンク > https://example.com]]"
        )
        assert clean_pixiv_markup(content) == "第一章\n漢字です\n\n次のリンク"


class TestFetchArticle:
    """Tests for fetch_article function."""

    @pytest.mark.parametrize("url", ["", "   ", "not a url", "ftp://example.com/x"])
    def test_invalid_url(self, url):
        with pytest.raises(ExtractError) as exc_info:
            fetch_article(url)
        assert exc_info.value.code == ExtractError.INVALID_URL

    def test_generic_page(self):
        with patch("httpx.get", return_value=_response(text=ARTICLE_HTML)) as mock_get:
            article = fetch_article("https://example.com/1")
        assert article.title == "Episode 3"
        assert "첫 문단입니다." in article.text
        mock_get.assert_called_once()

    def test_http_error_status(self):
        with patch("httpx.get", return_value=_response(status_code=403)):
            with pytest.raises(ExtractError) as exc_info:
                fetch_article("https://example.com/1")
        assert exc_info.value.code == ExtractError.FETCH_FAILED
        assert "403" in str(exc_info.value)

    def test_network_error(self):
        with patch("httpx.get", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(ExtractError) as exc_info:
                fetch_article("https://example.com/1")
        assert exc_info.value.code == ExtractError.FETCH_FAILED

    def test_empty_page(self):
        with patch("httpx.get", return_value=_response(text="<html><body></body></html>")):
            with pytest.raises(ExtractError) as exc_info:
                fetch_article("https://example.com/1")
        assert exc_info.value.code == ExtractError.EXTRACT_EMPTY

    def test_pixiv_requires_cookie(self):
        with patch("httpx.get") as mock_get:
            with pytest.raises(ExtractError) as exc_info:
                fetch_article("https://www.pixiv.net/novel/show.php?id=123", cookie=" ")
        assert exc_info.value.code == ExtractError.PIXIV_COOKIE_REQUIRED
        mock_get.assert_not_called()

    def test_pixiv_novel(self):
        payload = {
            "error": False,
            "body": {"title": " 제목 ", "content": "一行目[newpage]二行目"},
        }
        with patch("httpx.get", return_value=_response(json_data=payload)) as mock_get:
            article = fetch_article(
                "https://www.pixiv.net/novel/show.php?id=123", cookie="PHPSESSID=abc"
            )

        assert article.title == "제목"
        assert article.text == "一行目\n\n二行目"
        assert article.url == "https://www.pixiv.net/novel/show.php?id=123"
        url = mock_get.call_args.args[0]
        headers = mock_get.call_args.kwargs["headers"]
        assert url == "https://www.pixiv.net/ajax/novel/123"
        assert headers["cookie"] == "PHPSESSID=abc"
        assert headers["referer"] == "https://www.pixiv.net/"

    @pytest.mark.parametrize(
        "payload",
        [
            {"error": True, "message": "restricted"},
            {"error": False, "body": {"content": "  "}},
            {"error": False, "body": []},
            None,
        ],
    )
    def test_pixiv_unexpected_payload(self, payload):
        with patch("httpx.get", return_value=_response(json_data=payload)):
            with pytest.raises(ExtractError) as exc_info:
                fetch_article("https://www.pixiv.net/novel/456", cookie="c")
        assert exc_info.value.code == ExtractError.EXTRACT_EMPTY

    def test_pixiv_non_novel_page_uses_cookie(self):
        with patch("httpx.get", return_value=_response(text=ARTICLE_HTML)) as mock_get:
            fetch_article("https://www.pixiv.net/users/1", cookie="c")
        assert mock_get.call_args.kwargs["headers"]["cookie"] == "c"
