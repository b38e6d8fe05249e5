"""Unit tests for link and image URL resolution."""

from __future__ import annotations

from urllib.parse import urlsplit

import pytest

from kakomon.extractors.urlnorm import UnresolvableURLError, resolve_url

BASE = "https://www.ap-siken.com/kakomon/21_haru/q31.html"


class TestAbsoluteReferences:
    def test_returned_unchanged(self):
        href = "https://example.com/post?id=1#answer"
        assert resolve_url(BASE, href) == href

    def test_independent_of_base(self):
        href = "https://example.com/a/b.html"
        assert resolve_url(BASE, href) == resolve_url("http://other.test/x/y", href)

    def test_lowercases_scheme_and_host(self):
        assert resolve_url(BASE, "HTTPS://Example.COM/Post") == "https://example.com/Post"

    def test_empty_path_becomes_slash(self):
        assert resolve_url(BASE, "https://example.com") == "https://example.com/"

    def test_removes_default_http_port(self):
        assert resolve_url(BASE, "http://example.com:80/post") == "http://example.com/post"

    def test_removes_default_https_port(self):
        assert resolve_url(BASE, "https://example.com:443/post") == "https://example.com/post"

    def test_keeps_non_default_port(self):
        assert resolve_url(BASE, "https://example.com:8443/post") == "https://example.com:8443/post"

    def test_keeps_query_untouched(self):
        href = "https://example.com/post?utm_source=x&b=2&a=1"
        assert resolve_url(BASE, href) == href

    def test_query_brackets_and_pipes_kept(self):
        href = "https://example.com/s?tags[]=a&x=1|2&q={k}^`v`"
        assert resolve_url(BASE, href) == href

    def test_path_pipe_caret_brackets_kept(self):
        href = "https://example.com/a|b^c/[d]"
        assert resolve_url(BASE, href) == href

    def test_fragment_braces_kept(self):
        href = "https://example.com/p#{section}|1"
        assert resolve_url(BASE, href) == href

    def test_path_braces_and_backtick_encoded(self):
        result = resolve_url(BASE, "https://example.com/{a}`b")
        assert result == "https://example.com/%7Ba%7D%60b"

    def test_non_hierarchical_scheme(self):
        assert resolve_url(BASE, "mailto:info@example.com") == "mailto:info@example.com"


class TestRelativeReferences:
    def test_root_relative(self):
        result = resolve_url("https://www.ap-siken.com/", "/kakomon/21_haru/q31.html")
        assert result == "https://www.ap-siken.com/kakomon/21_haru/q31.html"

    def test_document_relative(self):
        assert resolve_url(BASE, "q2.html") == "https://www.ap-siken.com/kakomon/21_haru/q2.html"

    def test_parent_directory(self):
        result = resolve_url(BASE, "../img/q31.png")
        assert result == "https://www.ap-siken.com/kakomon/img/q31.png"

    def test_protocol_relative_inherits_scheme(self):
        assert resolve_url(BASE, "//cdn.example.com/a.png") == "https://cdn.example.com/a.png"

    def test_query_only(self):
        result = resolve_url("https://example.com/list", "?page=2")
        assert result == "https://example.com/list?page=2"

    def test_fragment_only(self):
        result = resolve_url("https://example.com/list", "#top")
        assert result == "https://example.com/list#top"

    def test_base_host_is_normalized(self):
        assert resolve_url("https://WWW.AP-SIKEN.COM/", "/x.html") == "https://www.ap-siken.com/x.html"

    def test_surrounding_whitespace_ignored(self):
        assert resolve_url(BASE, "  /x.html\t") == "https://www.ap-siken.com/x.html"

    @pytest.mark.parametrize(
        "href",
        ["/a.html", "b/c.html", "../d.html", "?q=1", "#frag", "./", "img/問題.png"],
    )
    def test_scheme_and_authority_come_from_base(self, href):
        result = urlsplit(resolve_url(BASE, href))
        base = urlsplit(BASE)
        assert result.scheme == base.scheme
        assert result.netloc == base.netloc


class TestEncoding:
    def test_space_percent_encoded(self):
        assert resolve_url("https://example.com/", "/a b.html") == "https://example.com/a%20b.html"

    def test_non_ascii_path_percent_encoded(self):
        result = resolve_url("https://example.com/", "/問題.html")
        assert result == "https://example.com/%E5%95%8F%E9%A1%8C.html"

    def test_quote_and_angle_brackets_encoded(self):
        result = resolve_url("https://example.com/", '/a"<b>.html')
        assert result == "https://example.com/a%22%3Cb%3E.html"

    def test_relative_query_brackets_kept(self):
        result = resolve_url("https://example.com/list", "?tags[]=a")
        assert result == "https://example.com/list?tags[]=a"

    def test_existing_escapes_preserved(self):
        assert resolve_url("https://example.com/", "/a%20b.html") == "https://example.com/a%20b.html"


class TestUnresolvable:
    @pytest.mark.parametrize("href", ["", "   ", "/a\x00b", "/a\nb", "\x7f", "http://[::1"])
    def test_raises(self, href):
        with pytest.raises(UnresolvableURLError):
            resolve_url(BASE, href)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_url(BASE, "")

    def test_error_carries_href(self):
        with pytest.raises(UnresolvableURLError) as exc_info:
            resolve_url(BASE, "/a\x01")
        assert exc_info.value.href == "/a\x01"
