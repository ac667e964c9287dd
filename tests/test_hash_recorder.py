import base64
import hashlib

from bs4 import BeautifulSoup

from mathjax_csp.hash_recorder import (
    PLACEHOLDER_SOURCE,
    HashTable,
    csp_hash_source,
    hash_style_tag,
    minify_css,
    style_text,
)

CSS = """
.mathjax-inline-0123456789abcdef { vertical-align : -0.186ex ; }
mjx-container[jax="SVG"] > svg { overflow: visible; }
"""


def test_placeholder_is_hash_of_empty_style():
    assert PLACEHOLDER_SOURCE == "'sha256-47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU='"
    assert csp_hash_source("") == PLACEHOLDER_SOURCE


def test_hash_source_format():
    expected = base64.b64encode(hashlib.sha256(b"a{color:red}").digest()).decode()
    assert csp_hash_source("a{color:red}") == f"'sha256-{expected}'"


def test_hash_source_is_content_deterministic():
    assert csp_hash_source(minify_css(CSS)) == csp_hash_source(minify_css(CSS))
    assert csp_hash_source("a{color:red}") != csp_hash_source("a{color:blue}")


def test_minify_is_idempotent():
    once = minify_css(CSS)
    assert once
    assert "\n" not in once
    assert minify_css(once) == once


def test_hash_table_keeps_order_and_skips_repeats():
    table = HashTable()
    assert table.record("/a", "'sha256-A'")
    assert table.record("/a", "'sha256-B'")
    assert not table.record("/a", "'sha256-A'")
    table.record("/b", "'sha256-B'")
    table.record("/b", "'sha256-C'")

    assert table.sources("/a") == ["'sha256-A'", "'sha256-B'"]
    assert table.joined("/a") == "'sha256-A' 'sha256-B'"
    assert table.aggregate() == "'sha256-A' 'sha256-B' 'sha256-C'"
    assert list(table.items()) == [("/a", "'sha256-A' 'sha256-B'"), ("/b", "'sha256-B' 'sha256-C'")]
    assert "/a" in table and "/c" not in table
    assert len(table) == 2


def test_hash_table_ensure_only_fills_empty_entries():
    table = HashTable()
    table.record("/a", "'sha256-A'")
    table.ensure("/a", PLACEHOLDER_SOURCE)
    table.ensure("/b", PLACEHOLDER_SOURCE)
    assert table.sources("/a") == ["'sha256-A'"]
    assert table.sources("/b") == [PLACEHOLDER_SOURCE]


def test_hash_style_tag_hashes_what_ships():
    soup = BeautifulSoup(f"<html><head><style>{CSS}</style></head><body></body></html>", "html.parser")
    table = HashTable()

    source = hash_style_tag(soup.style, "/page", table)

    shipped = style_text(soup.style)
    assert shipped == minify_css(CSS)
    assert source == csp_hash_source(shipped)
    assert table.sources("/page") == [source]
    # child combinator must survive serialization unescaped
    assert f"<style>{shipped}</style>" in str(soup)
    assert "&gt;" not in str(soup)


def test_hash_style_tag_adds_comment_outside_hashed_content():
    soup = BeautifulSoup("<html><head><style>a { color: red; }</style></head></html>", "html.parser")
    source = hash_style_tag(soup.style, "/page", HashTable())
    html = str(soup)
    assert f"<!-- {source} --><style>" in html
    assert source not in style_text(soup.style)


def test_hash_style_tag_same_content_twice_records_once():
    table = HashTable()
    for _ in range(2):
        soup = BeautifulSoup("<head><style>a { color: red; }</style></head>", "html.parser")
        hash_style_tag(soup.style, "/page", table)
    assert len(table.sources("/page")) == 1
