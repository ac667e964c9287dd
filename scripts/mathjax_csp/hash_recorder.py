#!/usr/bin/env python3
"""
CSP hash bookkeeping.
Minifies inline <style> content, computes its CSP hash source and records it
against the page that ships it.
"""
import base64
import hashlib
from typing import Dict, Iterator, List, Tuple

import csscompressor
from bs4 import Comment
from bs4.element import NavigableString, Stylesheet


def minify_css(css: str) -> str:
    """Minify CSS. Running it on already minified CSS returns it unchanged."""
    return csscompressor.compress(css or "").strip()


def csp_hash_source(text: str) -> str:
    """Return the 'sha256-...' CSP source for an exact inline content blob."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return f"'sha256-{base64.b64encode(digest).decode('ascii')}'"


# Hash of the empty style element; emitted by the sources tag before the real list is known
PLACEHOLDER_SOURCE = csp_hash_source("")


class HashTable:
    """Page URL -> CSP hash sources shipped by that page, in recording order.

    Append-only: a page keeps every source it ever recorded, and recording a
    source the page already holds is a no-op.
    """

    def __init__(self):
        self._sources: Dict[str, List[str]] = {}

    def record(self, url: str, source: str) -> bool:
        entry = self._sources.setdefault(url, [])
        if source in entry:
            return False
        entry.append(source)
        return True

    def ensure(self, url: str, source: str) -> None:
        """Give a page without any source a single one."""
        if not self._sources.get(url):
            self._sources[url] = [source]

    def sources(self, url: str) -> List[str]:
        return list(self._sources.get(url, []))

    def joined(self, url: str) -> str:
        return " ".join(self._sources.get(url, []))

    def aggregate(self) -> str:
        """Every recorded source across the site, first-seen order, no repeats."""
        seen = dict.fromkeys(source for entry in self._sources.values() for source in entry)
        return " ".join(seen)

    def items(self) -> Iterator[Tuple[str, str]]:
        for url in self._sources:
            yield url, self.joined(url)

    def __contains__(self, url) -> bool:
        return url in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self):
        return f"HashTable({self._sources!r})"


def style_text(style_tag) -> str:
    return "".join(str(child) for child in style_tag.contents if isinstance(child, NavigableString))


def hash_style_tag(style_tag, page_url: str, hashes: HashTable) -> str:
    """
    Minify a <style> element in place, hash exactly what will ship and
    record the hash for the page.

    A comment holding the hash source is inserted right before the element
    so the built HTML shows which source covers which block.
    """
    css = minify_css(style_text(style_tag))
    style_tag.string = Stylesheet(css)
    source = csp_hash_source(css)
    style_tag.insert_before(Comment(f" {source} "))
    hashes.record(page_url, source)
    return source
