#!/usr/bin/env python3
"""
Per-page math processing.
Runs a rendered page through the math engine, turns MathJax's inline styles
into hashed <style> content and records the hashes in the build session.
"""
from bs4 import BeautifulSoup

from . import config
from .hash_recorder import hash_style_tag
from .renderer import MathRenderer
from .session import BuildSession
from .style_extractor import (
    compile_style_element,
    ensure_no_inline_styles,
    extract_style_attributes,
    get_or_create_head,
)


def is_mathable(page) -> bool:
    """Pages whose output is HTML (or served from a directory URL) get math processing."""
    return page.output_ext == ".html" or page.url.endswith("/")


def has_math(output: str) -> bool:
    return bool(output) and config.MATH_TAG_REGEX.search(output) is not None


def mathify(page, session: BuildSession, renderer: MathRenderer) -> bool:
    """
    Render math on page.output in place.
    Returns False when the page has no math markers and was left alone.
    """
    if not has_math(page.output):
        return False

    print(f"  [Math] Rendering math: {page.path}")
    soup = BeautifulSoup(page.output, "html.parser")
    ensure_no_inline_styles(soup, page.path)

    rendered = renderer.render(page.output, session.config.engine_options(), page_path=page.path)
    soup = BeautifulSoup(rendered, "html.parser")

    # MathJax appends its own stylesheet as the last element of <head>
    head = get_or_create_head(soup)
    children = head.find_all(recursive=False)
    if children and children[-1].name == "style":
        if session.config.strip_css:
            # Stylesheet is expected to be linked as an external file instead
            children[-1].decompose()
        else:
            hash_style_tag(children[-1], page.url, session.hashes)

    style_attributes = extract_style_attributes(soup)
    compile_style_element(soup, style_attributes, page.url, session.hashes)
    page.output = str(soup)
    return True
