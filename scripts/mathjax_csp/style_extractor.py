#!/usr/bin/env python3
"""
Style extraction.
Moves the inline style attributes MathJax puts on <svg> and <mjx-container>
elements into deterministic CSS classes, then compiles those classes into a
single <style> element in the head.
"""
import hashlib
from typing import Dict, Optional

from . import config
from .errors import ConfigurationError
from .hash_recorder import HashTable, hash_style_tag


def style_digest(style: str) -> str:
    """Content digest of a style attribute; names its CSS class."""
    return hashlib.md5(style.encode("utf-8")).hexdigest()[:16]


def ensure_no_inline_styles(soup, page_path: str) -> None:
    """
    Refuse to process a page whose watched elements already carry inline
    styles before MathJax ran. Those would be hashed as if MathJax produced
    them.
    """
    styled = soup.select(config.STYLED_SELECTOR)
    if styled:
        raise ConfigurationError(
            f"{page_path}: inline style on <{styled[0].name}> element present before rendering math "
            "due to misconfiguration or server-side style injection."
        )


def extract_style_attributes(soup) -> Dict[str, str]:
    """
    Replace every watched style attribute with a class named after its digest.
    Returns digest -> style text, one entry per distinct style, in document order.
    """
    style_attributes = {}
    for styled_tag in soup.select(config.STYLED_SELECTOR):
        style_attribute = styled_tag["style"]
        digest = style_digest(style_attribute)
        style_attributes.setdefault(digest, style_attribute)

        digest_class = f"{config.CLASS_PREFIX}{digest}"
        classes = styled_tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        classes = list(classes)
        if digest_class not in classes:
            classes.append(digest_class)
        styled_tag["class"] = classes
        del styled_tag["style"]
    return style_attributes


def get_or_create_head(soup):
    head = soup.head
    if head is not None:
        return head
    head = soup.new_tag("head")
    if soup.html is not None:
        soup.html.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def compile_style_element(soup, style_attributes: Dict[str, str], page_url: str,
                          hashes: HashTable) -> Optional[object]:
    """Compile extracted styles into one <style> at the end of <head> and hash it."""
    if not style_attributes:
        return None

    style_content = "".join(
        f".{config.CLASS_PREFIX}{digest}{{{style}}}" for digest, style in style_attributes.items()
    )
    style_tag = soup.new_tag("style")
    style_tag.string = style_content
    get_or_create_head(soup).append(style_tag)
    hash_style_tag(style_tag, page_url, hashes)
    return style_tag
