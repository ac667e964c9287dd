#!/usr/bin/env python3
"""
Two-pass build coordination.

Pass 1 renders every page, runs math on the eligible ones and collects the
CSP hash of every inline style. Pages using {% mathjax_csp_sources %} only
get a placeholder at that point, so after pass 1 the session is resolved
and exactly those pages are rendered again from their original content.
Pass 2 may record new hashes; they are appended to the page's entry. There
is never a third pass.
"""
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from . import config
from .config import MathJaxCSPConfig
from .csp_map import write_csp_map
from .hash_recorder import PLACEHOLDER_SOURCE
from .mathifier import is_mathable, mathify
from .renderer import MathJaxRenderer, MathRenderer
from .session import BuildSession
from .site import Site


def post_render(page, session: BuildSession, renderer: MathRenderer) -> None:
    if is_mathable(page):
        mathify(page, session, renderer)


def second_pass(site: Site, session: BuildSession, renderer: MathRenderer) -> None:
    pages = [p for p in site.pages if p.path in session.second_pass_pages]
    print(f"--> Adding CSP sources: {' '.join(p.path for p in pages)}")
    for page in pages:
        page.content = session.unrendered[page.path]
        site.render_page(page)
        post_render(page, session, renderer)
        session.hashes.ensure(page.url, PLACEHOLDER_SOURCE)


def build(site: Site, mathjax_config: Optional[MathJaxCSPConfig] = None,
          renderer: Optional[MathRenderer] = None) -> BuildSession:
    """Render every page of an already read site. Returns the finished session."""
    session = BuildSession(mathjax_config)
    renderer = renderer or MathJaxRenderer(script=session.config.mathjaxify, cwd=site.source)
    site.attach(session)
    try:
        for page in site.pages:
            session.snapshot(page)

        for page in tqdm(site.pages, desc="Rendering", unit="page"):
            site.render_page(page)
            post_render(page, session, renderer)

        session.resolve()
        if session.needs_second_pass:
            second_pass(site, session, renderer)
    finally:
        site.detach()
    return session


def run_build(source: Path, destination: Path, mathjax_config: Optional[MathJaxCSPConfig] = None,
              renderer: Optional[MathRenderer] = None) -> BuildSession:
    """Read, build and write a site, then emit the nginx CSP map."""
    mathjax_config = mathjax_config or MathJaxCSPConfig()
    csp_map_path = Path(mathjax_config.csp_map or Path(source) / config.CSP_MAP_FILENAME)

    site = Site(source, destination, csp_map_name=csp_map_path.name).read()
    session = build(site, mathjax_config, renderer)
    site.write()
    write_csp_map(csp_map_path, session.hashes, session.config.default_csp)
    return session
