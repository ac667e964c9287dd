#!/usr/bin/env python3
"""
MathJax CSP Package
===================

Server-side MathJax rendering for static sites that ship a strict
Content-Security-Policy. Inline styles produced by MathJax are moved into
hashed <style> elements, and the hash sources are handed back to templates
(via {% mathjax_csp_sources %}) and to nginx (via a generated csp.conf map).

Modules:
    - config: Constants and the mathjax_csp option set
    - errors: Build-aborting exceptions
    - hash_recorder: CSS minification, CSP hash sources, per-page hash table
    - style_extractor: style attribute -> CSS class extraction and compilation
    - session: Per-build state and pass state machine
    - sources_tag: The {% mathjax_csp_sources %} Jinja2 tag
    - renderer: The mathjaxify subprocess boundary
    - mathifier: Per-page math processing
    - coordinator: Two-pass build
    - csp_map: nginx map emitter
    - site: Minimal page/site host

Usage:
    from mathjax_csp import run
    run("site", "_site")

    # Or from the command line:
    mathjax-csp site _site --config site/_config.json
"""

__version__ = "1.0.0"
__author__ = "mathjax-csp contributors"

import sys
from pathlib import Path
from typing import Optional


def run(source, destination, config_path=None, mathjaxify: Optional[str] = None,
        csp_map: Optional[str] = None, strip_css: Optional[bool] = None, renderer=None):
    """
    Build a site with server-side math and write its nginx CSP map.

    Args:
        source: Site source directory.
        destination: Output directory.
        config_path: JSON site config; defaults to <source>/_config.json when present.
        mathjaxify: Path to the mathjaxify script (overrides the config).
        csp_map: Where to write the nginx map (overrides the config).
        strip_css: Drop MathJax's own <style> instead of hashing it (overrides the config).
        renderer: Math renderer to use instead of spawning mathjaxify.
    """
    from .config import SITE_CONFIG_FILENAME, MathJaxCSPConfig, load_site_config
    from .coordinator import run_build

    source = Path(source)
    if config_path is None and (source / SITE_CONFIG_FILENAME).exists():
        config_path = source / SITE_CONFIG_FILENAME

    options = load_site_config(config_path) if config_path else {}
    if mathjaxify:
        options["mathjaxify"] = mathjaxify
    if csp_map:
        options["csp_map"] = csp_map
    if strip_css is not None:
        options["strip_css"] = strip_css

    print(f"--> Building {source} -> {destination}")
    return run_build(source, Path(destination), MathJaxCSPConfig.from_dict(options), renderer)


def run_with_args(argv=None) -> int:
    """
    Run a build with command-line arguments.
    This is the CLI entry point.
    """
    import argparse

    from jinja2 import TemplateError

    from .errors import MathJaxCSPError, TemplateRenderError

    parser = argparse.ArgumentParser(
        description="Render MathJax server-side and collect CSP hashes for inline styles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    mathjax-csp site _site
    mathjax-csp site _site --strip-css --csp-map /etc/nginx/csp.conf
        """
    )
    parser.add_argument("source", help="Site source directory")
    parser.add_argument("destination", help="Output directory")
    parser.add_argument("--config", default=None, help="JSON site config (default: <source>/_config.json)")
    parser.add_argument("--mathjaxify", default=None, help="Path to the mathjaxify script")
    parser.add_argument("--csp-map", default=None, help="Where to write the nginx CSP map (default: <source>/csp.conf)")
    parser.add_argument("--strip-css", action="store_true", default=None,
                        help="Remove MathJax's own stylesheet instead of hashing it")

    args = parser.parse_args(argv)
    try:
        run(args.source, args.destination, config_path=args.config, mathjaxify=args.mathjaxify,
            csp_map=args.csp_map, strip_css=args.strip_css)
    except MathJaxCSPError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except TemplateError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return TemplateRenderError.exit_code
    return 0


from .config import MathJaxCSPConfig, load_site_config
from .errors import ConfigurationError, EngineError, MathJaxCSPError, SourcesTagError, TemplateRenderError
from .hash_recorder import PLACEHOLDER_SOURCE, HashTable, csp_hash_source, hash_style_tag, minify_css
from .style_extractor import compile_style_element, ensure_no_inline_styles, extract_style_attributes
from .session import BuildSession, PassState
from .sources_tag import MathJaxSourcesExtension
from .renderer import MathJaxRenderer, MathRenderer
from .mathifier import has_math, is_mathable, mathify
from .coordinator import build, run_build
from .csp_map import render_csp_map, write_csp_map
from .site import Page, Site


__all__ = [
    # Main entry points
    'run',
    'run_with_args',
    'build',
    'run_build',
    # Config & errors
    'MathJaxCSPConfig',
    'load_site_config',
    'MathJaxCSPError',
    'ConfigurationError',
    'EngineError',
    'SourcesTagError',
    'TemplateRenderError',
    # Hashing
    'PLACEHOLDER_SOURCE',
    'HashTable',
    'csp_hash_source',
    'hash_style_tag',
    'minify_css',
    # Styles
    'compile_style_element',
    'ensure_no_inline_styles',
    'extract_style_attributes',
    # Session & tag
    'BuildSession',
    'PassState',
    'MathJaxSourcesExtension',
    # Rendering
    'MathJaxRenderer',
    'MathRenderer',
    'has_math',
    'is_mathable',
    'mathify',
    # Output
    'render_csp_map',
    'write_csp_map',
    'Page',
    'Site',
]
