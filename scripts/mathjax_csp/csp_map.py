#!/usr/bin/env python3
"""
nginx CSP map emitter.
Writes a `map $uri $csp { ... }` block giving every page its own
Content-Security-Policy with the page's hash sources filled in.
Include it from the server config and send `add_header Content-Security-Policy $csp;`.
"""
from pathlib import Path

from .config import CSP_TOKEN
from .hash_recorder import HashTable


def fill_csp(template: str, sources: str) -> str:
    return template.replace(CSP_TOKEN, sources, 1)


def default_csp(template: str) -> str:
    """Policy for URLs with no hashes: the template with its token removed."""
    if f" {CSP_TOKEN}" in template:
        return template.replace(f" {CSP_TOKEN}", "", 1)
    return template.replace(CSP_TOKEN, "", 1)


def render_csp_map(hashes: HashTable, template: str) -> str:
    rows = f'\ndefault "{default_csp(template)}";\n'
    for url, sources in hashes.items():
        policy = fill_csp(template, sources)
        rows += f'\t"{url}" "{policy}";\n'
        rows += f'\t"{url}.html" "{policy}";\n'
    return f"map $uri $csp {{{rows}}}\n"


def write_csp_map(path: Path, hashes: HashTable, template: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_csp_map(hashes, template), encoding="utf-8")
    print(f"  [CSP] Added CSP hashes for {len(hashes)} pages into {path}")
    print(f"  [CSP] Keep {path.name} out of the site's input files")
    return path
