#!/usr/bin/env python3
"""
MathJax CSP site build
======================

Renders math server-side for every page of a static site, moves MathJax's
inline styles into hashed <style> elements and writes an nginx map with a
per-page Content-Security-Policy.

Usage:
    python run_mathjax_csp.py site _site
    python run_mathjax_csp.py site _site --strip-css
"""

import sys
import os

# Ensure the scripts directory is in the path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)


def main():
    """Main entry point for the site build."""
    from mathjax_csp import run_with_args
    return run_with_args()


if __name__ == "__main__":
    sys.exit(main())
