#!/usr/bin/env python3
"""
MathJax CSP configuration.
Constants shared across modules plus the per-site option set.
"""
import json
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

# --- CONSTANTS ---
MATH_TAG_REGEX = re.compile(
    r'(<script[^>]*type="math/tex|\\\[.*\\\]|\\\(.*\\\)|\$\$.*?\$\$)',
    re.IGNORECASE | re.DOTALL,
)

# Engine option name -> mathjaxify command line flag
FIELDS = {
    "em_size": "--em",
    "ex_size": "--ex",
    "single_dollars": "--singleDollars",
    "output": "--output",
}

# Elements MathJax emits with inline style attributes
STYLED_SELECTOR = "svg[style], mjx-container[style]"
CLASS_PREFIX = "mathjax-inline-"

CSP_TOKEN = "[CSP]"
DEFAULT_CSP = "default-src 'self'; style-src 'self' [CSP];"
CSP_MAP_FILENAME = "csp.conf"
SITE_CONFIG_FILENAME = "_config.json"

PAGE_EXTENSIONS = (".html", ".htm", ".xml")


@dataclass
class MathJaxCSPConfig:
    """Options read from the ``mathjax_csp`` section of the site config."""
    default_csp: str = DEFAULT_CSP
    strip_css: bool = False
    em_size: Optional[float] = None
    ex_size: Optional[float] = None
    single_dollars: Optional[bool] = None
    output: Optional[str] = None
    mathjaxify: Optional[str] = None
    csp_map: Optional[str] = None

    def __post_init__(self):
        count = self.default_csp.count(CSP_TOKEN)
        if count != 1:
            raise ConfigurationError(
                f"default_csp must contain {CSP_TOKEN} exactly once (found {count}): {self.default_csp!r}"
            )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "MathJaxCSPConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown mathjax_csp option(s): {', '.join(unknown)}")
        if data.get("default_csp") is None:
            data.pop("default_csp", None)
        return cls(**data)

    def engine_options(self) -> dict:
        """Options passed through to the rendering engine (unset ones omitted)."""
        options = {}
        for name in FIELDS:
            value = getattr(self, name)
            if value is not None:
                options[name] = value
        return options


def load_site_config(path: Path) -> dict:
    """Load a JSON site config and return its mathjax_csp section."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    section = data.get("mathjax_csp") or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"mathjax_csp in {path} must be an object")
    return section
