#!/usr/bin/env python3
"""
Math rendering engine boundary.
MathJaxRenderer pipes a whole HTML page through MathJax's node backend
(the `mathjaxify` script) and returns the page with math rendered.
"""
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .config import FIELDS
from .errors import EngineError


class MathRenderer:
    """Anything that turns raw page HTML into HTML with rendered math."""

    def render(self, html: str, options: dict, page_path: Optional[str] = None) -> str:
        raise NotImplementedError


def _find_mathjaxify(cwd: Path) -> Optional[str]:
    found = shutil.which("mathjaxify")
    if found:
        return found
    for candidate in (cwd / "node_modules" / ".bin" / "mathjaxify", cwd / "bin" / "mathjaxify"):
        if candidate.exists():
            return str(candidate)
    return None


def build_flags(options: dict) -> List[str]:
    """Translate engine options into mathjaxify flags, in FIELDS order."""
    flags = []
    for name, flag in FIELDS.items():
        value = options.get(name)
        if value is None:
            continue
        if isinstance(value, bool):
            if value:
                flags.append(flag)
        else:
            flags.extend([flag, str(value)])
    return flags


class MathJaxRenderer(MathRenderer):
    def __init__(self, script: Optional[str] = None, node: str = "node", cwd: Optional[Path] = None):
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.script = script
        self.node = node

    def command(self, options: dict) -> List[str]:
        script = self.script or _find_mathjaxify(self.cwd)
        if not script:
            raise EngineError("'mathjaxify' not found (install it or pass its path)")
        return [self.node, str(script)] + build_flags(options)

    def render(self, html: str, options: dict, page_path: Optional[str] = None) -> str:
        cmd = self.command(options)
        env = dict(os.environ)
        env["NODE_PATH"] = str(self.cwd / "node_modules")
        where = f" for {page_path}" if page_path else ""

        try:
            result = subprocess.run(
                cmd,
                input=html,
                cwd=self.cwd,
                env=env,
                capture_output=True,
                text=True,
                encoding="utf-8",
            )
        except OSError as e:
            raise EngineError(f"Failed to execute {' '.join(cmd)}{where}: {e}") from e

        if result.returncode != 0:
            tail = "\n".join((result.stderr or "").splitlines()[-20:])
            raise EngineError(f"mathjaxify exited with code {result.returncode}{where}\n{tail}".rstrip())
        if not result.stdout:
            raise EngineError(f"mathjaxify produced no output{where}")
        return result.stdout
