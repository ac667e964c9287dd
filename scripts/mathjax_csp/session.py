#!/usr/bin/env python3
"""
Per-build state.
One BuildSession is created when a build starts and dropped when it ends;
every stage that needs the hash table, the second-pass registry or the pass
state gets it from here.
"""
from enum import Enum
from typing import Dict, Optional, Set

from .config import MathJaxCSPConfig
from .hash_recorder import PLACEHOLDER_SOURCE, HashTable


class PassState(Enum):
    COLLECTING = "collecting"
    RESOLVED = "resolved"


class BuildSession:
    def __init__(self, config: Optional[MathJaxCSPConfig] = None):
        self.config = config or MathJaxCSPConfig()
        self.hashes = HashTable()
        # Paths of pages that rendered the sources tag during the first pass
        self.second_pass_pages: Set[str] = set()
        # Page path -> template content before any rendering
        self.unrendered: Dict[str, str] = {}
        self.state = PassState.COLLECTING
        self.final_source_list: Optional[str] = None

    @property
    def collecting(self) -> bool:
        return self.state is PassState.COLLECTING

    @property
    def needs_second_pass(self) -> bool:
        return bool(self.second_pass_pages)

    def snapshot(self, page) -> None:
        self.unrendered[page.path] = page.content

    def register(self, page_path: str) -> None:
        if self.collecting:
            self.second_pass_pages.add(page_path)

    def resolve(self) -> str:
        """Freeze the site-wide source list and switch the sources tag to it."""
        if not self.collecting:
            raise RuntimeError("Build session already resolved")
        self.final_source_list = self.hashes.aggregate() or PLACEHOLDER_SOURCE
        self.state = PassState.RESOLVED
        return self.final_source_list
