#!/usr/bin/env python3
"""
Minimal static site host.
Discovers pages under a source directory, renders them as Jinja2 templates
and writes the result to a destination directory.

The derived CSP map file must never be read back as site input, otherwise
each build would pick up the previous build's map as a page or asset. It is
always excluded here.
"""
import shutil
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError

from . import config
from .errors import SourcesTagError, TemplateRenderError
from .sources_tag import MathJaxSourcesExtension


def url_for_path(rel_path: str) -> str:
    """
    index.html -> /, docs/index.html -> /docs/, post.html -> /post,
    feed.xml -> /feed.xml
    """
    p = PurePosixPath(rel_path)
    if p.name in ("index.html", "index.htm"):
        parent = p.parent.as_posix()
        return "/" if parent == "." else f"/{parent}/"
    if p.suffix in (".html", ".htm"):
        return "/" + p.with_suffix("").as_posix()
    return "/" + p.as_posix()


class Page:
    def __init__(self, path: str, content: str):
        self.path = path
        self.content = content
        self.output = ""
        self.url = url_for_path(path)

    @property
    def output_ext(self) -> str:
        suffix = PurePosixPath(self.path).suffix.lower()
        return ".html" if suffix == ".htm" else suffix

    def template_vars(self) -> dict:
        return {"path": self.path, "url": self.url}

    def __repr__(self):
        return f"Page({self.path!r})"


class Site:
    def __init__(self, source: Path, destination: Path, exclude: Optional[Iterable[str]] = None,
                 csp_map_name: str = config.CSP_MAP_FILENAME):
        self.source = Path(source).resolve()
        self.destination = Path(destination).resolve()
        self.exclude = set(exclude or ())
        self.exclude.add(csp_map_name)
        self.pages: List[Page] = []
        self.static_files: List[Path] = []
        self.environment = Environment(
            loader=FileSystemLoader(str(self.source)),
            extensions=[MathJaxSourcesExtension],
            keep_trailing_newline=True,
            autoescape=False,
        )

    def _is_excluded(self, rel: PurePosixPath) -> bool:
        for part in rel.parts:
            if part.startswith(("_", ".")) or part in self.exclude:
                return True
        return rel.as_posix() in self.exclude

    def read(self) -> "Site":
        """Collect pages and static files from the source directory."""
        self.pages.clear()
        self.static_files.clear()
        for f in sorted(self.source.rglob("*")):
            if not f.is_file():
                continue
            if f.resolve().is_relative_to(self.destination):
                continue
            rel = PurePosixPath(f.relative_to(self.source).as_posix())
            if self._is_excluded(rel):
                continue
            if f.suffix.lower() in config.PAGE_EXTENSIONS:
                self.pages.append(Page(rel.as_posix(), f.read_text(encoding="utf-8")))
            else:
                self.static_files.append(f)
        print(f"--> Read {len(self.pages)} pages and {len(self.static_files)} static files from {self.source}")
        return self

    def attach(self, session) -> None:
        self.environment.mathjax_csp_session = session

    def detach(self) -> None:
        self.environment.mathjax_csp_session = None

    def render_page(self, page: Page) -> str:
        try:
            template = self.environment.from_string(page.content)
            page.output = template.render(
                page=page.template_vars(),
                site={"pages": [p.url for p in self.pages]},
            )
        except SourcesTagError:
            raise
        except TemplateError as e:
            raise TemplateRenderError(f"{page.path}: {e}") from e
        return page.output

    def destination_for(self, page: Page) -> Path:
        """Pages ship under their output extension, so .htm sources are written as .html."""
        return self.destination / PurePosixPath(page.path).with_suffix(page.output_ext).as_posix()

    def write(self) -> None:
        for page in self.pages:
            out = self.destination_for(page)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(page.output, encoding="utf-8")
        for f in self.static_files:
            out = self.destination / f.relative_to(self.source)
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(f, out)
        print(f"--> Wrote {len(self.pages)} pages and {len(self.static_files)} static files to {self.destination}")
