#!/usr/bin/env python3
"""
The {% mathjax_csp_sources %} template tag.

While the first pass collects hashes the tag prints a placeholder source and
registers its page for a second pass. Once the session is resolved it prints
the final site-wide list of hash sources.
"""
from jinja2 import nodes
from jinja2.ext import Extension
from markupsafe import Markup

from .errors import SourcesTagError
from .hash_recorder import PLACEHOLDER_SOURCE


class MathJaxSourcesExtension(Extension):
    tags = {"mathjax_csp_sources"}

    def __init__(self, environment):
        super().__init__(environment)
        environment.extend(mathjax_csp_session=None)

    def parse(self, parser):
        lineno = next(parser.stream).lineno
        call = self.call_method("_render_sources", [nodes.ContextReference()], lineno=lineno)
        return nodes.Output([call], lineno=lineno)

    def _render_sources(self, context):
        session = self.environment.mathjax_csp_session
        page = context.get("page")
        if session is None:
            raise SourcesTagError(
                f"mathjax_csp_sources rendered outside a build (template: {context.name})"
            )
        if not page or not page.get("path"):
            raise SourcesTagError(
                f"mathjax_csp_sources used outside a page context (template: {context.name})"
            )

        if session.collecting:
            session.register(page["path"])
            return Markup(PLACEHOLDER_SOURCE)
        return Markup(session.final_source_list)
