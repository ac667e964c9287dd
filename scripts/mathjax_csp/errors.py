#!/usr/bin/env python3
"""
Exceptions raised during a build. All of them are fatal.
"""
from jinja2 import TemplateError


class MathJaxCSPError(RuntimeError):
    """Base class for build-aborting errors."""
    exit_code = 1


class ConfigurationError(MathJaxCSPError):
    """Bad configuration, or inline styles present before math rendering."""
    exit_code = 2


class EngineError(MathJaxCSPError):
    """The math rendering engine could not be run or failed."""
    exit_code = 3


class SourcesTagError(MathJaxCSPError, TemplateError):
    """The mathjax_csp_sources tag was rendered outside a page build."""
    exit_code = 4


class TemplateRenderError(MathJaxCSPError):
    """A page template failed to compile or render."""
    exit_code = 4
