import os
import sys

import pytest

# Make the package importable without installing it
_scripts_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts")
if _scripts_dir not in sys.path:
    sys.path.insert(0, _scripts_dir)

from fakes import FakeMathJax  # noqa: E402


@pytest.fixture
def fake_mathjax():
    return FakeMathJax()


LAYOUT = """<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Security-Policy" content="style-src 'self' {% block csp %}{% endblock %}">
<title>{{ page.url }}</title>
</head>
<body>
{% block body %}{% endblock %}
</body>
</html>
"""


@pytest.fixture
def make_site(tmp_path):
    """Write {relative path: content} into a fresh source dir; returns (source, destination)."""
    def _make(files):
        source = tmp_path / "src"
        source.mkdir()
        (source / "_layouts").mkdir()
        (source / "_layouts" / "default.html").write_text(LAYOUT, encoding="utf-8")
        for rel, content in files.items():
            f = source / rel
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text(content, encoding="utf-8")
        return source, tmp_path / "dest"
    return _make


def _math_page(body, with_tag=False):
    csp = "{% block csp %}{% mathjax_csp_sources %}{% endblock %}" if with_tag else ""
    return '{% extends "_layouts/default.html" %}' + csp + "{% block body %}" + body + "{% endblock %}"


@pytest.fixture
def math_page():
    """Page template extending the default layout, optionally with the sources tag in its CSP."""
    return _math_page
