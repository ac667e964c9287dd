import pytest

from mathjax_csp.mathifier import has_math, is_mathable
from mathjax_csp.site import Page, Site, url_for_path


@pytest.mark.parametrize("path,url", [
    ("index.html", "/"),
    ("notes/index.html", "/notes/"),
    ("post.html", "/post"),
    ("notes/post.htm", "/notes/post"),
    ("feed.xml", "/feed.xml"),
])
def test_url_for_path(path, url):
    assert url_for_path(path) == url


def test_mathable_pages():
    assert is_mathable(Page("post.html", ""))
    assert is_mathable(Page("notes/index.html", ""))
    assert not is_mathable(Page("feed.xml", ""))


@pytest.mark.parametrize("text,expected", [
    ("$$x^2$$", True),
    (r"inline \(a+b\) math", True),
    (r"display \[a+b\] math", True),
    ('<script type="math/tex">x</script>', True),
    ("costs $5", False),
    ("", False),
])
def test_has_math(text, expected):
    assert has_math(text) is expected


def test_read_skips_private_and_generated_files(make_site):
    source, dest = make_site({
        "index.html": "hi",
        "notes/post.html": "post",
        "feed.xml": "<feed/>",
        "style.css": "a{}",
        "csp.conf": "map $uri $csp {}",
        "_drafts/wip.html": "wip",
        ".hidden.html": "no",
    })
    site = Site(source, dest).read()
    assert [p.path for p in site.pages] == ["feed.xml", "index.html", "notes/post.html"]
    assert [f.name for f in site.static_files] == ["style.css"]


def test_destination_inside_source_is_not_read(make_site):
    source, _ = make_site({"index.html": "hi"})
    out = source / "out"
    out.mkdir()
    (out / "index.html").write_text("old build")
    site = Site(source, out).read()
    assert [p.path for p in site.pages] == ["index.html"]


def test_render_and_write(make_site):
    source, dest = make_site({
        "index.html": '{% extends "_layouts/default.html" %}{% block body %}<p>{{ page.url }}</p>{% endblock %}',
        "style.css": "a{}",
    })
    site = Site(source, dest).read()
    site.render_page(site.pages[0])
    assert "<p>/</p>" in site.pages[0].output
    site.write()
    assert (dest / "index.html").read_text(encoding="utf-8") == site.pages[0].output
    assert (dest / "style.css").read_text() == "a{}"


def test_htm_pages_are_written_as_html(make_site):
    source, dest = make_site({"notes/post.htm": "hi", "feed.xml": "<feed/>"})
    site = Site(source, dest).read()
    for page in site.pages:
        site.render_page(page)
    site.write()
    assert (dest / "notes" / "post.html").read_text(encoding="utf-8") == "hi"
    assert (dest / "feed.xml").exists()
