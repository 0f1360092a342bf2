# File: tests/test_text_renderer.py
import pytest

from site_parity.extractor.text_renderer import render
from site_parity.models import ContentSection
from site_parity.parser.html_parser import parse_html
from site_parity.urls import ResolutionMode

BASE = "https://site.com/page"


def text_of(html: str, **kwargs) -> str:
    sections = render(parse_html(html), BASE, **kwargs)
    assert sections[0].label == "section 1"
    return sections[0].text


def test_inline_tokens_are_space_separated():
    html = "<body><p>Hello <b>big</b> world</p><p>Second</p></body>"
    assert text_of(html) == "Hello big world\n\nSecond"


def test_no_token_collision_between_inline_elements():
    assert text_of("<p><span>one</span><span>two</span></p>") == "one two"


def test_link_marker():
    html = '<p>See <a href="/docs?page=2#top">the docs</a>.</p>'
    assert text_of(html) == "See [the docs](https://site.com/docs) ."


def test_mailto_renders_plain_anchor_text():
    assert text_of('<p>Write <a href="mailto:info@site.com">us</a></p>') == "Write us"


@pytest.mark.parametrize(
    "anchor,expected",
    [
        ('<a href="/x"><img src="i.png"></a>', "Icon"),
        ("<a>plain</a>", "Icon plain"),
        ('<a href="">empty</a>', "Icon empty"),
        ('<a href="#">top</a>', "Icon top"),
        ('<a href="http://[bad">bad</a>', "Icon bad"),
    ],
)
def test_link_marker_never_has_a_missing_half(anchor, expected):
    assert text_of(f"<p>Icon {anchor}</p>") == expected


def test_marker_text_is_whitespace_normalized():
    html = '<p><a href="/a">  two\n   words </a></p>'
    assert text_of(html) == "[two words](https://site.com/a)"


def test_hidden_elements_are_excluded():
    html = (
        "<body><script>var x = 1;</script><style>p { color: red }</style>"
        "<p>Visible</p><noscript>enable js</noscript><template><p>tpl</p></template></body>"
    )
    assert text_of(html) == "Visible"


def test_title_and_head_do_not_render():
    assert text_of("<title>T</title><p>x</p>") == "x"


def test_line_break():
    assert text_of("<p>line one<br>line two</p>") == "line one\nline two"


def test_blocks_never_share_a_line():
    html = "<h1>Title</h1><ul><li>One</li><li>Two</li></ul><div>Tail</div>"
    assert text_of(html) == "Title\n\nOne\n\nTwo\n\nTail"


def test_blank_line_runs_collapse():
    html = "<div><p>A</p>\n\n\n<div></div><div> </div><p>B</p></div>"
    assert text_of(html) == "A\n\nB"


def test_whitespace_runs_collapse():
    assert text_of("<p>  lots   of\n\t space  </p>") == "lots of space"


def test_content_regions_become_numbered_sections():
    html = (
        "<body><nav><a href='/'>Home</a></nav>"
        "<main><p>Main text</p></main>"
        "<article><p>Article</p></article></body>"
    )
    assert render(parse_html(html), BASE) == [
        ContentSection("section 1", "Main text"),
        ContentSection("section 2", "Article"),
    ]


def test_nested_regions_are_rendered_once():
    html = "<main><article><p>Inner</p></article><p>Outer</p></main>"
    assert render(parse_html(html), BASE) == [ContentSection("section 1", "Inner\n\nOuter")]


@pytest.mark.parametrize(
    "container",
    ['<div class="post-content">', '<div role="main">', '<div class="Entry-Content">'],
)
def test_content_hints(container):
    html = f"<body><p>Skip me</p>{container}<p>Body</p></div></body>"
    assert render(parse_html(html), BASE) == [ContentSection("section 1", "Body")]


def test_whitespace_only_region_adds_no_section():
    html = "<body><section>   \n </section><p>Outside</p></body>"
    assert render(parse_html(html), BASE) == [ContentSection("section 1", "Outside")]


def test_boilerplate_is_stripped():
    html = (
        "<body><header>Site header</header><p>Text</p>"
        "<footer>Foot</footer><div class='sidebar'>Side</div></body>"
    )
    assert text_of(html) == "Text"
    assert text_of(html, strip_boilerplate=False) == "Site header\n\nText\n\nFoot\n\nSide"


def test_region_inside_boilerplate_is_ignored():
    html = "<body><nav><section><p>Menu</p></section></nav><p>Body</p></body>"
    assert render(parse_html(html), BASE) == [ContentSection("section 1", "Body")]


def test_empty_document_yields_one_empty_section():
    assert render(parse_html(""), BASE) == [ContentSection("section 1", "")]


def test_images_section():
    html = (
        '<main><p>Hi</p><img src="/a.png" alt="A pic" width="640" height="480">'
        '<img src="/b.png" width="10"><img src="/a.png"><img src="data:image/png;base64,AAA"></main>'
    )
    sections = render(parse_html(html), BASE, include_images=True)
    assert sections == [
        ContentSection("section 1", "Hi"),
        ContentSection(
            "images",
            "![A pic](https://site.com/a.png) 640x480\n![image](https://site.com/b.png)",
        ),
    ]


def test_images_section_is_optional():
    html = '<main><p>Hi</p><img src="/a.png"></main>'
    assert [s.label for s in render(parse_html(html), BASE)] == ["section 1"]
    assert [s.label for s in render(parse_html("<p>no images</p>"), BASE, include_images=True)] == [
        "section 1"
    ]


def test_document_resolution_mode_in_markers():
    html = '<p><a href="img.png">pic</a></p>'
    sections = render(parse_html(html), "https://site.com/blog/post", mode=ResolutionMode.DOCUMENT)
    assert sections[0].text == "[pic](https://site.com/blog/img.png)"
