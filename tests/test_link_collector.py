# File: tests/test_link_collector.py
from site_parity.extractor.link_collector import collect
from site_parity.extractor.text_renderer import render
from site_parity.models import LinkOrigin, LinkRecord
from site_parity.parser.html_parser import parse_html
from site_parity.urls import ResolutionMode

BASE = "https://site.com/page"

PAGE = """\
<html><body>
  <a href="/x">A</a>
  <a href="/x#frag">A again</a>
  <a href="/x?utm=1">A third</a>
  <a href="https://other.com/y" rel="nofollow noopener">Other</a>
  <a href="mailto:info@site.com">Mail</a>
  <a href="tel:+100">Call</a>
  <a href="#">Top</a>
  <a href="">Empty</a>
  <a>No href</a>
  <a href="/z">   </a>
  <a href="http://[bad">Bad</a>
  <a href="/after-bad">  After
  </a>
</body></html>
"""


def test_collects_canonical_deduplicated_links_in_order():
    links = collect(parse_html(PAGE), BASE)
    assert [link.url for link in links] == [
        "https://site.com/x",
        "https://other.com/y",
        "https://site.com/z",
        "https://site.com/after-bad",
    ]


def test_first_encounter_wins():
    links = collect(parse_html(PAGE), BASE)
    assert links[0] == LinkRecord(
        url="https://site.com/x", anchor_text="A", origin=LinkOrigin.INTERNAL, followable=True
    )


def test_nofollow_and_classification():
    other = collect(parse_html(PAGE), BASE)[1]
    assert other.origin is LinkOrigin.EXTERNAL
    assert other.followable is False


def test_whitespace_anchor_text_falls_back_to_url():
    by_url = {link.url: link for link in collect(parse_html(PAGE), BASE)}
    assert by_url["https://site.com/z"].anchor_text == "https://site.com/z"
    assert by_url["https://site.com/after-bad"].anchor_text == "After"


def test_no_two_records_share_a_url():
    html = "".join(f'<a href="/p{i % 3}?n={i}#s{i}">{i}</a>' for i in range(30))
    links = collect(parse_html(html), BASE)
    urls = [link.url for link in links]
    assert len(urls) == len(set(urls)) == 3


def test_mailto_yields_no_record():
    assert collect(parse_html('<a href="mailto:info@site.com">Mail</a>'), BASE) == []


def test_missing_rel_is_followable():
    (link,) = collect(parse_html('<a href="/a">a</a>'), BASE)
    assert link.followable is True


def test_nofollow_token_is_case_sensitive():
    (link,) = collect(parse_html('<a href="/a" rel="NoFollow">a</a>'), BASE)
    assert link.followable is True


def test_whitespace_only_block_adds_nothing():
    assert collect(parse_html("<div>   \n   </div><p> </p>"), BASE) == []


def test_image_source_uses_alt_text():
    html = '<img src="/logo.png" alt="Logo"><img src="/bare.png"><a href="/a">a</a>'
    assert len(collect(parse_html(html), BASE)) == 1
    links = collect(parse_html(html), BASE, sources=("anchor", "image"))
    assert [(link.url, link.anchor_text) for link in links] == [
        ("https://site.com/logo.png", "Logo"),
        ("https://site.com/bare.png", "https://site.com/bare.png"),
        ("https://site.com/a", "a"),
    ]


def test_button_and_data_sources():
    html = (
        '<button formaction="/send">Send</button>'
        '<div data-href="https://cards.io/1" title="Card"></div>'
        '<span data-url="/s">Span</span>'
    )
    links = collect(parse_html(html), BASE, sources=("button", "data"))
    assert [(link.url, link.anchor_text) for link in links] == [
        ("https://site.com/send", "Send"),
        ("https://cards.io/1", "Card"),
        ("https://site.com/s", "Span"),
    ]


def test_start_and_skip_bound_the_walk():
    tree = parse_html('<nav><a href="/n">n</a></nav><main><a href="/m">m</a></main>')
    main = tree.find_first("main")
    assert [link.url for link in collect(tree, BASE, start=main)] == ["https://site.com/m"]
    skipped = collect(tree, BASE, skip=lambda el: el.tag == "nav")
    assert [link.url for link in skipped] == ["https://site.com/m"]


def test_seen_map_is_threaded_between_calls():
    tree = parse_html('<main><a href="/a">a</a></main><article><a href="/a">again</a><a href="/b">b</a></article>')
    seen = {}
    first = collect(tree, BASE, start=tree.find_first("main"), seen=seen)
    second = collect(tree, BASE, start=tree.find_first("article"), seen=seen)
    assert [link.url for link in first] == ["https://site.com/a"]
    assert [link.url for link in second] == ["https://site.com/a", "https://site.com/b"]
    assert second[0].anchor_text == "a"


def test_resolution_mode_is_forwarded():
    tree = parse_html('<a href="img.png">i</a>')
    (root,) = collect(tree, "https://site.com/blog/post")
    (doc,) = collect(tree, "https://site.com/blog/post", mode=ResolutionMode.DOCUMENT)
    assert root.url == "https://site.com/img.png"
    assert doc.url == "https://site.com/blog/img.png"


def test_anchor_text_whitespace_collapsed_like_rendered_text():
    tree = parse_html('<main><p><a href="/more">Read\n     more</a></p></main>')
    (link,) = collect(tree, BASE)
    assert link.anchor_text == "Read more"
    assert f"[{link.anchor_text}]({link.url})" in render(tree, BASE)[0].text
