# File: tests/test_html_parser.py
import dataclasses

import pytest

from site_parity.errors import ParseFailure
from site_parity.parser.html_parser import DocumentTree, ElementNode, TextNode, parse_html

HTML = """\
<html><head><title>T</title></head>
<body>
  <div class="a b"><p>one<!-- hidden -->two</p></div>
  <a href="/x" rel="nofollow noopener">X</a>
  <a href="/y">Y</a>
</body></html>
"""


@pytest.fixture()
def tree() -> DocumentTree:
    return parse_html(HTML)


def test_root_is_document_element(tree):
    assert tree.root.index == 0
    assert tree.root.parent is None
    assert tree.root.tag == "[document]"


def test_find_all_in_document_order(tree):
    anchors = tree.find_all("a")
    assert [a.get("href") for a in anchors] == ["/x", "/y"]
    assert anchors[0].index < anchors[1].index


def test_multi_valued_attributes_are_joined(tree):
    first = tree.find_first("a")
    assert first.get("rel") == "nofollow noopener"
    div = tree.find_first("div")
    assert div.classes == ("a", "b")


def test_comments_are_dropped(tree):
    p = tree.find_first("p")
    assert tree.text_content(p) == "onetwo"
    assert all(isinstance(tree.node(i), TextNode) for i in p.children)


def test_parent_child_links_are_consistent(tree):
    for node in tree.iter_preorder():
        if isinstance(node, ElementNode):
            for child_index in node.children:
                child = tree.node(child_index)
                assert child.parent == node.index
                assert child.index > node.index


def test_preorder_matches_index_order(tree):
    indices = [n.index for n in tree.iter_preorder()]
    assert indices == sorted(indices)
    assert len(indices) == len(tree)


def test_skip_prunes_subtrees(tree):
    nodes = list(tree.iter_preorder(skip=lambda el: el.tag == "div"))
    assert all(not (isinstance(n, ElementNode) and n.tag in ("div", "p")) for n in nodes)
    assert any(isinstance(n, ElementNode) and n.tag == "a" for n in nodes)


def test_find_first_with_predicate(tree):
    found = tree.find_first(predicate=lambda el: el.get("href") == "/y")
    assert found is not None and tree.text_content(found) == "Y"
    assert tree.find_first("table") is None


def test_nodes_are_immutable(tree):
    a = tree.find_first("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.tag = "b"  # type: ignore[misc]
    with pytest.raises(TypeError):
        a.attrs["href"] = "/z"  # type: ignore[index]


def test_bytes_markup():
    tree = parse_html(b"<title>Bytes</title>")
    assert tree.text_content(tree.find_first("title")) == "Bytes"


def test_empty_markup_gives_bare_root():
    tree = parse_html("")
    assert len(tree) == 1
    assert tree.root.children == ()


def test_non_markup_input_fails():
    with pytest.raises(ParseFailure):
        parse_html(None)  # type: ignore[arg-type]


def test_unknown_parser_fails():
    with pytest.raises(ParseFailure):
        parse_html("<p>x</p>", parser="no-such-parser")
