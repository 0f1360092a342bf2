# === FILE: site_parity/parser/html_parser.py ===
"""HTML parsing for SiteParity.

BeautifulSoup does the actual parsing; the result is then frozen into a
read-only, arena-style :class:`DocumentTree`:

* every node lives in one tuple and is addressed by its index;
* nodes are one of two tagged variants, :class:`ElementNode` or
  :class:`TextNode` (comments, doctypes and other markup declarations are
  dropped while building);
* indices follow document (pre-order) order, so ``a.index < b.index`` means
  *a* starts before *b*.

Nothing downstream ever mutates the tree, so the link collector and the text
renderer can walk the same instance independently.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from site_parity.errors import ParseFailure

__all__: Sequence[str] = ("DocumentTree", "ElementNode", "Node", "TextNode", "parse_html")

DOCUMENT_TAG = "[document]"


@dataclass(frozen=True, slots=True)
class TextNode:
    """Character data inside an element."""

    index: int
    parent: Optional[int]
    text: str


@dataclass(frozen=True, slots=True)
class ElementNode:
    """An element with lower-cased tag name, string attributes and child indices."""

    index: int
    parent: Optional[int]
    tag: str
    attrs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    children: tuple[int, ...] = ()

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name, default)

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self.attrs.get("class", "").split())


Node = Union[ElementNode, TextNode]
ElementPredicate = Callable[[ElementNode], bool]


class DocumentTree:
    """Immutable node arena; index ``0`` is the synthetic document root."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Sequence[Node]) -> None:
        if not nodes or not isinstance(nodes[0], ElementNode):
            raise ValueError("a document tree needs an element root at index 0")
        self._nodes: tuple[Node, ...] = tuple(nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> ElementNode:
        return self._nodes[0]  # type: ignore[return-value]

    def node(self, index: int) -> Node:
        return self._nodes[index]

    def children(self, element: ElementNode) -> Iterator[Node]:
        return (self._nodes[i] for i in element.children)

    def iter_preorder(
        self,
        start: Optional[ElementNode] = None,
        skip: Optional[ElementPredicate] = None,
    ) -> Iterator[Node]:
        """Depth-first, document-order walk from *start* (root by default).

        Elements for which *skip* returns true are not yielded and their
        subtree is pruned. *start* itself is always yielded.
        """
        first = start if start is not None else self.root
        stack: list[Node] = [first]
        while stack:
            current = stack.pop()
            if isinstance(current, ElementNode):
                if skip is not None and current is not first and skip(current):
                    continue
                stack.extend(self._nodes[i] for i in reversed(current.children))
            yield current

    def find_all(
        self,
        tag: Optional[str] = None,
        predicate: Optional[ElementPredicate] = None,
        *,
        start: Optional[ElementNode] = None,
        skip: Optional[ElementPredicate] = None,
    ) -> list[ElementNode]:
        """Elements under *start* matching *tag* and/or *predicate*, in document order."""
        found: list[ElementNode] = []
        for node in self.iter_preorder(start, skip):
            if not isinstance(node, ElementNode):
                continue
            if tag is not None and node.tag != tag:
                continue
            if predicate is not None and not predicate(node):
                continue
            found.append(node)
        return found

    def find_first(
        self,
        tag: Optional[str] = None,
        predicate: Optional[ElementPredicate] = None,
        *,
        start: Optional[ElementNode] = None,
    ) -> Optional[ElementNode]:
        for node in self.iter_preorder(start):
            if not isinstance(node, ElementNode):
                continue
            if (tag is None or node.tag == tag) and (predicate is None or predicate(node)):
                return node
        return None

    def text_content(self, element: ElementNode) -> str:
        """Concatenated text of every descendant text node (like DOM ``textContent``)."""
        return "".join(n.text for n in self.iter_preorder(element) if isinstance(n, TextNode))


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def _attr_value(value: object) -> str:
    # bs4 keeps multi-valued attributes (class, rel, ...) as lists
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def _freeze(soup: BeautifulSoup) -> DocumentTree:
    raw: list[tuple] = []
    kids: dict[int, list[int]] = {}
    stack: list[tuple[object, Optional[int]]] = [(soup, None)]

    while stack:
        bs_node, parent = stack.pop()
        if isinstance(bs_node, PreformattedString):
            continue  # comments, CDATA, doctype, processing instructions
        index = len(raw)
        if isinstance(bs_node, NavigableString):
            raw.append(("text", parent, str(bs_node)))
        elif isinstance(bs_node, Tag):
            name = DOCUMENT_TAG if parent is None else (bs_node.name or "").lower()
            attrs = {k.lower(): _attr_value(v) for k, v in (bs_node.attrs or {}).items()}
            raw.append(("element", parent, name, attrs))
            kids[index] = []
            stack.extend((child, index) for child in reversed(bs_node.contents))
        else:
            continue
        if parent is not None:
            kids[parent].append(index)

    nodes: list[Node] = []
    for index, item in enumerate(raw):
        if item[0] == "text":
            nodes.append(TextNode(index=index, parent=item[1], text=item[2]))
        else:
            nodes.append(
                ElementNode(
                    index=index,
                    parent=item[1],
                    tag=item[2],
                    attrs=MappingProxyType(item[3]),
                    children=tuple(kids[index]),
                )
            )
    return DocumentTree(nodes)


def parse_html(markup: Union[str, bytes], parser: str = "html.parser") -> DocumentTree:
    """Parse *markup* into a :class:`DocumentTree`.

    Parameters
    ----------
    markup
        HTML as text, or raw bytes (BeautifulSoup sniffs the encoding).
    parser
        BeautifulSoup tree builder, ``"html.parser"`` or ``"lxml"``.

    Raises
    ------
    ParseFailure
        The input is not markup, or the tree builder rejected it.
    """
    if not isinstance(markup, (str, bytes)):
        raise ParseFailure(f"Expected HTML text, got {type(markup).__name__}")
    try:
        soup = BeautifulSoup(markup, parser)
    except FeatureNotFound as exc:
        raise ParseFailure(f"HTML parser {parser!r} is not available") from exc
    except ParserRejectedMarkup as exc:
        raise ParseFailure(f"Markup could not be parsed: {exc}") from exc
    return _freeze(soup)
