# File: site_parity/extractor/text_renderer.py
"""
Text rendering: DocumentTree → labeled plain-text sections.

Visible text is reconstructed in document order. Inline content of one
block is joined with single spaces; block elements start and end a
paragraph (separated by one blank line), ``<br>`` ends a line. Links with
both a target and text become ``[text](canonical url)`` markers.
"""
from __future__ import annotations

import re
from typing import Callable, Final, Iterable, List, Sequence, Tuple

from site_parity.errors import InvalidReference, NonNavigableReference
from site_parity.models import ContentSection
from site_parity.parser.html_parser import DocumentTree, ElementNode, Node, TextNode
from site_parity.extractor.regions import document_body, find_content_regions, skip_predicate
from site_parity.urls import ResolutionMode, normalize

__all__: Sequence[str] = (
    "BLOCK_TAGS",
    "render",
    "render_images",
    "render_region",
    "render_with_scopes",
)

BLOCK_TAGS: Final = frozenset(
    {
        "html", "body", "main", "article", "section", "header", "footer", "nav", "aside",
        "div", "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "ul", "ol", "dl", "dt", "dd",
        "table", "thead", "tbody", "tfoot", "tr", "caption", "blockquote", "pre",
        "figure", "figcaption", "address", "fieldset", "form", "details", "summary", "hr",
    }
)


class _Break(str):
    """Line or paragraph break marker, never confused with a text node."""


_LINE: Final = _Break("\n")
_BLOCK: Final = _Break("\n\n")
_WS_RE: Final = re.compile(r"\s+")
_EDGE_WS_RE: Final = re.compile(r"[ \t]*\n[ \t]*")
_BLANK_RUN_RE: Final = re.compile(r"\n{3,}")

Skip = Callable[[ElementNode], bool]


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _assemble(parts: Iterable[str]) -> str:
    out: List[str] = []
    line: List[str] = []
    for part in parts:
        if isinstance(part, _Break):
            out.append(_collapse(" ".join(line)))
            out.append(part)
            line = []
        else:
            line.append(part)
    out.append(_collapse(" ".join(line)))
    text = _EDGE_WS_RE.sub("\n", "".join(out))
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def _inline_text(tree: DocumentTree, element: ElementNode, skip: Skip) -> str:
    return _collapse(
        " ".join(n.text for n in tree.iter_preorder(element, skip) if isinstance(n, TextNode))
    )


def _link_token(
    tree: DocumentTree, element: ElementNode, base_url: str, skip: Skip, mode: ResolutionMode
) -> str:
    text = _inline_text(tree, element, skip)
    href = (element.get("href") or "").strip()
    if not text or not href or href == "#":
        return text
    try:
        url = normalize(base_url, href, mode)
    except (NonNavigableReference, InvalidReference):
        return text
    return f"[{text}]({url})"


def render_region(
    tree: DocumentTree,
    start: ElementNode,
    base_url: str,
    skip: Skip,
    mode: ResolutionMode = ResolutionMode.ROOT,
) -> str:
    """Render the subtree rooted at *start* into normalized text."""
    parts: List[str] = []
    # (node, entering); a block element is pushed again to close it
    stack: List[Tuple[Node, bool]] = [(start, True)]
    while stack:
        node, entering = stack.pop()
        if isinstance(node, TextNode):
            parts.append(node.text)
            continue
        if not entering:
            parts.append(_BLOCK)
            continue
        if node is not start and skip(node):
            continue
        if node.tag == "br":
            parts.append(_LINE)
            continue
        if node.tag == "a":
            parts.append(_link_token(tree, node, base_url, skip, mode))
            continue
        if node.tag in BLOCK_TAGS:
            parts.append(_BLOCK)
            stack.append((node, False))
        stack.extend((tree.node(i), True) for i in reversed(node.children))
    return _assemble(parts)


def _dimensions(element: ElementNode) -> str:
    width = (element.get("width") or "").strip()
    height = (element.get("height") or "").strip()
    if width and height:
        return f"{width}x{height}"
    return ""


def render_images(
    tree: DocumentTree,
    base_url: str,
    regions: Sequence[ElementNode],
    skip: Skip,
    mode: ResolutionMode = ResolutionMode.ROOT,
) -> str:
    """One ``![description](url) WxH`` line per distinct image in *regions*."""
    seen: set[str] = set()
    lines: List[str] = []
    for region in regions:
        for img in tree.find_all("img", start=region, skip=skip):
            src = (img.get("src") or "").strip()
            if not src:
                continue
            try:
                url = normalize(base_url, src, mode)
            except (NonNavigableReference, InvalidReference):
                continue
            if url in seen:
                continue
            seen.add(url)
            description = _collapse(img.get("alt") or img.get("title") or "") or "image"
            line = f"![{description}]({url})"
            dims = _dimensions(img)
            lines.append(f"{line} {dims}" if dims else line)
    return "\n".join(lines)


def render_with_scopes(
    tree: DocumentTree,
    base_url: str,
    *,
    strip_boilerplate: bool = True,
    include_images: bool = False,
    mode: ResolutionMode = ResolutionMode.ROOT,
) -> Tuple[List[ContentSection], List[ElementNode]]:
    """Like :func:`render`, also returning the elements the sections came from."""
    skip = skip_predicate(strip_boilerplate)
    sections: List[ContentSection] = []
    scopes: List[ElementNode] = []
    for region in find_content_regions(tree, strip_boilerplate):
        text = render_region(tree, region, base_url, skip, mode)
        if text:
            scopes.append(region)
            sections.append(ContentSection(f"section {len(sections) + 1}", text))

    if not sections:
        body = document_body(tree)
        scopes = [body]
        sections.append(ContentSection("section 1", render_region(tree, body, base_url, skip, mode)))

    if include_images:
        images = render_images(tree, base_url, scopes, skip, mode)
        if images:
            sections.append(ContentSection("images", images))
    return sections, scopes


def render(
    tree: DocumentTree,
    base_url: str,
    *,
    strip_boilerplate: bool = True,
    include_images: bool = False,
    mode: ResolutionMode = ResolutionMode.ROOT,
) -> List[ContentSection]:
    """Render *tree* into ``section 1..N`` (plus an optional ``images`` section).

    Every outermost content region that renders to non-empty text becomes
    one section, numbered in document order. When there is none, the body
    (or the whole document) is rendered as the single ``section 1``, which
    may be empty.
    """
    sections, _ = render_with_scopes(
        tree,
        base_url,
        strip_boilerplate=strip_boilerplate,
        include_images=include_images,
        mode=mode,
    )
    return sections
