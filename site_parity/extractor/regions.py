# File: site_parity/extractor/regions.py
"""Locating the content-bearing parts of a page.

Two questions are answered here, for both the text renderer and the
content-scoped link collection:

* is an element page chrome (navigation, header, footer, ads) that should
  not count as content?
* which containers hold the page's actual content?
"""
from __future__ import annotations

from typing import Final, List, Optional

from site_parity.parser.html_parser import DocumentTree, ElementNode

#: subtrees that never render: not visible, or not part of the body
EXCLUDED_TAGS: Final = frozenset({"script", "style", "noscript", "template", "head", "title"})

BOILERPLATE_TAGS: Final = frozenset({"header", "nav", "footer", "aside", "form", "iframe"})
BOILERPLATE_CLASSES: Final = frozenset(
    {
        "header",
        "nav",
        "footer",
        "navigation",
        "menu",
        "sidebar",
        "advertisement",
        "ads",
        "banner",
        "cookie-banner",
        "newsletter",
        "social-share",
        "breadcrumb",
        "pagination",
    }
)

CONTENT_TAGS: Final = frozenset({"main", "article", "section"})
CONTENT_ROLES: Final = frozenset({"main", "article"})


def is_excluded(element: ElementNode) -> bool:
    return element.tag in EXCLUDED_TAGS


def is_boilerplate(element: ElementNode) -> bool:
    """Navigation, headers, footers, ads and similar page chrome."""
    if element.tag in BOILERPLATE_TAGS:
        return True
    return any(cls.lower() in BOILERPLATE_CLASSES for cls in element.classes)


def is_content_region(element: ElementNode) -> bool:
    if element.tag in CONTENT_TAGS:
        return True
    if (element.get("role") or "").strip().lower() in CONTENT_ROLES:
        return True
    return any("content" in cls.lower() for cls in element.classes)


def skip_predicate(strip_boilerplate: bool):
    """Subtree filter used by every traversal that looks at visible content."""
    if strip_boilerplate:
        return lambda el: is_excluded(el) or is_boilerplate(el)
    return is_excluded


def find_content_regions(tree: DocumentTree, strip_boilerplate: bool = True) -> List[ElementNode]:
    """Outermost content containers in document order.

    A region nested inside another region is not reported separately, so no
    text ends up in two sections.
    """
    skip = skip_predicate(strip_boilerplate)
    regions: List[ElementNode] = []
    stack: List[ElementNode] = [tree.root]
    while stack:
        element = stack.pop()
        if element is not tree.root and skip(element):
            continue
        if element is not tree.root and is_content_region(element):
            regions.append(element)
            continue
        stack.extend(
            child
            for child in reversed([tree.node(i) for i in element.children])
            if isinstance(child, ElementNode)
        )
    return regions


def document_body(tree: DocumentTree) -> ElementNode:
    """``<body>`` when the parser produced one, else the document root."""
    body: Optional[ElementNode] = tree.find_first("body")
    return body if body is not None else tree.root


__all__ = [
    "BOILERPLATE_CLASSES",
    "BOILERPLATE_TAGS",
    "CONTENT_TAGS",
    "EXCLUDED_TAGS",
    "document_body",
    "find_content_regions",
    "is_boilerplate",
    "is_content_region",
    "is_excluded",
    "skip_predicate",
]
