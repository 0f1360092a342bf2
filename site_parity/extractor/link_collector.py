# File: site_parity/extractor/link_collector.py
"""
Link collection: DocumentTree → ordered, deduplicated list of LinkRecord.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from site_parity.errors import InvalidReference, NonNavigableReference
from site_parity.logger import logger
from site_parity.models import LinkRecord
from site_parity.parser.html_parser import DocumentTree, ElementNode
from site_parity.urls import ResolutionMode, classify, normalize

__all__: Sequence[str] = ("collect", "link_reference", "LINK_SOURCES")

EMPTY_FRAGMENT = "#"
LINK_SOURCES: Tuple[str, ...] = ("anchor", "image", "button", "data")


def link_reference(element: ElementNode, sources: Iterable[str]) -> Optional[Tuple[str, str]]:
    """Return ``(raw reference, fallback text)`` when *element* carries a link.

    The fallback text is used only when the element has no visible text of
    its own (images, icon buttons).
    """
    fallback = (element.get("title") or element.get("alt") or "").strip()
    if element.tag == "a" and "anchor" in sources:
        href = element.get("href")
        return (href, "") if href is not None else None
    if element.tag == "img" and "image" in sources:
        src = element.get("src")
        if src is None:
            return None
        return src, (element.get("alt") or element.get("title") or "").strip()
    if element.tag == "button" and "button" in sources:
        target = element.get("formaction") or element.get("data-href")
        return (target, fallback) if target is not None else None
    if "data" in sources:
        target = element.get("data-href") or element.get("data-url")
        if target is not None:
            return target, fallback
    return None


def _followable(element: ElementNode) -> bool:
    return "nofollow" not in (element.get("rel") or "").split()


def _visit(
    tree: DocumentTree,
    element: ElementNode,
    base_url: str,
    sources: Iterable[str],
    mode: ResolutionMode,
    seen: Dict[str, LinkRecord],
) -> None:
    found = link_reference(element, sources)
    if found is None:
        return
    raw, fallback = found
    raw = raw.strip()
    if not raw or raw == EMPTY_FRAGMENT:
        return
    try:
        url = normalize(base_url, raw, mode)
    except NonNavigableReference:
        logger.debug("Skipping non-navigable link: %s", raw)
        return
    except InvalidReference:
        logger.warning("Invalid URL: %s", raw)
        return
    if url in seen:
        return
    text = " ".join(tree.text_content(element).split()) or fallback or url
    seen[url] = LinkRecord(
        url=url,
        anchor_text=text,
        origin=classify(url, base_url),
        followable=_followable(element),
    )


def collect(
    tree: DocumentTree,
    base_url: str,
    *,
    start: Optional[ElementNode] = None,
    skip: Optional[Callable[[ElementNode], bool]] = None,
    sources: Iterable[str] = ("anchor",),
    mode: ResolutionMode = ResolutionMode.ROOT,
    seen: Optional[Dict[str, LinkRecord]] = None,
) -> List[LinkRecord]:
    """Collect links under *start* (the document root by default).

    Parameters
    ----------
    tree
        Parsed document.
    base_url
        URL the page was fetched from; relative references resolve against it.
    start, skip
        Traversal bounds, see :meth:`DocumentTree.iter_preorder`.
    sources
        Element kinds to surface as links, a subset of :data:`LINK_SOURCES`.
    mode
        How bare relative references are resolved.
    seen
        Canonical URL → record map shared between calls, so several regions
        of one page can be collected without duplicates. It is filled in
        place and its insertion order is the first-encounter order.

    Returns
    -------
    list[LinkRecord]
        Every record in *seen* after the walk, in first-encounter order.
    """
    seen = {} if seen is None else seen
    sources = tuple(sources)
    for node in tree.iter_preorder(start, skip):
        if isinstance(node, ElementNode):
            _visit(tree, node, base_url, sources, mode, seen)
    return list(seen.values())
