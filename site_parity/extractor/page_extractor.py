# File: site_parity/extractor/page_extractor.py
"""site_parity.extractor.page_extractor: one page's markup → ExtractionResult."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

from site_parity.config import ParityConfig
from site_parity.extractor.link_collector import collect
from site_parity.extractor.regions import skip_predicate
from site_parity.extractor.text_renderer import render_with_scopes
from site_parity.logger import logger
from site_parity.models import ContentSection, ExtractionResult, LinkRecord, LinkScope
from site_parity.parser.html_parser import DocumentTree, parse_html
from site_parity.urls import ResolutionMode

__all__ = ["NO_TITLE", "count_words", "extract", "extract_title"]

NO_TITLE = "No title found"


def extract_title(tree: DocumentTree) -> str:
    """Text of the first ``<title>``, else of the first ``<h1>``, else :data:`NO_TITLE`."""
    for tag in ("title", "h1"):
        element = tree.find_first(tag)
        if element is not None:
            text = " ".join(tree.text_content(element).split())
            if text:
                return text
    return NO_TITLE


def count_words(sections: Iterable[ContentSection]) -> int:
    return len(" ".join(s.text for s in sections).split())


def extract(
    markup: Union[str, bytes],
    page_url: str,
    config: Optional[ParityConfig] = None,
    *,
    scope: LinkScope = LinkScope.DOCUMENT,
) -> ExtractionResult:
    """Parse *markup* fetched from *page_url* and derive title, sections and links.

    Args:
        markup: raw HTML.
        page_url: final URL of the page; base for relative links and for
            internal/external classification.
        config: extraction settings, defaults when omitted.
        scope: ``DOCUMENT`` collects every link of the page, ``CONTENT``
            only the links inside the rendered content.

    Raises:
        ParseFailure: the markup could not be parsed.
    """
    config = config or ParityConfig()
    mode = ResolutionMode(config.resolution)
    tree = parse_html(markup, config.parser)

    title = extract_title(tree)
    sections, scopes = render_with_scopes(
        tree,
        page_url,
        strip_boilerplate=config.strip_boilerplate,
        include_images=config.include_images,
        mode=mode,
    )

    if scope is LinkScope.CONTENT:
        skip = skip_predicate(config.strip_boilerplate)
        seen: Dict[str, LinkRecord] = {}
        for region in scopes:
            collect(
                tree,
                page_url,
                start=region,
                skip=skip,
                sources=config.link_sources,
                mode=mode,
                seen=seen,
            )
        links = list(seen.values())
    else:
        links = collect(tree, page_url, sources=config.link_sources, mode=mode)

    result = ExtractionResult(
        url=page_url,
        title=title,
        sections=tuple(sections),
        links=tuple(links),
        word_count=count_words(sections),
    )
    logger.debug(
        "Extracted %s: %d sections, %d links, %d words",
        page_url,
        len(result.sections),
        len(result.links),
        result.word_count,
    )
    return result
