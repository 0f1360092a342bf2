# File: site_parity/models.py
"""site_parity.models: value objects produced by extraction and comparison.

All of them are frozen dataclasses holding tuples, built once per request and
never mutated afterwards. ``to_dict`` gives the JSON wire form used by the
HTTP service and the reports.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class LinkOrigin(str, Enum):
    """Whether a link stays on the page's host."""

    INTERNAL = "internal"
    EXTERNAL = "external"


class LinkScope(str, Enum):
    """Part of the document the link collector scans."""

    DOCUMENT = "document"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class LinkRecord:
    """One outbound link; identity is the canonical ``url``."""

    url: str
    anchor_text: str
    origin: LinkOrigin
    followable: bool = True

    @property
    def is_internal(self) -> bool:
        return self.origin is LinkOrigin.INTERNAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "anchorText": self.anchor_text,
            "type": self.origin.value,
            "follow": self.followable,
        }


@dataclass(frozen=True, slots=True)
class ContentSection:
    label: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "text": self.text}


def group_links(links: Tuple[LinkRecord, ...]) -> Dict[str, List[Dict[str, Any]]]:
    """Split *links* into the ``internalLinks`` / ``externalLinks`` wire groups."""
    return {
        "internalLinks": [link.to_dict() for link in links if link.is_internal],
        "externalLinks": [link.to_dict() for link in links if not link.is_internal],
    }


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Everything derived from one fetched page."""

    url: str
    title: str
    sections: Tuple[ContentSection, ...] = ()
    links: Tuple[LinkRecord, ...] = ()
    word_count: int = 0

    @property
    def content(self) -> str:
        return "\n\n".join(s.text for s in self.sections if s.text)

    @property
    def internal_links(self) -> Tuple[LinkRecord, ...]:
        return tuple(link for link in self.links if link.is_internal)

    @property
    def external_links(self) -> Tuple[LinkRecord, ...]:
        return tuple(link for link in self.links if not link.is_internal)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "sections": [s.to_dict() for s in self.sections],
            "links": [link.to_dict() for link in self.links],
            "wordCount": self.word_count,
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


#: (lower bound, rating) pairs, checked top-down
RATING_BANDS: Tuple[Tuple[int, str], ...] = ((80, "high"), (60, "medium"), (0, "low"))


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Link-level diff between an old and a new page."""

    shared: Tuple[LinkRecord, ...] = field(default_factory=tuple)
    missing: Tuple[LinkRecord, ...] = field(default_factory=tuple)
    similarity: int = 0

    @property
    def rating(self) -> str:
        for bound, name in RATING_BANDS:
            if self.similarity >= bound:
                return name
        return "low"

    @property
    def missing_internal(self) -> Tuple[LinkRecord, ...]:
        return tuple(link for link in self.missing if link.is_internal)

    @property
    def missing_external(self) -> Tuple[LinkRecord, ...]:
        return tuple(link for link in self.missing if not link.is_internal)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shared": group_links(self.shared),
            "missing": group_links(self.missing),
            "similarity": self.similarity,
            "rating": self.rating,
        }


__all__ = [
    "ComparisonResult",
    "ContentSection",
    "ExtractionResult",
    "LinkOrigin",
    "LinkRecord",
    "LinkScope",
    "RATING_BANDS",
    "group_links",
]
