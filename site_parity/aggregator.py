# File: site_parity/aggregator.py
"""site_parity.aggregator: assembling the migration report of two pages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from site_parity.comparator import compare
from site_parity.models import ComparisonResult, ExtractionResult, group_links


@dataclass(frozen=True, slots=True)
class MigrationReport:
    """Both link inventories plus their comparison."""

    old: ExtractionResult
    new: ExtractionResult
    comparison: ComparisonResult

    @property
    def similarity(self) -> int:
        return self.comparison.similarity

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: ``url1``/``url2`` link groups, ``shared``, ``missing``, score."""
        return {
            "url1": {"url": self.old.url, **group_links(self.old.links)},
            "url2": {"url": self.new.url, **group_links(self.new.links)},
            **self.comparison.to_dict(),
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def build_migration_report(old: ExtractionResult, new: ExtractionResult) -> MigrationReport:
    return MigrationReport(old=old, new=new, comparison=compare(old, new))


__all__ = ["MigrationReport", "build_migration_report"]
