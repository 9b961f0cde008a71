"""Mapping engine for NAMASTE rows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from namaste_bridge.mapping.repository import ReferenceEntry, ReferenceIndex
from namaste_bridge.mapping.targets import TargetGenerator
from namaste_bridge.schema import MappingResult, MappingStatus, NormalizedRow, TargetMapping

# (found in reference index, number of targets present) -> (status, confidence)
CONFIDENCE_POLICY: dict[tuple[bool, int], tuple[MappingStatus, float]] = {
    (True, 2): ("mapped", 0.92),
    (True, 1): ("partial", 0.68),
    (True, 0): ("partial", 0.45),
    (False, 2): ("mapped", 0.75),
    (False, 1): ("partial", 0.55),
    (False, 0): ("unmapped", 0.0),
}


@dataclass(frozen=True)
class MappingConfig:
    reference_version: str = "v1"
    search_limit: int = 10


class MappingEngine:
    """Reference-first mapping engine.

    Stateless per row: the result depends only on the row, the reference
    index and the target generator.
    """

    def __init__(
        self,
        index: ReferenceIndex | None = None,
        targets: TargetGenerator | None = None,
        config: MappingConfig | None = None,
    ):
        self.config = config or MappingConfig()
        self.index = index if index is not None else ReferenceIndex.from_version(self.config.reference_version)
        self.targets = targets or TargetGenerator()

    def map(self, row: NormalizedRow) -> MappingResult:
        entry = self.index.find(row.source_code, row.source_term)
        target = self.targets.generate(row.source_code)
        return self._build_result(row.source_code, row.source_term, entry, target)

    def map_many(self, rows: Iterable[NormalizedRow]) -> list[MappingResult]:
        return [self.map(row) for row in rows]

    def lookup(self, code: str) -> MappingResult | None:
        """Map a bare code if it is a known reference code."""
        entry = self.index.get(code)
        if entry is None:
            return None
        return self._build_result(entry.code, entry.term, entry, self.targets.generate(entry.code))

    def search(self, query: str, limit: int | None = None) -> list[MappingResult]:
        resolved_limit = limit if limit is not None else self.config.search_limit
        needle = query.strip().lower()
        results = [
            self._build_result(entry.code, entry.term, entry, self.targets.generate(entry.code))
            for entry in self.index.search(query, limit=len(self.index))
        ]
        results.sort(key=lambda item: (item.source_code.lower() != needle, -item.confidence_score))
        return results[:resolved_limit]

    @staticmethod
    def _build_result(
        code: str,
        term: str,
        entry: ReferenceEntry | None,
        target: TargetMapping,
    ) -> MappingResult:
        status, confidence = CONFIDENCE_POLICY[(entry is not None, target.target_count)]
        return MappingResult(
            source_code=code,
            source_term=entry.display if entry else term,
            secondary_code=target.secondary_code,
            secondary_term=target.secondary_term,
            tertiary_code=target.tertiary_code,
            tertiary_term=target.tertiary_term,
            confidence_score=confidence,
            mapping_status=status,
        )


@lru_cache(maxsize=4)
def get_default_engine(reference_version: str = "v1") -> MappingEngine:
    return MappingEngine(config=MappingConfig(reference_version=reference_version))


def map_row(row: NormalizedRow, *, reference_version: str = "v1") -> MappingResult:
    """Map a single row with the packaged reference dataset."""

    return get_default_engine(reference_version).map(row)
