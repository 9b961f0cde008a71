"""Conversion pipeline: parse, map in batches, bundle and persist."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

from namaste_bridge.config import BridgeConfig
from namaste_bridge.exceptions import NoValidDataError, PersistenceError
from namaste_bridge.fhir.bundle import BundleGenerator
from namaste_bridge.fhir.models import Bundle
from namaste_bridge.mapping.engine import MappingConfig, MappingEngine, get_default_engine
from namaste_bridge.parsing.parser import parse
from namaste_bridge.schema import MappingResult, NormalizedRow, Submitter
from namaste_bridge.storage.base import MappingStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

NO_VALID_DATA_MESSAGE = (
    "No valid data found in file. Please check the format and ensure it has at least "
    "two columns (code, term)."
)


def default_batch_size(total: int) -> int:
    """Batch size giving roughly twenty progress steps, capped at five rows."""
    return max(1, min(5, math.ceil(total / 20)))


def iter_mapped_batches(
    rows: Sequence[NormalizedRow],
    engine: MappingEngine,
    batch_size: int | None = None,
) -> Iterator[list[MappingResult]]:
    """Yield mapping results one batch at a time, in input order.

    Stop iterating to cancel; batches already yielded stay valid.
    """
    size = batch_size if batch_size and batch_size > 0 else default_batch_size(len(rows))
    for start in range(0, len(rows), size):
        yield engine.map_many(rows[start : start + size])


def map_rows(
    rows: Sequence[NormalizedRow],
    *,
    engine: MappingEngine | None = None,
    batch_size: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[MappingResult]:
    """Map every row, reporting ``(processed, total)`` after each batch."""
    resolved_engine = engine or get_default_engine()
    total = len(rows)
    results: list[MappingResult] = []
    for batch in iter_mapped_batches(rows, resolved_engine, batch_size):
        results.extend(batch)
        logger.debug("mapped %d/%d rows", len(results), total)
        if on_progress:
            on_progress(len(results), total)
    return results


@dataclass
class ConversionResult:
    results: list[MappingResult]
    bundle: Bundle
    file_id: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def status_counts(self) -> dict[str, int]:
        counts = {"mapped": 0, "partial": 0, "unmapped": 0}
        for result in self.results:
            counts[result.mapping_status] += 1
        return counts


class ConversionPipeline:
    """Runs one uploaded file through parsing, mapping, bundling and storage."""

    def __init__(
        self,
        engine: MappingEngine | None = None,
        store: MappingStore | None = None,
        bundle_generator: BundleGenerator | None = None,
        config: BridgeConfig | None = None,
    ):
        self.config = config or BridgeConfig()
        self.engine = engine or MappingEngine(
            config=MappingConfig(
                reference_version=self.config.reference_version,
                search_limit=self.config.search_result_limit,
            )
        )
        self.store = store
        self.bundle_generator = bundle_generator or BundleGenerator()

    def run(
        self,
        content: str | bytes,
        filename: str,
        submitter: Submitter,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> ConversionResult:
        """Convert one file.

        Raises:
            NoValidDataError: If the file yields no rows.
            PersistenceError: If storing the finished run fails. The error
                carries the computed results and bundle.
        """
        rows = parse(content)
        if not rows:
            raise NoValidDataError(NO_VALID_DATA_MESSAGE)
        logger.info("parsed %d rows from %s", len(rows), filename)

        results = map_rows(
            rows,
            engine=self.engine,
            batch_size=self.config.batch_size,
            on_progress=on_progress,
        )
        bundle = self.bundle_generator.generate(results, submitter.email)

        file_id = None
        if self.store is not None:
            file_id = self._persist(content, filename, submitter, results, bundle)

        return ConversionResult(results=results, bundle=bundle, file_id=file_id, warnings=_warnings(results))

    def _persist(
        self,
        content: str | bytes,
        filename: str,
        submitter: Submitter,
        results: list[MappingResult],
        bundle: Bundle,
    ) -> str:
        file_id: str | None = None
        try:
            file_id = self.store.create_file(
                user_id=submitter.user_id,
                filename=filename,
                file_size=_byte_size(content),
                total_records=len(results),
            )
            chunk = max(1, self.config.insert_batch_size)
            for start in range(0, len(results), chunk):
                self.store.insert_mappings(
                    file_id=file_id,
                    user_id=submitter.user_id,
                    results=results[start : start + chunk],
                )
            self.store.update_file_status(file_id, "completed", processed_records=len(results))
        except Exception as exc:
            logger.exception("persisting %s failed", filename)
            self._mark_failed(file_id)
            raise PersistenceError(
                f"Failed to save mapping results: {exc}",
                results=results,
                bundle=bundle,
                file_id=file_id,
            ) from exc
        return file_id

    def _mark_failed(self, file_id: str | None) -> None:
        if file_id is None:
            return
        try:
            self.store.update_file_status(file_id, "failed")
        except Exception:
            logger.warning("could not mark file %s as failed", file_id)


def _byte_size(content: str | bytes) -> int:
    return len(content.encode("utf-8")) if isinstance(content, str) else len(content)


def _warnings(results: Sequence[MappingResult]) -> list[str]:
    warnings: list[str] = []
    if any(result.mapping_status == "partial" for result in results):
        warnings.append("partial_mappings")
    if any(result.mapping_status == "unmapped" for result in results):
        warnings.append("unmapped_rows")
    return warnings


def convert(
    content: str | bytes,
    submitter_email: str,
    *,
    engine: MappingEngine | None = None,
) -> tuple[list[MappingResult], Bundle]:
    """Parse and map ``content`` without storage, returning results and bundle.

    An empty or header-only input gives an empty result list and an empty bundle.
    """
    results = map_rows(parse(content), engine=engine)
    bundle = BundleGenerator().generate(results, submitter_email)
    return results, bundle
