"""In-process storage backend."""

from __future__ import annotations

import threading
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from namaste_bridge.exceptions import StorageError
from namaste_bridge.schema import MappingResult
from namaste_bridge.storage.base import FileStatus, MappingStore


class InMemoryMappingStore(MappingStore):
    """Keeps files and mapping rows in dictionaries, keyed by file id."""

    def __init__(self):
        self._lock = threading.Lock()
        self.files: dict[str, dict] = {}
        self.rows: dict[str, list[dict]] = {}

    def create_file(self, *, user_id: str, filename: str, file_size: int, total_records: int) -> str:
        file_id = str(uuid.uuid4())
        with self._lock:
            self.files[file_id] = {
                "id": file_id,
                "user_id": user_id,
                "filename": filename,
                "file_size": file_size,
                "total_records": total_records,
                "processed_records": 0,
                "processing_status": "processing",
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            self.rows[file_id] = []
        return file_id

    def insert_mappings(self, *, file_id: str, user_id: str, results: Sequence[MappingResult]) -> int:
        with self._lock:
            if file_id not in self.files:
                raise StorageError(f"Unknown file id: {file_id}")
            self.rows[file_id].extend(result.to_storage_row(file_id=file_id, user_id=user_id) for result in results)
        return len(results)

    def update_file_status(self, file_id: str, status: FileStatus, *, processed_records: int | None = None) -> None:
        with self._lock:
            record = self.files.get(file_id)
            if record is None:
                raise StorageError(f"Unknown file id: {file_id}")
            record["processing_status"] = status
            if processed_records is not None:
                record["processed_records"] = processed_records

    def list_mappings(self, *, user_id: str, file_id: str) -> list[dict]:
        with self._lock:
            return [dict(row) for row in self.rows.get(file_id, []) if row["user_id"] == user_id]
