"""Storage interface for uploaded files and their mapping rows."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from namaste_bridge.schema import MappingResult

FileStatus = str  # processing|completed|failed


class MappingStore(ABC):
    """Abstract storage collaborator used by the conversion pipeline."""

    @abstractmethod
    def create_file(self, *, user_id: str, filename: str, file_size: int, total_records: int) -> str:
        """Create an uploaded-file record in ``processing`` state.

        Returns:
            Identifier of the new file record.
        """
        pass

    @abstractmethod
    def insert_mappings(self, *, file_id: str, user_id: str, results: Sequence[MappingResult]) -> int:
        """Bulk insert mapping rows for a file. Returns the number inserted."""
        pass

    @abstractmethod
    def update_file_status(self, file_id: str, status: FileStatus, *, processed_records: int | None = None) -> None:
        pass

    @abstractmethod
    def list_mappings(self, *, user_id: str, file_id: str) -> list[dict]:
        pass
