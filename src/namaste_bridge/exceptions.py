"""Custom exceptions for namaste-bridge."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from namaste_bridge.fhir.models import Bundle
    from namaste_bridge.schema import MappingResult


class NamasteBridgeError(Exception):
    """Base exception for namaste-bridge."""

    pass


class NoValidDataError(NamasteBridgeError):
    """Raised when an uploaded file yields no mappable rows."""

    pass


class ReferenceDataError(NamasteBridgeError):
    """Raised when a reference dataset version is missing or malformed."""

    pass


class StorageError(NamasteBridgeError):
    """Raised when a storage backend operation fails."""

    pass


class PersistenceError(StorageError):
    """Raised when persisting a finished run fails.

    The mapping results and bundle computed before the failure stay valid and
    are attached so the caller can still return them.
    """

    def __init__(
        self,
        message: str,
        *,
        results: list[MappingResult] | None = None,
        bundle: Bundle | None = None,
        file_id: str | None = None,
    ):
        super().__init__(message)
        self.results = list(results or [])
        self.bundle = bundle
        self.file_id = file_id
