"""Storage backends for uploaded files and mapping rows."""

from namaste_bridge.config import BridgeConfig
from namaste_bridge.storage.base import MappingStore
from namaste_bridge.storage.memory import InMemoryMappingStore


def _build_postgres_store(database_url: str | None) -> MappingStore:
    from namaste_bridge.storage.postgres import PostgresMappingStore

    return PostgresMappingStore(database_url or "")


def build_store(config: BridgeConfig) -> MappingStore | None:
    """Return the store selected by ``config.storage_backend``, or None."""
    backend = config.storage_backend
    if backend in {"", "none"}:
        return None
    if backend == "memory":
        return InMemoryMappingStore()
    if backend in {"postgres", "postgresql"}:
        return _build_postgres_store(config.database_url)
    raise ValueError(f"Unsupported storage backend: {backend}")


__all__ = ["InMemoryMappingStore", "MappingStore", "build_store"]
