"""Environment-driven configuration for namaste-bridge."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_int(value: str | None, default: int | None) -> int | None:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class BridgeConfig:
    reference_version: str = "v1"
    batch_size: int | None = None
    insert_batch_size: int = 50
    storage_backend: str = "none"  # none|memory|postgres
    database_url: str | None = None
    max_upload_bytes: int = 5 * 1024 * 1024
    frontend_origins: tuple[str, ...] = ("*",)
    search_result_limit: int = 10
    strict_persistence: bool = False

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
        batch_size = _safe_int(os.getenv("MAPPING_BATCH_SIZE"), None)
        return cls(
            reference_version=os.getenv("REFERENCE_VERSION", "v1").strip() or "v1",
            batch_size=batch_size if batch_size and batch_size > 0 else None,
            insert_batch_size=max(1, _safe_int(os.getenv("INSERT_BATCH_SIZE"), 50) or 50),
            storage_backend=(os.getenv("STORAGE_BACKEND", "none").strip().lower() or "none"),
            database_url=os.getenv("DATABASE_URL"),
            max_upload_bytes=_safe_int(os.getenv("MAX_UPLOAD_BYTES"), 5 * 1024 * 1024) or 5 * 1024 * 1024,
            frontend_origins=tuple(origin.strip() for origin in raw_origins.split(",") if origin.strip()),
            search_result_limit=max(1, _safe_int(os.getenv("SEARCH_RESULT_LIMIT"), 10) or 10),
            strict_persistence=_parse_bool(os.getenv("STRICT_PERSISTENCE"), False),
        )
