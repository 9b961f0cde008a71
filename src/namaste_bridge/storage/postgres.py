"""PostgreSQL storage backend (psycopg 3)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import psycopg
from psycopg.rows import dict_row

from namaste_bridge.exceptions import StorageError
from namaste_bridge.schema import MappingResult
from namaste_bridge.storage.base import FileStatus, MappingStore

logger = logging.getLogger(__name__)

CREATE_FILES_SQL = """
    create table if not exists uploaded_files (
      id uuid primary key default gen_random_uuid(),
      user_id text not null,
      filename text not null,
      file_size integer not null,
      total_records integer not null,
      processed_records integer not null default 0,
      processing_status text not null default 'processing',
      created_at timestamptz not null default now(),
      updated_at timestamptz not null default now()
    )
"""

CREATE_CODES_SQL = """
    create table if not exists processed_codes (
      id bigserial primary key,
      file_id uuid not null references uploaded_files(id) on delete cascade,
      user_id text not null,
      namaste_code text not null,
      namaste_term text not null,
      icd11_tm2_code text null,
      icd11_tm2_term text null,
      icd11_bio_code text null,
      icd11_bio_term text null,
      confidence_score double precision not null,
      mapping_status text not null,
      created_at timestamptz not null default now()
    )
"""

INSERT_CODE_SQL = """
    insert into processed_codes (
      file_id, user_id, namaste_code, namaste_term, icd11_tm2_code, icd11_tm2_term,
      icd11_bio_code, icd11_bio_term, confidence_score, mapping_status
    ) values (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
"""


class PostgresMappingStore(MappingStore):
    """Stores uploaded files and processed codes in PostgreSQL."""

    def __init__(self, database_url: str):
        if not database_url:
            raise StorageError("DATABASE_URL is required for the postgres storage backend")
        self.database_url = database_url
        self._db_ready = False

    def _conn(self) -> psycopg.Connection:
        return psycopg.connect(self.database_url, row_factory=dict_row)

    def _ensure_schema(self, cur) -> None:
        if self._db_ready:
            return
        cur.execute(CREATE_FILES_SQL)
        cur.execute(CREATE_CODES_SQL)
        cur.execute("create index if not exists idx_processed_codes_file_user on processed_codes(file_id, user_id)")
        self._db_ready = True

    def create_file(self, *, user_id: str, filename: str, file_size: int, total_records: int) -> str:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(
                        """
                        insert into uploaded_files (user_id, filename, file_size, total_records, processing_status)
                        values (%s, %s, %s, %s, 'processing')
                        returning id
                        """,
                        (user_id, filename, file_size, total_records),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to create file record: {exc}") from exc

        if not row or row.get("id") is None:
            raise StorageError("File record insert returned no id")
        return str(row["id"])

    def insert_mappings(self, *, file_id: str, user_id: str, results: Sequence[MappingResult]) -> int:
        if not results:
            return 0
        params = []
        for result in results:
            row = result.to_storage_row(file_id=file_id, user_id=user_id)
            params.append(
                (
                    row["file_id"],
                    row["user_id"],
                    row["namaste_code"],
                    row["namaste_term"],
                    row["icd11_tm2_code"],
                    row["icd11_tm2_term"],
                    row["icd11_bio_code"],
                    row["icd11_bio_term"],
                    row["confidence_score"],
                    row["mapping_status"],
                )
            )
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.executemany(INSERT_CODE_SQL, params)
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to insert mapping rows: {exc}") from exc
        logger.debug("inserted %d mapping rows for file %s", len(params), file_id)
        return len(params)

    def update_file_status(self, file_id: str, status: FileStatus, *, processed_records: int | None = None) -> None:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        update uploaded_files
                        set processing_status = %s,
                            processed_records = coalesce(%s, processed_records),
                            updated_at = now()
                        where id = %s
                        """,
                        (status, processed_records, file_id),
                    )
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to update file status: {exc}") from exc

    def list_mappings(self, *, user_id: str, file_id: str) -> list[dict]:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        select namaste_code, namaste_term, icd11_tm2_code, icd11_tm2_term,
                               icd11_bio_code, icd11_bio_term, confidence_score, mapping_status
                        from processed_codes
                        where file_id = %s and user_id = %s
                        order by id
                        """,
                        (file_id, user_id),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to query mapping rows: {exc}") from exc
        return [dict(row, file_id=file_id, user_id=user_id) for row in rows]
