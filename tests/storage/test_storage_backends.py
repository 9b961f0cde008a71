"""Tests for storage backends."""

import psycopg
import pytest

from namaste_bridge import MappingResult
from namaste_bridge.config import BridgeConfig
from namaste_bridge.exceptions import StorageError
from namaste_bridge.storage import InMemoryMappingStore, build_store
from namaste_bridge.storage.postgres import PostgresMappingStore

RESULT = MappingResult(
    source_code="NAM001",
    source_term="Vata Dosha Imbalance",
    secondary_code="TM2.006",
    secondary_term="Tissue Depletion Pattern",
    confidence_score=0.68,
    mapping_status="partial",
)


def test_storage_row_layout():
    row = RESULT.to_storage_row(file_id="f1", user_id="u1")

    assert row["namaste_code"] == "NAM001"
    assert row["icd11_tm2_code"] == "TM2.006"
    assert row["icd11_bio_code"] is None
    assert row["mapping_status"] == "partial"


def test_memory_store_round_trip():
    store = InMemoryMappingStore()

    file_id = store.create_file(user_id="u1", filename="codes.csv", file_size=42, total_records=1)
    assert store.files[file_id]["processing_status"] == "processing"

    assert store.insert_mappings(file_id=file_id, user_id="u1", results=[RESULT]) == 1
    store.update_file_status(file_id, "completed", processed_records=1)

    assert store.files[file_id]["processing_status"] == "completed"
    assert store.list_mappings(user_id="u1", file_id=file_id)[0]["namaste_term"] == "Vata Dosha Imbalance"
    assert store.list_mappings(user_id="someone-else", file_id=file_id) == []


def test_memory_store_unknown_file_raises():
    store = InMemoryMappingStore()

    with pytest.raises(StorageError):
        store.insert_mappings(file_id="missing", user_id="u1", results=[RESULT])
    with pytest.raises(StorageError):
        store.update_file_status("missing", "failed")


def _mock_connection(mocker):
    conn = mocker.MagicMock()
    conn.__enter__.return_value = conn
    cur = mocker.MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    connect = mocker.patch("namaste_bridge.storage.postgres.psycopg.connect", return_value=conn)
    return connect, conn, cur


def test_postgres_store_requires_database_url():
    with pytest.raises(StorageError):
        PostgresMappingStore("")


def test_postgres_create_file_returns_id(mocker):
    connect, conn, cur = _mock_connection(mocker)
    cur.fetchone.return_value = {"id": "0b7c"}

    store = PostgresMappingStore("postgresql://localhost/test")
    file_id = store.create_file(user_id="u1", filename="codes.csv", file_size=10, total_records=2)

    assert file_id == "0b7c"
    connect.assert_called_once()
    conn.commit.assert_called_once()


def test_postgres_insert_mappings_uses_executemany(mocker):
    _, _, cur = _mock_connection(mocker)

    store = PostgresMappingStore("postgresql://localhost/test")
    inserted = store.insert_mappings(file_id="f1", user_id="u1", results=[RESULT, RESULT])

    assert inserted == 2
    sql, params = cur.executemany.call_args.args
    assert "insert into processed_codes" in sql
    assert params[0][:4] == ("f1", "u1", "NAM001", "Vata Dosha Imbalance")


def test_postgres_errors_are_wrapped(mocker):
    mocker.patch(
        "namaste_bridge.storage.postgres.psycopg.connect",
        side_effect=psycopg.OperationalError("connection refused"),
    )

    store = PostgresMappingStore("postgresql://localhost/test")
    with pytest.raises(StorageError):
        store.update_file_status("f1", "completed", processed_records=1)


def test_build_store_selects_backend():
    assert build_store(BridgeConfig(storage_backend="none")) is None
    assert isinstance(build_store(BridgeConfig(storage_backend="memory")), InMemoryMappingStore)
    assert isinstance(
        build_store(BridgeConfig(storage_backend="postgres", database_url="postgresql://localhost/test")),
        PostgresMappingStore,
    )
    with pytest.raises(ValueError):
        build_store(BridgeConfig(storage_backend="sqlite"))
