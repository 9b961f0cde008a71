"""Tests for the command-line interface."""

import json

import pytest

from namaste_bridge.cli import main


@pytest.fixture(autouse=True)
def no_storage(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "none")


def test_convert_json_output_and_bundle_file(tmp_path, capsys):
    source = tmp_path / "codes.csv"
    source.write_text("code,term\nNAM001,Vata Dosha Imbalance\nXYZ1,Local\n", encoding="utf-8")
    output = tmp_path / "bundle.json"

    exit_code = main(["convert", str(source), "--email", "doctor@example.com", "--json", "-o", str(output)])

    assert exit_code == 0
    results = json.loads(capsys.readouterr().out)
    assert [item["source_code"] for item in results] == ["NAM001", "XYZ1"]
    assert results[0]["confidence_score"] == 0.92
    bundle = json.loads(output.read_text(encoding="utf-8"))
    assert bundle["resourceType"] == "Bundle"
    assert len(bundle["entry"]) == 2


def test_convert_table_output(tmp_path, capsys):
    source = tmp_path / "codes.tsv"
    source.write_text("code\tterm\nNAM002\tPitta Dosha Imbalance\n", encoding="utf-8")

    assert main(["convert", str(source), "--email", "doctor@example.com"]) == 0

    out = capsys.readouterr().out
    assert "NAM002" in out
    assert "mapped (92%)" in out


def test_convert_missing_file(tmp_path, capsys):
    assert main(["convert", str(tmp_path / "missing.csv"), "--email", "doctor@example.com"]) == 1
    assert "file not found" in capsys.readouterr().err


def test_convert_header_only_file(tmp_path, capsys):
    source = tmp_path / "codes.csv"
    source.write_text("code,term\n", encoding="utf-8")

    assert main(["convert", str(source), "--email", "doctor@example.com"]) == 1
    assert "No valid data" in capsys.readouterr().err


def test_search_json(capsys):
    assert main(["search", "dosha", "--limit", "2", "--json"]) == 0

    results = json.loads(capsys.readouterr().out)
    assert [item["source_code"] for item in results] == ["NAM001", "NAM002"]
