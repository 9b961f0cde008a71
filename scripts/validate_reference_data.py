"""Validate packaged NAMASTE reference datasets.

Checks:
1. Every entry has a non-empty code, term and a known system.
2. Codes are unique (case-insensitive) within a version.
3. Terms are unique (case-insensitive) within a version.
4. The default ICD-11 target lists are non-empty and hold unique codes.
"""

from __future__ import annotations

import runpy
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
DATA_ROOT = ROOT / "src" / "namaste_bridge" / "mapping" / "data"
TARGETS_PATH = ROOT / "src" / "namaste_bridge" / "mapping" / "targets.py"
VALID_SYSTEMS = {"ayurveda", "siddha", "unani"}
REQUIRED_FIELDS = ("code", "term", "system")


def fail(message: str) -> None:
    print(f"[reference-check] ERROR: {message}")
    raise SystemExit(1)


def load_python_constant(path: Path, key: str) -> list:
    namespace = runpy.run_path(str(path))
    value = namespace.get(key)
    if not isinstance(value, (list, tuple)):
        fail(f"Missing or invalid constant '{key}' in {path}")
    return list(value)


def validate_entries(entries: list[dict], label: str) -> None:
    for entry in entries:
        if not isinstance(entry, dict):
            fail(f"{label}: invalid entry {entry!r}")
        for field in REQUIRED_FIELDS:
            value = entry.get(field)
            if not isinstance(value, str) or not value.strip():
                fail(f"{label}: entry {entry!r} has empty '{field}'")
        if entry["system"] not in VALID_SYSTEMS:
            fail(f"{label}: unknown system {entry['system']!r} for {entry['code']}")


def validate_unique(entries: list[dict], field: str, label: str) -> None:
    seen: set[str] = set()
    for entry in entries:
        key = entry[field].strip().upper()
        if key in seen:
            fail(f"{label}: duplicate {field} {entry[field]!r}")
        seen.add(key)


def validate_targets(targets: list, label: str) -> None:
    if not targets:
        fail(f"{label} must not be empty")
    codes = [code for code, _ in targets]
    if len(codes) != len(set(codes)):
        fail(f"{label} contains duplicate codes")


def iter_reference_versions() -> list[Path]:
    versions = [
        path
        for path in sorted(DATA_ROOT.iterdir())
        if path.is_dir() and (path / "namc_codes.py").exists()
    ]
    if not versions:
        fail(f"No reference versions found under {DATA_ROOT}")
    return versions


def main() -> int:
    for version_dir in iter_reference_versions():
        entries = load_python_constant(version_dir / "namc_codes.py", "NAMC_CODES")
        validate_entries(entries, version_dir.name)
        validate_unique(entries, "code", version_dir.name)
        validate_unique(entries, "term", version_dir.name)

    validate_targets(load_python_constant(TARGETS_PATH, "ICD11_TM2_TARGETS"), "ICD11_TM2_TARGETS")
    validate_targets(load_python_constant(TARGETS_PATH, "ICD11_BIO_TARGETS"), "ICD11_BIO_TARGETS")

    print("[reference-check] OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
