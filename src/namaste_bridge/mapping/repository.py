"""Reference index of known NAMASTE codes."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import import_module
from importlib.resources import files

from namaste_bridge.exceptions import ReferenceDataError


@dataclass(frozen=True)
class ReferenceEntry:
    code: str
    term: str
    system: str = "ayurveda"
    native_term: str | None = None
    definition: str | None = None

    @property
    def display(self) -> str:
        return self.term


class ReferenceIndex:
    """Immutable lookup over a fixed set of reference entries.

    Codes and terms are keyed uppercased. When several entries share a key the
    first one in dataset order wins.
    """

    def __init__(self, entries: Iterable[ReferenceEntry], *, version: str = "custom"):
        self.version = version
        self._entries: tuple[ReferenceEntry, ...] = tuple(entries)
        by_code: dict[str, ReferenceEntry] = {}
        by_term: dict[str, ReferenceEntry] = {}
        for entry in self._entries:
            by_code.setdefault(_key(entry.code), entry)
            by_term.setdefault(_key(entry.term), entry)
        self._by_code = by_code
        self._by_term = by_term

    @classmethod
    def from_version(cls, version: str = "v1") -> ReferenceIndex:
        return cls(_load_entries(version), version=version)

    @property
    def entries(self) -> tuple[ReferenceEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and _key(code) in self._by_code

    def get(self, code: str) -> ReferenceEntry | None:
        return self._by_code.get(_key(code))

    def find(self, code: str, term: str | None = None) -> ReferenceEntry | None:
        """Resolve a source code/term to a reference entry.

        Tries the exact code, then the exact term, then substring containment
        between the code and every known code in dataset order.
        """
        code_key = _key(code)
        entry = self._by_code.get(code_key)
        if entry:
            return entry

        if term:
            entry = self._by_term.get(_key(term))
            if entry:
                return entry

        if not code_key:
            return None
        for candidate in self._entries:
            candidate_key = _key(candidate.code)
            if code_key in candidate_key or candidate_key in code_key:
                return candidate
        return None

    def search(self, query: str, limit: int = 10) -> list[ReferenceEntry]:
        """Case-insensitive substring search over codes and terms."""
        needle = query.strip().lower()
        if not needle or limit <= 0:
            return []

        matches = [
            entry
            for entry in self._entries
            if needle in entry.code.lower() or needle in entry.term.lower()
        ]
        # sorted() is stable, so dataset order is kept within each group.
        matches = sorted(matches, key=lambda entry: entry.code.lower() != needle)
        return matches[:limit]


def _key(value: str) -> str:
    return value.strip().upper()


def _load_entries(version: str) -> list[ReferenceEntry]:
    try:
        module = import_module(f"namaste_bridge.mapping.data.{version}.namc_codes")
        data = module.NAMC_CODES
    except ModuleNotFoundError:
        path = files("namaste_bridge.mapping.data").joinpath(version, "namc_codes.json")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ReferenceDataError(f"Reference dataset not found: {version}") from exc

    try:
        return [ReferenceEntry(**item) for item in data]
    except TypeError as exc:
        raise ReferenceDataError(f"Malformed reference dataset {version}: {exc}") from exc
