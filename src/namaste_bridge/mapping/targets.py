"""Deterministic ICD-11 target selection.

This is a stand-in for a real NAMASTE to ICD-11 crosswalk: a target is picked
from a fixed list by the character-code sum of the source code, so every code,
known or not, gets a stable, plausible target in each system.
"""

from __future__ import annotations

from collections.abc import Sequence

from namaste_bridge.schema import TargetMapping

Target = tuple[str, str]

ICD11_TM2_TARGETS: tuple[Target, ...] = (
    ("TM2.001", "Vata Dosha Imbalance"),
    ("TM2.002", "Pitta Dosha Imbalance"),
    ("TM2.003", "Kapha Dosha Imbalance"),
    ("TM2.004", "Digestive Fire Weakness"),
    ("TM2.005", "Mental Agitation Pattern"),
    ("TM2.006", "Tissue Depletion Pattern"),
)

ICD11_BIO_TARGETS: tuple[Target, ...] = (
    ("M79.3", "Panniculitis, unspecified"),
    ("K30", "Functional dyspepsia"),
    ("J44.1", "Chronic obstructive pulmonary disease with acute exacerbation"),
    ("K59.9", "Functional intestinal disorder, unspecified"),
    ("F41.9", "Anxiety disorder, unspecified"),
    ("R53", "Malaise and fatigue"),
)


def code_hash(code: str) -> int:
    """Sum of the character codes of ``code``."""
    return sum(ord(char) for char in code)


class TargetGenerator:
    """Selects secondary (TM2) and tertiary (biomedicine) targets for a code.

    An empty target list disables that side entirely.
    """

    def __init__(
        self,
        secondary_targets: Sequence[Target] = ICD11_TM2_TARGETS,
        tertiary_targets: Sequence[Target] = ICD11_BIO_TARGETS,
    ):
        self.secondary_targets = tuple(secondary_targets)
        self.tertiary_targets = tuple(tertiary_targets)

    def indices(self, code: str) -> tuple[int | None, int | None]:
        value = code_hash(code)
        secondary = value % len(self.secondary_targets) if self.secondary_targets else None
        tertiary = value % len(self.tertiary_targets) if self.tertiary_targets else None
        return secondary, tertiary

    def generate(self, code: str) -> TargetMapping:
        secondary_index, tertiary_index = self.indices(code)
        secondary_code, secondary_term = (
            self.secondary_targets[secondary_index] if secondary_index is not None else (None, None)
        )
        tertiary_code, tertiary_term = (
            self.tertiary_targets[tertiary_index] if tertiary_index is not None else (None, None)
        )
        return TargetMapping(
            secondary_code=secondary_code,
            secondary_term=secondary_term,
            tertiary_code=tertiary_code,
            tertiary_term=tertiary_term,
        )
