"""Reference lookup and ICD-11 mapping for NAMASTE codes."""

from namaste_bridge.mapping.engine import CONFIDENCE_POLICY, MappingConfig, MappingEngine, map_row
from namaste_bridge.mapping.repository import ReferenceEntry, ReferenceIndex
from namaste_bridge.mapping.targets import TargetGenerator, code_hash

__all__ = [
    "CONFIDENCE_POLICY",
    "MappingConfig",
    "MappingEngine",
    "ReferenceEntry",
    "ReferenceIndex",
    "TargetGenerator",
    "code_hash",
    "map_row",
]
