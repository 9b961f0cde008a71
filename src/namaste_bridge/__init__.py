"""namaste-bridge: Map NAMASTE traditional-medicine codes to ICD-11 and export FHIR bundles."""

from namaste_bridge.core import ConversionPipeline, ConversionResult, convert, map_rows
from namaste_bridge.fhir import Bundle, generate_bundle
from namaste_bridge.mapping import MappingEngine, ReferenceEntry, ReferenceIndex, map_row
from namaste_bridge.parsing import Delimiter, parse
from namaste_bridge.schema import MappingResult, NormalizedRow, Submitter, TargetMapping

__version__ = "0.1.0"

__all__ = [
    "Bundle",
    "ConversionPipeline",
    "ConversionResult",
    "Delimiter",
    "MappingEngine",
    "MappingResult",
    "NormalizedRow",
    "ReferenceEntry",
    "ReferenceIndex",
    "Submitter",
    "TargetMapping",
    "convert",
    "generate_bundle",
    "map_row",
    "map_rows",
    "parse",
    "__version__",
]
