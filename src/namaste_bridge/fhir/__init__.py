"""FHIR R4 bundle generation for mapping results."""

from namaste_bridge.fhir.bundle import BundleGenerator, generate_bundle
from namaste_bridge.fhir.models import Bundle, CodeSystem

__all__ = ["Bundle", "BundleGenerator", "CodeSystem", "generate_bundle"]
