"""Builds FHIR R4 collection bundles from mapping results."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from namaste_bridge.fhir.models import (
    Bundle,
    BundleEntry,
    CodeableConcept,
    CodeSystem,
    Coding,
    Concept,
    ConceptProperty,
    ContactDetail,
    ContactPoint,
    Designation,
    Identifier,
    Meta,
)
from namaste_bridge.schema import MappingResult

URI_SYSTEM = "urn:ietf:rfc:3986"
BUNDLE_PROFILE = "http://hl7.org/fhir/StructureDefinition/Bundle"
CODE_SYSTEM_PROFILE = "http://hl7.org/fhir/StructureDefinition/CodeSystem"
DESIGNATION_USAGE_SYSTEM = "http://terminology.hl7.org/CodeSystem/designation-usage"
CODE_SYSTEM_URL = "http://namaste.gov.in/fhir/CodeSystem/namaste-terminology"
VALUE_SET_URL = "http://namaste.gov.in/fhir/ValueSet/all-namaste-codes"
CODE_SYSTEM_VERSION = "2024.1"
OID_PREFIX = "2.16.356.10"

TM2_LABEL = "ICD-11 TM2"
BIO_LABEL = "ICD-11 Biomedicine"
TM2_PROPERTY = "icd11_tm2_mapping"
BIO_PROPERTY = "icd11_bio_mapping"

PUBLISHER = "Ministry of Ayush, Government of India"
CONTACT_NAME = "NAMASTE System Administrator"
DESCRIPTION = (
    "NAMASTE codes with ICD-11 TM2 and Biomedicine mappings for traditional medicine integration"
)
PURPOSE = (
    "To provide standardized terminology for Ayurveda, Siddha, and Unani medical systems "
    "with global ICD-11 interoperability"
)
COPYRIGHT = "© 2024 Ministry of Ayush, Government of India. All rights reserved."

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid4() -> str:
    return str(uuid.uuid4())


class BundleGenerator:
    """Assembles mapping results into a single FHIR collection bundle."""

    def __init__(self, clock: Clock | None = None, id_factory: IdFactory | None = None):
        self.clock = clock or _utc_now
        self.id_factory = id_factory or _uuid4

    def generate(self, results: Sequence[MappingResult], submitter_email: str) -> Bundle:
        """Build a bundle with one CodeSystem entry per result.

        Args:
            results: Mapping results in output order. They are only read.
            submitter_email: Email recorded as the CodeSystem contact.

        Returns:
            Bundle ready for serialisation.
        """
        now = self.clock()
        timestamp = now.isoformat()
        epoch_ms = int(now.timestamp() * 1000)

        entries = [
            BundleEntry(
                fullUrl=f"urn:uuid:{self.id_factory()}",
                resource=self._code_system(result, index, submitter_email, timestamp, epoch_ms),
            )
            for index, result in enumerate(results)
        ]

        return Bundle(
            id=f"namaste-icd11-mapping-{self.id_factory()}",
            meta=Meta(lastUpdated=timestamp, profile=[BUNDLE_PROFILE]),
            identifier=Identifier(system=URI_SYSTEM, value=f"urn:uuid:{self.id_factory()}"),
            timestamp=timestamp,
            entry=entries,
        )

    def _code_system(
        self,
        result: MappingResult,
        index: int,
        submitter_email: str,
        timestamp: str,
        epoch_ms: int,
    ) -> CodeSystem:
        return CodeSystem(
            id=f"namaste-{result.source_code}",
            meta=Meta(versionId="1", lastUpdated=timestamp, profile=[CODE_SYSTEM_PROFILE]),
            url=CODE_SYSTEM_URL,
            identifier=[Identifier(system=URI_SYSTEM, value=f"urn:oid:{OID_PREFIX}.{epoch_ms}.{index}")],
            version=CODE_SYSTEM_VERSION,
            name="NAMASTETerminology",
            title="NAMASTE Terminology System",
            date=timestamp,
            publisher=PUBLISHER,
            contact=[
                ContactDetail(
                    name=CONTACT_NAME,
                    telecom=[ContactPoint(system="email", value=submitter_email)],
                )
            ],
            description=DESCRIPTION,
            jurisdiction=[
                CodeableConcept(coding=[Coding(system="urn:iso:std:iso:3166", code="IN", display="India")])
            ],
            purpose=PURPOSE,
            copyright=COPYRIGHT,
            valueSet=VALUE_SET_URL,
            count=1,
            concept=[_concept(result)],
        )


def _concept(result: MappingResult) -> Concept:
    designations: list[Designation] = []
    properties = [
        ConceptProperty(code="confidence_score", valueDecimal=result.confidence_score),
        ConceptProperty(code="mapping_status", valueCode=result.mapping_status),
    ]

    if result.secondary_code:
        designations.append(_designation(TM2_LABEL, result.secondary_code, result.secondary_term))
        properties.append(
            ConceptProperty(code=TM2_PROPERTY, valueString=f"{result.secondary_code}|{result.secondary_term or ''}")
        )
    if result.tertiary_code:
        designations.append(_designation(BIO_LABEL, result.tertiary_code, result.tertiary_term))
        properties.append(
            ConceptProperty(code=BIO_PROPERTY, valueString=f"{result.tertiary_code}|{result.tertiary_term or ''}")
        )

    return Concept(
        code=result.source_code,
        display=result.source_term,
        definition=f"Traditional medicine term: {result.source_term}",
        designation=designations,
        property=properties,
    )


def _designation(label: str, code: str, term: str | None) -> Designation:
    return Designation(
        use=Coding(system=DESIGNATION_USAGE_SYSTEM, code="display"),
        value=f"{label}: {code} - {term or ''}",
    )


def generate_bundle(results: Sequence[MappingResult], submitter_email: str) -> Bundle:
    """Generate a FHIR bundle with wall-clock timestamps and random identifiers."""

    return BundleGenerator().generate(results, submitter_email)
