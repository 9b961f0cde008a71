"""Tests for FHIR bundle generation."""

from datetime import datetime, timezone
from itertools import count

from namaste_bridge import MappingResult, generate_bundle
from namaste_bridge.fhir import BundleGenerator

FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _generator() -> BundleGenerator:
    counter = count(1)
    return BundleGenerator(clock=lambda: FIXED_NOW, id_factory=lambda: f"id-{next(counter)}")


def _mapped() -> MappingResult:
    return MappingResult(
        source_code="NAM001",
        source_term="Vata Dosha Imbalance",
        secondary_code="TM2.006",
        secondary_term="Tissue Depletion Pattern",
        tertiary_code="R53",
        tertiary_term="Malaise and fatigue",
        confidence_score=0.92,
        mapping_status="mapped",
    )


def _unmapped() -> MappingResult:
    return MappingResult(source_code="XYZ", source_term="Unknown", confidence_score=0.0, mapping_status="unmapped")


def test_bundle_top_level_fields():
    bundle = _generator().generate([_mapped()], "doctor@example.com").to_dict()

    assert bundle["resourceType"] == "Bundle"
    assert bundle["type"] == "collection"
    assert bundle["id"].startswith("namaste-icd11-mapping-")
    assert bundle["identifier"]["system"] == "urn:ietf:rfc:3986"
    assert bundle["identifier"]["value"].startswith("urn:uuid:")
    assert bundle["timestamp"] == FIXED_NOW.isoformat()
    assert bundle["meta"]["lastUpdated"] == FIXED_NOW.isoformat()


def test_bundle_has_one_entry_per_result_with_matching_status():
    results = [_mapped(), _unmapped(), _mapped()]

    bundle = _generator().generate(results, "doctor@example.com")

    assert len(bundle.entry) == len(results)
    for entry, result in zip(bundle.entry, results):
        properties = {prop.code: prop for prop in entry.resource.concept[0].property}
        assert properties["mapping_status"].valueCode == result.mapping_status
        assert properties["confidence_score"].valueDecimal == result.confidence_score


def test_code_system_entry_contents():
    bundle = _generator().generate([_mapped()], "doctor@example.com").to_dict()

    resource = bundle["entry"][0]["resource"]
    assert bundle["entry"][0]["fullUrl"].startswith("urn:uuid:")
    assert resource["resourceType"] == "CodeSystem"
    assert resource["id"] == "namaste-NAM001"
    assert resource["status"] == "active"
    assert resource["caseSensitive"] is True
    assert resource["content"] == "complete"
    assert resource["count"] == 1
    assert resource["contact"][0]["telecom"] == [{"system": "email", "value": "doctor@example.com"}]
    assert resource["jurisdiction"][0]["coding"][0]["code"] == "IN"
    expected_oid = f"urn:oid:2.16.356.10.{int(FIXED_NOW.timestamp() * 1000)}.0"
    assert resource["identifier"][0]["value"] == expected_oid

    concept = resource["concept"][0]
    assert concept["code"] == "NAM001"
    assert concept["display"] == "Vata Dosha Imbalance"
    assert concept["definition"] == "Traditional medicine term: Vata Dosha Imbalance"
    assert [item["value"] for item in concept["designation"]] == [
        "ICD-11 TM2: TM2.006 - Tissue Depletion Pattern",
        "ICD-11 Biomedicine: R53 - Malaise and fatigue",
    ]
    assert concept["property"] == [
        {"code": "confidence_score", "valueDecimal": 0.92},
        {"code": "mapping_status", "valueCode": "mapped"},
        {"code": "icd11_tm2_mapping", "valueString": "TM2.006|Tissue Depletion Pattern"},
        {"code": "icd11_bio_mapping", "valueString": "R53|Malaise and fatigue"},
    ]


def test_result_without_targets_has_no_designations():
    bundle = _generator().generate([_unmapped()], "doctor@example.com")

    concept = bundle.entry[0].resource.concept[0]
    assert concept.designation == []
    assert [prop.code for prop in concept.property] == ["confidence_score", "mapping_status"]


def test_generate_does_not_mutate_results():
    results = [_mapped(), _unmapped()]
    before = [result.model_dump() for result in results]

    generate_bundle(results, "doctor@example.com")

    assert [result.model_dump() for result in results] == before


def test_default_identifiers_are_unique():
    bundle = generate_bundle([_mapped(), _mapped()], "doctor@example.com")
    other = generate_bundle([_mapped()], "doctor@example.com")

    full_urls = {entry.fullUrl for entry in bundle.entry}
    assert len(full_urls) == 2
    assert bundle.id != other.id
    assert bundle.identifier.value != other.identifier.value
    assert datetime.fromisoformat(bundle.timestamp).tzinfo is not None


def test_empty_results_give_empty_bundle():
    bundle = generate_bundle([], "doctor@example.com")

    assert bundle.entry == []
    assert '"resourceType": "Bundle"' in bundle.to_json()
