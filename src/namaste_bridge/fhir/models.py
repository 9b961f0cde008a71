"""FHIR R4 resource shapes used in the exported bundle.

Only the elements the exporter writes are modelled. Field names follow the
FHIR JSON element names.
"""

from typing import Literal

from pydantic import BaseModel, Field


class Meta(BaseModel):
    versionId: str | None = None
    lastUpdated: str
    profile: list[str] = Field(default_factory=list)


class Identifier(BaseModel):
    system: str
    value: str


class Coding(BaseModel):
    system: str
    code: str
    display: str | None = None


class CodeableConcept(BaseModel):
    coding: list[Coding] = Field(default_factory=list)


class ContactPoint(BaseModel):
    system: Literal["email", "phone", "url"] = "email"
    value: str


class ContactDetail(BaseModel):
    name: str
    telecom: list[ContactPoint] = Field(default_factory=list)


class Designation(BaseModel):
    language: str = "en-US"
    use: Coding
    value: str


class ConceptProperty(BaseModel):
    code: str
    valueDecimal: float | None = None
    valueCode: str | None = None
    valueString: str | None = None


class Concept(BaseModel):
    code: str
    display: str
    definition: str
    designation: list[Designation] = Field(default_factory=list)
    property: list[ConceptProperty] = Field(default_factory=list)


class CodeSystem(BaseModel):
    resourceType: Literal["CodeSystem"] = "CodeSystem"
    id: str
    meta: Meta
    url: str
    identifier: list[Identifier] = Field(default_factory=list)
    version: str
    name: str
    title: str
    status: Literal["draft", "active", "retired", "unknown"] = "active"
    experimental: bool = False
    date: str
    publisher: str
    contact: list[ContactDetail] = Field(default_factory=list)
    description: str
    jurisdiction: list[CodeableConcept] = Field(default_factory=list)
    purpose: str
    copyright: str
    caseSensitive: bool = True
    valueSet: str | None = None
    content: Literal["not-present", "example", "fragment", "complete", "supplement"] = "complete"
    count: int
    concept: list[Concept] = Field(default_factory=list)


class BundleEntry(BaseModel):
    fullUrl: str
    resource: CodeSystem


class Bundle(BaseModel):
    resourceType: Literal["Bundle"] = "Bundle"
    id: str
    meta: Meta
    identifier: Identifier
    type: Literal["collection"] = "collection"
    timestamp: str
    entry: list[BundleEntry] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent, exclude_none=True)
