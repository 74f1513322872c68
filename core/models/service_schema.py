# ============================================================================
# SERVICE SCHEMA REGISTRY
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Domain model - Per-service-type form configuration
# PURPOSE: Field schema, file slots, and destination collection per form type
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Service Schema Registry

One ServiceSchema per ServiceType. The intake pipeline is generic; the
schema is the only thing that differs between the research permit and
internship permit forms.

Example:
    schema = get_service_schema(ServiceType.RESEARCH)
    schema.required_fields[0]     # "name"
    schema.collection_path        # "pelayanan/penelitian/data"
    schema.slot("ktpFile").url_field  # "fotocopyKTPUrl"
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from core.contracts import ServiceType


@dataclass(frozen=True)
class FileSlot:
    """
    A named file-attachment position in a form.

    Older form revisions posted the same attachment under different part
    names; those are listed in aliases and resolved to the canonical name.
    """
    name: str
    url_field: str
    aliases: Tuple[str, ...] = ()
    required: bool = True

    @property
    def part_names(self) -> Tuple[str, ...]:
        """Canonical part name first, then legacy aliases."""
        return (self.name,) + self.aliases


@dataclass(frozen=True)
class ServiceSchema:
    """Intake configuration for one service type."""
    service_type: ServiceType
    required_fields: Tuple[str, ...]
    file_slots: Tuple[FileSlot, ...]
    collection_path: str
    optional_fields: Tuple[str, ...] = ()
    field_aliases: Dict[str, str] = field(default_factory=dict)

    @property
    def record_fields(self) -> Tuple[str, ...]:
        """All text fields stored on the record, in schema order."""
        return self.required_fields + self.optional_fields

    def slot(self, name: str) -> FileSlot:
        """Get a file slot by canonical name."""
        for file_slot in self.file_slots:
            if file_slot.name == name:
                return file_slot
        raise KeyError(f"Unknown file slot '{name}' for {self.service_type.value}")

    def resolve_slot(self, part_name: str) -> Optional[FileSlot]:
        """Map an incoming multipart part name (canonical or alias) to its slot."""
        for file_slot in self.file_slots:
            if part_name in file_slot.part_names:
                return file_slot
        return None


# ============================================================================
# FILE SLOTS (shared by both forms)
# ============================================================================

COVER_LETTER_SLOT = FileSlot(
    name="suratPengantarFile",
    url_field="suratPengantarUrl",
    aliases=("suratPermohonanFile", "suratPermohonan"),
)
PROPOSAL_SLOT = FileSlot(
    name="proposalFile",
    url_field="proposalUrl",
    aliases=("proposal",),
)
ID_CARD_SLOT = FileSlot(
    name="ktpFile",
    url_field="fotocopyKTPUrl",
    aliases=("fotocopy",),
)

DEFAULT_FILE_SLOTS = (COVER_LETTER_SLOT, PROPOSAL_SLOT, ID_CARD_SLOT)


# ============================================================================
# SCHEMAS
# ============================================================================

RESEARCH_SCHEMA = ServiceSchema(
    service_type=ServiceType.RESEARCH,
    required_fields=(
        "name",
        "researcherName",
        "address",
        "inputValue",
        "institution",
        "occupation",
        "judulPenelitian",
        "researchField",
        "tujuanPenelitian",
        "supervisorName",
        "teamMembers",
        "statusPenelitian",
        "researchPeriod",
        "researchLocation",
    ),
    optional_fields=("letterNumber",),
    file_slots=DEFAULT_FILE_SLOTS,
    collection_path="pelayanan/penelitian/data",
)

INTERNSHIP_SCHEMA = ServiceSchema(
    service_type=ServiceType.INTERNSHIP,
    required_fields=(
        "letterNumber",
        "name",
        "address",
        "inputValue",
        "institution",
        "occupation",
        "judul",
        "supervisorName",
        "tujuanPermohonan",
        "teamMembers",
        "statusPermohonan",
        "period",
        "location",
    ),
    field_aliases={"applicantsName": "name"},
    file_slots=DEFAULT_FILE_SLOTS,
    collection_path="pelayanan/magang/data",
)

# /api/submit-form records keep the cover letter under its original key
LEGACY_RESEARCH_SCHEMA = replace(
    RESEARCH_SCHEMA,
    file_slots=(
        replace(COVER_LETTER_SLOT, url_field="suratPermohonanUrl"),
        PROPOSAL_SLOT,
        ID_CARD_SLOT,
    ),
)

SERVICE_SCHEMAS: Dict[ServiceType, ServiceSchema] = {
    ServiceType.RESEARCH: RESEARCH_SCHEMA,
    ServiceType.INTERNSHIP: INTERNSHIP_SCHEMA,
}


def get_service_schema(service_type: ServiceType) -> ServiceSchema:
    """Look up the schema for a service type."""
    try:
        return SERVICE_SCHEMAS[ServiceType(service_type)]
    except (KeyError, ValueError):
        raise KeyError(f"No intake schema for service type '{service_type}'")


__all__ = [
    "FileSlot",
    "ServiceSchema",
    "DEFAULT_FILE_SLOTS",
    "RESEARCH_SCHEMA",
    "INTERNSHIP_SCHEMA",
    "LEGACY_RESEARCH_SCHEMA",
    "SERVICE_SCHEMAS",
    "get_service_schema",
]
