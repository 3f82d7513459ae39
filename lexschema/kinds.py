"""Closed vocabularies for legal sources and cross-reference semantics.

Both enums subclass `str` so they serialize as their plain values and compare
equal to them, while Pydantic rejects anything outside the set at model
construction time.
"""

from enum import Enum


class SourceKind(str, Enum):
    """The kind of legal source a document or provision belongs to."""

    STATUTE = "statute"
    REGULATION = "regulation"
    CASELAW = "caselaw"
    CIRCULAR = "circular"
    PREPARATORY_WORK = "preparatory_work"
    UNKNOWN = "unknown"

    @property
    def color(self) -> str:
        """Hex colour used for nodes and edges of this kind."""
        return SOURCE_KIND_COLORS[self]

    @property
    def legacy_code(self) -> str:
        """Norwegian document type code used by the legacy admin tool."""
        return SOURCE_KIND_LEGACY_CODES[self]


class RelationKind(str, Enum):
    """Semantic label carried by a cross-reference between two provisions."""

    CLARIFIES = "clarifies"
    ENABLED_BY = "enabled_by"
    IMPLEMENTS = "implements"
    CITES = "cites"
    INTERPRETS = "interprets"
    APPLIES = "applies"
    MENTIONS = "mentions"

    @property
    def label(self) -> str:
        """Norwegian display label."""
        return RELATION_KIND_LABELS[self]


DEFAULT_RELATION_KIND = RelationKind.CITES

SOURCE_KIND_COLORS: dict[SourceKind, str] = {
    SourceKind.STATUTE: "#3B82F6",
    SourceKind.REGULATION: "#10B981",
    SourceKind.CASELAW: "#8B5CF6",
    SourceKind.CIRCULAR: "#F59E0B",
    SourceKind.PREPARATORY_WORK: "#6B7280",
    SourceKind.UNKNOWN: "#9CA3AF",
}

SOURCE_KIND_LEGACY_CODES: dict[SourceKind, str] = {
    SourceKind.STATUTE: "lov",
    SourceKind.REGULATION: "forskrift",
    SourceKind.CASELAW: "dom",
    SourceKind.CIRCULAR: "rundskriv",
    SourceKind.PREPARATORY_WORK: "forarbeid",
    SourceKind.UNKNOWN: "ukjent",
}

RELATION_KIND_LABELS: dict[RelationKind, str] = {
    RelationKind.CLARIFIES: "Utdyper",
    RelationKind.ENABLED_BY: "Hjemles i",
    RelationKind.IMPLEMENTS: "Implementerer",
    RelationKind.CITES: "Viser til",
    RelationKind.INTERPRETS: "Tolker",
    RelationKind.APPLIES: "Anvender",
    RelationKind.MENTIONS: "Nevner",
}
