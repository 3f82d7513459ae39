"""Draft relations and the persisted cross-reference shapes.

A `DraftRelation` is an editor-authored, not yet persisted link from one
provision to another. At save time each draft is turned into a
`CrossReferencePayload`, which is what the persistence collaborator stores;
stored rows come back as `CrossReferenceRecord`.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from lexschema.document import LegalDocument, LegalProvision
from lexschema.kinds import DEFAULT_RELATION_KIND, RelationKind


class DraftRelationInput(BaseModel):
    """What the editor hands to the ledger when adding a relation.

    Entity references are optional at the model level so that incomplete
    selections can be represented and rejected with a useful error by the
    ledger instead of failing inside Pydantic.
    """

    model_config = {"frozen": True}

    from_provision: LegalProvision | None = None
    to_provision: LegalProvision | None = None
    from_document: LegalDocument | None = None
    to_document: LegalDocument | None = None
    relation_kind: RelationKind | None = DEFAULT_RELATION_KIND
    note: str | None = None

    def missing_fields(self) -> tuple[str, ...]:
        """Names of the required references that are not set."""
        required = ("from_provision", "to_provision", "from_document", "to_document", "relation_kind")
        return tuple(name for name in required if getattr(self, name) is None)

    @property
    def is_well_formed(self) -> bool:
        return not self.missing_fields()


class DraftRelation(DraftRelationInput):
    """A staged relation held by the ledger.

    `temp_id` is assigned once when the relation enters the ledger and is the
    only identity used to remove it again.
    """

    temp_id: str = Field(description="Ephemeral ledger identifier.")


class CrossReferencePayload(BaseModel):
    """Serialized cross-reference ready for the batch insert."""

    model_config = {"frozen": True}

    from_provision_id: int = Field(description="Resolved numeric surrogate key of the source provision.")
    to_document_number: str = Field(description="Citation number (or id) of the target document.")
    to_anchor: str = Field(description="Anchor (or provision number) of the target provision.")
    ref_type: RelationKind
    ref_text: str | None = Field(default=None, description="Editor note; never an empty string.")


class CrossReferenceRecord(CrossReferencePayload):
    """A cross-reference as stored by the persistence collaborator."""

    id: int
    created_at: datetime


class InsertResult(BaseModel):
    """Outcome of one batch insert."""

    model_config = {"frozen": True}

    inserted_count: int = Field(ge=0)
