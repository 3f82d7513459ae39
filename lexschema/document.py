"""Legal documents and provisions as returned by the lookup collaborator.

Both models are frozen: they are read-only inputs to the cross-reference
engine and are never mutated after they have been fetched.
"""

from pydantic import BaseModel, Field


class LegalDocument(BaseModel):
    """A statute, regulation, court decision, circular or preparatory work."""

    model_config = {"frozen": True}

    document_id: str = Field(description="Storage identifier of the document.")
    title: str = Field(description="Human-readable title.")
    source_kind: str | None = Field(
        default=None,
        description="Declared source kind. May be absent or unreliable, so it is kept as a raw string.",
    )
    document_number: str | None = Field(
        default=None,
        description="Citation number, e.g. 'LOV-1998-07-17-56'.",
    )
    status: str = Field(default="active", description="Document lifecycle status.")
    is_primary_source: bool = Field(
        default=False,
        description="Whether this is a primary legal source.",
    )
    source_url: str | None = Field(
        default=None,
        description="Link to the published text, if known.",
    )


class LegalProvision(BaseModel):
    """A single numbered provision (section/paragraph) within a document."""

    model_config = {"frozen": True}

    provision_id: str = Field(description="Display/lookup identifier of the provision.")
    provision_number: str = Field(description="Human label, e.g. '3-1'.")
    title: str = Field(default="", description="Provision heading.")
    document_id: str = Field(description="Identifier of the parent document.")
    anchor: str | None = Field(
        default=None,
        description="Canonical machine-readable citation, e.g. 'LOV-1998-07-17-56.§3-1'.",
    )
    sort_order: int = Field(default=0, description="Position within the parent document.")
    is_active: bool = Field(default=True, description="Whether the provision is in force.")
