"""Test fixtures and factory helpers.

This module provides:
- Factory functions for documents, provisions and draft relations
- A recording renderer and failing collaborators for exercising error paths
- Pytest fixtures wiring in-memory collaborators into an EditingSession

The canonical scenario used throughout is a link between the accounting act
(LOV-1998-07-17-56 § 3-1) and the accounting regulation
(FOR-1999-12-11-1319 § 1-1).
"""

from datetime import datetime, timezone
from typing import Sequence

import pytest

from lexgraph.session import EditingSession
from lexgraph.storage.memory import (
    InMemoryCrossReferenceStorage,
    InMemoryLegalSourceLookup,
    InMemoryProvisionIdResolver,
)
from lexschema.document import LegalDocument, LegalProvision
from lexschema.graph import GraphModel
from lexschema.kinds import RelationKind
from lexschema.relation import CrossReferencePayload, DraftRelationInput, InsertResult
from lexschema.storage import GraphRendererInterface

FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# --- Factories ---


def make_document(
    document_id: str = "doc-1",
    title: str = "Test document",
    document_number: str | None = None,
    source_kind: str | None = None,
    source_url: str | None = None,
) -> LegalDocument:
    return LegalDocument(
        document_id=document_id,
        title=title,
        document_number=document_number,
        source_kind=source_kind,
        source_url=source_url,
    )


def make_provision(
    provision_id: str = "prov-1",
    document_id: str = "doc-1",
    provision_number: str = "1",
    anchor: str | None = None,
    title: str = "",
    sort_order: int = 0,
    is_active: bool = True,
) -> LegalProvision:
    return LegalProvision(
        provision_id=provision_id,
        provision_number=provision_number,
        title=title,
        document_id=document_id,
        anchor=anchor,
        sort_order=sort_order,
        is_active=is_active,
    )


def statute_doc() -> LegalDocument:
    return make_document(
        document_id="1",
        title="Lov om årsregnskap m.v. (regnskapsloven)",
        document_number="LOV-1998-07-17-56",
    )


def regulation_doc() -> LegalDocument:
    return make_document(
        document_id="3",
        title="Forskrift om årsregnskap m.m.",
        document_number="FOR-1999-12-11-1319",
    )


def statute_provision() -> LegalProvision:
    return make_provision("1", "1", "3-1", anchor="LOV-1998-07-17-56.§3-1", title="Regnskapspliktige")


def regulation_provision() -> LegalProvision:
    return make_provision("3", "3", "1-1", anchor="FOR-1999-12-11-1319.§1-1", title="Virkeområde")


def make_draft_input(
    from_provision: LegalProvision | None = None,
    to_provision: LegalProvision | None = None,
    from_document: LegalDocument | None = None,
    to_document: LegalDocument | None = None,
    relation_kind: RelationKind = RelationKind.CITES,
    note: str | None = None,
) -> DraftRelationInput:
    """A complete statute -> regulation draft unless overridden."""
    return DraftRelationInput(
        from_provision=from_provision or statute_provision(),
        to_provision=to_provision or regulation_provision(),
        from_document=from_document or statute_doc(),
        to_document=to_document or regulation_doc(),
        relation_kind=relation_kind,
        note=note,
    )


# --- Collaborator doubles ---


class RecordingRenderer(GraphRendererInterface):
    """Keeps every graph it is asked to render."""

    def __init__(self) -> None:
        self.rendered: list[GraphModel] = []

    def render(self, model: GraphModel) -> None:
        self.rendered.append(model)

    @property
    def last(self) -> GraphModel | None:
        return self.rendered[-1] if self.rendered else None


class FailingStorage(InMemoryCrossReferenceStorage):
    """Storage whose batch insert always fails."""

    def __init__(self) -> None:
        super().__init__(clock=lambda: FIXED_NOW)
        self.calls = 0

    async def insert_cross_references(self, payloads: Sequence[CrossReferencePayload]) -> InsertResult:
        self.calls += 1
        raise ConnectionError("database unavailable")


class FailingLookup(InMemoryLegalSourceLookup):
    async def find_documents(self, kind_filter=None, free_text=None, limit=50):
        raise TimeoutError("lookup timed out")


# --- Fixtures ---


@pytest.fixture
def lookup() -> InMemoryLegalSourceLookup:
    return InMemoryLegalSourceLookup(
        documents=[statute_doc(), regulation_doc()],
        provisions=[statute_provision(), regulation_provision()],
    )


@pytest.fixture
def storage() -> InMemoryCrossReferenceStorage:
    return InMemoryCrossReferenceStorage(clock=lambda: FIXED_NOW)


@pytest.fixture
def resolver() -> InMemoryProvisionIdResolver:
    return InMemoryProvisionIdResolver.from_provisions([statute_provision(), regulation_provision()])


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def session(lookup, storage, resolver, renderer) -> EditingSession:
    return EditingSession(lookup=lookup, storage=storage, resolver=resolver, renderer=renderer)


@pytest.fixture
def selected_session(session) -> EditingSession:
    """Session with the statute as source and the regulation as target."""
    session.select_document("source", statute_doc())
    session.select_document("target", regulation_doc())
    session.select_provision("source", statute_provision())
    session.select_provision("target", regulation_provision())
    return session
