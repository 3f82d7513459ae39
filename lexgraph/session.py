"""Editing session for staging and saving legal cross-references.

This module provides `EditingSession`, which owns everything one editor
needs to build a batch of cross-references:

**Selection:**
    1. Search documents (optionally by source kind) and pick a source and a
       target document
    2. Search provisions of each and pick a source and a target provision
    3. Optionally swap the direction of the pair

**Drafting:**
    1. A relation kind is suggested from the two documents' source kinds
    2. The editor accepts or overrides it, optionally adds a note, and the
       relation is appended to the session's ledger
    3. The display graph is rebuilt and pushed to the renderer after every
       ledger mutation

**Saving:**
    1. The numeric key of every draft's source provision is resolved
    2. Every draft is turned into a payload; any incomplete draft aborts the
       save before anything is written
    3. The whole batch goes to the persistence collaborator in one call
    4. Only on success are the saved drafts cleared from the ledger

A failed save leaves the ledger exactly as it was, so the same batch can be
retried. Errors from the collaborators are logged and re-raised unchanged;
the session itself never retries.

Example usage:
    ```python
    session = EditingSession(
        lookup=lookup,
        storage=storage,
        resolver=resolver,
        renderer=renderer,
    )
    session.select_document("source", statute)
    session.select_document("target", regulation)
    session.select_provision("source", section_3_1)
    session.select_provision("target", section_1_1)
    session.add_to_draft(note="Hjemmel for forskriften")
    result = await session.save()
    ```
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from lexgraph.classifier import classify_document
from lexgraph.config import SessionConfig
from lexgraph.graph_builder import GraphModelBuilder
from lexgraph.ledger import DraftRelationLedger
from lexgraph.logging import setup_logging
from lexgraph.payload import CrossReferencePayloadBuilder, IncompleteRelationError
from lexgraph.suggest import suggest
from lexschema.document import LegalDocument, LegalProvision
from lexschema.graph import GraphModel
from lexschema.kinds import DEFAULT_RELATION_KIND, RelationKind, SourceKind
from lexschema.relation import DraftRelation, DraftRelationInput
from lexschema.storage import (
    CrossReferenceStorageInterface,
    GraphRendererInterface,
    LegalSourceLookupInterface,
    ProvisionIdResolverInterface,
)

Side = Literal["source", "target"]

logger = setup_logging("lexgraph.session")


class SaveResult(BaseModel):
    """Result of saving the ledger.

    Attributes:
        inserted_count: Number of cross-references the persistence
            collaborator reports as inserted.
        saved_temp_ids: Temp ids of the drafts that made up the batch, in
            ledger order.
    """

    model_config = {"frozen": True}

    inserted_count: int
    saved_temp_ids: tuple[str, ...] = ()


class Selection(BaseModel):
    """The editor's current picks on one side of a relation."""

    model_config = {"frozen": True}

    document: LegalDocument | None = None
    provision: LegalProvision | None = None


class EditingSession:
    """One editor's draft ledger, selection state and collaborators.

    The session is the sole owner of its ledger. Nothing is shared between
    sessions and nothing survives the session unless `save()` succeeds.
    """

    def __init__(
        self,
        lookup: LegalSourceLookupInterface,
        storage: CrossReferenceStorageInterface,
        resolver: ProvisionIdResolverInterface,
        renderer: GraphRendererInterface | None = None,
        config: SessionConfig | None = None,
    ) -> None:
        self.lookup = lookup
        self.storage = storage
        self.resolver = resolver
        self.renderer = renderer
        self.config = config or SessionConfig()
        self.ledger = DraftRelationLedger()
        self.graph_builder = GraphModelBuilder.from_config(self.config)
        self.payload_builder = CrossReferencePayloadBuilder()
        self._selection: dict[Side, Selection] = {"source": Selection(), "target": Selection()}
        self._graph = GraphModel()

    # --- Selection ---------------------------------------------------------

    def selection(self, side: Side) -> Selection:
        return self._selection[side]

    def select_document(self, side: Side, document: LegalDocument) -> None:
        """Pick the document for `side`.

        Changing the document drops a provision that belongs to a different
        document.
        """
        current = self._selection[side]
        provision = current.provision
        if provision is not None and provision.document_id != document.document_id:
            provision = None
        self._selection[side] = Selection(document=document, provision=provision)

    def select_provision(self, side: Side, provision: LegalProvision) -> None:
        current = self._selection[side]
        if current.document is not None and provision.document_id != current.document.document_id:
            raise ValueError(
                f"Provision {provision.provision_id!r} does not belong to the selected "
                f"{side} document {current.document.document_id!r}"
            )
        self._selection[side] = Selection(document=current.document, provision=provision)

    def swap_direction(self) -> None:
        """Exchange the source and target selections."""
        self._selection = {"source": self._selection["target"], "target": self._selection["source"]}

    @property
    def can_create_relation(self) -> bool:
        return all(
            sel.document is not None and sel.provision is not None for sel in self._selection.values()
        )

    def suggested_kind(self) -> RelationKind:
        """Default relation kind for the current selection.

        Falls back to ``RelationKind.CITES`` when auto-suggest is off or a
        provision is not selected yet.
        """
        source, target = self._selection["source"], self._selection["target"]
        if not self.config.auto_suggest or source.provision is None or target.provision is None:
            return DEFAULT_RELATION_KIND
        if source.document is None or target.document is None:
            return DEFAULT_RELATION_KIND
        return suggest(classify_document(source.document), classify_document(target.document))

    # --- Lookup ------------------------------------------------------------

    async def search_documents(
        self,
        kind_filter: SourceKind | None = None,
        free_text: str | None = None,
    ) -> list[LegalDocument]:
        try:
            return await self.lookup.find_documents(
                kind_filter=kind_filter,
                free_text=free_text,
                limit=self.config.document_limit,
            )
        except Exception:
            logger.warning("Document lookup failed (kind=%s, text=%r)", kind_filter, free_text)
            raise

    async def search_provisions(self, side: Side, free_text: str | None = None) -> list[LegalProvision]:
        """Search provisions of the document selected on `side`.

        Returns an empty list when no document is selected on that side.
        """
        document = self._selection[side].document
        if document is None:
            return []
        try:
            return await self.lookup.find_provisions(
                document.document_id,
                free_text=free_text,
                limit=self.config.provision_limit,
            )
        except Exception:
            logger.warning("Provision lookup failed (document=%s, text=%r)", document.document_id, free_text)
            raise

    # --- Drafting ----------------------------------------------------------

    @property
    def graph(self) -> GraphModel:
        return self._graph

    def drafts(self) -> tuple[DraftRelation, ...]:
        return self.ledger.list()

    def _refresh(self) -> None:
        self._graph = self.graph_builder.build(self.ledger.list())
        if self.renderer is not None:
            self.renderer.render(self._graph)

    def add_to_draft(self, relation_kind: RelationKind | None = None, note: str | None = None) -> str:
        """Stage a relation between the selected provisions.

        Args:
            relation_kind: Overrides the suggested kind.
            note: Free-text note. Surrounding whitespace is stripped and a
                blank note is dropped.

        Returns:
            The temp id of the new ledger entry.

        Raises:
            IncompleteRelationError: If a document or provision is not selected.
        """
        source, target = self._selection["source"], self._selection["target"]
        draft = DraftRelationInput(
            from_provision=source.provision,
            to_provision=target.provision,
            from_document=source.document,
            to_document=target.document,
            relation_kind=relation_kind or self.suggested_kind(),
            note=(note or "").strip() or None,
        )
        missing = draft.missing_fields()
        if missing:
            raise IncompleteRelationError(missing)
        temp_id = self.ledger.add(draft)
        logger.debug("Added draft %s (%s)", temp_id, draft.relation_kind.value)
        self._refresh()
        return temp_id

    def add_relation(self, relation: DraftRelationInput) -> str:
        """Stage a fully specified relation, bypassing the selection."""
        temp_id = self.ledger.add(relation)
        logger.debug("Added draft %s", temp_id)
        self._refresh()
        return temp_id

    def remove(self, temp_id: str) -> bool:
        removed = self.ledger.remove(temp_id)
        if removed:
            logger.debug("Removed draft %s", temp_id)
            self._refresh()
        return removed

    def discard(self) -> None:
        """Drop every staged relation without saving."""
        count = len(self.ledger)
        self.ledger.clear()
        logger.debug("Discarded %d draft relation(s)", count)
        self._refresh()

    # --- Saving ------------------------------------------------------------

    async def save(self) -> SaveResult:
        """Persist the whole ledger as one batch.

        Returns:
            The inserted count and the temp ids that were saved. An empty
            ledger returns a zero count without calling the storage.

        Raises:
            IncompleteRelationError: If a draft cannot be serialized.
            UnresolvedProvisionError: If a source provision has no stored key.
            Exception: Whatever the persistence collaborator raises.

        In every failure case the ledger is left untouched.
        """
        snapshot = self.ledger.list()
        if not snapshot:
            return SaveResult(inserted_count=0)

        try:
            pairs = []
            for draft in snapshot:
                if draft.from_provision is None:
                    raise IncompleteRelationError(("from_provision",), draft.temp_id)
                pairs.append((draft, await self.resolver.resolve(draft.from_provision)))
            payloads = self.payload_builder.build_batch(pairs)
            result = await self.storage.insert_cross_references(payloads)
        except Exception:
            logger.exception("Saving %d draft relation(s) failed; drafts kept", len(snapshot))
            raise

        # Drafts staged while the batch was in flight stay in the ledger.
        for draft in snapshot:
            self.ledger.remove(draft.temp_id)
        self._refresh()
        logger.info("Saved %d cross-reference(s)", result.inserted_count)
        return SaveResult(
            inserted_count=result.inserted_count,
            saved_temp_ids=tuple(d.temp_id for d in snapshot),
        )
