"""Tests for the editing session.

This module verifies:
- Selection, swapping and relation-kind suggestion
- Drafting: add/remove/discard keep the graph and the renderer in sync
- Saving: one batch per save, ledger cleared only on success
- Failed saves (persistence, resolution, lookup) leave the drafts untouched
- The end-to-end statute -> regulation scenario
"""

import logging

import pytest

from lexgraph.config import SessionConfig
from lexgraph.demo import DEMO_DOCUMENTS, demo_lookup, demo_resolver
from lexgraph.payload import IncompleteRelationError
from lexgraph.session import EditingSession
from lexgraph.storage.memory import InMemoryCrossReferenceStorage, InMemoryProvisionIdResolver
from lexschema.graph import NodeIdentity
from lexschema.kinds import RelationKind, SourceKind
from lexschema.storage import UnresolvedProvisionError

from tests.conftest import (
    FailingLookup,
    FailingStorage,
    RecordingRenderer,
    make_draft_input,
    make_provision,
    regulation_doc,
    regulation_provision,
    statute_doc,
    statute_provision,
)


class TestSelection:
    def test_cannot_create_relation_until_everything_is_selected(self, session) -> None:
        assert not session.can_create_relation
        session.select_document("source", statute_doc())
        session.select_document("target", regulation_doc())
        session.select_provision("source", statute_provision())
        assert not session.can_create_relation

        session.select_provision("target", regulation_provision())

        assert session.can_create_relation

    def test_changing_document_drops_foreign_provision(self, selected_session) -> None:
        selected_session.select_document("source", regulation_doc())

        assert selected_session.selection("source").provision is None
        assert not selected_session.can_create_relation

    def test_reselecting_same_document_keeps_provision(self, selected_session) -> None:
        selected_session.select_document("source", statute_doc())

        assert selected_session.selection("source").provision == statute_provision()

    def test_provision_must_belong_to_selected_document(self, session) -> None:
        session.select_document("source", statute_doc())

        with pytest.raises(ValueError, match="does not belong"):
            session.select_provision("source", regulation_provision())

    def test_swap_direction(self, selected_session) -> None:
        selected_session.swap_direction()

        assert selected_session.selection("source").document == regulation_doc()
        assert selected_session.selection("source").provision == regulation_provision()
        assert selected_session.selection("target").document == statute_doc()


class TestSuggestion:
    def test_statute_to_regulation(self, selected_session) -> None:
        assert selected_session.suggested_kind() == RelationKind.ENABLED_BY

    def test_regulation_to_statute(self, selected_session) -> None:
        selected_session.swap_direction()

        assert selected_session.suggested_kind() == RelationKind.ENABLED_BY

    def test_defaults_to_cites_without_provisions(self, session) -> None:
        session.select_document("source", regulation_doc())
        session.select_document("target", statute_doc())

        assert session.suggested_kind() == RelationKind.CITES

    def test_auto_suggest_disabled(self, lookup, storage, resolver) -> None:
        session = EditingSession(lookup, storage, resolver, config=SessionConfig(auto_suggest=False))
        session.select_document("source", regulation_doc())
        session.select_document("target", statute_doc())
        session.select_provision("source", regulation_provision())
        session.select_provision("target", statute_provision())

        assert session.suggested_kind() == RelationKind.CITES


class TestDrafting:
    def test_add_uses_suggestion(self, selected_session) -> None:
        temp_id = selected_session.add_to_draft()

        (draft,) = selected_session.drafts()
        assert draft.temp_id == temp_id
        assert draft.relation_kind == RelationKind.ENABLED_BY

    def test_override_and_note(self, selected_session) -> None:
        selected_session.add_to_draft(RelationKind.MENTIONS, note="  nevnt i forarbeidene  ")

        (draft,) = selected_session.drafts()
        assert draft.relation_kind == RelationKind.MENTIONS
        assert draft.note == "nevnt i forarbeidene"

    def test_blank_note_dropped(self, selected_session) -> None:
        selected_session.add_to_draft(note="   ")

        assert selected_session.drafts()[0].note is None

    def test_incomplete_selection_rejected(self, session) -> None:
        session.select_document("source", statute_doc())
        session.select_provision("source", statute_provision())

        with pytest.raises(IncompleteRelationError) as exc_info:
            session.add_to_draft()
        assert set(exc_info.value.missing) == {"to_provision", "to_document"}
        assert session.drafts() == ()

    def test_selection_kept_after_add(self, selected_session) -> None:
        selected_session.add_to_draft()

        assert selected_session.can_create_relation

    def test_graph_follows_every_mutation(self, selected_session, renderer) -> None:
        first = selected_session.add_to_draft()
        second = selected_session.add_to_draft(RelationKind.CITES)
        assert len(selected_session.graph.edges) == 2

        selected_session.remove(first)
        assert [e.edge_id for e in selected_session.graph.edges] == [second]

        selected_session.discard()
        assert selected_session.graph.is_empty
        assert len(renderer.rendered) == 4
        assert renderer.last == selected_session.graph

    def test_remove_unknown_does_not_rerender(self, selected_session, renderer) -> None:
        selected_session.add_to_draft()

        assert selected_session.remove("draft-missing") is False
        assert len(renderer.rendered) == 1

    def test_add_relation_directly(self, session) -> None:
        temp_id = session.add_relation(make_draft_input(relation_kind=RelationKind.APPLIES))

        assert session.graph.edges[0].edge_id == temp_id
        assert session.graph.edges[0].label == "Anvender"

    def test_legacy_node_identity_from_config(self, lookup, storage, resolver) -> None:
        config = SessionConfig(node_identity=NodeIdentity.ROLE)
        session = EditingSession(lookup, storage, resolver, config=config)
        session.add_relation(make_draft_input())

        assert [n.node_id for n in session.graph.nodes] == ["source-1", "target-3"]


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_documents(self, session) -> None:
        documents = await session.search_documents(kind_filter=SourceKind.REGULATION)

        assert [d.document_id for d in documents] == ["3"]

    @pytest.mark.asyncio
    async def test_search_provisions_of_selected_document(self, session) -> None:
        assert await session.search_provisions("source") == []

        session.select_document("source", statute_doc())

        provisions = await session.search_provisions("source", "3-1")
        assert [p.provision_id for p in provisions] == ["1"]

    @pytest.mark.asyncio
    async def test_search_respects_configured_limit(self, storage, resolver) -> None:
        session = EditingSession(demo_lookup(), storage, resolver, config=SessionConfig(document_limit=3))

        assert len(await session.search_documents()) == 3

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates_unchanged(self, storage, resolver, caplog) -> None:
        session = EditingSession(FailingLookup(), storage, resolver)

        with caplog.at_level(logging.WARNING, logger="lexgraph.session"):
            with pytest.raises(TimeoutError, match="timed out"):
                await session.search_documents(kind_filter=SourceKind.CASELAW)

        (record,) = [r for r in caplog.records if r.name == "lexgraph.session" and r.levelno >= logging.WARNING]
        assert record.levelno == logging.WARNING
        assert "Document lookup failed" in record.getMessage()


class TestSave:
    @pytest.mark.asyncio
    async def test_save_inserts_batch_and_clears(self, selected_session, storage, renderer) -> None:
        first = selected_session.add_to_draft(note="Hjemmel")
        second = selected_session.add_to_draft(RelationKind.CITES)

        result = await selected_session.save()

        assert result.inserted_count == 2
        assert result.saved_temp_ids == (first, second)
        assert selected_session.drafts() == ()
        assert selected_session.graph.is_empty
        assert renderer.last.is_empty

        records = await storage.list_cross_references()
        assert len(records) == 2
        assert {r.from_provision_id for r in records} == {1}
        assert {r.to_anchor for r in records} == {"FOR-1999-12-11-1319.§1-1"}
        assert {r.ref_text for r in records} == {"Hjemmel", None}

    @pytest.mark.asyncio
    async def test_empty_save_skips_storage(self, lookup, resolver) -> None:
        storage = FailingStorage()
        session = EditingSession(lookup, storage, resolver)

        result = await session.save()

        assert result.inserted_count == 0
        assert storage.calls == 0

    @pytest.mark.asyncio
    async def test_persistence_failure_keeps_drafts(self, lookup, resolver, caplog) -> None:
        storage = FailingStorage()
        session = EditingSession(lookup, storage, resolver)
        session.add_relation(make_draft_input(note="a"))
        session.add_relation(make_draft_input(note="b"))
        before = session.drafts()
        graph_before = session.graph

        with caplog.at_level(logging.ERROR, logger="lexgraph.session"):
            with pytest.raises(ConnectionError):
                await session.save()

        (record,) = [r for r in caplog.records if r.name == "lexgraph.session" and r.levelno >= logging.WARNING]
        assert record.levelno == logging.ERROR
        assert "Saving 2 draft relation(s) failed" in record.getMessage()
        assert record.exc_info is not None and record.exc_info[0] is ConnectionError

        assert session.drafts() == before
        assert session.graph == graph_before
        assert storage.calls == 1

    @pytest.mark.asyncio
    async def test_retry_after_failure_saves_same_batch(self, lookup, resolver) -> None:
        session = EditingSession(lookup, FailingStorage(), resolver)
        temp_id = session.add_relation(make_draft_input())
        with pytest.raises(ConnectionError):
            await session.save()

        session.storage = InMemoryCrossReferenceStorage()
        result = await session.save()

        assert result.saved_temp_ids == (temp_id,)
        assert await session.storage.count() == 1

    @pytest.mark.asyncio
    async def test_unresolved_provision_aborts_whole_batch(self, lookup, storage) -> None:
        resolver = InMemoryProvisionIdResolver.from_provisions([statute_provision()])
        session = EditingSession(lookup, storage, resolver)
        session.add_relation(make_draft_input())
        session.add_relation(
            make_draft_input(
                from_provision=regulation_provision(),
                from_document=regulation_doc(),
                to_provision=statute_provision(),
                to_document=statute_doc(),
            )
        )

        with pytest.raises(UnresolvedProvisionError):
            await session.save()

        assert len(session.drafts()) == 2
        assert await storage.count() == 0

    @pytest.mark.asyncio
    async def test_payload_fallbacks_reach_storage(self, lookup, storage) -> None:
        target_doc = regulation_doc().model_copy(update={"document_number": None})
        target_prov = make_provision("3", "3", "1-1", anchor=None)
        resolver = InMemoryProvisionIdResolver({"LOV-1998-07-17-56.§3-1": 555})
        session = EditingSession(lookup, storage, resolver)
        session.add_relation(make_draft_input(to_document=target_doc, to_provision=target_prov, note=""))

        await session.save()

        (record,) = await storage.list_cross_references()
        assert record.from_provision_id == 555
        assert record.to_document_number == "3"
        assert record.to_anchor == "1-1"
        assert record.ref_text is None


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_statute_to_regulation_scenario(self) -> None:
        renderer = RecordingRenderer()
        session = EditingSession(
            lookup=demo_lookup(),
            storage=InMemoryCrossReferenceStorage(),
            resolver=demo_resolver(),
            renderer=renderer,
        )

        (statute,) = await session.search_documents(free_text="LOV-1998-07-17-56")
        (regulation,) = await session.search_documents(kind_filter=SourceKind.REGULATION)
        session.select_document("source", statute)
        session.select_document("target", regulation)
        (section_3_1,) = await session.search_provisions("source", "3-1")
        (section_1_1,) = await session.search_provisions("target", "1-1")
        session.select_provision("source", section_3_1)
        session.select_provision("target", section_1_1)

        assert session.suggested_kind() == RelationKind.ENABLED_BY

        session.add_to_draft()
        assert len(session.ledger.list()) == 1

        graph = session.graph
        assert len(graph.nodes) == 2
        assert len(graph.edges) == 1
        assert graph.edges[0].relation_kind == RelationKind.ENABLED_BY
        assert renderer.last == graph

        session.discard()
        assert len(session.ledger.list()) == 0

    @pytest.mark.asyncio
    async def test_demo_corpus_round(self) -> None:
        """Link the first provision of every secondary source to the accounting act."""
        lookup = demo_lookup()
        storage = InMemoryCrossReferenceStorage()
        session = EditingSession(lookup, storage, demo_resolver())
        statute = DEMO_DOCUMENTS[0]
        session.select_document("target", statute)
        session.select_provision("target", (await lookup.find_provisions(statute.document_id))[0])

        expected = {
            "3": RelationKind.ENABLED_BY,
            "4": RelationKind.INTERPRETS,
            "5": RelationKind.CLARIFIES,
            "6": RelationKind.CLARIFIES,
        }
        for document in DEMO_DOCUMENTS:
            if document.document_id not in expected:
                continue
            session.select_document("source", document)
            first = (await session.search_provisions("source"))[0]
            session.select_provision("source", first)
            assert session.suggested_kind() == expected[document.document_id]
            session.add_to_draft()

        result = await session.save()

        assert result.inserted_count == 4
        records = await storage.list_cross_references()
        assert sorted(r.from_provision_id for r in records) == [3, 5, 6, 7]
        assert {r.to_document_number for r in records} == {"LOV-1998-07-17-56"}
