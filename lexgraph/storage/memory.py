"""In-memory collaborator implementations for testing, development and demos.

This module provides dictionary-based implementations of the lookup,
persistence and resolution interfaces. These implementations are suitable
for:

- **Unit testing**: Fast, isolated tests without a database
- **Development**: Exercising the editing flow without a backend
- **Demo mode**: Serving the fixed sample corpus in `lexgraph.demo`

**Not recommended for production** due to:
- No persistence (data is lost when the process exits)
- No concurrency control
- O(n) search operations (no indexing)
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

from lexgraph.classifier import classify_document
from lexschema.document import LegalDocument, LegalProvision
from lexschema.kinds import RelationKind, SourceKind
from lexschema.relation import CrossReferencePayload, CrossReferenceRecord, InsertResult
from lexschema.storage import (
    CrossReferenceStorageInterface,
    LegalSourceLookupInterface,
    ProvisionIdResolverInterface,
    UnresolvedProvisionError,
)


def _matches(free_text: str | None, *fields: str | None) -> bool:
    """Case-insensitive substring match of `free_text` against any field."""
    if free_text is None or not free_text.strip():
        return True
    needle = free_text.strip().casefold()
    return any(field is not None and needle in field.casefold() for field in fields)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryLegalSourceLookup(LegalSourceLookupInterface):
    """Document and provision search over dictionaries.

    Documents are filtered by their classified source kind, so a document
    without a declared kind is still found by its citation number.

    Example:
        ```python
        lookup = InMemoryLegalSourceLookup(documents=docs, provisions=provs)
        statutes = await lookup.find_documents(kind_filter=SourceKind.STATUTE)
        ```
    """

    def __init__(
        self,
        documents: Iterable[LegalDocument] = (),
        provisions: Iterable[LegalProvision] = (),
    ) -> None:
        self._documents: dict[str, LegalDocument] = {}
        self._provisions: dict[str, LegalProvision] = {}
        for document in documents:
            self.add_document(document)
        for provision in provisions:
            self.add_provision(provision)

    def add_document(self, document: LegalDocument) -> None:
        """Add or replace a document."""
        self._documents[document.document_id] = document

    def add_provision(self, provision: LegalProvision) -> None:
        """Add or replace a provision."""
        self._provisions[provision.provision_id] = provision

    async def find_documents(
        self,
        kind_filter: SourceKind | None = None,
        free_text: str | None = None,
        limit: int = 50,
    ) -> list[LegalDocument]:
        """Finds documents by classified kind and title/number text.

        Args:
            kind_filter: Only documents classified as this kind.
            free_text: Substring of title or document number.
            limit: The maximum number of documents to return.

        Returns:
            Matching documents in insertion order.
        """
        results: list[LegalDocument] = []
        for document in self._documents.values():
            if kind_filter is not None and classify_document(document) != kind_filter:
                continue
            if not _matches(free_text, document.title, document.document_number):
                continue
            results.append(document)
            if len(results) >= limit:
                break
        return results

    async def find_provisions(
        self,
        document_id: str,
        free_text: str | None = None,
        limit: int = 200,
    ) -> list[LegalProvision]:
        """Finds active provisions of a document, ordered by `sort_order`.

        Args:
            document_id: The parent document.
            free_text: Substring of provision number or title.
            limit: The maximum number of provisions to return.
        """
        matching = [
            p
            for p in self._provisions.values()
            if p.document_id == document_id and p.is_active and _matches(free_text, p.provision_number, p.title)
        ]
        matching.sort(key=lambda p: p.sort_order)
        return matching[:limit]


class InMemoryCrossReferenceStorage(CrossReferenceStorageInterface):
    """Cross-reference storage with sequential integer ids.

    Batches are validated in full before any record is written, so a failing
    batch leaves the storage untouched.

    Args:
        clock: Returns the timestamp stamped on new records. Defaults to the
            current UTC time.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._records: dict[int, CrossReferenceRecord] = {}
        self._next_id = 1
        self._clock = clock

    async def insert_cross_references(self, payloads: Sequence[CrossReferencePayload]) -> InsertResult:
        """Stores a batch of payloads atomically.

        Raises:
            pydantic.ValidationError: If any payload is invalid; nothing is stored.
        """
        now = self._clock()
        staged: list[CrossReferenceRecord] = []
        for offset, payload in enumerate(payloads):
            data = CrossReferencePayload.model_validate(payload).model_dump()
            staged.append(CrossReferenceRecord(**data, id=self._next_id + offset, created_at=now))
        for record in staged:
            self._records[record.id] = record
        self._next_id += len(staged)
        return InsertResult(inserted_count=len(staged))

    async def list_cross_references(
        self,
        ref_type: RelationKind | None = None,
        search: str | None = None,
        limit: int = 50,
    ) -> list[CrossReferenceRecord]:
        """Lists records newest first, filtered by type and free text.

        The free text is matched against the target anchor, the target
        document number, the note and the source provision id.
        """
        results: list[CrossReferenceRecord] = []
        for record in sorted(self._records.values(), key=lambda r: (r.created_at, r.id), reverse=True):
            if ref_type is not None and record.ref_type != ref_type:
                continue
            if not _matches(search, record.to_anchor, record.to_document_number, record.ref_text, str(record.from_provision_id)):
                continue
            results.append(record)
            if len(results) >= limit:
                break
        return results

    async def delete_cross_reference(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    async def count(self) -> int:
        return len(self._records)


class InMemoryProvisionIdResolver(ProvisionIdResolverInterface):
    """Maps provisions to numeric keys by anchor, then by provision id."""

    def __init__(self, keys: dict[str, int] | None = None) -> None:
        self._keys: dict[str, int] = dict(keys or {})

    @classmethod
    def from_provisions(cls, provisions: Iterable[LegalProvision]) -> "InMemoryProvisionIdResolver":
        """Register every provision.

        Numeric provision ids are used as-is; other provisions get the next
        free integer.
        """
        resolver = cls()
        pending: list[LegalProvision] = []
        for provision in provisions:
            if provision.provision_id.isdigit():
                resolver.register(provision, int(provision.provision_id))
            else:
                pending.append(provision)
        next_key = max(resolver._keys.values(), default=0) + 1
        for provision in pending:
            resolver.register(provision, next_key)
            next_key += 1
        return resolver

    def register(self, provision: LegalProvision, key: int) -> None:
        if provision.anchor:
            self._keys[provision.anchor] = key
        self._keys[provision.provision_id] = key

    async def resolve(self, provision: LegalProvision) -> int:
        """Returns the numeric key of `provision`.

        Raises:
            UnresolvedProvisionError: If neither its anchor nor its id is known.
        """
        if provision.anchor and provision.anchor in self._keys:
            return self._keys[provision.anchor]
        if provision.provision_id in self._keys:
            return self._keys[provision.provision_id]
        raise UnresolvedProvisionError(provision)
