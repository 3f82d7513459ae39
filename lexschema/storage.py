"""Interfaces for the collaborators the cross-reference engine depends on.

The engine owns no I/O. Everything it reads or writes goes through one of
these interfaces:

- **Lookup**: searching documents and their provisions
- **Persistence**: batch-inserting finished cross-references and listing them
- **Resolution**: mapping a display provision to its numeric storage key
- **Rendering**: receiving the node/edge graph for display

Lookup, persistence and resolution are async-first so that database or HTTP
backed implementations can be plugged in without blocking. Timeouts and
retries belong to the implementations; failures are expected to propagate
unchanged to the caller.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from lexschema.document import LegalDocument, LegalProvision
from lexschema.graph import GraphModel
from lexschema.kinds import RelationKind, SourceKind
from lexschema.relation import CrossReferencePayload, CrossReferenceRecord, InsertResult


class UnresolvedProvisionError(LookupError):
    """Raised when a provision has no stored numeric surrogate key."""

    def __init__(self, provision: LegalProvision):
        self.provision = provision
        key = provision.anchor or provision.provision_id
        super().__init__(f"No stored provision matches {key!r}")


class LegalSourceLookupInterface(ABC):
    """Read-only search over legal documents and provisions."""

    @abstractmethod
    async def find_documents(
        self,
        kind_filter: SourceKind | None = None,
        free_text: str | None = None,
        limit: int = 50,
    ) -> list[LegalDocument]:
        """Find documents, optionally restricted to one source kind.

        Args:
            kind_filter: Only return documents classified as this kind.
            free_text: Case-insensitive text matched against title and
                document number.
            limit: Maximum number of documents to return.
        """

    @abstractmethod
    async def find_provisions(
        self,
        document_id: str,
        free_text: str | None = None,
        limit: int = 200,
    ) -> list[LegalProvision]:
        """Find active provisions of one document, in document order.

        Args:
            document_id: Parent document.
            free_text: Case-insensitive text matched against provision number
                and title.
            limit: Maximum number of provisions to return.
        """


class CrossReferenceStorageInterface(ABC):
    """Persistence for finished cross-references."""

    @abstractmethod
    async def insert_cross_references(self, payloads: Sequence[CrossReferencePayload]) -> InsertResult:
        """Insert a batch of cross-references.

        The batch is all-or-nothing: if any payload cannot be stored, nothing
        is stored and the error propagates.
        """

    @abstractmethod
    async def list_cross_references(
        self,
        ref_type: RelationKind | None = None,
        search: str | None = None,
        limit: int = 50,
    ) -> list[CrossReferenceRecord]:
        """List stored cross-references, newest first."""

    @abstractmethod
    async def delete_cross_reference(self, record_id: int) -> bool:
        """Delete one stored cross-reference. Returns True if it existed."""


class ProvisionIdResolverInterface(ABC):
    """Resolves a display provision to the storage key cross-references use."""

    @abstractmethod
    async def resolve(self, provision: LegalProvision) -> int:
        """Return the numeric key of `provision`.

        Raises:
            UnresolvedProvisionError: If the provision is not stored.
        """


class GraphRendererInterface(ABC):
    """A display surface that accepts the derived graph."""

    @abstractmethod
    def render(self, model: GraphModel) -> None:
        """Replace whatever is displayed with `model`."""
