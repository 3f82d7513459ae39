"""
Legal Cross-Reference Graph - Classification, Staging and Graph Construction.

Turns an editor's document/provision picks into a validated, persistable
cross-reference graph:

- `classify` resolves a document or provision to a SourceKind
- `suggest` proposes a default RelationKind for a pair of source kinds
- `DraftRelationLedger` stages relations before they are saved
- `GraphModelBuilder` derives the node/edge graph for display
- `CrossReferencePayloadBuilder` serializes drafts for the batch insert
- `EditingSession` ties these to the lookup, persistence and rendering
  collaborators

The session module is imported lazily so that the pure components can be
used without pulling in the logging setup:

    # This does NOT configure the session logger:
    from lexgraph import classify, suggest

    # This does (when the symbol is accessed):
    from lexgraph import EditingSession
"""

from typing import TYPE_CHECKING

from lexgraph.classifier import classify, classify_document, classify_node
from lexgraph.config import LayoutConfig, SessionConfig, load_session_config
from lexgraph.graph_builder import GraphModelBuilder
from lexgraph.ledger import DraftRelationLedger
from lexgraph.payload import CrossReferencePayloadBuilder, IncompleteRelationError
from lexgraph.suggest import suggest

if TYPE_CHECKING:
    from lexgraph.session import EditingSession, SaveResult

__all__ = [
    "CrossReferencePayloadBuilder",
    "DraftRelationLedger",
    "EditingSession",
    "GraphModelBuilder",
    "IncompleteRelationError",
    "LayoutConfig",
    "SaveResult",
    "SessionConfig",
    "classify",
    "classify_document",
    "classify_node",
    "load_session_config",
    "suggest",
]

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for the session module."""
    if name in ("EditingSession", "SaveResult"):
        from lexgraph.session import EditingSession, SaveResult
        return {"EditingSession": EditingSession, "SaveResult": SaveResult}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
