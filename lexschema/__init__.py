"""
Legal Cross-Reference Schema - Models and Interfaces

This package contains only Pydantic models, enums and ABC interfaces with no
decision logic. It defines:

- Source and relation vocabularies (SourceKind, RelationKind)
- Legal documents and provisions
- Draft relations and persisted cross-reference shapes
- The node/edge graph model
- Collaborator interfaces (lookup, persistence, resolution, rendering)

These are used by lexgraph and by any backend that implements the
collaborator interfaces.
"""

from lexschema.document import LegalDocument, LegalProvision
from lexschema.graph import GraphEdge, GraphModel, GraphNode, NodeIdentity, NodePosition, NodeRole
from lexschema.kinds import DEFAULT_RELATION_KIND, RelationKind, SourceKind
from lexschema.relation import (
    CrossReferencePayload,
    CrossReferenceRecord,
    DraftRelation,
    DraftRelationInput,
    InsertResult,
)
from lexschema.storage import (
    CrossReferenceStorageInterface,
    GraphRendererInterface,
    LegalSourceLookupInterface,
    ProvisionIdResolverInterface,
    UnresolvedProvisionError,
)

__all__ = [
    "CrossReferencePayload",
    "CrossReferenceRecord",
    "CrossReferenceStorageInterface",
    "DEFAULT_RELATION_KIND",
    "DraftRelation",
    "DraftRelationInput",
    "GraphEdge",
    "GraphModel",
    "GraphNode",
    "GraphRendererInterface",
    "InsertResult",
    "LegalDocument",
    "LegalProvision",
    "LegalSourceLookupInterface",
    "NodeIdentity",
    "NodePosition",
    "NodeRole",
    "ProvisionIdResolverInterface",
    "RelationKind",
    "SourceKind",
    "UnresolvedProvisionError",
]

__version__ = "0.1.0"
