"""Node/edge graph model derived from the draft ledger for display."""

from enum import Enum

from pydantic import BaseModel, Field

from lexschema.kinds import RelationKind, SourceKind


class NodeRole(str, Enum):
    """Side of a relation a provision appears on."""

    SOURCE = "source"
    TARGET = "target"


class NodeIdentity(str, Enum):
    """How graph nodes are deduplicated.

    `PROVISION` keys nodes on (document_id, provision_id), so a provision that
    is the target of one relation and the source of another is a single node.
    `ROLE` keys nodes on (role, provision_id) and reproduces the legacy admin
    tool, which draws such a provision twice.
    """

    PROVISION = "provision"
    ROLE = "role"


class NodePosition(BaseModel):
    """Suggested layout coordinates. Cosmetic only; renderers may ignore them."""

    model_config = {"frozen": True}

    x: float
    y: float


class GraphNode(BaseModel):
    model_config = {"frozen": True}

    node_id: str
    provision_id: str
    document_id: str
    roles: tuple[NodeRole, ...] = Field(
        description="Roles this node plays, in order of first appearance. Rendering hint only.",
    )
    document_title: str
    document_number: str | None = None
    provision_number: str
    provision_title: str = ""
    anchor: str | None = None
    source_kind: SourceKind
    color: str
    source_url: str | None = None
    position: NodePosition


class GraphEdge(BaseModel):
    model_config = {"frozen": True}

    edge_id: str = Field(description="The temp_id of the ledger entry this edge was drawn from.")
    source: str = Field(description="node_id of the 'from' node.")
    target: str = Field(description="node_id of the 'to' node.")
    relation_kind: RelationKind
    label: str
    note: str | None = None
    source_kind: SourceKind = Field(description="Classification of the source node; drives edge colour.")
    color: str


class GraphModel(BaseModel):
    model_config = {"frozen": True}

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    def node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges
