"""Derive the display graph from a snapshot of the draft ledger.

Every draft relation contributes a "from" node, a "to" node and one edge
between them. Nodes are deduplicated within one build; edges never are, since
each edge stands for exactly one ledger entry and carries its temp id.

The graph is recomputed from scratch on every call. Building twice from the
same snapshot produces equal models, so callers can rebuild after every
ledger mutation without tracking what changed.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from lexgraph.classifier import classify_node
from lexgraph.config import LayoutConfig, SessionConfig
from lexschema.document import LegalDocument, LegalProvision
from lexschema.graph import GraphEdge, GraphModel, GraphNode, NodeIdentity, NodePosition, NodeRole
from lexschema.relation import DraftRelation


def _escape_id(part: str) -> str:
    return part.replace("\\", "\\\\").replace(":", "\\:")


class GraphModelBuilder(BaseModel):
    """Builds a `GraphModel` from draft relations.

    Node identity depends on `node_identity`:

    - ``NodeIdentity.PROVISION`` keys nodes on (document_id, provision_id)
      with ids ``<document_id>:<provision_id>``; a ``:`` or ``\\`` inside
      either id is backslash-escaped so distinct pairs never share an id.
      A provision that is the target of one relation and the source of
      another becomes one node whose `roles` lists both.
    - ``NodeIdentity.ROLE`` keys nodes on (role, provision_id) with ids
      ``source-<id>`` / ``target-<id>``, matching the legacy admin tool.

    Example:
        ```python
        builder = GraphModelBuilder()
        model = builder.build(ledger.list())
        renderer.render(model)
        ```
    """

    model_config = ConfigDict(frozen=True)

    node_identity: NodeIdentity = NodeIdentity.PROVISION
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    @classmethod
    def from_config(cls, config: SessionConfig) -> "GraphModelBuilder":
        return cls(node_identity=config.node_identity, layout=config.layout)

    def node_key(self, role: NodeRole, provision: LegalProvision, document: LegalDocument) -> tuple[str, str]:
        if self.node_identity is NodeIdentity.ROLE:
            return (role.value, provision.provision_id)
        return (document.document_id, provision.provision_id)

    def node_id(self, role: NodeRole, provision: LegalProvision, document: LegalDocument) -> str:
        if self.node_identity is NodeIdentity.ROLE:
            return f"{role.value}-{provision.provision_id}"
        return f"{_escape_id(document.document_id)}:{_escape_id(provision.provision_id)}"

    def _position(self, role: NodeRole, index: int) -> NodePosition:
        x = self.layout.source_x if role is NodeRole.SOURCE else self.layout.target_x
        return NodePosition(x=x, y=index * self.layout.row_height + self.layout.row_offset)

    def _make_node(
        self,
        node_id: str,
        role: NodeRole,
        provision: LegalProvision,
        document: LegalDocument,
        index: int,
    ) -> GraphNode:
        kind = classify_node(provision, document)
        return GraphNode(
            node_id=node_id,
            provision_id=provision.provision_id,
            document_id=document.document_id,
            roles=(role,),
            document_title=document.title,
            document_number=document.document_number,
            provision_number=provision.provision_number,
            provision_title=provision.title,
            anchor=provision.anchor,
            source_kind=kind,
            color=kind.color,
            source_url=document.source_url,
            position=self._position(role, index),
        )

    def _upsert_node(
        self,
        nodes: dict[tuple[str, str], GraphNode],
        role: NodeRole,
        provision: LegalProvision,
        document: LegalDocument,
        index: int,
    ) -> str:
        key = self.node_key(role, provision, document)
        existing = nodes.get(key)
        if existing is None:
            node = self._make_node(self.node_id(role, provision, document), role, provision, document, index)
            nodes[key] = node
            return node.node_id
        if role not in existing.roles:
            nodes[key] = existing.model_copy(update={"roles": existing.roles + (role,)})
        return existing.node_id

    def build(self, snapshot: Iterable[DraftRelation]) -> GraphModel:
        """Build nodes and edges for `snapshot`, in ledger order.

        Raises:
            ValueError: If a relation lacks one of its entity references.
        """
        nodes: dict[tuple[str, str], GraphNode] = {}
        edges: list[GraphEdge] = []

        for index, relation in enumerate(snapshot):
            missing = relation.missing_fields()
            if missing:
                raise ValueError(f"Draft relation {relation.temp_id!r} is missing {', '.join(missing)}")

            source_id = self._upsert_node(
                nodes, NodeRole.SOURCE, relation.from_provision, relation.from_document, index  # type: ignore[arg-type]
            )
            target_id = self._upsert_node(
                nodes, NodeRole.TARGET, relation.to_provision, relation.to_document, index  # type: ignore[arg-type]
            )

            edge_kind = classify_node(relation.from_provision, relation.from_document)  # type: ignore[arg-type]
            edges.append(
                GraphEdge(
                    edge_id=relation.temp_id,
                    source=source_id,
                    target=target_id,
                    relation_kind=relation.relation_kind,
                    label=relation.relation_kind.label,
                    note=relation.note,
                    source_kind=edge_kind,
                    color=edge_kind.color,
                )
            )

        return GraphModel(nodes=tuple(nodes.values()), edges=tuple(edges))
