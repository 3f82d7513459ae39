"""JSON export of the draft graph for rendering surfaces.

The exported document has two arrays, ``nodes`` and ``edges``, whose items
carry the node/edge ids the renderer needs to connect them plus the display
attributes under ``data``. Node data also carries ``doc_type``, the legacy
Norwegian type code (``lov``, ``forskrift``, ...) of the node's source kind.
Positions are suggestions only.
"""

import json
from pathlib import Path
from typing import Any, Dict

from lexschema.graph import GraphEdge, GraphModel, GraphNode


def _node_to_dict(node: GraphNode) -> Dict[str, Any]:
    data = node.model_dump(mode="json", exclude={"node_id", "position"})
    return {
        "id": node.node_id,
        "position": {"x": node.position.x, "y": node.position.y},
        "data": {**data, "doc_type": node.source_kind.legacy_code},
    }


def _edge_to_dict(edge: GraphEdge) -> Dict[str, Any]:
    return {
        "id": edge.edge_id,
        "source": edge.source,
        "target": edge.target,
        "label": edge.label,
        "color": edge.color,
        "data": {
            "relation_kind": edge.relation_kind.value,
            "note": edge.note,
            "source_kind": edge.source_kind.value,
        },
    }


def graph_to_dict(model: GraphModel) -> Dict[str, Any]:
    """Converts a graph model into a JSON-serializable dictionary.

    Args:
        model: The graph built from the draft ledger.

    Returns:
        ``{"nodes": [...], "edges": [...]}`` in the model's order.
    """
    return {
        "nodes": [_node_to_dict(n) for n in model.nodes],
        "edges": [_edge_to_dict(e) for e in model.edges],
    }


def write_graph_json(model: GraphModel, path: Path) -> Path:
    """Writes the graph to `path` as UTF-8 JSON, creating parent directories.

    Returns:
        The path written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(graph_to_dict(model), f, ensure_ascii=False, indent=2)
    return path
