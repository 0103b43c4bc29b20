"""
DOCFLOW - Workflow Graph Schemas
Nodes and directed edges as drawn in the editor. Read-only for the engine.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional, Set
from enum import Enum


class NodeKind(str, Enum):
    OPEN_PDF = "open-pdf"
    EXTRACT_TEXT = "extract-text"
    SUMMARIZE = "summarize"
    SEND_EMAIL = "send-email"
    SHOW_EMAIL_COUNT = "show-email-count"


DEFAULT_LABELS = {
    NodeKind.OPEN_PDF: "Open PDF",
    NodeKind.EXTRACT_TEXT: "Extract Text",
    NodeKind.SUMMARIZE: "Summarize",
    NodeKind.SEND_EMAIL: "Send Email",
    NodeKind.SHOW_EMAIL_COUNT: "Show Email Count",
}


class Node(BaseModel):
    """A pipeline stage on the canvas. ``label`` is for display only."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: NodeKind
    label: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label") and data.get("kind"):
            data = {**data, "label": DEFAULT_LABELS[NodeKind(data["kind"])]}
        return data


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str


class Graph(BaseModel):
    """
    Workflow graph. Edges whose endpoints do not name an existing node are
    kept as given but never show up in adjacency queries.
    """
    model_config = ConfigDict(frozen=True)

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def _unique_node_ids(cls, nodes: List[Node]) -> List[Node]:
        seen = set()
        for node in nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id '{node.id}'")
            seen.add(node.id)
        return nodes

    @field_validator("edges")
    @classmethod
    def _unique_edge_ids(cls, edges: List[Edge]) -> List[Edge]:
        seen = set()
        for edge in edges:
            if edge.id in seen:
                raise ValueError(f"duplicate edge id '{edge.id}'")
            seen.add(edge.id)
        return edges

    @property
    def node_ids(self) -> Set[str]:
        return {n.id for n in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        return next((n for n in self.nodes if n.id == node_id), None)

    def incoming_edges(self, node_id: str) -> Set[str]:
        """Source ids of edges pointing at ``node_id``."""
        ids = self.node_ids
        if node_id not in ids:
            return set()
        return {e.source for e in self.edges if e.target == node_id and e.source in ids}

    def outgoing_targets(self, node_id: str) -> List[str]:
        """Target ids of edges leaving ``node_id``, in edge declaration order."""
        ids = self.node_ids
        if node_id not in ids:
            return []
        return [e.target for e in self.edges if e.source == node_id and e.target in ids]

    def start_nodes(self) -> List[Node]:
        """Nodes with no (valid) incoming edge, in node order."""
        return [n for n in self.nodes if not self.incoming_edges(n.id)]

    def has_kind(self, kind: NodeKind) -> bool:
        return any(n.kind == kind for n in self.nodes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        """
        Build a graph from the editor's export format:
        ``{"nodes": [{"id", "type", "data": {"label"}}], "edges": [{"id", "source", "target"}]}``.
        """
        nodes = []
        for raw in data.get("nodes", []):
            kind = raw.get("type") or raw.get("kind")
            if not kind:
                raise ValueError(f"node '{raw.get('id')}' has no type")
            label = (raw.get("data") or {}).get("label") or raw.get("label") or ""
            nodes.append(Node(id=str(raw["id"]), kind=NodeKind(kind), label=label))

        edges = []
        for i, raw in enumerate(data.get("edges", [])):
            source, target = str(raw["source"]), str(raw["target"])
            edge_id = str(raw.get("id") or f"e{source}-{target}-{i}")
            edges.append(Edge(id=edge_id, source=source, target=target))

        return cls(nodes=nodes, edges=edges)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [{"id": n.id, "type": n.kind.value, "data": {"label": n.label}} for n in self.nodes],
            "edges": [{"id": e.id, "source": e.source, "target": e.target} for e in self.edges],
        }
