"""Authoritative node/edge topology of the deception network."""

from __future__ import annotations

from typing import Optional

from .errors import TopologyError
from .identifiers import parse_label_number
from .models import SERVER_ID, SERVER_LABEL, Edge, Node, NodeKind, Position


class NetworkModel:
    """One server plus a set of honeypots, each fed by a single server edge.

    Honeypots are kept in insertion order.  A node and its incoming edge
    are always added and removed together.
    """

    def __init__(self, server: Optional[Node] = None):
        self.server = server or Node(
            id=SERVER_ID,
            kind=NodeKind.SERVER,
            label=SERVER_LABEL,
            position=Position(250.0, 50.0),
        )
        self._honeypots: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}  # keyed by target id

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._honeypots or node_id == self.server.id

    def get_node(self, node_id: str) -> Optional[Node]:
        if node_id == self.server.id:
            return self.server
        return self._honeypots.get(node_id)

    def list_live_honeypots(self) -> list[Node]:
        return list(self._honeypots.values())

    def live_numbers(self) -> set[int]:
        return {parse_label_number(n.label) for n in self._honeypots.values()}

    def nodes(self) -> list[Node]:
        return [self.server, *self._honeypots.values()]

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def add_honeypot(self, node: Node, edge: Edge) -> None:
        if not node.is_honeypot:
            raise TopologyError(f"node {node.id} is not a honeypot")
        if node.id in self:
            raise TopologyError(f"node id {node.id} is already live")
        if edge.source != self.server.id or edge.target != node.id:
            raise TopologyError(f"edge {edge.id} must run from the server to {node.id}")
        self._honeypots[node.id] = node
        self._edges[node.id] = edge

    def remove_honeypot(self, node_id: str) -> Node:
        if node_id == self.server.id:
            raise TopologyError("the server node cannot be removed")
        try:
            node = self._honeypots.pop(node_id)
        except KeyError:
            raise TopologyError(f"no live honeypot with id {node_id}") from None
        self._edges.pop(node_id, None)
        return node
