"""Create honeypot nodes and wire them to the server."""

from __future__ import annotations

import logging
from typing import Optional

from .identifiers import next_honeypot_number
from .models import (
    DYNAMIC_EDGE_LABEL,
    INITIAL_EDGE_LABEL,
    VARIANTS,
    Edge,
    Node,
    NodeKind,
    Position,
    Severity,
    honeypot_label,
)
from .state import SimulationState

log = logging.getLogger(__name__)

# layout slots for the honeypots present at start-up
INITIAL_POSITIONS = [Position(150.0, 200.0), Position(350.0, 200.0)]


def random_position(state: SimulationState) -> Position:
    rnd = state.random
    return Position(rnd.uniform(50.0, 550.0), rnd.uniform(150.0, 450.0))


def deploy_honeypot(
    state: SimulationState,
    *,
    variant: Optional[str] = None,
    position: Optional[Position] = None,
    edge_label: str = DYNAMIC_EDGE_LABEL,
    announce: bool = True,
) -> Node:
    """Add a honeypot with the lowest free label and a fresh node id.

    With ``announce`` a SUCCESS system entry is written to the log buffer.
    """
    with state.lock:
        number = next_honeypot_number(state.network.live_numbers())
        node = Node(
            id=state.ids.next_node_id(),
            kind=NodeKind.HONEYPOT,
            label=honeypot_label(number),
            variant=variant or state.random.choice(VARIANTS),
            position=position or random_position(state),
        )
        state.network.add_honeypot(node, Edge.to_honeypot(node.id, edge_label))
        log.info("deployed %s as node %s", node.label, node.id)
        if announce:
            state.deployed_total += 1
            state.logs.system(
                f"{node.label} has been deployed and is now monitoring for attacks",
                Severity.SUCCESS,
            )
        return node


def seed_topology(state: SimulationState) -> list[Node]:
    """Place the start-up honeypots; nothing is logged for them."""
    nodes = []
    for i in range(state.config.initial_honeypots):
        position = INITIAL_POSITIONS[i] if i < len(INITIAL_POSITIONS) else None
        nodes.append(deploy_honeypot(
            state,
            variant=VARIANTS[0],
            position=position,
            edge_label=INITIAL_EDGE_LABEL,
            announce=False,
        ))
    return nodes
