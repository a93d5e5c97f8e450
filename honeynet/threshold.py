"""Per-node attack counting and the retirement threshold."""

from __future__ import annotations

import logging
from typing import Optional

from .models import RetirementCandidate
from .state import SimulationState

log = logging.getLogger(__name__)


def record_attack(state: SimulationState, node_id: str) -> Optional[RetirementCandidate]:
    """Count one attack on *node_id* and report a new retirement candidate.

    A candidate is returned only on the attack that brings the count to
    exactly the threshold, and only while no other retirement is pending.
    Attacks on nodes that are not live honeypots are ignored.
    """
    with state.lock:
        node = state.network.get_node(node_id)
        if node is None or not node.is_honeypot:
            log.debug("ignoring attack on non-live node %s", node_id)
            return None

        count = state.attack_counts.get(node_id, 0) + 1
        state.attack_counts[node_id] = count

        if count != state.config.attack_threshold or state.pending:
            return None
        log.info("%s reached %d attacks", node.label, count)
        return RetirementCandidate(node_id=node_id,
                                   remaining_seconds=state.config.countdown_start)


def clear(state: SimulationState, node_id: str) -> None:
    with state.lock:
        state.attack_counts.pop(node_id, None)
