"""Retirement countdown state machine.

IDLE -> PENDING when a candidate is raised.  While PENDING the countdown
drops by one every tick; at zero, or when the operator confirms early, the
node is retired (RETIRING) and a replacement is deployed after the respawn
delay, which returns the machine to IDLE.  An operator cancel goes straight
back to IDLE without retiring anything.
"""

from __future__ import annotations

import logging

from . import threshold
from .decoys import deploy_honeypot
from .errors import NoPendingRetirement, RetirementInProgress
from .models import CountdownPhase, RetirementCandidate, Severity
from .state import SimulationState

log = logging.getLogger(__name__)


def begin(state: SimulationState, candidate: RetirementCandidate) -> bool:
    """Start counting down on *candidate*; refused unless IDLE."""
    with state.lock:
        if state.pending:
            return False
        node = state.network.get_node(candidate.node_id)
        if node is None:
            return False
        state.phase = CountdownPhase.PENDING
        state.candidate_id = candidate.node_id
        state.remaining = candidate.remaining_seconds
        state.tick_timer = state.scheduler.call_later(
            state.config.tick_interval, lambda: _tick(state))
        state.logs.system(
            f"{node.label} reached {state.config.attack_threshold} attacks - "
            f"retiring in {state.remaining}s unless cancelled",
            Severity.WARNING,
        )
        log.info("retirement countdown started for %s", node.label)
        return True


def _tick(state: SimulationState) -> None:
    with state.lock:
        state.tick_timer = None
        if state.phase is not CountdownPhase.PENDING:
            return
        state.remaining -= 1
        if state.remaining > 0:
            state.tick_timer = state.scheduler.call_later(
                state.config.tick_interval, lambda: _tick(state))
            return
        retire_and_respawn(state, state.candidate_id)


def _stop_ticking(state: SimulationState) -> None:
    if state.tick_timer is not None:
        state.tick_timer.cancel()
        state.tick_timer = None


def confirm(state: SimulationState, node_id: str) -> None:
    """Operator override: retire the pending node now."""
    with state.lock:
        if state.phase is CountdownPhase.RETIRING:
            raise RetirementInProgress(f"node {state.candidate_id} is already being retired")
        if state.phase is CountdownPhase.IDLE or state.candidate_id != node_id:
            raise NoPendingRetirement(f"no retirement pending for node {node_id}")
        log.info("operator confirmed retirement of node %s", node_id)
        retire_and_respawn(state, node_id)


def cancel(state: SimulationState) -> bool:
    """Operator override: drop the pending candidate without retiring it.

    Returns False when nothing was pending.
    """
    with state.lock:
        if state.phase is CountdownPhase.IDLE:
            return False
        if state.phase is CountdownPhase.RETIRING:
            raise RetirementInProgress(f"node {state.candidate_id} is already being retired")
        _stop_ticking(state)
        node_id = state.candidate_id
        node = state.network.get_node(node_id)
        if state.config.clear_count_on_cancel:
            threshold.clear(state, node_id)
        state.phase = CountdownPhase.IDLE
        state.candidate_id = None
        state.remaining = state.config.countdown_start
        label = node.label if node else f"node {node_id}"
        state.logs.system(f"Retirement of {label} cancelled by operator", Severity.INFO)
        log.info("operator cancelled retirement of %s", label)
        return True


def retire_and_respawn(state: SimulationState, node_id: str) -> None:
    """Remove *node_id* now and deploy its replacement after the respawn delay."""
    with state.lock:
        _stop_ticking(state)
        state.candidate_id = node_id
        threshold.clear(state, node_id)
        state.flash_seq.pop(node_id, None)
        node = state.network.get_node(node_id)
        if node is not None and node.is_honeypot:
            state.network.remove_honeypot(node_id)
            state.retired_total += 1
            state.logs.system(
                f"{node.label} has been retired due to high attack volume",
                Severity.ERROR,
            )
            log.warning("retired %s (node %s)", node.label, node_id)
        state.phase = CountdownPhase.RETIRING
        state.remaining = 0
        state.scheduler.call_later(state.config.respawn_delay, lambda: _respawn(state))


def _respawn(state: SimulationState) -> None:
    with state.lock:
        deploy_honeypot(state)
        state.phase = CountdownPhase.IDLE
        state.candidate_id = None
        state.remaining = state.config.countdown_start
