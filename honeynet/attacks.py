"""Synthetic attack generation against live honeypots."""

from __future__ import annotations

import logging
from typing import Optional

from . import countdown, threshold
from .models import AttackEvent
from .randomness import RandomSource
from .state import SimulationState

log = logging.getLogger(__name__)

ATTACK_TYPES = (
    "Port Scan",
    "SSH Brute Force",
    "SQL Injection",
    "Malware Upload",
    "Lateral Movement Attempt",
)


def random_ip(rnd: RandomSource) -> str:
    return ".".join(str(octet) for octet in rnd.octets())


def pick_attack(state: SimulationState) -> Optional[AttackEvent]:
    """Choose a target, attack type and source address, or None if no target."""
    honeypots = state.network.list_live_honeypots()
    if not honeypots:
        return None
    target = state.random.choice(honeypots)
    attack_type = state.random.choice(ATTACK_TYPES)
    return AttackEvent(
        attack_type=attack_type,
        source_ip=random_ip(state.random),
        target_id=target.id,
        target_label=target.label,
    )


def launch(state: SimulationState) -> Optional[AttackEvent]:
    """Run one attack: log it, flash the target, then count it.

    Having no live honeypots is a normal quiet state; nothing happens.
    """
    with state.lock:
        event = pick_attack(state)
        if event is None:
            log.debug("no live honeypots, skipping attack")
            return None
        state.logs.attack(event)
        flash(state, event.target_id)
        candidate = threshold.record_attack(state, event.target_id)
        if candidate is not None:
            countdown.begin(state, candidate)
        return event


def flash(state: SimulationState, node_id: str) -> None:
    """Mark *node_id* as flashing for ``flash_duration`` seconds."""
    with state.lock:
        node = state.network.get_node(node_id)
        if node is None:
            return
        seq = state.flash_seq.get(node_id, 0) + 1
        state.flash_seq[node_id] = seq
        node.flashing = True
        state.scheduler.call_later(state.config.flash_duration,
                                   lambda: _unflash(state, node_id, seq))


def _unflash(state: SimulationState, node_id: str, seq: int) -> None:
    with state.lock:
        node = state.network.get_node(node_id)
        # a newer attack owns the flag now, or the node is gone
        if node is None or state.flash_seq.get(node_id) != seq:
            return
        node.flashing = False


def start(state: SimulationState) -> None:
    """Begin firing every ``attack_interval``; the first attack comes one
    interval from now."""
    with state.lock:
        if state.generator_timer is not None:
            return
        _schedule(state)


def stop(state: SimulationState) -> None:
    """Stop the cadence; nothing queued is replayed on restart."""
    with state.lock:
        if state.generator_timer is not None:
            state.generator_timer.cancel()
            state.generator_timer = None


def _schedule(state: SimulationState) -> None:
    state.generator_timer = state.scheduler.call_later(
        state.config.attack_interval, lambda: _on_interval(state))


def _on_interval(state: SimulationState) -> None:
    with state.lock:
        if not state.running:
            state.generator_timer = None
            return
        _schedule(state)
        launch(state)
