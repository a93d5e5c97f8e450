"""Public facade over the simulation components.

``HoneypotSimulation`` owns one :class:`SimulationState` and exposes the
inbound operator calls plus a read-only snapshot of everything a
presentation layer would draw.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Optional

from . import attacks, countdown
from .config import SimulationConfig
from .decoys import deploy_honeypot, seed_topology
from .identifiers import IdAllocator
from .log_buffer import LogBuffer
from .models import (
    SERVER_ID,
    AttackEvent,
    CountdownPhase,
    Edge,
    LogEntry,
    Node,
    RetirementCandidate,
    Severity,
)
from .network import NetworkModel
from .randomness import NumpyRandomSource, RandomSource
from .scheduler import Scheduler, VirtualScheduler
from .state import SimulationState

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationSnapshot:
    running: bool
    nodes: list[Node]
    edges: list[Edge]
    logs: list[LogEntry]
    candidate: Optional[RetirementCandidate]
    phase: CountdownPhase
    flashing: list[str]
    attack_counts: dict[str, int]
    retirements: int = 0
    deployments: int = 0

    @property
    def honeypots(self) -> list[Node]:
        return [n for n in self.nodes if n.is_honeypot]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["phase"] = self.phase.value
        for node in data["nodes"]:
            node["kind"] = node["kind"].value
        for entry in data["logs"]:
            entry["timestamp"] = entry["timestamp"].isoformat()
            entry["category"] = entry["category"].value
            entry["severity"] = entry["severity"].value
        return data


def build_state(
    config: Optional[SimulationConfig] = None,
    scheduler: Optional[Scheduler] = None,
    random: Optional[RandomSource] = None,
) -> SimulationState:
    """Assemble a fresh state holding the server and the start-up honeypots."""
    config = config or SimulationConfig()
    scheduler = scheduler or VirtualScheduler()
    state = SimulationState(
        config=config,
        scheduler=scheduler,
        random=random or NumpyRandomSource(config.seed),
        network=NetworkModel(),
        logs=LogBuffer(config.log_capacity, clock=scheduler.timestamp),
        ids=IdAllocator(start=int(SERVER_ID) + 1),
    )
    seed_topology(state)
    return state


class HoneypotSimulation:
    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        scheduler: Optional[Scheduler] = None,
        random: Optional[RandomSource] = None,
    ):
        self.state = build_state(config, scheduler, random)

    @property
    def config(self) -> SimulationConfig:
        return self.state.config

    @property
    def scheduler(self) -> Scheduler:
        return self.state.scheduler

    @property
    def running(self) -> bool:
        return self.state.running

    # -- inbound ----------------------------------------------------------

    def set_running(self, running: bool) -> bool:
        """Start or stop the attack generator.

        Returns False, without logging, when already in the requested state.
        Pending countdowns and respawns are not affected by stopping.
        """
        state = self.state
        with state.lock:
            if state.running == running:
                return False
            state.running = running
            if running:
                attacks.start(state)
                state.logs.system("Simulation started - Monitoring for attacks", Severity.SUCCESS)
            else:
                attacks.stop(state)
                state.logs.system("Simulation stopped - System paused", Severity.INFO)
            log.info("simulation %s", "started" if running else "stopped")
            return True

    def manual_add_honeypot(self) -> Node:
        return replace(deploy_honeypot(self.state))

    def confirm_retirement(self, node_id: str) -> None:
        countdown.confirm(self.state, node_id)

    def cancel_retirement(self) -> bool:
        return countdown.cancel(self.state)

    def trigger_attack(self) -> Optional[AttackEvent]:
        """Fire one attack immediately, independent of the cadence."""
        return attacks.launch(self.state)

    # -- outbound ---------------------------------------------------------

    def snapshot(self) -> SimulationSnapshot:
        state = self.state
        with state.lock:
            return SimulationSnapshot(
                running=state.running,
                nodes=[replace(n) for n in state.network.nodes()],
                edges=state.network.edges(),
                logs=state.logs.all(),
                candidate=state.candidate,
                phase=state.phase,
                flashing=state.flashing_ids(),
                attack_counts=dict(state.attack_counts),
                retirements=state.retired_total,
                deployments=state.deployed_total,
            )
