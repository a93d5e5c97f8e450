"""The single mutable value every simulation component operates on."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Optional

from .config import SimulationConfig
from .identifiers import IdAllocator
from .log_buffer import LogBuffer
from .models import CountdownPhase, RetirementCandidate, optional_candidate
from .network import NetworkModel
from .randomness import RandomSource
from .scheduler import Scheduler, Timer


@dataclass(eq=False)
class SimulationState:
    """Network, counters, countdown and log for one simulation.

    Components never keep state of their own; they receive this object
    and mutate it while holding ``lock``.  Every timer callback takes the
    same lock, so a host that drives the engine from several threads
    still sees each transition as a whole.
    """

    config: SimulationConfig
    scheduler: Scheduler
    random: RandomSource
    network: NetworkModel
    logs: LogBuffer
    ids: IdAllocator
    attack_counts: dict[str, int] = field(default_factory=dict)
    # bumped on every attack; a flash reset only clears its own flash
    flash_seq: dict[str, int] = field(default_factory=dict)
    running: bool = False
    phase: CountdownPhase = CountdownPhase.IDLE
    candidate_id: Optional[str] = None
    remaining: int = 0
    generator_timer: Optional[Timer] = None
    tick_timer: Optional[Timer] = None
    # lifetime totals; the log buffer only holds the newest entries
    retired_total: int = 0
    deployed_total: int = 0
    lock: RLock = field(default_factory=RLock)

    def __post_init__(self):
        if not self.remaining:
            self.remaining = self.config.countdown_start

    @property
    def candidate(self) -> Optional[RetirementCandidate]:
        return optional_candidate(self.candidate_id, self.remaining)

    @property
    def pending(self) -> bool:
        return self.phase is not CountdownPhase.IDLE

    def flashing_ids(self) -> list[str]:
        return [n.id for n in self.network.list_live_honeypots() if n.flashing]
