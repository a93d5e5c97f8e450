"""Tunable constants for the simulation."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SimulationConfig:
    # timings are in simulated seconds
    attack_interval: float = 5.0
    flash_duration: float = 1.0
    tick_interval: float = 1.0
    respawn_delay: float = 2.0
    attack_threshold: int = 5
    countdown_start: int = 10
    log_capacity: int = 50
    initial_honeypots: int = 2
    # cancelling a retirement forgets the node's attack count so the
    # threshold can fire again; False keeps the node armed but silent
    clear_count_on_cancel: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("attack_interval", "flash_duration", "tick_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.respawn_delay < 0:
            raise ValueError("respawn_delay must not be negative")
        if self.attack_threshold < 1:
            raise ValueError("attack_threshold must be at least 1")
        if self.countdown_start < 1:
            raise ValueError("countdown_start must be at least 1")
        if self.log_capacity < 1:
            raise ValueError("log_capacity must be at least 1")
        if self.initial_honeypots < 0:
            raise ValueError("initial_honeypots must not be negative")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SimulationConfig":
        """Build a config from parsed CLI flags, ignoring flags left unset."""
        overrides = {}
        for name in cls.__dataclass_fields__:
            value = getattr(args, name, None)
            if value is not None:
                overrides[name] = value
        return cls(**overrides)
