"""Deception network simulation.

A fixed real server is surrounded by decoy honeypots that absorb synthetic
attacks.  Honeypots that draw too much attention are retired and replaced
after an operator-overridable countdown.
"""

from .config import SimulationConfig
from .engine import HoneypotSimulation, SimulationState

__version__ = "0.1"  # package version

__all__ = ["HoneypotSimulation", "SimulationConfig", "SimulationState"]
