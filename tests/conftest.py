"""Shared fixtures: a deterministic simulation on a virtual clock."""

from datetime import datetime

import pytest

from honeynet.config import SimulationConfig
from honeynet.engine import HoneypotSimulation
from honeynet.randomness import RandomSource
from honeynet.scheduler import VirtualScheduler


class ScriptedRandom(RandomSource):
    """Replays queued choice indices; falls back to index 0 when empty."""

    def __init__(self, indices=None, octets=(10, 0, 0, 1)):
        self.indices = list(indices or [])
        self.fixed_octets = octets

    def choice_index(self, n):
        if self.indices:
            return self.indices.pop(0) % n
        return 0

    def octets(self):
        return self.fixed_octets

    def uniform(self, low, high):
        return low


@pytest.fixture
def scheduler():
    return VirtualScheduler(origin=datetime(2024, 1, 1, 12, 0, 0))


@pytest.fixture
def rnd():
    return ScriptedRandom()


@pytest.fixture
def make_sim(scheduler, rnd):
    def _make(**overrides):
        return HoneypotSimulation(SimulationConfig(**overrides), scheduler=scheduler, random=rnd)
    return _make


@pytest.fixture
def sim(make_sim):
    return make_sim()
