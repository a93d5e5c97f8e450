"""CLI runs and configuration parsing."""

import argparse

import pandas as pd
import pytest

from honeynet.cli import main
from honeynet.config import SimulationConfig


def test_simulate_prints_log(capsys):
    assert main(["simulate", "--seconds", "60", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0].startswith("[SYSTEM]")
    assert "Simulation started - Monitoring for attacks" in lines[0]
    assert sum(1 for line in lines if line.startswith("[ATTACK]")) == 12
    assert "12 attacks logged" in out


def test_simulate_with_low_threshold_retires(capsys):
    main(["simulate", "--seconds", "120", "--seed", "1", "--threshold", "2", "--honeypots", "1"])
    out = capsys.readouterr().out
    assert "has been retired due to high attack volume" in out
    assert "has been deployed and is now monitoring for attacks" in out


def test_simulate_exports_csv(tmp_path, capsys):
    path = tmp_path / "out.csv"
    main(["simulate", "--seconds", "20", "--seed", "2", "--export-log", str(path)])
    df = pd.read_csv(path)
    assert (df["category"] == "attack").sum() == 4


def test_config_from_args_keeps_defaults():
    args = argparse.Namespace(seed=4, attack_threshold=None, countdown_start=3, seconds=10)
    config = SimulationConfig.from_args(args)
    assert config.seed == 4
    assert config.attack_threshold == 5
    assert config.countdown_start == 3


@pytest.mark.parametrize("field,value", [
    ("attack_interval", 0),
    ("attack_threshold", 0),
    ("countdown_start", 0),
    ("log_capacity", 0),
    ("respawn_delay", -1),
])
def test_config_rejects_bad_values(field, value):
    with pytest.raises(ValueError):
        SimulationConfig(**{field: value})
