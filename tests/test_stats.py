"""Status-panel summaries built with pandas."""

from datetime import datetime, timedelta

import pandas as pd

from honeynet.stats import HIGH_RISK_TYPES, LOG_COLUMNS, export_csv, logs_frame, summarize


def test_empty_summary(sim):
    summary = summarize(sim.snapshot())
    assert summary == {
        "server_online": True,
        "active_honeypots": 2,
        "total_attacks": 0,
        "attacks_by_type": {},
        "attacks_by_target": {},
        "high_risk_attacks": 0,
        "last_attack": None,
        "retirements": 0,
        "deployments": 0,
    }


def test_summary_after_a_retirement(make_sim, rnd, scheduler):
    rnd.indices = [0, 0] * 5 + [1, 1]
    sim = make_sim()
    sim.set_running(True)
    for _ in range(6):
        sim.trigger_attack()
    sim.confirm_retirement("2")
    scheduler.advance(2)

    summary = summarize(sim.snapshot())
    assert summary["total_attacks"] == 6
    assert summary["attacks_by_type"] == {"Port Scan": 5, "SSH Brute Force": 1}
    assert summary["attacks_by_target"] == {"Honeypot 1": 5, "Honeypot 2": 1}
    assert summary["retirements"] == 1
    assert summary["deployments"] == 1
    assert summary["active_honeypots"] == 2


def test_logs_frame_columns(sim):
    sim.trigger_attack()
    df = logs_frame(sim.snapshot().logs)
    assert list(df.columns) == LOG_COLUMNS
    assert df.loc[0, "category"] == "attack"


def test_export_csv(sim, tmp_path):
    sim.set_running(True)
    sim.trigger_attack()
    path = tmp_path / "log.csv"
    assert export_csv(sim.snapshot().logs, path) == 2
    df = pd.read_csv(path)
    assert len(df) == 2
    assert set(df["category"]) == {"attack", "system"}


def test_high_risk_and_last_attack(make_sim, rnd, scheduler):
    # Port Scan, SQL Injection, Malware Upload, SQL Injection, spread over time
    rnd.indices = [0, 0, 1, 2, 0, 3, 1, 2]
    sim = make_sim()
    for _ in range(4):
        sim.trigger_attack()
        scheduler.advance(3)

    summary = summarize(sim.snapshot())
    assert set(HIGH_RISK_TYPES) == {"SQL Injection", "Malware Upload"}
    assert summary["total_attacks"] == 4
    assert summary["high_risk_attacks"] == 3
    # the newest attack fired at t=9 on the virtual clock
    assert summary["last_attack"] == datetime(2024, 1, 1, 12, 0, 0) + timedelta(seconds=9)


def test_lifetime_totals_survive_log_eviction(make_sim):
    sim = make_sim(log_capacity=5)
    for _ in range(8):
        sim.manual_add_honeypot()
    snap = sim.snapshot()
    assert len(snap.logs) == 5
    summary = summarize(snap)
    assert summary["deployments"] == 8
    assert summary["active_honeypots"] == 10
