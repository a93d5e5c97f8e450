"""Bounded log buffer behaviour."""

from datetime import datetime

import pytest

from honeynet.log_buffer import LogBuffer
from honeynet.models import AttackEvent, LogCategory, Severity


def test_newest_first():
    buf = LogBuffer(capacity=5)
    buf.system("first", Severity.INFO)
    buf.system("second", Severity.SUCCESS)
    assert [e.message for e in buf.all()] == ["second", "first"]


def test_capacity_eviction_after_60_appends():
    buf = LogBuffer(capacity=50)
    for i in range(60):
        buf.system(f"entry {i}", Severity.INFO)
    entries = buf.all()
    assert len(buf) == 50
    assert [e.message for e in entries] == [f"entry {i}" for i in range(59, 9, -1)]


def test_ids_are_unique():
    buf = LogBuffer()
    for i in range(30):
        buf.system(str(i), Severity.INFO)
    ids = [e.id for e in buf.all()]
    assert len(set(ids)) == len(ids)


def test_attack_entry_fields():
    stamp = datetime(2024, 5, 1, 9, 30, 15)
    buf = LogBuffer(clock=lambda: stamp)
    entry = buf.attack(AttackEvent("SQL Injection", "1.2.3.4", "2", "Honeypot 1"))
    assert entry.category is LogCategory.ATTACK
    assert entry.severity is Severity.WARNING
    assert entry.target_id == "2"
    assert entry.format() == "[ATTACK] 09:30:15 - SQL Injection from 1.2.3.4 on Honeypot 1"


def test_system_entry_format():
    stamp = datetime(2024, 5, 1, 9, 30, 15)
    buf = LogBuffer(clock=lambda: stamp)
    entry = buf.system("Simulation stopped - System paused", Severity.INFO)
    assert entry.format() == "[SYSTEM] 09:30:15 - Simulation stopped - System paused"


def test_entries_are_immutable():
    buf = LogBuffer()
    entry = buf.system("x", Severity.INFO)
    with pytest.raises(AttributeError):
        entry.message = "y"


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        LogBuffer(capacity=0)
