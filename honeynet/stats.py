"""Summary statistics over the log buffer."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from .models import LogCategory, LogEntry

# attack types the status panel flags as high risk
HIGH_RISK_TYPES = ("SQL Injection", "Malware Upload")

LOG_COLUMNS = [
    "id", "timestamp", "category", "severity", "message",
    "attack_type", "source_ip", "target_id", "target_label",
]


def logs_frame(entries: Iterable[LogEntry]) -> pd.DataFrame:
    """Return the entries as a DataFrame, one row per entry, newest first."""
    rows = [{
        "id": e.id,
        "timestamp": e.timestamp,
        "category": e.category.value,
        "severity": e.severity.value,
        "message": e.message,
        "attack_type": e.attack_type,
        "source_ip": e.source_ip,
        "target_id": e.target_id,
        "target_label": e.target_label,
    } for e in entries]
    return pd.DataFrame(rows, columns=LOG_COLUMNS)


def summarize(snapshot) -> dict:
    """Counters for a status panel: attacks by type and target, live decoys.

    ``retirements`` and ``deployments`` are lifetime totals; the attack
    figures cover only what is still in the log buffer.
    """
    df = logs_frame(snapshot.logs)
    attacks = df[df["category"] == LogCategory.ATTACK.value]
    return {
        "server_online": any(not n.is_honeypot for n in snapshot.nodes),
        "active_honeypots": len(snapshot.honeypots),
        "total_attacks": int(len(attacks)),
        "attacks_by_type": {k: int(v) for k, v in attacks["attack_type"].value_counts().items()},
        "attacks_by_target": {k: int(v) for k, v in attacks["target_label"].value_counts().items()},
        "high_risk_attacks": int(attacks["attack_type"].isin(HIGH_RISK_TYPES).sum()),
        "last_attack": _last_attack(attacks),
        "retirements": snapshot.retirements,
        "deployments": snapshot.deployments,
    }


def _last_attack(attacks: pd.DataFrame) -> Optional[datetime]:
    # frames are newest first
    if attacks.empty:
        return None
    return pd.Timestamp(attacks["timestamp"].iloc[0]).to_pydatetime()


def export_csv(entries: Iterable[LogEntry], path) -> int:
    """Write the entries to *path* as CSV; returns the row count."""
    df = logs_frame(entries)
    df.to_csv(path, index=False)
    return len(df)
