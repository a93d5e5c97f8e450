"""Value types shared by the simulation components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


SERVER_ID = "1"
SERVER_LABEL = "Real Server"
HONEYPOT_LABEL = "Honeypot {number}"

# cosmetic classes, no behavioural effect
VARIANTS = ("standard", "gen2", "gen3")

INITIAL_EDGE_LABEL = "Monitored Tunnel"
DYNAMIC_EDGE_LABEL = "Dynamic Tunnel"


class NodeKind(str, Enum):
    SERVER = "server"
    HONEYPOT = "honeypot"


class LogCategory(str, Enum):
    ATTACK = "attack"
    SYSTEM = "system"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class CountdownPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RETIRING = "retiring"  # node removed, respawn not yet done


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class Node:
    id: str
    kind: NodeKind
    label: str
    variant: str = VARIANTS[0]
    position: Position = Position(0.0, 0.0)
    flashing: bool = False

    @property
    def is_honeypot(self) -> bool:
        return self.kind is NodeKind.HONEYPOT


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    label: str = DYNAMIC_EDGE_LABEL

    @classmethod
    def to_honeypot(cls, target: str, label: str = DYNAMIC_EDGE_LABEL) -> "Edge":
        return cls(id=f"e{SERVER_ID}-{target}", source=SERVER_ID, target=target, label=label)


@dataclass(frozen=True)
class AttackEvent:
    attack_type: str
    source_ip: str
    target_id: str
    target_label: str


@dataclass(frozen=True)
class LogEntry:
    id: str
    timestamp: datetime
    category: LogCategory
    severity: Severity
    message: str
    attack_type: str = ""
    source_ip: str = ""
    target_id: str = ""
    target_label: str = ""

    def format(self) -> str:
        clock = self.timestamp.strftime("%H:%M:%S")
        if self.category is LogCategory.ATTACK:
            return (f"[ATTACK] {clock} - {self.attack_type} from "
                    f"{self.source_ip} on {self.target_label}")
        return f"[SYSTEM] {clock} - {self.message}"


@dataclass(frozen=True)
class RetirementCandidate:
    node_id: str
    remaining_seconds: int


def honeypot_label(number: int) -> str:
    return HONEYPOT_LABEL.format(number=number)


def optional_candidate(node_id: Optional[str], remaining: int) -> Optional[RetirementCandidate]:
    if node_id is None:
        return None
    return RetirementCandidate(node_id=node_id, remaining_seconds=remaining)
