"""Network profile and command result definitions."""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


class Procedure(Enum):
    """What a reconciliation does to wpa_supplicant."""
    ADD = "add"
    MODIFY = "modify"
    REPLACE = "replace"


@dataclass
class NetworkProfile:
    """A network configured in wpa_supplicant."""
    id: int
    ssid: str
    bssid: str = "any"
    flags: str = ""
    id_str: Optional[str] = None
    priority: Optional[int] = None
    key_mgmt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "id": self.id,
            "ssid": self.ssid,
            "bssid": self.bssid,
            "flags": self.flags,
            "id_str": self.id_str,
            "priority": self.priority,
            "key_mgmt": self.key_mgmt,
        }


@dataclass
class CommandResult:
    """Outcome of a wpa_cli command that acknowledges with OK."""
    ok: bool
    argv: List[str]
    lines: List[str] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def success(cls, argv: List[str], lines: List[str]) -> "CommandResult":
        return cls(ok=True, argv=argv, lines=lines)

    @classmethod
    def failure(cls, argv: List[str], lines: List[str], message: str) -> "CommandResult":
        return cls(ok=False, argv=argv, lines=lines, message=message)

    @property
    def value(self) -> Optional[str]:
        """First output line, if any."""
        return self.lines[0] if self.lines else None


@dataclass
class ReconcilePlan:
    """Decision made for one desired profile."""
    method: str
    procedure: Procedure
    matches: List[NetworkProfile]
    fields: Dict[str, str]

    @property
    def matched_ids(self) -> List[int]:
        return [network.id for network in self.matches]

    def describe(self, redacted_fields: Optional[Dict[str, str]] = None) -> str:
        """Human readable summary of what the plan would do."""
        shown = redacted_fields if redacted_fields is not None else self.fields
        entry = "\n".join(f"    {key}={value}" for key, value in shown.items())

        lines = [f"Using METHOD={self.method} and following PROCEDURE={self.procedure.value}...", ""]
        if self.procedure == Procedure.ADD:
            lines += ["I would have added this network entry:", entry]
        elif self.procedure == Procedure.MODIFY:
            lines += [f"I would have modified network id {self.matched_ids[0]} with:", entry]
        else:
            lines += ["I would have removed these network entries:"]
            lines += [f"    {n.id}: ssid={n.ssid} id_str={n.id_str}" for n in self.matches]
            lines += ["", " _and_", "", "I would have added this network entry:", entry]
        return "\n".join(lines)


@dataclass
class ReconcileOutcome:
    """Result of a completed reconciliation."""
    plan: ReconcilePlan
    network_id: Optional[int] = None
    removed_ids: List[int] = field(default_factory=list)
    dry_run: bool = False
