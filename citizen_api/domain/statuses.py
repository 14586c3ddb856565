"""Status values and transition policies for applications and grievances."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from citizen_api.core.errors import ValidationFailureError

APPLICATION_STATUSES = ("submitted", "in_review", "approved", "rejected")
GRIEVANCE_STATUSES = ("open", "in_progress", "resolved", "closed")

APPLICATION_INITIAL_STATUS = "submitted"
GRIEVANCE_INITIAL_STATUS = "open"


@dataclass(frozen=True)
class StatusPolicy:
    """
    Decides whether a record may move from one status to another.

    The default policy only checks that the target is one of the known values,
    so every status is reachable from every other one. A stricter policy is
    opt-in and must be built from an explicit transition table.
    """

    statuses: tuple[str, ...]
    transitions: Mapping[str, frozenset[str]] | None = field(default=None)

    @classmethod
    def permissive(cls, statuses: Iterable[str]) -> "StatusPolicy":
        return cls(tuple(statuses))

    @classmethod
    def from_transitions(cls, statuses: Iterable[str], transitions: Mapping[str, Iterable[str]]) -> "StatusPolicy":
        known = tuple(statuses)
        table: dict[str, frozenset[str]] = {}
        for source, targets in transitions.items():
            targets = frozenset(targets)
            unknown = ({source} | targets) - set(known)
            if unknown:
                raise ValueError(f"Unknown statuses in transition table: {sorted(unknown)}")
            table[source] = targets
        return cls(known, table)

    def validate(self, value: str | None) -> str:
        if value not in self.statuses:
            raise ValidationFailureError(
                f"Invalid status {value!r}; expected one of: {', '.join(self.statuses)}"
            )
        return value

    def check_transition(self, current: str, target: str) -> str:
        self.validate(target)
        if self.transitions is None or current == target:
            return target
        if target not in self.transitions.get(current, frozenset()):
            raise ValidationFailureError(f"Status cannot change from {current!r} to {target!r}")
        return target


APPLICATION_POLICY = StatusPolicy.permissive(APPLICATION_STATUSES)
GRIEVANCE_POLICY = StatusPolicy.permissive(GRIEVANCE_STATUSES)
