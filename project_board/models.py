"""Project entity and status values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def parse(cls, value: "ProjectStatus | str") -> "ProjectStatus":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unsupported project status '{value}'. Expected one of: {allowed}.")


@dataclass(slots=True, eq=False)
class Project:
    """A single board entry.

    Equality is identity: listeners hold on to the instance, and the store
    changes ``status`` in place rather than replacing the object.
    """

    id: str
    title: str
    description: str
    people: int
    _status: ProjectStatus = field(default=ProjectStatus.ACTIVE, init=False, repr=False)

    @property
    def status(self) -> ProjectStatus:
        return self._status

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, title={self.title!r}, status={self._status.value})"

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "people": self.people,
            "status": self._status.value,
        }


def _assign_status(project: Project, status: ProjectStatus) -> None:
    # Only ProjectStore calls this.
    project._status = status


__all__ = ["Project", "ProjectStatus"]
