"""In-memory project store with synchronous change notification."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, TypeVar
from uuid import uuid4

from .models import Project, ProjectStatus, _assign_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[List[T]], None]


class Subscribable(Protocol[T]):
    def subscribe(self, listener: Listener[T]) -> None:  # pragma: no cover - interface
        ...


def _new_project_id() -> str:
    return uuid4().hex


class ProjectStore:
    """Single owner of the board's projects.

    ``create`` and ``transition`` are the only mutations. Each effective
    mutation calls every listener, in registration order, with a new list
    holding the full project sequence. Listener exceptions propagate to the
    caller after the mutation has been applied.
    """

    def __init__(self, *, id_factory: Callable[[], str] = _new_project_id) -> None:
        self._projects: List[Project] = []
        self._listeners: List[Listener[Project]] = []
        self._issued_ids: set[str] = set()
        self._id_factory = id_factory

    def __len__(self) -> int:
        return len(self._projects)

    @property
    def projects(self) -> List[Project]:
        return list(self._projects)

    def subscribe(self, listener: Listener[Project]) -> None:
        self._listeners.append(listener)
        logger.debug("Registered project listener #%d: %r", len(self._listeners), listener)

    def find(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def create(self, title: str, description: str, people: int) -> str:
        project = Project(
            id=self._allocate_id(),
            title=title,
            description=description,
            people=people,
        )
        self._projects.append(project)
        logger.debug("Created project %s (%r, people=%s)", project.id, title, people)
        self._notify()
        return project.id

    def transition(self, project_id: str, new_status: ProjectStatus | str) -> bool:
        status = ProjectStatus.parse(new_status)
        project = self.find(project_id)
        if project is None:
            logger.debug("Ignoring transition for unknown project %s", project_id)
            return False
        if project.status is status:
            return False
        previous = project.status
        _assign_status(project, status)
        logger.debug("Moved project %s from %s to %s", project_id, previous.value, status.value)
        self._notify()
        return True

    def _allocate_id(self) -> str:
        candidate = self._id_factory()
        while candidate in self._issued_ids:
            candidate = self._id_factory()
        self._issued_ids.add(candidate)
        return candidate

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(list(self._projects))


__all__ = ["Listener", "ProjectStore", "Subscribable"]
