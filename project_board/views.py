"""Headless board components: project items, project lists and the input form.

These mirror the browser widgets without any DOM. Lists subscribe to the
store and re-render on every notification; items start drags; lists accept
drops and translate them into ``ProjectStore.transition`` calls.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional, Tuple, Union

from .config import BoardSettings
from .drag_drop import PLAIN_TEXT, DragPhase, DragSession
from .models import Project, ProjectStatus
from .store import ProjectStore
from .validation import Validatable, validate

logger = logging.getLogger(__name__)

Alert = Callable[[str], None]


def _log_alert(message: str) -> None:
    logger.warning("Input rejected: %s", message)


class ProjectItemView:
    def __init__(self, project: Project, *, media_type: str = PLAIN_TEXT) -> None:
        self.project = project
        self.media_type = media_type

    @property
    def title(self) -> str:
        return self.project.title

    @property
    def description(self) -> str:
        return self.project.description

    @property
    def persons(self) -> str:
        if self.project.people == 1:
            return "1 person"
        return f"{self.project.people} persons"

    def render(self) -> Dict[str, str]:
        return {
            "id": self.project.id,
            "title": self.title,
            "assigned": f"{self.persons} assigned",
            "description": self.description,
        }

    def drag_start(self, session: DragSession) -> None:
        logger.debug("Drag start for project %s", self.project.id)
        session.begin(self.project.id, media_type=self.media_type, effect="move")

    def drag_end(self, session: DragSession) -> None:
        phase = session.end()
        logger.debug("Drag end for project %s (%s)", self.project.id, phase.value)


class ProjectListView:
    """Shows the projects of one status and accepts drops for that status."""

    def __init__(
        self,
        store: ProjectStore,
        kind: Union[ProjectStatus, str],
        *,
        media_type: str = PLAIN_TEXT,
    ) -> None:
        self.store = store
        self.kind = ProjectStatus.parse(kind)
        self.media_type = media_type
        self.assigned_projects: List[Project] = []
        self.items: List[ProjectItemView] = []
        self.droppable = False
        self.render_count = 0
        store.subscribe(self._on_projects_changed)

    @property
    def list_id(self) -> str:
        return f"{self.kind.value}-projects-list"

    @property
    def heading(self) -> str:
        return f"{self.kind.value.upper()} PROJECTS"

    def item_for(self, project_id: str) -> Optional[ProjectItemView]:
        for item in self.items:
            if item.project.id == project_id:
                return item
        return None

    def render(self) -> List[Dict[str, str]]:
        return [item.render() for item in self.items]

    def drag_over(self, session: DragSession) -> bool:
        types = session.data_transfer.types
        accepted = bool(types) and types[0] == self.media_type
        session.hover(accepted)
        if accepted:
            self.droppable = True
        return accepted

    def drag_leave(self, session: DragSession) -> None:
        self.droppable = False
        session.leave()

    def drop(self, session: DragSession) -> bool:
        """Move the dragged project into this list; ``False`` when nothing changed."""

        if session.phase is not DragPhase.HOVERING_VALID:
            logger.debug("Drop on %s ignored in phase %s", self.list_id, session.phase.value)
            return False
        project_id = session.payload(self.media_type)
        session.mark_dropped()
        self.droppable = False
        moved = self.store.transition(project_id, self.kind)
        if not moved:
            logger.debug("Drop of %s on %s changed nothing", project_id, self.list_id)
        return moved

    def _on_projects_changed(self, projects: List[Project]) -> None:
        self.assigned_projects = [project for project in projects if project.status is self.kind]
        self.items = [ProjectItemView(project, media_type=self.media_type) for project in self.assigned_projects]
        self.render_count += 1


class ProjectInputForm:
    """Collects title, description and team size, then asks the store to create."""

    def __init__(
        self,
        store: ProjectStore,
        settings: Optional[BoardSettings] = None,
        *,
        alert: Optional[Alert] = None,
    ) -> None:
        self.store = store
        self.settings = settings if settings is not None else BoardSettings()
        self.alert: Alert = alert or _log_alert
        self.title = ""
        self.description = ""
        self.people = ""

    def fill(self, title: str, description: str, people: Union[str, int, float]) -> None:
        self.title = title
        self.description = description
        self.people = str(people)

    def reset(self) -> None:
        self.title = ""
        self.description = ""
        self.people = ""

    def submit(self) -> Optional[str]:
        user_input = self._gather_user_input()
        if user_input is None:
            return None
        title, description, people = user_input
        project_id = self.store.create(title, description, people)
        self.reset()
        return project_id

    def _gather_user_input(self) -> Optional[Tuple[str, str, int]]:
        text_checks = (
            self.settings.title.validatable("Title", self.title),
            self.settings.description.validatable("Description", self.description),
        )
        for check in text_checks:
            if not self._passes(check):
                return None

        raw_people = self.people.strip()
        people: Union[str, int, float] = ""
        if raw_people:
            try:
                people = _parse_number(raw_people)
            except ValueError:
                self.alert("People must be a number.")
                return None
            if isinstance(people, float):
                self.alert("People must be a whole number.")
                return None
        if not self._passes(self.settings.people.validatable("People", people)):
            return None

        if isinstance(people, str):
            # Only reachable when people is optional and left blank.
            people = 0
        return self.title.strip(), self.description.strip(), people

    def _passes(self, check: Validatable) -> bool:
        result = validate(check)
        if not result.is_valid:
            self.alert(result.message or f"{check.name} is invalid.")
        return result.is_valid


def _parse_number(text: str) -> Union[int, float]:
    try:
        return int(text)
    except ValueError:
        value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {text!r}")
    if value.is_integer():
        return int(value)
    return value


__all__ = ["ProjectInputForm", "ProjectItemView", "ProjectListView"]
