"""Board wiring: one store injected into the form and both project lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .config import BoardSettings
from .drag_drop import DragPhase, DragSession
from .models import ProjectStatus
from .store import ProjectStore
from .views import Alert, ProjectInputForm, ProjectItemView, ProjectListView


@dataclass(slots=True)
class Board:
    settings: BoardSettings
    store: ProjectStore
    input_form: ProjectInputForm
    active_list: ProjectListView
    finished_list: ProjectListView

    def list_for(self, status: Union[ProjectStatus, str]) -> ProjectListView:
        if ProjectStatus.parse(status) is ProjectStatus.ACTIVE:
            return self.active_list
        return self.finished_list

    def item_for(self, project_id: str) -> Optional[ProjectItemView]:
        return self.active_list.item_for(project_id) or self.finished_list.item_for(project_id)

    def drag(self, project_id: str, to: Union[ProjectStatus, str]) -> DragPhase:
        """Drag a rendered project onto the list for ``to`` and release it there."""

        item = self.item_for(project_id)
        if item is None:
            raise KeyError(f"Project '{project_id}' is not rendered on the board.")
        target = self.list_for(to)
        session = DragSession()
        item.drag_start(session)
        if target.drag_over(session):
            target.drop(session)
        else:
            target.drag_leave(session)
        item.drag_end(session)
        return session.phase

    def snapshot(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            ProjectStatus.ACTIVE.value: self.active_list.render(),
            ProjectStatus.FINISHED.value: self.finished_list.render(),
        }


def build_board(
    settings: Optional[BoardSettings] = None,
    *,
    store: Optional[ProjectStore] = None,
    alert: Optional[Alert] = None,
) -> Board:
    if settings is None:
        settings = BoardSettings()
    if store is None:
        store = ProjectStore()
    input_form = ProjectInputForm(store, settings, alert=alert)
    active_list = ProjectListView(store, ProjectStatus.ACTIVE, media_type=settings.drag_media_type)
    finished_list = ProjectListView(store, ProjectStatus.FINISHED, media_type=settings.drag_media_type)
    return Board(
        settings=settings,
        store=store,
        input_form=input_form,
        active_list=active_list,
        finished_list=finished_list,
    )


__all__ = ["Board", "build_board"]
