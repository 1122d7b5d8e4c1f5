"""In-memory project board: a publish/subscribe project store and its drag-and-drop protocol."""

from .app import Board, build_board
from .config import BoardSettings, ConfigError, FieldRules, load_settings
from .drag_drop import PLAIN_TEXT, DataTransfer, DragPhase, DragSession, DragStateError
from .models import Project, ProjectStatus
from .store import Listener, ProjectStore, Subscribable
from .validation import Validatable, ValidationOutput, validate
from .views import ProjectInputForm, ProjectItemView, ProjectListView

__all__ = [
    "Board",
    "build_board",
    "BoardSettings",
    "ConfigError",
    "FieldRules",
    "load_settings",
    "PLAIN_TEXT",
    "DataTransfer",
    "DragPhase",
    "DragSession",
    "DragStateError",
    "Project",
    "ProjectStatus",
    "Listener",
    "ProjectStore",
    "Subscribable",
    "Validatable",
    "ValidationOutput",
    "validate",
    "ProjectInputForm",
    "ProjectItemView",
    "ProjectListView",
]
