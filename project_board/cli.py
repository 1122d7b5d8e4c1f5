from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from .app import Board, build_board
from .config import LOG_LEVELS, BoardSettings, ConfigError, load_settings

logger = logging.getLogger(__name__)

STEP_KINDS = ("add", "drag", "move")


class ScriptError(RuntimeError):
    """Raised when a replay script is malformed or refers to unknown projects."""


def _load_steps(path: Path) -> List[Mapping[str, object]]:
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScriptError(f"Unable to read script {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ScriptError(f"Invalid YAML in script {path}: {exc}") from exc

    if not isinstance(document, dict) or not isinstance(document.get("steps"), list):
        raise ScriptError(f"Script {path} must be a mapping with a 'steps' list.")
    steps = document["steps"]
    for index, step in enumerate(steps, start=1):
        if not isinstance(step, dict) or len(step) != 1:
            raise ScriptError(f"Step {index} must be a single-key mapping (one of: {', '.join(STEP_KINDS)}).")
        kind = next(iter(step))
        if kind not in STEP_KINDS:
            raise ScriptError(f"Step {index} has unknown kind '{kind}'. Expected one of: {', '.join(STEP_KINDS)}.")
        if not isinstance(step[kind], dict):
            raise ScriptError(f"Step {index} ('{kind}') must map to a mapping of arguments.")
    return steps


def _field_text(args: Mapping[str, object], key: str) -> str:
    value = args.get(key)
    return "" if value is None else str(value)


def _resolve_project(board: Board, title: object, index: int) -> str:
    for project in board.store.projects:
        if project.title == title:
            return project.id
    raise ScriptError(f"Step {index} refers to unknown project '{title}'.")


def _run_step(board: Board, index: int, kind: str, args: Mapping[str, object], alerts: List[str]) -> Dict[str, object]:
    if kind == "add":
        board.input_form.fill(
            _field_text(args, "title"),
            _field_text(args, "description"),
            _field_text(args, "people"),
        )
        before = len(alerts)
        project_id = board.input_form.submit()
        result: Dict[str, object] = {"step": index, "kind": kind, "created": project_id}
        if project_id is None:
            result["alert"] = alerts[before] if len(alerts) > before else None
        return result

    project_id = _resolve_project(board, args.get("project"), index)
    target = args.get("to")
    if target is None:
        raise ScriptError(f"Step {index} ('{kind}') is missing 'to'.")
    try:
        if kind == "drag":
            phase = board.drag(project_id, str(target))
            return {"step": index, "kind": kind, "project": project_id, "phase": phase.value}
        moved = board.store.transition(project_id, str(target))
    except ValueError as exc:
        raise ScriptError(f"Step {index}: {exc}") from exc
    return {"step": index, "kind": kind, "project": project_id, "moved": moved}


def replay(script: str | Path, *, settings: Optional[BoardSettings] = None) -> Dict[str, object]:
    """Run a replay script against a fresh board and return the results."""

    if settings is None:
        settings = load_settings()
    alerts: List[str] = []
    board = build_board(settings, alert=alerts.append)
    steps = _load_steps(Path(script))
    results = []
    for index, step in enumerate(steps, start=1):
        kind, args = next(iter(step.items()))
        logger.debug("Replaying step %d (%s)", index, kind)
        results.append(_run_step(board, index, kind, args, alerts))
    return {"steps": results, "board": board.snapshot()}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="project-board", description="In-memory project board helper")
    parser.add_argument("--config", help="Path to a YAML board config (defaults to $PROJECT_BOARD_CONFIG)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (defaults to the config value)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser("replay", help="Replay a YAML script of board actions")
    replay_parser.add_argument("script")

    config_parser = subparsers.add_parser("config", help="Inspect board settings")
    config_subparsers = config_parser.add_subparsers(dest="config_command", required=True)
    config_subparsers.add_parser("show", help="Print the effective settings")

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "config" and args.config_command == "show":
        print(json.dumps(settings.model_dump(mode="json"), indent=2))
        return 0

    if args.command == "replay":
        try:
            payload = replay(args.script, settings=settings)
        except ScriptError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(json.dumps(payload, indent=2))
        return 0

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
