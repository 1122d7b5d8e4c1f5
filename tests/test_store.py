from __future__ import annotations

from typing import List

import pytest

from project_board.models import Project, ProjectStatus
from project_board.store import ProjectStore


class RecordingListener:
    def __init__(self) -> None:
        self.calls: List[List[Project]] = []

    def __call__(self, projects: List[Project]) -> None:
        self.calls.append(projects)


@pytest.fixture()
def store() -> ProjectStore:
    return ProjectStore()


@pytest.fixture()
def listener(store: ProjectStore) -> RecordingListener:
    recorder = RecordingListener()
    store.subscribe(recorder)
    return recorder


def test_create_returns_unique_ids_and_active_projects(store: ProjectStore) -> None:
    ids = [store.create(f"Project {index}", "desc", 2) for index in range(50)]

    assert len(set(ids)) == 50
    assert all(project.status is ProjectStatus.ACTIVE for project in store.projects)


def test_create_preserves_insertion_order(store: ProjectStore) -> None:
    titles = ["alpha", "beta", "gamma", "delta"]
    for title in titles:
        store.create(title, "desc", 1)

    assert len(store) == 4
    assert [project.title for project in store.projects] == titles


def test_create_notifies_with_full_snapshot(store: ProjectStore, listener: RecordingListener) -> None:
    first = store.create("Build API", "REST service", 3)
    second = store.create("Docs", "Write docs", 1)

    assert len(listener.calls) == 2
    assert [project.id for project in listener.calls[0]] == [first]
    assert [project.id for project in listener.calls[1]] == [first, second]


def test_create_accepts_inputs_as_given(store: ProjectStore) -> None:
    project_id = store.create("", "", 0)

    project = store.find(project_id)
    assert project is not None
    assert project.title == ""
    assert project.people == 0


def test_id_collisions_from_factory_are_regenerated() -> None:
    values = iter(["dup", "dup", "dup", "fresh"])
    store = ProjectStore(id_factory=lambda: next(values))

    first = store.create("one", "desc", 1)
    second = store.create("two", "desc", 1)

    assert first == "dup"
    assert second == "fresh"


def test_transition_unknown_id_is_silent(store: ProjectStore, listener: RecordingListener) -> None:
    store.create("Build API", "REST service", 3)
    calls_before = len(listener.calls)
    before = store.projects

    assert store.transition("nonexistent-id", ProjectStatus.FINISHED) is False
    assert len(listener.calls) == calls_before
    assert store.projects == before


def test_transition_to_same_status_is_silent(store: ProjectStore, listener: RecordingListener) -> None:
    project_id = store.create("Build API", "REST service", 3)
    calls_before = len(listener.calls)

    assert store.transition(project_id, ProjectStatus.ACTIVE) is False
    assert len(listener.calls) == calls_before


def test_transition_mutates_in_place_and_notifies_each_listener_once(store: ProjectStore) -> None:
    first = RecordingListener()
    second = RecordingListener()
    store.subscribe(first)
    store.subscribe(second)
    project_id = store.create("Build API", "REST service", 3)
    project = store.find(project_id)

    assert store.transition(project_id, ProjectStatus.FINISHED) is True

    assert store.find(project_id) is project
    assert project is not None and project.status is ProjectStatus.FINISHED
    for recorder in (first, second):
        assert len(recorder.calls) == 2
        assert recorder.calls[-1][0].status is ProjectStatus.FINISHED


def test_transition_accepts_status_strings(store: ProjectStore) -> None:
    project_id = store.create("Build API", "REST service", 3)

    assert store.transition(project_id, "Finished") is True
    assert store.transition(project_id, " active ") is True


def test_transition_rejects_unknown_status(store: ProjectStore, listener: RecordingListener) -> None:
    project_id = store.create("Build API", "REST service", 3)

    with pytest.raises(ValueError, match="Unsupported project status"):
        store.transition(project_id, "archived")
    assert len(listener.calls) == 1


def test_repeated_transition_is_idempotent(store: ProjectStore, listener: RecordingListener) -> None:
    project_id = store.create("Build API", "REST service", 3)

    assert store.transition(project_id, ProjectStatus.FINISHED) is True
    state_after_first = [project.to_dict() for project in store.projects]
    calls_after_first = len(listener.calls)

    assert store.transition(project_id, ProjectStatus.FINISHED) is False
    assert [project.to_dict() for project in store.projects] == state_after_first
    assert len(listener.calls) == calls_after_first


def test_listeners_are_called_in_registration_order(store: ProjectStore) -> None:
    order: List[str] = []
    store.subscribe(lambda projects: order.append("first"))
    store.subscribe(lambda projects: order.append("second"))
    store.subscribe(lambda projects: order.append("third"))

    store.create("Build API", "REST service", 3)

    assert order == ["first", "second", "third"]


def test_snapshot_mutation_does_not_leak_into_store(store: ProjectStore) -> None:
    store.subscribe(lambda projects: projects.clear())
    store.create("Build API", "REST service", 3)

    snapshot = store.projects
    snapshot.append(snapshot[0])

    assert len(store) == 1
    assert len(store.projects) == 1


def test_each_listener_gets_its_own_snapshot(store: ProjectStore) -> None:
    seen: List[List[Project]] = []
    store.subscribe(seen.append)
    store.subscribe(seen.append)

    store.create("Build API", "REST service", 3)

    assert seen[0] == seen[1]
    assert seen[0] is not seen[1]


def test_listener_error_propagates_and_mutation_stays_committed(store: ProjectStore) -> None:
    later = RecordingListener()

    def broken(projects: List[Project]) -> None:
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(later)

    with pytest.raises(RuntimeError, match="render failed"):
        store.create("Build API", "REST service", 3)

    assert len(store) == 1
    assert later.calls == []

    project_id = store.projects[0].id
    with pytest.raises(RuntimeError, match="render failed"):
        store.transition(project_id, ProjectStatus.FINISHED)
    assert store.projects[0].status is ProjectStatus.FINISHED


def test_project_equality_is_identity(store: ProjectStore) -> None:
    first = store.find(store.create("Same", "desc", 1))
    second = store.find(store.create("Same", "desc", 1))

    assert first is not None and second is not None
    assert first != second
    assert first == first


def test_project_status_is_read_only(store: ProjectStore) -> None:
    project = store.find(store.create("Build API", "REST service", 3))

    with pytest.raises(AttributeError):
        project.status = ProjectStatus.FINISHED  # type: ignore[misc]


def test_project_to_dict_uses_status_value(store: ProjectStore) -> None:
    project = store.find(store.create("Build API", "REST service", 3))

    assert project is not None
    payload = project.to_dict()
    assert payload["status"] == "active"
    assert payload["people"] == 3
    assert payload["id"] == project.id
