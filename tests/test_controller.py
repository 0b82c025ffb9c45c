# tests/test_controller.py

from __future__ import annotations

import logging

import pytest

from tasklist.core.controller import TaskListController
from tasklist.tasks.task_models import CreateIntent, Prompt, RenameIntent, Task

from .fakes import FakeTaskRepo, FakeView


def _controller(tasks: list[Task] | None = None) -> tuple[TaskListController, FakeTaskRepo, FakeView]:
    repo = FakeTaskRepo(tasks)
    view = FakeView()
    controller = TaskListController(repo, view)
    controller.load()
    return controller, repo, view


def _titles(controller: TaskListController) -> list[str]:
    return [t.title for t in controller.tasks]


def test_load_keeps_store_order_and_renders_once() -> None:
    x, y = Task(id="x", title="X"), Task(id="y", title="Y")
    controller, _, view = _controller([x, y])

    assert controller.tasks == (x, y)
    assert view.rows == ["X", "Y"]
    assert view.events == [("reload_all", 2)]


def test_load_fetch_failure_leaves_list_empty(caplog: pytest.LogCaptureFixture) -> None:
    repo = FakeTaskRepo([Task(id="x", title="X")])
    repo.fail_fetch = True
    view = FakeView()
    controller = TaskListController(repo, view)

    with caplog.at_level(logging.ERROR, logger="tasklist.core.controller"):
        controller.load()

    assert len(controller) == 0
    assert view.rows == []
    assert "Failed to fetch tasks" in caplog.text


def test_create_on_empty_list_appends_and_commits() -> None:
    controller, repo, view = _controller()

    task = controller.confirm(controller.begin_add(), "Buy milk")

    assert task is not None
    assert _titles(controller) == ["Buy milk"]
    assert view.rows == ["Buy milk"]
    assert view.events[-1] == ("insert_row", 0)
    assert repo.calls[-2:] == ["create", "commit"]
    assert repo.count_tasks() == 1


def test_create_appends_at_end() -> None:
    controller, _, view = _controller([Task(id="a", title="A")])

    controller.confirm(controller.begin_add(), "B")

    assert _titles(controller) == ["A", "B"]
    assert view.events[-1] == ("insert_row", 1)


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
def test_blank_confirm_is_a_no_op(text: str | None) -> None:
    controller, repo, view = _controller([Task(id="a", title="A")])
    calls_before = list(repo.calls)

    assert controller.confirm(controller.begin_add(), text) is None
    assert controller.confirm(controller.begin_update(0), text) is None

    assert _titles(controller) == ["A"]
    assert view.events == [("reload_all", 1)]
    assert repo.calls == calls_before


def test_confirm_stores_text_as_typed() -> None:
    controller, repo, view = _controller()

    task = controller.confirm(controller.begin_add(), "  Buy  milk ")
    assert task is not None
    assert task.title == "  Buy  milk "
    assert view.rows == ["  Buy  milk "]

    renamed = controller.confirm(controller.begin_update(0), " oat\tmilk")
    assert renamed is not None
    assert renamed.title == " oat\tmilk"
    assert repo.records[task.id].title == " oat\tmilk"


def test_rename_replaces_in_place_without_reordering() -> None:
    milk = Task(id="m", title="Buy milk")
    bread = Task(id="b", title="Buy bread")
    controller, repo, view = _controller([milk, bread])

    renamed = controller.confirm(controller.begin_update(0), "Buy oat milk")

    assert renamed is not None
    assert renamed.id == "m"
    assert _titles(controller) == ["Buy oat milk", "Buy bread"]
    assert view.rows == ["Buy oat milk", "Buy bread"]
    assert view.events[-1] == ("reload_row", 0)
    assert repo.calls[-2:] == ["update", "commit"]
    assert repo.records["m"].title == "Buy oat milk"
    # The earlier version is immutable.
    assert milk.title == "Buy milk"


def test_rename_targets_identity_not_position() -> None:
    a, b, c = Task(id="a", title="A"), Task(id="b", title="B"), Task(id="c", title="C")
    controller, _, view = _controller([a, b, c])

    prompt = controller.begin_update(2)
    controller.delete(0)
    controller.confirm(prompt, "C2")

    assert _titles(controller) == ["B", "C2"]
    assert view.events[-1] == ("reload_row", 1)


def test_rename_of_deleted_task_is_ignored() -> None:
    controller, repo, view = _controller([Task(id="a", title="A")])

    prompt = controller.begin_update(0)
    controller.delete(0)
    calls_before = list(repo.calls)

    assert controller.confirm(prompt, "A2") is None
    assert len(controller) == 0
    assert view.rows == []
    assert repo.calls == calls_before


def test_delete_middle_row() -> None:
    a, b, c = Task(id="a", title="A"), Task(id="b", title="B"), Task(id="c", title="C")
    controller, repo, view = _controller([a, b, c])

    removed = controller.delete(1)

    assert removed == b
    assert controller.tasks == (a, c)
    assert view.rows == ["A", "C"]
    assert view.events[-1] == ("delete_row", 1)
    assert repo.calls[-2:] == ["delete", "commit"]
    assert set(repo.records) == {"a", "c"}


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_delete_invalid_index_raises(index: int) -> None:
    controller, repo, view = _controller([Task(id=str(i), title=str(i)) for i in range(3)])

    with pytest.raises(IndexError):
        controller.delete(index)

    assert len(controller) == 3
    assert "delete" not in repo.calls
    assert len(view.rows) == 3


def test_begin_update_invalid_index_raises() -> None:
    controller, _, _ = _controller()

    with pytest.raises(IndexError):
        controller.begin_update(0)


def test_prompts_describe_add_and_update() -> None:
    controller, _, _ = _controller([Task(id="a", title="Buy milk")])

    add = controller.begin_add()
    update = controller.begin_update(0)

    assert (add.title, add.action_label, add.default_text) == ("New Task", "Add", "")
    assert add.intent == CreateIntent()
    assert add.bound_task_id is None

    assert (update.title, update.action_label, update.default_text) == (
        "Update Task",
        "Update",
        "Buy milk",
    )
    assert update.intent == RenameIntent("a")
    assert update.bound_task_id == "a"
    assert add.message == update.message == "What do you want to do?"


def test_commit_failure_keeps_displayed_state(caplog: pytest.LogCaptureFixture) -> None:
    controller, repo, view = _controller([Task(id="a", title="A")])
    repo.fail_commit = True

    with caplog.at_level(logging.ERROR, logger="tasklist.core.controller"):
        controller.confirm(controller.begin_add(), "B")
        controller.confirm(controller.begin_update(0), "A2")

    assert _titles(controller) == ["A2", "B"]
    assert view.rows == ["A2", "B"]
    assert repo.has_pending
    assert "Failed to commit" in caplog.text

    # Next successful commit writes what was left pending.
    repo.fail_commit = False
    controller.delete(1)
    assert [t.title for t in repo.records.values()] == ["A2"]


def test_list_rows_and_store_stay_aligned_over_a_sequence() -> None:
    controller, repo, view = _controller([Task(id="seed", title="Seed")])

    def assert_aligned() -> None:
        assert view.rows == _titles(controller)
        assert repo.count_tasks() == len(controller) == len(view.rows)

    assert_aligned()
    steps = [
        lambda: controller.confirm(controller.begin_add(), "one"),
        lambda: controller.confirm(controller.begin_add(), "two"),
        lambda: controller.confirm(controller.begin_update(1), "one!"),
        lambda: controller.delete(0),
        lambda: controller.confirm(controller.begin_add(), "three"),
        lambda: controller.delete(2),
    ]
    for step in steps:
        step()
        assert_aligned()

    assert _titles(controller) == ["one!", "two"]


def test_confirm_with_foreign_prompt_object() -> None:
    controller, _, _ = _controller()

    task = controller.confirm(Prompt.for_add(), "from elsewhere")

    assert task is not None
    assert controller.index_of(task.id) == 0
