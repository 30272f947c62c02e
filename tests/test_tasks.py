import time

from copilot import tasks


def test_create_and_update_task():
    task_id = tasks.create_task()
    task = tasks.get_task(task_id)

    assert task_id.startswith("task_")
    assert task["status"] == tasks.PENDING
    assert task["message"] == "Task created"
    assert "_created" not in task

    assert tasks.update_task(task_id, progress=50, message="Halfway")
    assert tasks.get_task(task_id)["progress"] == 50
    assert not tasks.update_task("task_missing", progress=1)
    assert tasks.get_task("task_missing") is None


def test_task_ids_are_unique():
    assert len({tasks.create_task() for _ in range(50)}) == 50


def test_cleanup_tasks():
    task_id = tasks.create_task()

    tasks.cleanup_tasks(max_age=3600)
    assert tasks.get_task(task_id) is not None

    tasks.cleanup_tasks(max_age=-1)
    assert tasks.get_task(task_id) is None


def test_run_in_background_completes():
    task_id = tasks.create_task()
    tasks.run_in_background(task_id, lambda a, b=0: a + b, 2, b=3).join(timeout=5)

    task = tasks.get_task(task_id)
    assert task["status"] == tasks.COMPLETED
    assert task["progress"] == 100
    assert task["result"] == 5


def test_run_in_background_records_failure():
    def broken():
        raise ValueError("bad input")

    task_id = tasks.create_task()
    tasks.run_in_background(task_id, broken).join(timeout=5)

    task = tasks.get_task(task_id)
    assert task["status"] == tasks.FAILED
    assert task["error"] == "bad input"
    assert task["result"] is None


def test_create_task_prunes_expired_tasks(monkeypatch):
    old_id = tasks.create_task()
    tasks._tasks[old_id]["_created"] -= 2 * 3600

    monkeypatch.setattr(tasks, "_last_cleanup", 0)
    new_id = tasks.create_task()

    assert tasks.get_task(old_id) is None
    assert tasks.get_task(new_id) is not None


def test_create_task_cleanup_is_throttled(monkeypatch):
    old_id = tasks.create_task()
    tasks._tasks[old_id]["_created"] -= 2 * 3600

    monkeypatch.setattr(tasks, "_last_cleanup", time.time())
    tasks.create_task()

    assert tasks.get_task(old_id) is not None
