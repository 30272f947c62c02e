import sys

import orchestrator
from copilot import collector, db, scheduler
from tests.conftest import make_raw


def test_collect_all_runs_requested_sources_in_order(monkeypatch):
    order = []

    def github():
        order.append("github")
        return [make_raw(name="a"), make_raw(name="a")]

    def reddit():
        order.append("reddit")
        return [make_raw(name="r", source="Reddit")]

    monkeypatch.setitem(collector.COLLECTORS, "github", github)
    monkeypatch.setitem(collector.COLLECTORS, "reddit", reddit)

    items = collector.collect_all(["reddit", "github", "nope"])

    assert order == ["github", "reddit"]
    assert [i["project_name"] for i in items] == ["a", "r"]
    assert collector.load_raw_file(collector.latest_raw_file()) == items

    logs = db.get_collection_logs()
    assert {log["source"] for log in logs} == {"GitHub", "Reddit"}
    assert all(log["status"] == "completed" for log in logs)


def test_failed_collector_is_logged(monkeypatch):
    def broken():
        raise RuntimeError("api down")

    monkeypatch.setitem(collector.COLLECTORS, "hackernews", broken)

    assert collector.collect_all(["hackernews"]) == []
    log = db.get_collection_logs()[0]
    assert log["status"] == "failed"
    assert log["error_message"] == "api down"


def test_dedupe_raw_items_is_per_source():
    items = [
        make_raw(url="https://x", source="GitHub"),
        make_raw(url="https://x", source="Reddit"),
        make_raw(url="https://x", source="GitHub"),
    ]
    assert len(collector.dedupe_raw_items(items)) == 2


def test_scheduler_jobs():
    sched = scheduler.create_scheduler()
    ids = {job.id for job in sched.get_jobs()}
    assert ids == {"collect_github", "collect_hackernews", "collect_reddit", "cleanup_tasks"}


def test_source_job_imports(monkeypatch):
    monkeypatch.setitem(collector.COLLECTORS, "reddit", lambda: [make_raw(name="post", stars=20000)])

    result = scheduler.run_source_job("reddit")

    assert result["imported"] == 1
    assert db.get_case_count() == 1


def test_source_job_reports_errors(monkeypatch):
    def broken(sources):
        raise RuntimeError("disk full")

    monkeypatch.setattr(collector, "collect_all", broken)
    assert scheduler.run_source_job("github")["error"] == "disk full"


def test_cli_default_pipeline(monkeypatch):
    monkeypatch.setitem(collector.COLLECTORS, "github", lambda: [make_raw(name="cli", stars=20000)])
    monkeypatch.setattr(sys, "argv", ["orchestrator.py"])

    orchestrator.main()

    assert db.get_cases()[0]["project_name"] == "cli"


def test_cli_no_import(monkeypatch):
    monkeypatch.setitem(collector.COLLECTORS, "github", lambda: [make_raw(name="cli")])
    monkeypatch.setattr(sys, "argv", ["orchestrator.py", "--no-import"])

    orchestrator.main()

    assert db.get_case_count() == 0
    assert collector.latest_raw_file() is not None
