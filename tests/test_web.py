import json

import pytest

import web
from copilot import db, tasks
from tests.conftest import make_case


@pytest.fixture
def client():
    web.app.config["TESTING"] = True
    with web.app.test_client() as client:
        yield client


@pytest.fixture
def sync_tasks(monkeypatch):
    """Run background tasks inline."""
    def run_now(task_id, func, *args, **kwargs):
        tasks._run(task_id, func, args, kwargs)

    monkeypatch.setattr(tasks, "run_in_background", run_now)


def test_home_and_health(client):
    db.insert_cases([make_case(name="agent-kit")])

    page = client.get("/")
    assert page.status_code == 200
    assert b"agent-kit" in page.data

    health = client.get("/health").get_json()
    assert health["status"] == "healthy"

    status = client.get("/status").get_json()
    assert status["case_count"] == 1


def test_cases_empty_returns_samples(client):
    body = client.get("/api/cases").get_json()
    assert body["total"] == 8
    assert "sample" in body["message"].lower()


def test_cases_list_and_search(client):
    db.insert_cases([
        make_case(name="fin-bot", industry="Finance", description="Banking assistant"),
        make_case(name="shop-bot", industry="Retail", description="Store chatbot"),
    ])

    body = client.get("/api/cases?industry=Finance").get_json()
    assert [c["project_name"] for c in body["data"]] == ["fin-bot"]
    assert "message" not in body

    body = client.get("/api/cases?keyword=store&limit=abc").get_json()
    assert [c["project_name"] for c in body["data"]] == ["shop-bot"]


def test_cases_error_returns_500(client, monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(db, "get_cases", broken)
    response = client.get("/api/cases")
    assert response.status_code == 500
    assert response.get_json()["error"] == "disk full"


def test_chat_requires_message_or_case_info(client):
    response = client.post("/api/chat", json={})
    assert response.status_code == 400


def test_chat_canned_reply_and_history(client):
    body = client.post("/api/chat", json={"message": "Hello!", "sessionId": "s1"}).get_json()

    assert body["mode"] == "chat"
    assert body["data"].startswith("Hello! I'm Sales Copilot")
    history = db.get_conversation_history("s1")
    assert [m["role"] for m in history] == ["user", "assistant"]


def test_chat_canned_reply_ignores_hi_inside_words(client):
    body = client.post("/api/chat", json={"message": "this thing"}).get_json()
    assert body["data"].startswith("Thanks for your question!")


def test_chat_auto_detects_brainstorm(client, fake_llm):
    fake_llm.replies = ["Three new directions"]

    body = client.post("/api/chat", json={"message": "Any new opportunities for agents?"}).get_json()

    assert body["mode"] == "brainstorm"
    assert body["metadata"]["autoIntent"] is True
    assert body["data"]["answer"] == "Three new directions"
    assert body["data"]["type"] == "brainstorm"


def test_chat_explicit_mode_is_kept(client):
    body = client.post("/api/chat", json={"message": "brainstorm please", "mode": "chat"}).get_json()
    assert body["mode"] == "chat"
    assert body["metadata"]["autoIntent"] is False


def test_chat_rejects_non_string_message(client):
    response = client.post("/api/chat", json={"message": 123})
    assert response.status_code == 400
    assert response.get_json()["error"] == "message must be a string"


def test_chat_sales_script_validation(client):
    response = client.post("/api/chat", json={"mode": "sales_script", "caseInfo": {"project_name": "x"}})
    assert response.status_code == 400


def test_chat_sales_script(client):
    body = client.post("/api/chat", json={
        "mode": "sales_script",
        "caseInfo": {"project_name": "ShopBot"},
        "customerIndustry": "Retail",
        "scriptType": "follow_up",
    }).get_json()

    assert body["success"]
    assert body["data"]["sales_script"]["script_type"] == "follow_up"


def test_chat_extract_info(client, fake_llm):
    fake_llm.replies = ['{"project_name": "FinBot"}']
    body = client.post("/api/chat", json={"message": "FinBot for banks", "mode": "extract_info"}).get_json()
    assert body["data"] == {"project_name": "FinBot"}

    fake_llm.replies = ["nothing"]
    response = client.post("/api/chat", json={"message": "???", "mode": "extract_info"})
    assert response.status_code == 500


def test_chat_stores_script_and_extracted_info(client, fake_llm):
    client.post("/api/chat", json={
        "message": "script for ShopBot", "mode": "sales_script", "sessionId": "s2",
        "caseInfo": {"project_name": "ShopBot"}, "customerIndustry": "Retail",
    })
    fake_llm.replies = ['{"project_name": "FinBot"}']
    client.post("/api/chat", json={"message": "FinBot for banks", "mode": "extract_info", "sessionId": "s2"})

    replies = [m["content"] for m in db.get_conversation_history("s2") if m["role"] == "assistant"]
    assert replies[0] == "Sales script generation failed"
    assert json.loads(replies[1]) == {"project_name": "FinBot"}


def test_chat_agent_mode(client):
    body = client.post("/api/chat", json={"message": "estimate roi for finance", "mode": "agent"}).get_json()

    assert body["data"]["intent"] == "roi_estimate"
    assert body["data"]["tasks"][0]["agent"] == "ROIEstimator"


def test_chat_task_lifecycle(client, sync_tasks):
    assert client.get("/api/chat/task").status_code == 400
    assert client.get("/api/chat/task?taskId=task_nope").status_code == 404
    assert client.post("/api/chat/task", json={}).status_code == 400

    body = client.post("/api/chat/task", json={"query": "new trends", "industry": "Retail"}).get_json()
    task_id = body["data"]["taskId"]

    task = client.get(f"/api/chat/task?taskId={task_id}").get_json()["data"]
    assert task["status"] == "completed"
    assert task["progress"] == 100
    assert "trends" in task["result"]


def test_chat_task_failure_exposes_error(client, sync_tasks, monkeypatch):
    def broken(query, industry=None):
        raise RuntimeError("workflow down")

    monkeypatch.setattr(web.workflows, "run_brainstorm_flow", broken)
    task_id = client.post("/api/chat/task", json={"query": "x"}).get_json()["data"]["taskId"]

    task = client.get(f"/api/chat/task?taskId={task_id}").get_json()["data"]
    assert task["status"] == "failed"
    assert task["error"] == "workflow down"
    assert "result" not in task


def test_roi_validation_and_default(client):
    assert client.post("/api/roi", json={"industry": "Finance"}).status_code == 400

    body = client.post("/api/roi", json={
        "industry": "Finance", "useCase": "Process Automation", "companySize": "medium",
    }).get_json()

    assert body["isDefault"] is True
    assert body["data"]["annual_savings"] == 540000


def test_roi_llm_answer(client, fake_llm):
    fake_llm.replies = ['{"labor_savings": 2, "annual_savings": 200000, "payback_period": 9}']
    body = client.post("/api/roi", json={
        "industry": "Finance", "useCase": "Search", "companySize": "small",
    }).get_json()

    assert body["isDefault"] is False
    assert body["data"]["payback_period"] == 9


def test_cron_requires_secret(client):
    assert client.get("/api/cron/data?secret=wrong").status_code == 401


def test_cron_starts_collection(client, sync_tasks, monkeypatch):
    calls = []

    def fake_collect(sources):
        calls.append(sources)
        return {"imported": 3, "skipped": 0, "total": 3}

    monkeypatch.setattr(web, "collect_and_import", fake_collect)
    body = client.get(f"/api/cron/data?secret={web.config.CRON_SECRET}&sources=reddit").get_json()

    assert body["success"]
    assert calls == [["reddit"]]
    assert tasks.get_task(body["taskId"])["result"]["imported"] == 3


def test_cron_tasks_expire_in_web_mode(client, sync_tasks, monkeypatch):
    monkeypatch.setattr(web, "collect_and_import", lambda sources: {"imported": 0})
    url = f"/api/cron/data?secret={web.config.CRON_SECRET}"

    old_ids = [client.get(url).get_json()["taskId"] for _ in range(3)]
    for task_id in old_ids:
        tasks._tasks[task_id]["_created"] -= 2 * 3600

    monkeypatch.setattr(tasks, "_last_cleanup", 0)
    new_id = client.get(url).get_json()["taskId"]

    assert all(tasks.get_task(task_id) is None for task_id in old_ids)
    assert tasks.get_task(new_id)["status"] == "completed"
