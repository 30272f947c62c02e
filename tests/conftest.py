import time

import pytest

from copilot import config, db, llm

REAL_CALL_LLM = llm.call_llm


class FakeLLM:
    """Stands in for llm.call_llm. Replies are consumed in order; exceptions are raised."""

    def __init__(self):
        self.prompts = []
        self.replies = []
        self.default = llm.LLMError("LLM disabled in tests")

    def __call__(self, prompt, model=None):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeResponse:
    def __init__(self, json_data=None, status_code=200, headers=None, text=""):
        self._json = json_data
        self.status_code = status_code
        self.headers = headers or {}
        self.text = text

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda seconds: None)


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_PATH", tmp_path / "copilot.db")
    monkeypatch.setattr(config, "RAW_DATA_DIR", tmp_path / "raw")
    db.init_db()
    return tmp_path / "copilot.db"


@pytest.fixture(autouse=True)
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(llm, "call_llm", fake)
    return fake


def make_raw(name="agent-kit", url=None, stars=500, description="An autonomous AI agent framework",
             topics=("ai-agent", "llm"), source="GitHub", **extra):
    item = {
        "source": source,
        "source_url": url or f"https://github.com/example/{name}",
        "project_name": name,
        "description": description,
        "stars": stars,
        "language": "Python",
        "topics": list(topics),
    }
    item.update(extra)
    return item


def make_case(name="agent-kit", url=None, **overrides):
    case = {
        "project_name": name,
        "description": "An autonomous AI agent framework",
        "industry": "General",
        "use_case": "AI Assistant",
        "technology": ["agent", "LLM"],
        "quality_score": 0.6,
        "source": "GitHub",
        "source_url": url or f"https://github.com/example/{name}",
        "raw_data": {"stars": 500},
    }
    case.update(overrides)
    return case
