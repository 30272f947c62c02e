import time

from copilot import config, fetcher, hn_fetcher, ratelimit, reddit_fetcher
from tests.conftest import FakeResponse


def fake_get(routes, calls=None):
    """requests.get stand-in answering by URL suffix."""
    def get(url, headers=None, params=None, timeout=None):
        if calls is not None:
            calls.append((url, headers, params))
        for suffix, response in routes.items():
            if url.endswith(suffix):
                return response
        return FakeResponse(status_code=404)
    return get


# ============ Rate limiting ============

def test_rate_limited_get_sets_user_agent(monkeypatch):
    calls = []
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({"/x": FakeResponse({})}, calls))

    ratelimit.rate_limited_get("https://api.example.com/x", headers={"Accept": "text/plain"})

    headers = calls[0][1]
    assert headers["User-Agent"] == config.USER_AGENT
    assert headers["Accept"] == "text/plain"


def test_rate_limited_get_waits_for_reset(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", sleeps.append)
    reset = str(int(time.time()) + 60)
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({
        "/x": FakeResponse({}, headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": reset}),
    }))

    ratelimit.rate_limited_get("https://api.example.com/x", delay=0.5)

    assert sleeps[0] == 0.5
    assert 50 < sleeps[1] <= 60


def test_rate_limited_get_minimum_wait(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", sleeps.append)
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({
        "/x": FakeResponse({}, headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "0"}),
    }))

    ratelimit.rate_limited_get("https://api.example.com/x")

    assert sleeps[1] == config.RATE_LIMIT_MIN_WAIT


# ============ GitHub ============

REPO = {
    "name": "agent-kit",
    "full_name": "example/agent-kit",
    "html_url": "https://github.com/example/agent-kit",
    "description": "Agents",
    "stargazers_count": 1200,
    "forks_count": 30,
    "language": "Python",
    "topics": ["ai-agent"],
    "owner": {"type": "Organization"},
    "license": {"name": "MIT"},
}


def test_to_raw_project():
    project = fetcher.to_raw_project(REPO)
    assert project["source"] == "GitHub"
    assert project["stars"] == 1200
    assert project["owner_type"] == "Organization"
    assert project["license"] == "MIT"


def test_collect_github_dedupes_across_queries(monkeypatch):
    monkeypatch.setattr(config, "GITHUB_SEARCH_QUERIES", ["AI Agent", "LLM Agent"])
    monkeypatch.setattr(config, "GITHUB_MAX_PAGES", 1)
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({
        "/search/repositories": FakeResponse({"items": [REPO]}),
        "/readme": FakeResponse(text="# Agent Kit"),
    }))

    projects = fetcher.collect_github()

    assert len(projects) == 1
    assert projects[0]["readme_content"] == "# Agent Kit"


def test_search_repositories_non_200(monkeypatch):
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({}))
    assert fetcher.search_repositories("AI Agent") == []


# ============ Hacker News ============

def test_clean_html():
    assert hn_fetcher.clean_html("<p>Hello <i>agents</i></p><p>Second</p>") == "Hello\nagents\nSecond"
    assert hn_fetcher.clean_html(None) == ""


def test_hn_is_relevant():
    assert hn_fetcher.is_relevant("Show HN: An LLM for spreadsheets")
    assert not hn_fetcher.is_relevant("Gardening tips")


def test_collect_hackernews(monkeypatch):
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({
        "/topstories.json": FakeResponse([1, 2, 3, 4]),
        "/item/1.json": FakeResponse({"title": "New LLM agent", "url": "https://a.com", "score": 120, "time": 0}),
        "/item/2.json": FakeResponse({"title": "Cooking", "url": "https://b.com"}),
        "/item/3.json": FakeResponse({"title": "Ask HN: AI?", "text": "<p>Question</p>"}),
        "/item/4.json": FakeResponse({"title": "LLM again", "url": "https://a.com"}),
    }))

    stories = hn_fetcher.collect_hackernews()

    assert len(stories) == 1
    assert stories[0]["source"] == "HackerNews"
    assert stories[0]["stars"] == 120
    assert stories[0]["created_at"].startswith("1970-01-01")


# ============ Reddit ============

def test_to_raw_post():
    post = {"title": "x" * 150, "permalink": "/r/LocalLLaMA/comments/1/x/", "score": 42, "created_utc": 0}
    raw = reddit_fetcher.to_raw_post(post, "LocalLLaMA")

    assert raw["source_url"] == "https://reddit.com/r/LocalLLaMA/comments/1/x/"
    assert len(raw["project_name"]) == 100
    assert raw["topics"] == ["Reddit", "LocalLLaMA"]


def test_collect_reddit_public_json(monkeypatch):
    monkeypatch.setattr(config, "REDDIT_CLIENT_ID", None)
    monkeypatch.setattr(config, "REDDIT_SUBREDDITS", ["LocalLLaMA", "artificial"])
    listing = {"data": {"children": [
        {"data": {"title": "My AI Agent stack", "url": "https://r/1", "permalink": "/r/a/1", "created_utc": 0}},
        {"data": {"title": "AI Agent megathread", "url": "https://r/2", "permalink": "/r/a/2", "stickied": True}},
        {"data": {"title": "Cats", "url": "https://r/3", "permalink": "/r/a/3"}},
    ]}}
    monkeypatch.setattr(ratelimit.requests, "get", fake_get({
        "/r/LocalLLaMA/hot.json": FakeResponse(listing),
        "/r/artificial/hot.json": FakeResponse(listing),
    }))

    posts = reddit_fetcher.collect_reddit()

    assert [p["project_name"] for p in posts] == ["My AI Agent stack"]


def test_collect_reddit_keeps_going_after_errors(monkeypatch):
    monkeypatch.setattr(config, "REDDIT_CLIENT_ID", None)
    monkeypatch.setattr(config, "REDDIT_SUBREDDITS", ["broken"])

    def boom(url, headers=None, params=None, timeout=None):
        raise ConnectionError("offline")

    monkeypatch.setattr(ratelimit.requests, "get", boom)
    assert reddit_fetcher.collect_reddit() == []
