import sqlite3

import pytest

from copilot import db
from tests.conftest import make_case


def test_init_db_seeds_lookup_tables():
    industries = {i["name"] for i in db.get_industries()}
    assert {"Finance", "Healthcare", "Retail"} <= industries
    assert db.scenario_exists("Customer Service")

    # idempotent
    db.init_db()
    assert len(db.get_industries()) == len(industries)


def test_insert_and_read_case():
    db.insert_cases([make_case()])

    cases = db.get_cases()
    assert len(cases) == 1
    case = cases[0]
    assert case["technology"] == ["agent", "LLM"]
    assert case["raw_data"] == {"stars": 500}
    assert case["is_verified"] is False
    assert db.get_case_by_id(case["id"])["project_name"] == "agent-kit"


def test_duplicate_source_url_rolls_back_whole_batch():
    db.insert_cases([make_case(name="first")])

    with pytest.raises(sqlite3.IntegrityError):
        db.insert_cases([make_case(name="fresh"), make_case(name="first")])

    assert db.get_case_count() == 1


def test_upsert_case_overwrites_by_source_url():
    first_id = db.upsert_case(make_case(quality_score=0.2))
    second_id = db.upsert_case(make_case(quality_score=0.9))

    assert first_id == second_id
    assert db.get_case_count() == 1
    assert db.get_cases()[0]["quality_score"] == 0.9


def test_get_cases_filters_and_orders():
    db.insert_cases([
        make_case(name="a", industry="Finance", quality_score=0.4),
        make_case(name="b", industry="Finance", quality_score=0.9),
        make_case(name="c", industry="Retail", quality_score=0.7, source="Reddit"),
    ])

    assert [c["project_name"] for c in db.get_cases(industry="Finance")] == ["b", "a"]
    assert [c["project_name"] for c in db.get_cases(source="Reddit")] == ["c"]
    assert [c["project_name"] for c in db.get_cases(limit=1, offset=1)] == ["c"]


def test_search_cases_matches_name_or_description():
    db.insert_cases([
        make_case(name="shop-helper", description="Retail chatbot"),
        make_case(name="other", description="Invoice automation"),
    ])
    assert [c["project_name"] for c in db.search_cases("invoice")] == ["other"]
    assert [c["project_name"] for c in db.search_cases("SHOP")] == ["shop-helper"]


def test_existing_source_urls():
    db.insert_cases([make_case(name="a")])
    urls = ["https://github.com/example/a", "https://github.com/example/b"]
    assert db.get_existing_source_urls(urls) == {"https://github.com/example/a"}
    assert db.get_existing_source_urls([]) == set()


def test_update_case_fields_ignores_unknown_columns():
    db.insert_cases([make_case()])
    case = db.get_cases()[0]

    assert db.update_case_fields(case["id"], {"pain_point": "Slow support", "source_url": "x"})
    assert not db.update_case_fields(case["id"], {"source_url": "x"})

    updated = db.get_case_by_id(case["id"])
    assert updated["pain_point"] == "Slow support"
    assert updated["source_url"] == case["source_url"]
    assert db.get_cases_missing_enrichment() == []


def test_scenarios_and_trends():
    db.save_scenario({"name": "Finance - Risk review", "industry": "Finance", "complexity": "extreme"})
    scenario = db.get_scenarios(industry="Finance")[0]
    assert scenario["complexity"] in ("low", "medium", "high")

    assert not db.trend_exists("Browser Agent")
    db.save_trend({"name": "Browser Agent", "metadata": {"technologies": ["playwright"]}})
    assert db.trend_exists("Browser Agent")
    assert db.get_trends()[0]["metadata"] == {"technologies": ["playwright"]}


def test_collection_log_lifecycle():
    log_id = db.start_collection_log("GitHub")
    db.finish_collection_log(log_id, "completed", 12)

    log = db.get_collection_logs()[0]
    assert log["status"] == "completed"
    assert log["items_collected"] == 12
    assert log["completed_at"]


def test_conversation_history_is_oldest_first():
    for i in range(3):
        db.add_conversation_message("s1", "user", f"message {i}")
    db.add_conversation_message("s2", "user", "elsewhere")

    history = db.get_conversation_history("s1", limit=2)
    assert [m["content"] for m in history] == ["message 1", "message 2"]
