import pytest

from copilot import db, workflows
from copilot.agents.base import AgentOutput
from tests.conftest import make_case


def test_brainstorm_flow_survives_llm_outage():
    result = workflows.run_brainstorm_flow("What's new in AI agents?")

    assert result["success"]
    data = result["data"]
    assert len(data["trends"]) == 6
    assert data["cases"] == []
    assert data["scenes"] == []
    assert data["sales_script"]["script_type"] == "cold_call"
    assert data["value_proposition"]["needs"]["industry"] == "General"
    assert data["ingestion"]["nodes_created"] == 6
    assert [s["step"] for s in result["metadata"]["steps"]] == [
        "trend_discovery", "case_collection", "insight_summary",
        "sales_script", "value_proposition", "data_ingestion",
    ]


def test_brainstorm_flow_second_run_skips_stored_trends():
    workflows.run_brainstorm_flow("trends")
    result = workflows.run_brainstorm_flow("trends")

    ingestion = result["data"]["ingestion"]
    assert ingestion["nodes_created"] == 0
    assert ingestion["duplicates_skipped"] == 6


def test_brainstorm_flow_with_cases():
    db.insert_cases([make_case(name="agent-kit")])

    result = workflows.run_brainstorm_flow("agent ideas")

    data = result["data"]
    assert [c["title"] for c in data["cases"]] == ["agent-kit"]
    assert len(data["scenes"]) == 8
    assert data["sales_script"]["metadata"]["scene"] == data["scenes"][0]["name"]
    assert data["ingestion"]["nodes_created"] == 9
    assert data["ingestion"]["duplicates_skipped"] == 1


def test_brainstorm_flow_without_ingest():
    result = workflows.run_brainstorm_flow("trends", auto_ingest=False)
    assert result["data"]["ingestion"] is None
    assert db.get_trends() == []


def test_brainstorm_flow_fails_without_trends(monkeypatch):
    monkeypatch.setattr(
        workflows.trend_finder_agent, "execute",
        lambda agent_input: AgentOutput(success=False, data=None, error="boom"),
    )
    with pytest.raises(workflows.WorkflowError, match="boom"):
        workflows.run_brainstorm_flow("trends")


def test_case_search_flow():
    db.insert_cases([make_case(name="agent-kit")])

    result = workflows.run_case_search_flow("agent", industry="Retail")

    assert result["success"]
    assert len(result["data"]["cases"]) == 1
    assert [s["industry"] for s in result["data"]["scenes"]] == ["Retail"]


def test_sales_script_flow():
    result = workflows.run_sales_script_flow({"industry": "Retail"}, script_type="demo")

    assert result["success"]
    assert result["data"]["sales_script"]["script_type"] == "demo"
    assert result["data"]["value_proposition"]["needs"]["industry"] == "Retail"


def test_sales_script_flow_reports_failure():
    result = workflows.run_sales_script_flow({})
    assert not result["success"]
    assert result["error"]
