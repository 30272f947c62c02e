"""
Multi-agent workflows.

run_brainstorm_flow chains every agent:
trend -> collect -> translate -> insight -> script -> value -> ingest
"""
from datetime import datetime, timezone

from copilot.agents.base import AgentInput
from copilot.agents.data_ingestion import data_ingestion_agent
from copilot.agents.insight_summarizer import insight_summarizer_agent
from copilot.agents.sales_generator import sales_script_generator_agent
from copilot.agents.scene_translator import scene_translator_agent
from copilot.agents.source_collector import source_collector_agent
from copilot.agents.trend_finder import trend_finder_agent
from copilot.agents.value_proposition import value_proposition_agent

COLLECT_LIMIT = 10
INGEST_TYPES = ("trends", "cases", "scenes")


class WorkflowError(Exception):
    """A required workflow step failed."""


def _step(steps: list, name: str, output) -> bool:
    steps.append({"step": name, "success": output.success, "error": output.error})
    icon = "✅" if output.success else "⚠️"
    print(f"{icon} [WORKFLOW] {name}")
    return output.success


def default_customer(industry: str = None) -> dict:
    return {"industry": industry or "General", "size": "Mid-to-large", "role": "Decision maker"}


def run_brainstorm_flow(query: str, industry: str = None, time_range: str = "7d",
                        auto_ingest: bool = True) -> dict:
    """
    Full brainstorm: trends, matching cases, business scenes, insight report,
    a cold call script and a value proposition. The trend and insight steps
    are required, the rest degrade to empty results.
    """
    print(f"🔄 [WORKFLOW] Brainstorm: {query!r} (industry={industry or 'all'})")
    started = datetime.now(timezone.utc)
    steps = []

    # 1. Trends
    trend_out = trend_finder_agent.execute(AgentInput(
        task=query, params={"time_range": time_range, "industry": industry},
    ))
    if not _step(steps, "trend_discovery", trend_out):
        raise WorkflowError(f"Trend discovery failed: {trend_out.error}")
    trends = trend_out.data["trends"]

    # 2. Cases
    collect_out = source_collector_agent.execute(AgentInput(
        task=query, params={"limit": COLLECT_LIMIT},
    ))
    cases = collect_out.data["cases"] if _step(steps, "case_collection", collect_out) else []

    # 3. Scenes
    scenes = []
    if cases:
        translate_out = scene_translator_agent.execute(AgentInput(
            task=query, params={"cases": cases, "industry": industry},
        ))
        if _step(steps, "scene_translation", translate_out):
            scenes = translate_out.data["scenes"]

    # 4. Insight
    insight_out = insight_summarizer_agent.execute(AgentInput(
        task=query, params={"trends": trends, "scenes": scenes, "industry": industry},
    ))
    if not _step(steps, "insight_summary", insight_out):
        raise WorkflowError(f"Insight summary failed: {insight_out.error}")

    # 5-6. Script and value proposition for the first scene
    scene = scenes[0] if scenes else None
    customer = default_customer(industry)
    case_info = cases[0] if cases else None

    script_out = sales_script_generator_agent.execute(AgentInput(
        task=query, params={"type": "cold_call", "scene": scene, "customer": customer, "case_info": case_info},
    ))
    sales_script = script_out.data if _step(steps, "sales_script", script_out) else None

    value_out = value_proposition_agent.execute(AgentInput(
        task=query, params={"scene": scene, "customer": customer, "case_info": case_info},
    ))
    value_proposition = value_out.data if _step(steps, "value_proposition", value_out) else None

    # 7. Ingest
    ingestion = None
    if auto_ingest:
        ingestion = {"nodes_created": 0, "edges_created": 0, "duplicates_skipped": 0, "errors": []}
        for data_type, items in zip(INGEST_TYPES, (trends, cases, scenes)):
            if not items:
                continue
            out = data_ingestion_agent.execute(AgentInput(
                task=f"ingest {data_type}", params={"data_type": data_type, "data": items},
            ))
            if not out.success:
                ingestion["errors"].append(out.error)
                continue
            for key in ("nodes_created", "edges_created", "duplicates_skipped"):
                ingestion[key] += out.data[key]
            ingestion["errors"].extend(out.data["errors"])
        steps.append({"step": "data_ingestion", "success": not ingestion["errors"], "error": None})

    duration = (datetime.now(timezone.utc) - started).total_seconds()
    print(f"📊 [WORKFLOW] Brainstorm finished in {duration:.1f}s")

    return {
        "success": True,
        "data": {
            "trends": trends,
            "trend_report": trend_out.data["report"],
            "cases": cases,
            "scenes": scenes,
            "insight": insight_out.data,
            "sales_script": sales_script,
            "value_proposition": value_proposition,
            "ingestion": ingestion,
        },
        "metadata": {
            "query": query,
            "industry": industry,
            "steps": steps,
            "duration": round(duration, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


def run_case_search_flow(keyword: str, industry: str = None, limit: int = 10) -> dict:
    print(f"🔄 [WORKFLOW] Case search: {keyword!r}")
    steps = []

    collect_out = source_collector_agent.execute(AgentInput(
        task=keyword, params={"keywords": [keyword], "limit": limit},
    ))
    if not _step(steps, "case_collection", collect_out):
        return {"success": False, "error": collect_out.error, "metadata": {"steps": steps}}
    cases = collect_out.data["cases"]

    scenes = []
    if cases:
        translate_out = scene_translator_agent.execute(AgentInput(
            task=keyword, params={"cases": cases, "industry": industry},
        ))
        if _step(steps, "scene_translation", translate_out):
            scenes = translate_out.data["scenes"]

    return {
        "success": True,
        "data": {"cases": cases, "scenes": scenes},
        "metadata": {"keyword": keyword, "industry": industry, "steps": steps},
    }


def run_sales_script_flow(customer: dict, scene: dict = None, case_info=None,
                          script_type: str = "cold_call") -> dict:
    print(f"🔄 [WORKFLOW] Sales script: {script_type} for {customer.get('industry', 'General')}")
    steps = []

    script_out = sales_script_generator_agent.execute(AgentInput(
        task="generate sales script",
        params={"type": script_type, "scene": scene, "customer": customer, "case_info": case_info},
    ))
    if not _step(steps, "sales_script", script_out):
        return {"success": False, "error": script_out.error, "metadata": {"steps": steps}}

    value_out = value_proposition_agent.execute(AgentInput(
        task="generate value proposition",
        params={"scene": scene, "customer": customer, "case_info": case_info},
    ))
    _step(steps, "value_proposition", value_out)

    return {
        "success": True,
        "data": {
            "sales_script": script_out.data,
            "value_proposition": value_out.data if value_out.success else None,
        },
        "metadata": {"script_type": script_type, "steps": steps},
    }
