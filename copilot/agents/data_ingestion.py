"""
Data Ingestion Agent
Writes trends, cases and scenes produced by a brainstorm back into the
store, skipping anything already there.
"""
import json
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError

from copilot import db
from copilot import llm
from copilot.agents.base import AgentCapability, AgentInput, AgentOutput, BaseAgent, StrList
from copilot.processor import DEFAULT_INDUSTRY, DEFAULT_USE_CASE

DATA_TYPES = ("trends", "cases", "scenes", "general")


class CaseStructure(BaseModel):
    industry: str = DEFAULT_INDUSTRY
    useCase: str = DEFAULT_USE_CASE
    painPoints: StrList = []
    benefits: StrList = []
    technologies: StrList = []
    companySize: str = "Mid-size"
    complexity: str = "medium"


class DataIngestionAgent(BaseAgent):
    name = "DataIngestionAgent"
    description = "Data ingestion agent: stores trends, cases and scenes without duplicates"
    capabilities = [
        AgentCapability("ingest_trends", "store discovered trends"),
        AgentCapability("ingest_cases", "store collected cases"),
        AgentCapability("ingest_scenes", "store business scenes"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        data_type = params.get("data_type", "general")
        items = params.get("data") or []

        stats = {"nodes_created": 0, "edges_created": 0, "duplicates_skipped": 0, "errors": []}

        try:
            if data_type == "trends":
                self.ingest_trends(items, stats)
            elif data_type == "cases":
                self.ingest_cases(items, stats)
            elif data_type == "scenes":
                self.ingest_scenes(items, stats)
            else:
                print(f"   [AGENT] {len(items)} general items received, nothing stored")
        except Exception as e:
            return self.error_output(str(e) or "Ingestion failed")

        message = f"Ingested {stats['nodes_created']} items, skipped {stats['duplicates_skipped']} duplicates"
        print(f"📥 [AGENT] {data_type}: {message}")
        return self.success_output({
            **stats,
            "message": message,
            "metadata": {
                "data_type": data_type,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def ingest_trends(self, trends: list[dict], stats: dict):
        for trend in trends:
            name = trend.get("name") or trend.get("direction") or trend.get("title")
            if not name:
                stats["errors"].append("Trend without a name")
                continue
            if db.trend_exists(name):
                stats["duplicates_skipped"] += 1
                continue

            technologies = trend.get("technologies") or trend.get("tags") or []
            db.save_trend({
                "name": name,
                "description": trend.get("description"),
                "source": trend.get("source") or "brainstorm",
                "url": trend.get("url"),
                "industry": trend.get("industry"),
                "opportunity_level": trend.get("opportunity_level") or trend.get("opportunity"),
                "metadata": {
                    "technologies": technologies,
                    "market_trend": trend.get("market_trend"),
                },
            })
            stats["nodes_created"] += 1
            stats["edges_created"] += (1 if trend.get("industry") else 0) + len(technologies)

    def ingest_cases(self, cases: list[dict], stats: dict):
        urls = [c.get("url") or c.get("source_url") for c in cases]
        existing = db.get_existing_source_urls([u for u in urls if u])

        for case, url in zip(cases, urls):
            if not url:
                stats["errors"].append(f"Case without source_url: {case.get('title')}")
                continue
            if url in existing:
                stats["duplicates_skipped"] += 1
                continue

            structure = self.structure_case(case)
            metadata = case.get("metadata") or {}
            db.insert_cases([{
                "project_name": case.get("title") or case.get("project_name") or url,
                "description": case.get("description"),
                "industry": structure["industry"],
                "use_case": structure["useCase"],
                "technology": structure["technologies"] or case.get("tags") or [],
                "quality_score": metadata.get("quality_score") or 0.5,
                "source": case.get("source") or "brainstorm",
                "source_url": url,
                "raw_data": {"structure": structure, "metadata": metadata},
                "pain_point": "; ".join(structure["painPoints"]) or None,
                "outcome": "; ".join(structure["benefits"]) or None,
                "target_company": structure["companySize"],
                "implementation_complexity": structure["complexity"],
            }])
            existing.add(url)

            stats["nodes_created"] += 1
            stats["edges_created"] += 2 + len(structure["painPoints"])

    def structure_case(self, case: dict) -> dict:
        prompt = f"""You are a business analyst. Structure this AI agent case for a sales team.

Case:
{json.dumps(case, indent=2, ensure_ascii=False, default=str)}

Answer in JSON:
{{
  "industry": "industry",
  "useCase": "use case",
  "painPoints": ["pain point"],
  "benefits": ["benefit"],
  "technologies": ["technology"],
  "companySize": "Small/Mid-size/Enterprise",
  "complexity": "low/medium/high"
}}

JSON:"""

        parsed = None
        try:
            parsed = llm.extract_json_object(self.call_llm(prompt))
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Case structuring failed: {e}")

        values = {k: v for k, v in (parsed or {}).items() if k in CaseStructure.model_fields and v}
        try:
            return CaseStructure.model_validate(values).model_dump()
        except ValidationError as e:
            print(f"⚠️ [AGENT] Case structure rejected: {e.error_count()} errors")
            return CaseStructure().model_dump()

    def ingest_scenes(self, scenes: list[dict], stats: dict):
        for scene in scenes:
            name = scene.get("name")
            if not name:
                stats["errors"].append("Scene without a name")
                continue
            if db.scenario_exists(name):
                stats["duplicates_skipped"] += 1
                continue

            db.save_scenario({
                "name": name,
                "industry": scene.get("industry"),
                "category": scene.get("use_case"),
                "description": scene.get("description"),
                "complexity": scene.get("complexity"),
                "technology_stack": scene.get("technology_stack"),
            })
            stats["nodes_created"] += 1
            stats["edges_created"] += 1


data_ingestion_agent = DataIngestionAgent()
