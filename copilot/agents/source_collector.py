"""
Source Collector Agent
Pulls the latest matching cases per source out of the case library.
"""
from datetime import datetime, timezone

from copilot import db
from copilot.agents.base import AgentCapability, AgentInput, AgentOutput, BaseAgent

DEFAULT_SOURCES = ["GitHub", "HackerNews", "Reddit"]
DEFAULT_KEYWORDS = ["ai agent", "ai assistant", "automation", "copilot"]
PER_SOURCE_POOL = 100


def _matches(case: dict, keywords: list[str]) -> bool:
    text = " ".join([
        case.get("project_name") or "",
        case.get("description") or "",
        " ".join(case.get("technology") or []),
    ]).lower()
    return any(k.lower() in text for k in keywords)


def _to_collected(case: dict) -> dict:
    return {
        "id": case["id"],
        "title": case["project_name"],
        "description": case.get("description") or case.get("outcome") or "",
        "source": case["source"],
        "url": case.get("source_url"),
        "tags": case.get("technology") or [],
        "metadata": {
            "quality_score": case.get("quality_score"),
            "industry": case.get("industry"),
            "use_case": case.get("use_case"),
        },
        "collected_at": case.get("created_at") or "",
    }


class SourceCollectorAgent(BaseAgent):
    name = "SourceCollectorAgent"
    description = "Source collector agent: latest AI agent cases from each source"
    capabilities = [
        AgentCapability("collect_from_github", "collect popular github projects"),
        AgentCapability("collect_from_hackernews", "collect hacker news discussions"),
        AgentCapability("collect_from_reddit", "collect reddit community posts"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        sources = params.get("sources") or DEFAULT_SOURCES
        keywords = params.get("keywords") or DEFAULT_KEYWORDS
        limit = params.get("limit", 20)

        try:
            collected = []
            for source in sources:
                collected.extend(self.collect_from_source(source, keywords))
        except Exception as e:
            return self.error_output(str(e) or "Source collection failed")

        cases = self.filter_and_deduplicate(collected)
        cases.sort(key=lambda c: c["collected_at"], reverse=True)

        return self.success_output({
            "cases": cases[:limit],
            "metadata": {
                "sources": sources,
                "total_collected": len(cases),
                "returned": min(len(cases), limit),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def collect_from_source(self, source: str, keywords: list[str]) -> list[dict]:
        cases = db.get_cases(source=source, limit=PER_SOURCE_POOL)
        matched = [_to_collected(c) for c in cases if _matches(c, keywords)]
        print(f"   [AGENT] {source}: {len(matched)} matching cases")
        return matched

    def filter_and_deduplicate(self, cases: list[dict]) -> list[dict]:
        """One case per title, case-insensitive."""
        seen = set()
        unique = []
        for case in cases:
            key = case["title"].lower()
            if key in seen:
                continue
            seen.add(key)
            unique.append(case)
        return unique


source_collector_agent = SourceCollectorAgent()
