"""
Trend Finder Agent
Gathers trend items from stored trends and the strongest stored cases,
has the LLM analyze them and writes a brainstorm-style trend report.
"""
import json
from datetime import datetime, timezone

from pydantic import BaseModel

from copilot import db
from copilot import llm
from copilot.agents.base import (
    AgentCapability, AgentInput, AgentOutput, BaseAgent, StrList, validate_items,
)

TREND_LIMIT = 10
CASE_LIMIT = 10

# Used only while the store holds neither trends nor cases
SEED_TRENDS = [
    {
        "title": "OpenManus - Universal AI Agent",
        "description": "General purpose agent covering browser automation, code generation and file handling",
        "source": "GitHub Trending",
        "category": "automation",
        "tags": ["agent", "automation", "browser"],
    },
    {
        "title": "Cursor - AI Code Editor",
        "description": "AI code editor with built-in code understanding",
        "source": "Product Hunt",
        "category": "development",
        "tags": ["editor", "ai-coding"],
    },
    {
        "title": "Multi-Agent Systems on the rise",
        "description": "Several agents collaborating on complex problems is becoming a hot topic",
        "source": "Twitter",
        "category": "architecture",
        "tags": ["multi-agent", "collaboration"],
    },
    {
        "title": "Agent + RAG convergence",
        "description": "Retrieval combined with agents gives knowledge-grounded assistants",
        "source": "Twitter",
        "category": "technology",
        "tags": ["rag", "retrieval", "knowledge"],
    },
    {
        "title": "Vertical agents take off",
        "description": "Legal, medical and financial agent products appear in large numbers",
        "source": "Twitter",
        "category": "vertical",
        "tags": ["vertical-ai", "domain-specific"],
    },
    {
        "title": "Agentic Workflow goes mainstream",
        "description": "Agent based workflows spread through enterprise processes",
        "source": "Twitter",
        "category": "workflow",
        "tags": ["workflow", "automation", "enterprise"],
    },
]

REPORT_FALLBACK = "Trend report generation failed"


class TrendAnalysis(BaseModel):
    name: str
    description: str = ""
    typical_cases: StrList = []
    applicable_scenarios: StrList = []
    customer_pain_points: StrList = []
    market_trend: str = ""
    opportunity_level: str = "Medium"


class TrendFinderAgent(BaseAgent):
    name = "TrendFinderAgent"
    description = "Trend finder agent: discovers the latest AI agent trends and applications"
    capabilities = [
        AgentCapability("discover_trends", "discover the latest ai agent trends"),
        AgentCapability("track_keywords", "track keyword trends"),
        AgentCapability("analyze_innovation", "analyze innovation directions"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        time_range = params.get("time_range", "7d")
        category = params.get("category", "ai-agent")
        industry = params.get("industry")

        try:
            trends = self.discover_trends(industry)
            analyzed = self.analyze_trends(trends)
            report = self.generate_trend_report(analyzed)
        except Exception as e:
            return self.error_output(str(e) or "Trend discovery failed")

        return self.success_output({
            "trends": analyzed,
            "report": report,
            "metadata": {
                "time_range": time_range,
                "category": category,
                "count": len(trends),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def discover_trends(self, industry: str = None) -> list[dict]:
        items = []

        try:
            for trend in db.get_trends(limit=TREND_LIMIT):
                if industry and trend.get("industry") not in (None, industry):
                    continue
                items.append({
                    "title": trend["name"],
                    "description": trend.get("description") or "",
                    "source": trend.get("source") or "brainstorm",
                    "url": trend.get("url"),
                    "category": trend.get("industry") or "general",
                    "tags": trend["metadata"].get("technologies", []),
                })

            for case in db.get_cases(industry=industry, limit=CASE_LIMIT):
                items.append({
                    "title": case["project_name"],
                    "description": case.get("description") or case.get("outcome") or "",
                    "source": case["source"],
                    "url": case.get("source_url"),
                    "category": case.get("use_case") or "general",
                    "tags": case["technology"][:5],
                })
        except Exception as e:
            print(f"⚠️ [AGENT] Trend store unavailable: {e}")

        if not items:
            print("   [AGENT] No stored trends or cases, using seed trends")
            return [dict(t) for t in SEED_TRENDS]
        return items

    def analyze_trends(self, trends: list[dict]) -> list[dict]:
        prompt = f"""You are an AI trend analyst. Analyze the AI agent trends below and extract the key facts.

Trends:
{json.dumps(trends, indent=2, ensure_ascii=False)}

Return a JSON array in this format:
[{{
  "name": "trend name",
  "description": "trend description",
  "typical_cases": ["case 1", "case 2"],
  "applicable_scenarios": ["scenario 1", "scenario 2"],
  "customer_pain_points": ["pain point 1", "pain point 2"],
  "market_trend": "market direction",
  "opportunity_level": "High/Medium/Low"
}}]

JSON:"""

        try:
            analyzed = validate_items(llm.extract_json_array(self.call_llm(prompt)), TrendAnalysis)
            if analyzed:
                return analyzed
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Trend analysis failed: {e}")

        return [
            {
                "name": t["title"],
                "description": t["description"],
                "typical_cases": [t["source"]],
                "applicable_scenarios": ["General scenario"],
                "customer_pain_points": ["Need for efficiency"],
                "market_trend": "Rising",
                "opportunity_level": "Medium",
            }
            for t in trends
        ]

    def generate_trend_report(self, analyzed: list[dict]) -> str:
        prompt = f"""You are an AI industry consultant. Write a professional brainstorm-style trend report from this analysis.

Trend analysis:
{json.dumps(analyzed, indent=2, ensure_ascii=False)}

Use this format:

## Latest AI Agent Innovation Directions

### 1. [Direction]
- Typical cases: [cases]
- Applicable scenarios: [scenarios]
- Customer pain points: [pain points]
- Market trend: [trend]
- Opportunity: [High/Medium/Low]

### 2. ...

## Directions Worth Watching

Give advice from a consultant's point of view.

Report:"""

        try:
            return self.call_llm(prompt)
        except llm.LLMError:
            return REPORT_FALLBACK


trend_finder_agent = TrendFinderAgent()
