"""
Insight Summarizer Agent
Combines trend and scene analysis into opportunities, recommendations and
one consultant-style report.
"""
import json
from datetime import datetime, timezone

from pydantic import BaseModel

from copilot import llm
from copilot.agents.base import (
    AgentCapability, AgentInput, AgentOutput, BaseAgent, StrList, validate_items,
)

DEFAULT_TRENDS = [
    {
        "direction": "Browser Agent",
        "description": "Agents that operate the browser to finish complex web tasks",
        "opportunity": "high",
        "timeline": "now",
        "key_players": ["OpenAI Operator", "Browser Use", "Skyvern"],
    },
    {
        "direction": "Code Agent",
        "description": "Agents that write and review code for developers",
        "opportunity": "high",
        "timeline": "now",
        "key_players": ["Cursor", "GitHub Copilot", "Devin"],
    },
    {
        "direction": "Multi-Agent",
        "description": "Several agents cooperating on complex tasks",
        "opportunity": "high",
        "timeline": "6-12 months",
        "key_players": ["AutoGen", "CrewAI", "LangGraph"],
    },
    {
        "direction": "Vertical Agent",
        "description": "Agents specialized for one industry such as legal, medical or finance",
        "opportunity": "high",
        "timeline": "now",
        "key_players": ["Harvey", "Hippocratic AI", "Hebbia"],
    },
    {
        "direction": "Agent + RAG",
        "description": "Retrieval augmented agents that answer from company knowledge",
        "opportunity": "medium",
        "timeline": "now",
        "key_players": ["LlamaIndex", "LangChain", "Dify"],
    },
    {
        "direction": "Agentic Workflow",
        "description": "Agent driven workflows that automate business processes end to end",
        "opportunity": "high",
        "timeline": "6-12 months",
        "key_players": ["n8n", "Zapier", "Make"],
    },
]

ACTION_MAP = {
    "Browser Agent": ["Evaluate browser automation use cases", "Build a pilot for e-commerce operations"],
    "Code Agent": ["Introduce AI coding assistants", "Measure the developer productivity gain"],
    "Multi-Agent": ["Identify multi-step business processes", "Design an agent collaboration pilot"],
    "Vertical Agent": ["Pick one focus industry", "Package industry specific solutions"],
    "Agentic Workflow": ["Map repetitive workflows", "Automate the highest volume process first"],
}
DEFAULT_ACTIONS = ["Research the market", "Run a proof of concept", "Collect customer feedback"]

GENERAL_RECOMMENDATIONS = [
    "Follow AI agent releases closely",
    "Build a library of industry cases",
    "Train the sales team on AI agent value",
    "Start with small pilots before scaling",
]
MAX_RECOMMENDATIONS = 10

REPORT_FALLBACK = "Insight report generation failed"


class TrendInsight(BaseModel):
    direction: str
    description: str = ""
    opportunity: str = "medium"
    timeline: str = "now"
    key_players: StrList = []


class SceneInsight(BaseModel):
    name: str
    industry: str = ""
    value: str = "medium"
    readiness: str = ""
    key_benefit: str = ""


class InsightSummarizerAgent(BaseAgent):
    name = "InsightSummarizerAgent"
    description = "Insight summarizer agent: turns analysis into actionable insight"
    capabilities = [
        AgentCapability("summarize_trends", "summarize trend insights"),
        AgentCapability("identify_opportunities", "identify business opportunities"),
        AgentCapability("generate_recommendations", "generate action recommendations"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        trends = params.get("trends") or []
        scenes = params.get("scenes") or []
        industry = params.get("industry")

        try:
            trend_insights = self.analyze_trends(trends)
            scene_insights = self.analyze_scenes(scenes)
            opportunities = self.identify_opportunities(trend_insights, scene_insights)
            report = self.generate_comprehensive_report(trend_insights, scene_insights, opportunities, industry)
        except Exception as e:
            return self.error_output(str(e) or "Insight summary failed")

        return self.success_output({
            "report": report,
            "trends": trend_insights,
            "opportunities": opportunities,
            "recommendations": self.generate_recommendations(opportunities),
            "metadata": {
                "trend_count": len(trend_insights),
                "scene_count": len(scene_insights),
                "opportunity_count": len(opportunities),
                "target_industry": industry or "General",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def analyze_trends(self, trends: list[dict]) -> list[dict]:
        if not trends:
            return [dict(t) for t in DEFAULT_TRENDS]

        prompt = f"""You are an AI trend analyst. Analyze these trends and name the main directions.

Trends:
{json.dumps(trends, indent=2, ensure_ascii=False)}

Return a JSON array:
[{{
  "direction": "direction name",
  "description": "short description",
  "opportunity": "high/medium/low",
  "timeline": "now / 6-12 months / 1-2 years",
  "key_players": ["company or project"]
}}]

JSON:"""

        try:
            insights = validate_items(llm.extract_json_array(self.call_llm(prompt)), TrendInsight)
            if insights:
                return insights
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Trend insight failed: {e}")

        return [dict(t) for t in DEFAULT_TRENDS]

    def analyze_scenes(self, scenes: list[dict]) -> list[dict]:
        if not scenes:
            return []

        prompt = f"""You are a business analyst. Rate the business value of these scenes.

Scenes:
{json.dumps(scenes[:10], indent=2, ensure_ascii=False)}

Return a JSON array:
[{{
  "name": "scene name",
  "industry": "industry",
  "value": "high/medium/low",
  "readiness": "ready / needs work / early",
  "key_benefit": "main benefit"
}}]

JSON:"""

        try:
            insights = validate_items(llm.extract_json_array(self.call_llm(prompt)), SceneInsight)
            if insights:
                return insights
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Scene insight failed: {e}")

        return scenes[:10]

    def identify_opportunities(self, trend_insights: list[dict], scene_insights: list[dict]) -> list[dict]:
        opportunities = []
        for trend in trend_insights:
            if str(trend.get("opportunity", "")).lower() != "high":
                continue
            direction = trend.get("direction") or trend.get("name") or "Unknown"
            opportunities.append({
                "direction": direction,
                "description": trend.get("description", ""),
                "timeline": trend.get("timeline", "now"),
                "related_scenes": [s.get("name") for s in scene_insights[:3] if s.get("name")],
                "actions": ACTION_MAP.get(direction, DEFAULT_ACTIONS),
            })
        return opportunities

    def generate_comprehensive_report(self, trend_insights: list[dict], scene_insights: list[dict],
                                      opportunities: list[dict], industry: str = None) -> str:
        prompt = f"""You are a senior AI consultant. Write an insight report for {industry or 'all industries'}.

Trend directions:
{json.dumps(trend_insights, indent=2, ensure_ascii=False)}

Business scenes:
{json.dumps(scene_insights, indent=2, ensure_ascii=False)}

Opportunities:
{json.dumps(opportunities, indent=2, ensure_ascii=False)}

Use this format:

## Executive Summary

## Key Trends

## Business Opportunities

## Recommended Actions

Report:"""

        try:
            return self.call_llm(prompt)
        except llm.LLMError:
            return REPORT_FALLBACK

    def generate_recommendations(self, opportunities: list[dict]) -> list[str]:
        recommendations = []
        for opp in opportunities[:3]:
            recommendations.extend(opp["actions"])
        recommendations.extend(GENERAL_RECOMMENDATIONS)
        return list(dict.fromkeys(recommendations))[:MAX_RECOMMENDATIONS]


insight_summarizer_agent = InsightSummarizerAgent()
