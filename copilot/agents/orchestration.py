"""
Orchestration Agent
Recognizes the intent of a request, hands it to the agent that can serve
it and turns the task results into one reply.
"""
import json
import time
from datetime import datetime, timezone

from copilot import config
from copilot import llm
from copilot import rag
from copilot import roi
from copilot.agents.base import (
    AgentCapability,
    AgentInput,
    AgentOutput,
    BaseAgent,
    IntentRecognitionResult,
    IntentType,
    OrchestrationResult,
    TaskResult,
)
from copilot.agents.sales_generator import sales_script_generator_agent
from copilot.agents.trend_finder import trend_finder_agent

# Checked in this order, first hit wins
INTENT_KEYWORDS = {
    IntentType.BRAINSTORM: [
        "new application", "new opportunit", "new scenario", "what's new", "innovation",
        "brainstorm", "inspiration", "discover new", "explore new", "trend direction",
        "new direction", "innovative case",
    ],
    IntentType.CASE_SEARCH: [
        "case study", "case library", "search case", "find case", "similar case",
        "success stor", "customer case", "project case", "cases",
    ],
    IntentType.SALES_SCRIPT: [
        "sales script", " script", "how to sell", "pitch", "selling point",
        "promotion plan", "talk to the customer",
    ],
    IntentType.ROI_ESTIMATE: [
        " roi", "return on investment", "cost saving", "save cost", "payback",
        "estimate", "efficiency gain",
    ],
    IntentType.TREND_DISCOVERY: [
        "trend", "latest", " hot ", "popular", "tech trend", "industry trend",
    ],
    IntentType.GENERAL_CHAT: [
        "hello", " hi ", " hey ", "help", "what is", "how do i use",
    ],
}

ENTITY_INDUSTRIES = [
    "e-commerce", "finance", "healthcare", "education", "manufacturing",
    "retail", "logistics", "customer service",
]

SUGGESTED_TASKS = {
    IntentType.BRAINSTORM: ["discover_trends", "collect_latest_cases", "translate_scenes", "generate_insights"],
    IntentType.CASE_SEARCH: ["search_cases", "analyze_case_details"],
    IntentType.SALES_SCRIPT: ["generate_sales_script"],
    IntentType.ROI_ESTIMATE: ["calculate_roi"],
    IntentType.TREND_DISCOVERY: ["discover_trends", "collect_latest_cases"],
    IntentType.GENERAL_CHAT: ["respond_greeting"],
    IntentType.UNKNOWN: ["clarify_intent"],
}

FALLBACK_REPLY = "Thanks for your question! I'm analyzing it for you..."


class OrchestrationAgent(BaseAgent):
    name = "OrchestrationAgent"
    description = "Orchestration agent: intent recognition, task dispatch, result aggregation"
    capabilities = [
        AgentCapability("intent_recognition", "recognize user intent"),
        AgentCapability("task_distribution", "dispatch tasks to agents"),
        AgentCapability("result_aggregation", "aggregate agent results"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        try:
            intent = self.recognize_intent(agent_input.task)
            print(f"🧭 [AGENT] Intent: {intent.intent.value} ({intent.confidence})")

            tasks = self.distribute_tasks(intent, agent_input)
            final_output = self.aggregate_results(agent_input.task, intent, tasks)
        except Exception as e:
            return self.error_output(str(e) or "Orchestration failed")

        return self.success_output(OrchestrationResult(
            success=True,
            intent=intent,
            tasks=tasks,
            final_output=final_output,
            metadata={
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "agent_count": len(tasks),
            },
        ))

    # ============ Intent ============

    def recognize_intent(self, task: str) -> IntentRecognitionResult:
        """Keyword match first, the LLM only when nothing matches."""
        lowered = f" {task.lower()} "
        for intent, keywords in INTENT_KEYWORDS.items():
            if any(k in lowered for k in keywords):
                return IntentRecognitionResult(
                    intent=intent,
                    confidence=0.8,
                    entities=self.extract_entities(task),
                    suggested_tasks=SUGGESTED_TASKS[intent],
                )

        return self.llm_intent_recognition(task)

    def llm_intent_recognition(self, task: str) -> IntentRecognitionResult:
        prompt = f"""You are an intent recognition expert. Identify the intent of this user input.

User input: "{task}"

Possible intents:
- brainstorm: look for new AI agent applications and opportunities
- case_search: search success cases
- sales_script: write a sales script
- roi_estimate: estimate return on investment
- trend_discovery: discover the latest trends
- general_chat: greetings, questions about the assistant

Answer in JSON:
{{
  "intent": "intent type",
  "confidence": 0.0-1.0,
  "entities": {{}}
}}

JSON:"""

        try:
            parsed = llm.extract_json_object(self.call_llm(prompt, model=config.LLM_FAST_MODEL))
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] LLM intent recognition failed: {e}")
            parsed = None

        if parsed:
            try:
                intent = IntentType(parsed.get("intent"))
            except ValueError:
                intent = IntentType.UNKNOWN
            return IntentRecognitionResult(
                intent=intent,
                confidence=parsed.get("confidence") or 0.5,
                entities=parsed.get("entities") or {},
                suggested_tasks=SUGGESTED_TASKS[intent],
            )

        return IntentRecognitionResult(intent=IntentType.UNKNOWN, confidence=0.3)

    def extract_entities(self, task: str) -> dict:
        entities = {}
        lowered = task.lower()

        for industry in ENTITY_INDUSTRIES:
            if industry in lowered:
                entities["industry"] = industry.title()
                break

        if "recent" in lowered or "latest" in lowered:
            entities["time_range"] = "recent"

        return entities

    # ============ Dispatch ============

    def _timed(self, agent_name: str, task: str, func) -> TaskResult:
        started = time.time()
        try:
            success, data, error = func()
        except Exception as e:
            success, data, error = False, None, str(e)
        return TaskResult(
            agent_name=agent_name,
            task=task,
            success=success,
            data=data,
            error=error,
            duration=round(time.time() - started, 3),
        )

    def distribute_tasks(self, intent: IntentRecognitionResult, agent_input: AgentInput) -> list[TaskResult]:
        params = agent_input.params or {}
        industry = params.get("industry") or intent.entities.get("industry")

        if intent.intent in (IntentType.BRAINSTORM, IntentType.TREND_DISCOVERY):
            def run():
                out = trend_finder_agent.execute(AgentInput(
                    task=agent_input.task,
                    params={"time_range": params.get("time_range", "7d"), "industry": industry},
                ))
                return out.success, out.data, out.error
            return [self._timed(trend_finder_agent.name, "discover_trends", run)]

        if intent.intent == IntentType.CASE_SEARCH:
            def run():
                results = rag.retrieve_from_database(agent_input.task, industry=industry)
                return True, {"cases": [
                    {"title": r.title, "url": r.source_url, "type": r.type, "relevance": r.similarity}
                    for r in results
                ]}, None
            return [self._timed("CaseRetriever", "search_cases", run)]

        if intent.intent == IntentType.SALES_SCRIPT:
            def run():
                out = sales_script_generator_agent.execute(AgentInput(
                    task=agent_input.task,
                    params={
                        "type": params.get("type", "cold_call"),
                        "customer": params.get("customer") or {"industry": industry or "General"},
                        "case_info": params.get("case_info"),
                    },
                ))
                return out.success, out.data, out.error
            return [self._timed(sales_script_generator_agent.name, "generate_sales_script", run)]

        if intent.intent == IntentType.ROI_ESTIMATE:
            def run():
                data, is_default = roi.estimate_roi(
                    industry or "General",
                    params.get("use_case", "Process Automation"),
                    params.get("company_size", "medium"),
                )
                return True, {"roi": data, "is_default": is_default}, None
            return [self._timed("ROIEstimator", "calculate_roi", run)]

        return [self._timed(self.name, "general_response",
                            lambda: (True, {"message": "general conversation"}, None))]

    # ============ Aggregation ============

    def aggregate_results(self, task: str, intent: IntentRecognitionResult,
                          tasks: list[TaskResult]) -> str:
        task_summary = json.dumps(
            [{"agent": t.agent_name, "task": t.task, "success": t.success, "data": t.data} for t in tasks],
            ensure_ascii=False, default=str,
        )[:6000]

        prompt = f"""You are an AI sales assistant. Write the final reply to the user from the intent and task results below.

Intent: {intent.intent.value}
Task results: {task_summary}

User request: {task}

Write a professional, useful reply."""

        try:
            return self.call_llm(prompt, model=config.LLM_FAST_MODEL)
        except llm.LLMError:
            return FALLBACK_REPLY


orchestration_agent = OrchestrationAgent()
