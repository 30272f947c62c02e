"""
Sales Script Generator Agent
Writes sales scripts for a customer from a business scene and a case.
"""
import json
from datetime import datetime, timezone

from copilot import llm
from copilot.agents.base import AgentCapability, AgentInput, AgentOutput, BaseAgent

SCRIPT_TEMPLATES = {
    "cold_call": {
        "prompt": """Write a cold call script for a first conversation with this customer.

Customer: {customer}
Business scene: {scene}
Reference case: {case_info}

Structure:
1. Opening (15 seconds): introduce yourself and earn the next minute
2. Hook: name a pain point the customer recognizes
3. Value: how an AI agent solves it, with the reference case
4. Close: ask for a follow-up meeting

Script:""",
        "key_points": ["Get to the point fast", "Lead with a pain point", "Use a concrete case", "Ask for the next step"],
        "tips": ["Keep it under two minutes", "Ask open questions", "Listen more than you talk"],
    },
    "follow_up": {
        "prompt": """Write a follow-up script after a first conversation.

Customer: {customer}
Business scene: {scene}
Reference case: {case_info}

Structure:
1. Recap the last conversation
2. Add new value: a result, a number or a case
3. Answer open questions
4. Propose a demo or a pilot

Script:""",
        "key_points": ["Reference the previous talk", "Bring something new", "Move toward a demo"],
        "tips": ["Follow up within a week", "Personalize the message", "Keep a clear ask"],
    },
    "demo": {
        "prompt": """Write a product demo script.

Customer: {customer}
Business scene: {scene}
Reference case: {case_info}

Structure:
1. Confirm the customer's goals
2. Show the workflow in their business scene
3. Highlight the measurable outcome
4. Agree on next steps

Script:""",
        "key_points": ["Demo the customer's own scenario", "Show outcomes not features", "Leave time for questions"],
        "tips": ["Prepare sample data from their industry", "Keep the demo under 30 minutes", "Have a backup recording"],
    },
    "objection_handling": {
        "prompt": """Write responses to the most common objections from this customer.

Customer: {customer}
Business scene: {scene}
Reference case: {case_info}

Cover these objections:
1. "It's too expensive"
2. "We're worried about data security"
3. "The technology isn't mature yet"
4. "We already have a solution"

For each: acknowledge, reframe, give evidence.

Responses:""",
        "key_points": ["Acknowledge the concern first", "Answer with evidence", "Turn the objection into a question"],
        "tips": ["Never argue", "Use customer stories", "Write down every new objection"],
    },
    "closing": {
        "prompt": """Write a closing script to win the deal.

Customer: {customer}
Business scene: {scene}
Reference case: {case_info}

Structure:
1. Summarize the agreed value
2. Confirm decision makers and timeline
3. Propose a concrete offer or pilot
4. Ask for the commitment

Script:""",
        "key_points": ["Summarize value in the customer's words", "Make the next step small", "Ask clearly"],
        "tips": ["Create honest urgency", "Prepare the contract in advance", "Handle last objections calmly"],
    },
}
DEFAULT_SCRIPT_TYPE = "cold_call"

SUPPLEMENTARY_TYPES = ["objection_handling", "closing"]

SCRIPT_FALLBACK = "Sales script generation failed"


class SalesScriptGeneratorAgent(BaseAgent):
    name = "SalesScriptGeneratorAgent"
    description = "Sales script generator agent: writes scripts for every stage of a deal"
    capabilities = [
        AgentCapability("generate_cold_call", "write cold call scripts"),
        AgentCapability("generate_follow_up", "write follow-up scripts"),
        AgentCapability("handle_objections", "write objection handling scripts"),
        AgentCapability("generate_closing", "write closing scripts"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        script_type = params.get("type") or DEFAULT_SCRIPT_TYPE
        scene = params.get("scene")
        customer = params.get("customer")
        case_info = params.get("case_info")

        if not (scene or customer or case_info):
            return self.error_output("Missing scene, customer, or case info")

        if script_type not in SCRIPT_TEMPLATES:
            script_type = DEFAULT_SCRIPT_TYPE

        try:
            script = self.generate_script(script_type, scene, customer, case_info)
            additional = {
                t: self.generate_script(t, scene, customer, case_info)
                for t in SUPPLEMENTARY_TYPES if t != script_type
            }
        except Exception as e:
            return self.error_output(str(e) or "Sales script generation failed")

        template = SCRIPT_TEMPLATES[script_type]
        return self.success_output({
            "script_type": script_type,
            "script": script,
            "key_points": template["key_points"],
            "tips": template["tips"],
            "additional_scripts": additional,
            "metadata": {
                "customer_industry": (customer or {}).get("industry", "General"),
                "scene": (scene or {}).get("name"),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def generate_script(self, script_type: str, scene, customer, case_info) -> str:
        prompt = self.build_prompt(SCRIPT_TEMPLATES[script_type]["prompt"], {
            "customer": _describe(customer),
            "scene": _describe(scene),
            "case_info": _describe(case_info),
        })
        prompt = "You are a senior B2B sales expert for AI agent solutions.\n\n" + prompt

        try:
            return self.call_llm(prompt)
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] {script_type} script failed: {e}")
            return SCRIPT_FALLBACK


def _describe(value) -> str:
    if not value:
        return "not provided"
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


sales_script_generator_agent = SalesScriptGeneratorAgent()
