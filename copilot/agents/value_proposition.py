"""
Value Proposition Agent
Builds a headline, supporting points, proof points and differentiators for
one customer and scene.
"""
import json
import re
from datetime import datetime, timezone

from copilot import llm
from copilot.agents.base import AgentCapability, AgentInput, AgentOutput, BaseAgent

HEADLINE_FALLBACK = "Intelligent automation that lifts efficiency"

DEFAULT_SUPPORTING_POINTS = [
    "Automates repetitive work around the clock",
    "Cuts response times from hours to seconds",
    "Lowers staffing and training cost",
    "Keeps service quality consistent",
    "Scales with demand without new hires",
]
DEFAULT_PROOF_POINTS = [
    "Reference customers in the same industry",
    "Measured efficiency gains from pilots",
    "Open source projects with active communities",
    "Payback within twelve months in typical deployments",
    "Security reviewed deployment options",
]
DEFAULT_DIFFERENTIATORS = [
    "Built for the customer's industry workflows",
    "Fast pilot with low upfront cost",
    "Works with existing systems",
    "Continuous improvement from usage data",
    "Local support and onboarding",
]

HEADLINE_RE = re.compile(r"###\s*Headline\s*\n+(.+)", re.IGNORECASE)


class ValuePropositionAgent(BaseAgent):
    name = "ValuePropositionAgent"
    description = "Value proposition agent: states the value of a solution for one customer"
    capabilities = [
        AgentCapability("analyze_needs", "analyze customer needs"),
        AgentCapability("generate_headline", "write a value headline"),
        AgentCapability("generate_proof_points", "list proof points"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        scene = params.get("scene") or {}
        customer = params.get("customer") or {}
        case_info = params.get("case_info")

        try:
            needs = self.analyze_needs(scene, customer)
            headline = self.generate_headline(needs, scene, case_info)
            supporting = self.generate_points("supporting points", needs, scene, DEFAULT_SUPPORTING_POINTS)
            proof = self.generate_points("proof points", needs, case_info, DEFAULT_PROOF_POINTS)
            differentiators = self.generate_points("differentiators", needs, scene, DEFAULT_DIFFERENTIATORS)
        except Exception as e:
            return self.error_output(str(e) or "Value proposition failed")

        return self.success_output({
            "headline": headline,
            "needs": needs,
            "supporting_points": supporting,
            "proof_points": proof,
            "differentiators": differentiators,
            "metadata": {
                "industry": needs["industry"],
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def analyze_needs(self, scene: dict, customer: dict) -> dict:
        return {
            "industry": customer.get("industry") or scene.get("industry") or "General",
            "primary_need": scene.get("use_case") or "Efficiency improvement",
            "pain_points": scene.get("pain_points") or ["Low efficiency", "High cost"],
            "company_size": customer.get("size") or "Mid-to-large",
            "role": customer.get("role") or "Decision maker",
        }

    def generate_headline(self, needs: dict, scene: dict, case_info) -> str:
        prompt = f"""You are a B2B marketing expert. Write a value proposition for this customer.

Customer needs: {json.dumps(needs, ensure_ascii=False)}
Business scene: {json.dumps(scene, ensure_ascii=False)}
Reference case: {json.dumps(case_info, ensure_ascii=False, default=str)}

Use this format:

### Headline
[one sentence, at most 15 words]

### Explanation
[two or three sentences]"""

        try:
            match = HEADLINE_RE.search(self.call_llm(prompt))
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Headline failed: {e}")
            return HEADLINE_FALLBACK

        if match:
            return match.group(1).strip()
        return HEADLINE_FALLBACK

    def generate_points(self, kind: str, needs: dict, context, defaults: list[str]) -> list[str]:
        prompt = f"""You are a B2B marketing expert. List five {kind} for this AI agent solution.

Customer needs: {json.dumps(needs, ensure_ascii=False)}
Context: {json.dumps(context, ensure_ascii=False, default=str)}

Return a JSON array of five short strings.

JSON:"""

        try:
            parsed = llm.extract_json_array(self.call_llm(prompt))
            if parsed:
                return [str(p) for p in parsed]
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] {kind} failed: {e}")

        return list(defaults)


value_proposition_agent = ValuePropositionAgent()
