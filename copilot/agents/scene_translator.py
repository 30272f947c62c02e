"""
Scene Translator Agent
Turns technical cases into business scenes a customer recognizes.
"""
import json
from datetime import datetime, timezone

from copilot import llm
from copilot.agents.base import AgentCapability, AgentInput, AgentOutput, BaseAgent

TECH_TO_SCENE_MAPPING = {
    "browser-automation": ["E-commerce operations", "Data collection", "Report automation", "Bulk operations"],
    "code-generation": ["Software development", "Code review", "Technical documentation", "API generation"],
    "rag": ["Knowledge management", "Intelligent Q&A", "Document retrieval", "Training assistant"],
    "multi-agent": ["Complex task handling", "Cross-system collaboration", "Decision support", "Process automation"],
    "computer-use": ["Desktop automation", "Enterprise app operation", "GUI automation"],
    "conversational-ai": ["Customer service", "Voice assistant", "Online communication", "User support"],
}

INDUSTRY_SCENES = {
    "E-commerce": ["Store operations", "Product listing", "Customer enquiries", "Order processing", "Data analysis"],
    "Finance": ["Risk assessment", "Customer service", "Fraud prevention", "Investment analysis", "Compliance review"],
    "Healthcare": ["Patient service", "Medical records", "Drug information", "Appointment management", "Health consultation"],
    "Education": ["Tutoring", "Homework grading", "Course recommendation", "Student management", "Question answering"],
    "Manufacturing": ["Production monitoring", "Quality inspection", "Supply chain management", "Equipment maintenance", "Production scheduling"],
    "Retail": ["Product recommendation", "Inventory management", "Customer analysis", "Marketing automation", "Store operations"],
    "Logistics": ["Route planning", "Order tracking", "Dispatch optimization", "Customer service", "Data analysis"],
    "Customer Service": ["Intelligent Q&A", "Ticket classification", "Sentiment analysis", "Knowledge base", "Ticket handling"],
}

PAIN_POINTS = {
    "E-commerce": {
        "Store operations": ["Manual product listing is slow", "Promotions are tedious to manage", "Slow replies to customer questions"],
        "Customer enquiries": ["High support staffing cost", "Slow replies at peak volume", "No coverage at night"],
    },
    "Finance": {
        "Customer service": ["Long customer wait times", "Repeated questions consume staff", "Inconsistent service quality"],
        "Risk assessment": ["Manual review is slow", "Risks are missed", "Decisions lack evidence"],
    },
    "Healthcare": {
        "Patient service": ["Long patient wait times", "Doctors cannot keep up with questions", "Knowledge goes out of date"],
        "Health consultation": ["Medical knowledge is hard to access", "Booking appointments is cumbersome"],
    },
    "Education": {
        "Tutoring": ["Limited after-class tutoring time", "Personal tutoring is hard to scale", "Grading takes too much time"],
        "Question answering": ["Questions are answered late", "Repeated questions consume resources"],
    },
    "Manufacturing": {
        "Production monitoring": ["Manual monitoring is inefficient", "Anomalies are found late", "Data silos"],
        "Quality inspection": ["Inspection standards vary", "Inspection is slow", "High risk of missed defects"],
    },
}
DEFAULT_PAIN_POINTS = ["Knowledge is hard to find", "Many repeated questions", "Slow responses"]

BENEFITS = {
    "Efficiency": ["Less repetitive manual work", "24/7 service", "Fast customer response"],
    "Cost": ["Lower staffing needs", "Lower training cost", "Fewer errors"],
    "Quality": ["Standardized service", "Better grounded decisions", "Knowledge is retained"],
}

TARGET_COMPANIES = {
    "E-commerce": ["Marketplace sellers", "Brands", "E-commerce agencies"],
    "Finance": ["Banks", "Insurers", "Brokerages", "Fintech companies"],
    "Healthcare": ["Hospitals", "Clinics", "Health management companies", "Online pharmacies"],
    "Education": ["Training providers", "Online learning platforms", "Universities", "K-12 schools"],
    "Manufacturing": ["Factories", "Equipment makers", "Industrial automation companies"],
    "Retail": ["Retailers", "Brands", "Store chains", "Shopping malls"],
    "Logistics": ["Logistics companies", "Couriers", "Supply chain managers"],
    "Customer Service": ["Call centers", "Support outsourcers", "In-house support teams"],
}
DEFAULT_TARGET_COMPANIES = ["Mid-size and larger companies across industries"]

SUGGESTIONS_FALLBACK = "Scene suggestion generation failed"


class SceneTranslatorAgent(BaseAgent):
    name = "SceneTranslatorAgent"
    description = "Scene translator agent: turns technical cases into business scenes"
    capabilities = [
        AgentCapability("translate_technical", "turn technical features into business scenes"),
        AgentCapability("map_industry", "map to industry scenes"),
        AgentCapability("extract_value", "extract customer value"),
    ]

    def execute(self, agent_input: AgentInput) -> AgentOutput:
        params = agent_input.params or {}
        cases = params.get("cases") or []
        industry = params.get("industry")

        if not cases:
            return self.error_output("No cases provided for translation")

        try:
            analyzed = [self.analyze_technical_features(c) for c in cases]
            scenes = self.translate_to_business_scenes(analyzed, industry)
            suggestions = self.generate_scene_suggestions(scenes)
        except Exception as e:
            return self.error_output(str(e) or "Scene translation failed")

        return self.success_output({
            "scenes": scenes,
            "suggestions": suggestions,
            "metadata": {
                "input_cases": len(cases),
                "output_scenes": len(scenes),
                "target_industry": industry or "General",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        })

    def analyze_technical_features(self, case: dict) -> dict:
        prompt = f"""You are an AI technology analyst. Extract the technical features of this AI agent case.

Case:
- Title: {case.get('title')}
- Description: {case.get('description')}
- Source: {case.get('source')}
- Tags: {', '.join(case.get('tags') or []) or 'none'}

Answer in JSON:
{{
  "technical_features": ["feature 1", "feature 2"],
  "core_capability": "core capability",
  "technology_stack": ["technology"],
  "use_case_technical": "technical use case"
}}

JSON:"""

        try:
            parsed = llm.extract_json_object(self.call_llm(prompt))
            if parsed:
                return {**case, **parsed}
        except llm.LLMError as e:
            print(f"⚠️ [AGENT] Technical analysis failed: {e}")

        return {
            **case,
            "technical_features": ["General AI capability"],
            "core_capability": "Intelligent Q&A",
            "technology_stack": ["LLM"],
            "use_case_technical": "Automated task handling",
        }

    def translate_to_business_scenes(self, analyzed: list[dict], industry: str = None) -> list[dict]:
        industries = [industry] if industry else list(INDUSTRY_SCENES)
        return [self.map_to_business_scene(case, ind) for case in analyzed for ind in industries]

    def map_to_business_scene(self, case: dict, industry: str) -> dict:
        matched = list(INDUSTRY_SCENES.get(industry, ["General business scenario"]))
        for tag in case.get("tags") or []:
            matched.extend(TECH_TO_SCENE_MAPPING.get(tag, []))

        primary = matched[0]
        return {
            "name": f"{industry} - {primary}",
            "description": (f"In {industry}, {case.get('description') or case.get('title')}. "
                            f"This applies to {primary} and helps companies modernize their operations."),
            "industry": industry,
            "use_case": primary,
            "related_scenes": matched[1:6],
            "pain_points": PAIN_POINTS.get(industry, {}).get(primary, DEFAULT_PAIN_POINTS),
            "benefits": BENEFITS["Efficiency"] + BENEFITS["Cost"] + BENEFITS["Quality"],
            "value_proposition": (f"AI agents help {industry} companies automate business processes, "
                                  "raise efficiency and cut staffing cost while keeping service quality consistent."),
            "target_companies": TARGET_COMPANIES.get(industry, DEFAULT_TARGET_COMPANIES),
            "technology_stack": case.get("technology_stack") or [],
        }

    def generate_scene_suggestions(self, scenes: list[dict]) -> str:
        prompt = f"""You are an AI sales consultant. Write scene suggestions from this list of business scenes.

Scenes:
{json.dumps(scenes[:5], indent=2, ensure_ascii=False)}

Use this format:

## Scene Suggestions

### 1. [Scene]
- Industry: [industry]
- Core value: [value proposition]
- Customer pain points: [pain points]
- Expected benefits: [benefits]
- Target customers: [customers]

### 2. ...

Suggestions:"""

        try:
            return self.call_llm(prompt)
        except llm.LLMError:
            return SUGGESTIONS_FALLBACK


scene_translator_agent = SceneTranslatorAgent()
