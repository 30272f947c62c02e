"""
Structured extraction of sales fields from a project's README and description
"""
import time

from pydantic import BaseModel, Field, ValidationError

from copilot import config
from copilot import llm

README_MAX_CHARS = 5000


class StructuredCaseData(BaseModel):
    pain_point: str = Field(
        default="Inefficient manual task handling",
        description="1-2 core business pain points the project solves.")
    solution_approach: str = Field(
        default="AI agent based automation",
        description="Core idea of the solution.")
    business_function: str = Field(
        default="General",
        description="Main business function: customer service, process automation, data analysis, content generation, ERP integration...")
    target_company: str = Field(
        default="Enterprises across industries",
        description="Target company type.")
    implementation_complexity: str = Field(
        default="Medium",
        description="Implementation complexity: Low / Medium / High.")
    competitive_advantage: str = Field(
        default="Open source and customizable",
        description="1-2 main competitive advantages.")
    use_case_summary: str = Field(
        default="",
        description="One sentence summary of the typical use case.")


def default_structured_data(name: str, description: str = None) -> StructuredCaseData:
    return StructuredCaseData(use_case_summary=f"{name} - {description or 'AI Agent project'}")


def _field_lines() -> str:
    return "\n".join(
        f'  "{name}": "{field.description}"'
        for name, field in StructuredCaseData.model_fields.items()
    )


def extract_case_structured_data(name: str, description: str = None,
                                 readme: str = None, topics: list[str] = None) -> StructuredCaseData:
    """
    Ask the model for the seven sales fields. Empty or missing fields get
    the defaults; any failure returns the full default structure.
    """
    readme_text = readme[:README_MAX_CHARS] if readme else "No README"
    prompt = f"""You are an AI agent case analyst extracting useful structured information for a sales team.

Project name: {name}
Description: {description or ''}
Topics: {', '.join(topics or [])}
README:
{readme_text}

Answer strictly in this JSON format and add nothing else:
{{
{_field_lines()}
}}

JSON:"""

    defaults = default_structured_data(name, description)
    try:
        parsed = llm.extract_json_object(llm.call_llm(prompt))
        if parsed is None:
            print(f"⚠️ [LLM] No JSON for {name}, using defaults")
            return defaults

        merged = defaults.model_dump()
        merged.update({k: v for k, v in parsed.items() if k in merged and v})
        return StructuredCaseData.model_validate(merged)
    except (llm.LLMError, ValidationError) as e:
        print(f"⚠️ [LLM] Structured extraction failed for {name}: {e}")
        return defaults


def batch_extract_structured_data(projects: list[dict], on_progress=None) -> list[dict]:
    """Sequentially enrich each project dict with the structured fields."""
    results = []
    total = len(projects)

    for i, project in enumerate(projects, 1):
        name = project.get("project_name") or "Unknown"
        try:
            structured = extract_case_structured_data(
                name,
                project.get("description"),
                project.get("readme_content"),
                project.get("topics") or [],
            )
        except Exception as e:
            print(f"❌ [LLM] {name}: {e}")
            structured = default_structured_data(name, project.get("description"))

        results.append({**project, **structured.model_dump()})

        if on_progress:
            on_progress(i, total)

        time.sleep(config.LLM_BATCH_DELAY)

    return results
