"""
LLM client - Gemini via google-genai

One prompt in, one text out. Everything that talks to the model goes
through call_llm so the rest of the code never touches the SDK.
"""
import json
import re

from google import genai

from copilot import config


class LLMError(Exception):
    """Missing API key or a failed provider call."""


_client = None


def get_client() -> genai.Client:
    global _client
    if _client is None:
        if not config.GEMINI_API_KEY:
            raise LLMError("GEMINI_API_KEY is not configured")
        _client = genai.Client(api_key=config.GEMINI_API_KEY)
    return _client


def call_llm(prompt: str, model: str = None) -> str:
    client = get_client()
    try:
        response = client.models.generate_content(
            model=model or config.LLM_MODEL,
            contents=prompt,
        )
    except Exception as e:
        print(f"❌ [LLM] API error: {e}")
        raise LLMError(f"LLM call failed: {e}") from e

    return response.text or ""


def extract_json_object(text: str) -> dict | None:
    """First '{' to last '}' of the text, parsed. None when it doesn't parse."""
    match = re.search(r'\{[\s\S]*\}', text or "")
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError:
        return None


def extract_json_array(text: str) -> list | None:
    match = re.search(r'\[[\s\S]*\]', text or "")
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError:
        return None


def extract_case_info(raw_text: str) -> dict | None:
    """Free text -> case fields, None when the answer has no usable JSON."""
    prompt = f"""You are an AI agent case analyst. Extract structured case information from the text below.

Answer strictly in this JSON format and add nothing else:
{{
  "project_name": "project name",
  "industry": "industry",
  "use_case": "use case",
  "pain_point": "problem it solves",
  "technology": ["tech 1", "tech 2"],
  "outcome": "result or impact"
}}

Text:
{raw_text}

JSON:"""

    result = call_llm(prompt)
    parsed = extract_json_object(result)
    if parsed is None:
        print("⚠️ [LLM] No JSON in case extraction answer")
    return parsed


def generate_sales_script(case_info: dict, customer_industry: str) -> str:
    technology = case_info.get("technology") or []
    if isinstance(technology, str):
        technology = [technology]

    prompt = f"""You are an AI sales assistant. Write a sales script for a sales rep based on this case.

Case:
- Project: {case_info.get('project_name', '')}
- Industry: {case_info.get('industry', '')}
- Use case: {case_info.get('use_case', '')}
- Pain point: {case_info.get('pain_point', '')}
- Technology: {', '.join(technology)}
- Outcome: {case_info.get('outcome', '')}

Customer industry: {customer_industry}

Write:
1. Opening (1-2 sentences)
2. Case introduction (3-4 sentences)
3. Value proposition (2-3 sentences)
4. Closing question (1 sentence)

Script:"""

    return call_llm(prompt, model=config.LLM_FAST_MODEL)


def calculate_roi(industry: str, use_case: str, company_size: str) -> dict | None:
    prompt = f"""You are an ROI analyst. Estimate the ROI of an AI agent project.

- Industry: {industry}
- Use case: {use_case}
- Company size: {company_size}

Give:
1. Expected labor savings (people per year)
2. Expected annual cost savings (currency units)
3. Payback period (months)
4. Confidence (High/Medium/Low)

Answer in JSON:
{{
  "labor_savings": "number",
  "annual_savings": "number",
  "payback_period": "number",
  "confidence": "High/Medium/Low"
}}

JSON:"""

    result = call_llm(prompt)
    parsed = extract_json_object(result)
    if parsed is None:
        print("⚠️ [LLM] Could not parse ROI answer")
    return parsed
