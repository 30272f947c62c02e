"""
ROI estimation: LLM estimate with a deterministic table fallback
"""
import math
import re

from copilot import llm

# labor (people/year), annual savings, payback (months)
BASE_VALUES = {
    "large": {"labor": 5, "annual": 600000, "payback": 6},
    "medium": {"labor": 3, "annual": 360000, "payback": 8},
    "small": {"labor": 1, "annual": 120000, "payback": 10},
}

USE_CASE_MULTIPLIERS = {
    "Customer Service": 1.2,
    "Process Automation": 1.5,
    "Data Analysis": 1.3,
    "AI Assistant": 1.1,
    "Content Generation": 1.0,
    "Knowledge Base": 1.4,
    "Search": 1.2,
    "Other": 1.0,
}

DEFAULT_NOTE = "This is an estimate; the actual ROI depends on the company's situation."


def _size_key(company_size: str) -> str:
    text = (company_size or "").lower()
    for key in BASE_VALUES:
        if key in text:
            return key
    return "medium"


def _round(value: float) -> int:
    # half up, the built-in round() is half-to-even
    return int(value + 0.5)


def _parse_int(value) -> int | None:
    """Leading integer of a number or numeric string ("360,000 CNY" -> 360000)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r'\s*(-?\d+)', str(value or "").replace(",", ""))
    return int(match.group(1)) if match else None


def default_roi(industry: str, use_case: str, company_size: str) -> dict:
    base = BASE_VALUES[_size_key(company_size)]
    multiplier = USE_CASE_MULTIPLIERS.get(use_case, 1.0)

    if multiplier >= 1.3:
        confidence = "High"
    elif multiplier >= 1.0:
        confidence = "Medium"
    else:
        confidence = "Low"

    return {
        "labor_savings": _round(base["labor"] * multiplier),
        "annual_savings": _round(base["annual"] * multiplier),
        "payback_period": _round(base["payback"] / multiplier),
        "confidence": confidence,
        "note": DEFAULT_NOTE,
    }


def estimate_roi(industry: str, use_case: str, company_size: str) -> tuple[dict, bool]:
    """Returns (data, is_default). Never raises for LLM problems."""
    try:
        result = llm.calculate_roi(industry, use_case, company_size)
    except llm.LLMError as e:
        print(f"⚠️ [LLM] ROI estimate unavailable: {e}")
        result = None

    if not result:
        return default_roi(industry, use_case, company_size), True

    labor = _parse_int(result.get("labor_savings"))
    annual = _parse_int(result.get("annual_savings"))
    if not labor or not annual:
        return default_roi(industry, use_case, company_size), True

    return {
        "labor_savings": labor,
        "annual_savings": annual,
        "payback_period": _parse_int(result.get("payback_period")) or 12,
        "confidence": result.get("confidence") or "Medium",
    }, False
