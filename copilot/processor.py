"""
Processor - raw collector records to case records

normalize -> score -> sort -> dedupe -> filter, plus distribution stats.
Classification is plain keyword matching against the tables below.
"""
from collections import Counter

# Table order decides ties: the first label with a hit wins
INDUSTRY_KEYWORDS = {
    "Finance": ["finance", "bank", "payment", "trading", "crypto", "fintech", "loan"],
    "Healthcare": ["health", "medical", "doctor", "hospital", "patient", "clinic", "pharma"],
    "Education": ["education", "learning", "school", "student", "course", "tutor"],
    "Retail": ["e-commerce", "shop", "retail", "store", "mall", "commerce", "amazon"],
    "Logistics": ["logistics", "shipping", "delivery", "transport", "warehouse", "supply"],
    "Manufacturing": ["manufacturing", "factory", "production", "industrial", "assembly"],
    "Food & Beverage": ["restaurant", "food", "kitchen", "catering", "menu"],
    "Real Estate": ["real estate", "property", "housing", "building", "land"],
}
DEFAULT_INDUSTRY = "General"

USE_CASE_KEYWORDS = [
    ("chatbot", "Customer Service"),
    ("assistant", "AI Assistant"),
    ("automation", "Process Automation"),
    ("rpa", "RPA"),
    ("data", "Data Analysis"),
    ("content", "Content Generation"),
    ("writing", "Writing Assistant"),
    ("translation", "Translation"),
    ("summar", "Summarization"),
    ("search", "Search"),
    ("qa", "Q&A"),
    ("knowledge", "Knowledge Base"),
    ("test", "Automated Testing"),
]
DEFAULT_USE_CASE = "Other"

TECH_KEYWORDS = {
    "LLM": ["gpt", "llm", "language model", "openai", "anthropic", "qwen", "claude"],
    "LangChain": ["langchain", "lang smith"],
    "RAG": ["rag", "retrieval", "vector", "pinecone", "weaviate", "chroma"],
    "Agent": ["agent", "autonomous", "crew", "multi-agent"],
    "OCR": ["ocr", "tesseract", "text recognition"],
    "TTS": ["tts", "text to speech", "elevenlabs", "coqui"],
    "Speech": ["speech", "whisper", "stt", "voice"],
    "API": ["api", "rest", "graphql", "endpoint"],
    "Browser": ["playwright", "puppeteer", "selenium", "browser"],
    "Database": ["postgres", "mysql", "mongodb", "redis", "supabase"],
    "Cloud": ["aws", "azure", "gcp", "cloud"],
}


def _classification_text(item: dict) -> str:
    topics = " ".join(item.get("topics") or [])
    return f"{item.get('project_name') or ''} {item.get('description') or ''} {topics}".lower()


def infer_industry(item: dict) -> str:
    text = _classification_text(item)
    for industry, keywords in INDUSTRY_KEYWORDS.items():
        if any(k in text for k in keywords):
            return industry
    return DEFAULT_INDUSTRY


def infer_use_case(item: dict) -> str:
    text = _classification_text(item)
    for keyword, label in USE_CASE_KEYWORDS:
        if keyword in text:
            return label
    return DEFAULT_USE_CASE


def extract_technology(item: dict) -> list[str]:
    """Lowercased topics, then the language, then keyword labels. No repeats."""
    techs = []

    def add(value):
        if value and value not in techs:
            techs.append(value)

    for topic in item.get("topics") or []:
        add(topic.lower())
    add(item.get("language"))

    text = f"{item.get('project_name') or ''} {item.get('description') or ''}".lower()
    for tech, keywords in TECH_KEYWORDS.items():
        if any(k in text for k in keywords):
            add(tech)

    return techs


def calculate_quality_score(item: dict) -> float:
    """
    Additive score in [0, 1]:
    stars (0.1-0.5), a real description (0.2), topics (0.2), GitHub source (0.1).
    """
    stars = item.get("stars") or 0
    if stars > 10000:
        score = 0.5
    elif stars > 1000:
        score = 0.4
    elif stars > 100:
        score = 0.3
    elif stars > 10:
        score = 0.2
    else:
        score = 0.1

    if len(item.get("description") or "") > 20:
        score += 0.2
    if item.get("topics"):
        score += 0.2
    if item.get("source") == "GitHub":
        score += 0.1

    return round(min(score, 1.0), 2)


def normalize_item(item: dict) -> dict:
    """Raw collector record -> case record (not yet persisted)."""
    return {
        "project_name": item.get("project_name") or item.get("name") or "Unknown",
        "description": item.get("description"),
        "industry": infer_industry(item),
        "use_case": infer_use_case(item),
        "pain_point": None,
        "technology": extract_technology(item),
        "outcome": item.get("description"),
        "source": item.get("source") or "GitHub",
        "source_url": item.get("source_url") or item.get("html_url") or "",
        "quality_score": calculate_quality_score(item),
        "is_verified": False,
        "raw_data": {
            "stars": item.get("stars"),
            "forks": item.get("forks"),
            "language": item.get("language"),
            "description": item.get("description"),
            "topics": item.get("topics"),
            "author": item.get("author"),
            "readme": item.get("readme_content"),
        },
    }


def dedupe_cases(cases: list[dict]) -> list[dict]:
    """First record per source_url wins; records without a URL are dropped."""
    seen = set()
    unique = []
    for case in cases:
        url = case.get("source_url")
        if not url or url in seen:
            continue
        seen.add(url)
        unique.append(case)
    return unique


def build_stats(cases: list[dict]) -> dict:
    technologies = Counter()
    for case in cases:
        technologies.update(case["technology"])

    return {
        "total": len(cases),
        "high_quality": sum(1 for c in cases if c["quality_score"] > 0.7),
        "medium_quality": sum(1 for c in cases if 0.4 < c["quality_score"] <= 0.7),
        "low_quality": sum(1 for c in cases if c["quality_score"] <= 0.4),
        "industries": Counter(c["industry"] for c in cases),
        "use_cases": Counter(c["use_case"] for c in cases),
        "technologies": technologies,
    }


def process_raw_data(items: list[dict], min_score: float = 0.0) -> tuple[list[dict], dict]:
    print(f"📦 [PROCESS] Processing {len(items)} raw records...")

    cases = [normalize_item(item) for item in items]
    # sorted() is stable, so equal scores keep collection order
    cases = sorted(cases, key=lambda c: c["quality_score"], reverse=True)
    cases = dedupe_cases(cases)
    cases = [c for c in cases if c["quality_score"] >= min_score]

    stats = build_stats(cases)

    print(f"✅ [PROCESS] {stats['total']} unique records")
    print(f"   High: {stats['high_quality']} | Medium: {stats['medium_quality']} | Low: {stats['low_quality']}")
    for industry, count in stats["industries"].most_common():
        print(f"   {industry}: {count}")

    return cases, stats
