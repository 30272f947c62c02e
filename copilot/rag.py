"""
Copilot RAG
Keyword-overlap retrieval over the case library followed by a single
prompt to the LLM. No embeddings: relevance is the share of query words
found in a record's text.
"""
from dataclasses import asdict, dataclass, field

from copilot import db
from copilot import llm

MATCH_COUNT = 5
CANDIDATE_POOL = 50
BLOCK_MAX_CHARS = 500
MAX_CONTEXT_LENGTH = 4000

STOP_WORDS = {
    "the", "a", "an", "is", "are", "of", "in", "on", "and", "for", "to",
    "how", "what", "which", "who", "with", "can", "you", "me", "our", "about",
}

APOLOGY_ANSWER = "Sorry, something went wrong while generating the answer. Please try again later."


@dataclass
class RetrievalResult:
    id: str
    type: str                   # case | scenario | trend
    title: str
    description: str
    content: str
    source: str
    source_url: str | None
    metadata: dict = field(default_factory=dict)
    similarity: float = 0.0


@dataclass
class SourceReference:
    title: str
    url: str | None
    type: str
    relevance: float


@dataclass
class RAGResponse:
    answer: str
    sources: list[SourceReference]
    retrieved_count: int
    context_length: int

    def to_dict(self) -> dict:
        return {
            "answer": self.answer,
            "sources": [asdict(s) for s in self.sources],
            "metadata": {
                "retrievedCount": self.retrieved_count,
                "contextLength": self.context_length,
            },
        }


def extract_keywords(text: str) -> list[str]:
    """Up to five distinct words longer than two chars, stop words removed."""
    keywords = []
    for word in (text or "").split():
        if len(word) > 2 and word.lower() not in STOP_WORDS and word not in keywords:
            keywords.append(word)
    return keywords[:5]


def calculate_similarity(query: str, text: str) -> float:
    query_words = (query or "").lower().split()
    text_lower = (text or "").lower()
    matches = sum(1 for w in query_words if len(w) > 2 and w in text_lower)
    return matches / max(len(query_words), 1)


def _candidates(record_type: str, industry: str = None) -> list[dict]:
    if record_type == "case":
        return db.get_cases(industry=industry, limit=CANDIDATE_POOL)
    if record_type == "scenario":
        return db.get_scenarios(industry=industry, limit=CANDIDATE_POOL)
    if record_type == "trend":
        trends = db.get_trends(limit=CANDIDATE_POOL)
        return [t for t in trends if not industry or t.get("industry") == industry]
    return []


def _to_result(row: dict, record_type: str, query: str) -> RetrievalResult:
    title = row.get("project_name") or row.get("name") or ""
    description = row.get("description") or row.get("use_case") or ""
    return RetrievalResult(
        id=row["id"],
        type=record_type,
        title=title,
        description=description,
        content=row.get("description") or row.get("use_case") or row.get("outcome") or "",
        source=row.get("source") or f"{record_type}s",
        source_url=row.get("source_url") or row.get("url"),
        metadata={
            "industry": row.get("industry"),
            "use_case": row.get("use_case"),
            "pain_point": row.get("pain_point"),
            "technology": row.get("technology"),
        },
        similarity=calculate_similarity(query, f"{title} {description}"),
    )


def retrieve_from_database(query: str, types=("case", "scenario"),
                           industry: str = None, limit: int = MATCH_COUNT) -> list[RetrievalResult]:
    results = []
    for record_type in types:
        try:
            rows = _candidates(record_type, industry)
        except Exception as e:
            print(f"⚠️ [RAG] {record_type} search failed: {e}")
            continue
        results.extend(_to_result(row, record_type, query) for row in rows)

    # stable: equal similarity keeps the quality order
    results.sort(key=lambda r: r.similarity, reverse=True)
    return results[:limit]


def build_context(results: list[RetrievalResult]) -> str:
    blocks = []
    for i, r in enumerate(results, 1):
        source = f"{r.source} - {r.source_url}" if r.source_url else r.source
        blocks.append(f"[{i}] {r.title}\nSource: {source}\nContent: {r.content[:BLOCK_MAX_CHARS]}\n---")
    return "\n\n".join(blocks)[:MAX_CONTEXT_LENGTH]


def _system_prompt(mode: str, context: str, has_results: bool) -> str:
    if mode == "brainstorm":
        prompt = """You are an AI sales consultant and industry analyst. Answer the user's question using the case library below.

Requirements:
1. Base every point on the provided cases
2. Cite the source whenever you mention a specific case
3. Focus on industry scenarios, customer pain points and results"""
        if has_results:
            prompt += f"\n\nCase library:\n{context}"
        else:
            prompt += ("\n\nThe case library has no related data. Answer from your own expertise, "
                       "but state that \"this is general advice, not based on specific cases\".")
        return prompt

    if mode == "case_search":
        return f"""You are a case search assistant. Recommend the most relevant cases below to the user.

Requirements:
1. Match cases to the user's need
2. List the key facts of each case
3. Explain why each case is relevant

Case library:
{context or 'No data'}"""

    return f"""You are a sales assistant. Write a sales script based on the cases below.

Requirements:
1. Cite specific cases to make it convincing
2. Highlight customer pain points and the solution
3. Include a value proposition and a call to action

Case library:
{context or 'No data'}"""


def agent_rag(query: str, mode: str = "brainstorm", industry: str = None,
              include_types=("case", "scenario")) -> RAGResponse:
    print(f"🔎 [RAG] Query: {query} | mode: {mode} | industry: {industry}")

    retrieved = retrieve_from_database(query, types=include_types, industry=industry)
    print(f"   [RAG] Retrieved {len(retrieved)} documents")

    context = build_context(retrieved)
    system_prompt = _system_prompt(mode, context, bool(retrieved))

    try:
        answer = llm.call_llm(f"{system_prompt}\n\nUser question: {query}\n\nAnswer:")
    except llm.LLMError as e:
        print(f"❌ [RAG] LLM error: {e}")
        return RAGResponse(APOLOGY_ANSWER, [], len(retrieved), len(context))

    sources = [SourceReference(r.title, r.source_url, r.type, r.similarity) for r in retrieved]
    return RAGResponse(answer, sources, len(retrieved), len(context))
