from copilot import db, rag
from tests.conftest import make_case


def test_extract_keywords_drops_stop_words_and_short_words():
    assert rag.extract_keywords("How can AI agents help the retail industry with inventory and pricing?") == [
        "agents", "help", "retail", "industry", "inventory",
    ]
    keywords = rag.extract_keywords("what is the best chatbot for banks and banks")
    assert keywords == ["best", "chatbot", "banks"]


def test_calculate_similarity_is_share_of_query_words():
    assert rag.calculate_similarity("retail chatbot", "A chatbot for retail stores") == 1.0
    assert rag.calculate_similarity("retail chatbot demo", "A chatbot") == 1 / 3
    assert rag.calculate_similarity("", "anything") == 0.0
    # words of two chars or fewer never match
    assert rag.calculate_similarity("ai", "ai agents") == 0.0


def test_retrieve_ranks_more_overlap_higher():
    db.insert_cases([
        make_case(name="generic-tool", description="A general purpose helper", quality_score=0.9),
        make_case(name="retail-bot", description="Retail chatbot for inventory questions", quality_score=0.5),
        make_case(name="retail-report", description="Retail sales reports", quality_score=0.7),
    ])

    results = rag.retrieve_from_database("retail chatbot inventory", types=("case",))

    assert [r.title for r in results] == ["retail-bot", "retail-report", "generic-tool"]
    assert results[0].similarity == 1.0
    assert results[0].type == "case"


def test_retrieve_ties_keep_quality_order():
    db.insert_cases([
        make_case(name="low", description="nothing", quality_score=0.2),
        make_case(name="high", description="nothing", quality_score=0.8),
    ])
    results = rag.retrieve_from_database("unrelated words", types=("case",))
    assert [r.title for r in results] == ["high", "low"]


def test_retrieve_includes_trends_for_industry():
    db.save_trend({"name": "Finance agents", "description": "Agents for banks", "industry": "Finance"})
    db.save_trend({"name": "Retail agents", "description": "Agents for shops", "industry": "Retail"})

    results = rag.retrieve_from_database("agents", types=("trend",), industry="Finance")
    assert [r.title for r in results] == ["Finance agents"]
    assert results[0].source == "brainstorm"


def test_build_context_truncates():
    result = rag.RetrievalResult(
        id="1", type="case", title="Big", description="", content="x" * 2000,
        source="GitHub", source_url="https://github.com/a/b",
    )
    context = rag.build_context([result] * 20)

    assert context.startswith("[1] Big\nSource: GitHub - https://github.com/a/b\nContent: ")
    assert len(context) == rag.MAX_CONTEXT_LENGTH
    assert "x" * (rag.BLOCK_MAX_CHARS + 1) not in context


def test_agent_rag_returns_sources(fake_llm):
    db.insert_cases([make_case(name="retail-bot", description="Retail chatbot")])
    fake_llm.replies = ["Use retail-bot [1]"]

    response = rag.agent_rag("retail chatbot ideas", include_types=("case",))

    assert response.answer == "Use retail-bot [1]"
    assert response.retrieved_count == 1
    assert response.sources[0].title == "retail-bot"
    assert "Case library:" in fake_llm.prompts[0]
    assert response.to_dict()["metadata"]["retrievedCount"] == 1


def test_agent_rag_without_hits_asks_for_general_advice(fake_llm):
    fake_llm.replies = ["General thoughts"]

    response = rag.agent_rag("anything", include_types=("case",))

    assert response.retrieved_count == 0
    assert "general advice" in fake_llm.prompts[0]


def test_agent_rag_llm_failure_returns_apology():
    db.insert_cases([make_case()])
    response = rag.agent_rag("agent", include_types=("case",))

    assert response.answer == rag.APOLOGY_ANSWER
    assert response.sources == []
    assert response.retrieved_count == 1
