from copilot import processor
from tests.conftest import make_raw


def test_quality_score_star_tiers():
    bare = {"description": "", "topics": [], "source": "Reddit"}
    assert processor.calculate_quality_score({**bare, "stars": 20000}) == 0.5
    assert processor.calculate_quality_score({**bare, "stars": 5000}) == 0.4
    assert processor.calculate_quality_score({**bare, "stars": 500}) == 0.3
    assert processor.calculate_quality_score({**bare, "stars": 50}) == 0.2
    assert processor.calculate_quality_score({**bare, "stars": 10}) == 0.1
    assert processor.calculate_quality_score({"source": "HackerNews"}) == 0.1


def test_quality_score_is_capped():
    item = make_raw(stars=50000, description="A very complete description of the project")
    assert processor.calculate_quality_score(item) == 1.0


def test_quality_score_bonuses():
    item = {"stars": 5, "description": "x" * 21, "topics": ["a"], "source": "GitHub"}
    assert processor.calculate_quality_score(item) == 0.6
    item["description"] = "x" * 20
    assert processor.calculate_quality_score(item) == 0.4


def test_infer_industry_uses_table_order():
    assert processor.infer_industry({"project_name": "bank-bot", "description": "hospital payments"}) == "Finance"
    assert processor.infer_industry({"description": "A tutor for every student"}) == "Education"
    assert processor.infer_industry({"topics": ["warehouse"]}) == "Logistics"
    assert processor.infer_industry({"description": "nothing special"}) == "General"


def test_infer_use_case():
    assert processor.infer_use_case({"description": "A chatbot for support"}) == "Customer Service"
    assert processor.infer_use_case({"description": "Personal assistant"}) == "AI Assistant"
    assert processor.infer_use_case({"project_name": "doc-summarizer"}) == "Summarization"
    assert processor.infer_use_case({"description": "zzz"}) == "Other"


def test_extract_technology_order_and_uniqueness():
    item = {
        "project_name": "browser-agent",
        "description": "Uses Playwright and GPT with a vector store",
        "topics": ["Agent", "LLM"],
        "language": "Python",
    }
    assert processor.extract_technology(item) == ["agent", "llm", "Python", "LLM", "RAG", "Agent", "Browser"]


def test_normalize_item_keeps_raw_fields():
    case = processor.normalize_item(make_raw(readme_content="# README", forks=3))
    assert case["project_name"] == "agent-kit"
    assert case["outcome"] == case["description"]
    assert case["raw_data"]["readme"] == "# README"
    assert case["raw_data"]["forks"] == 3
    assert case["is_verified"] is False


def test_dedupe_cases_keeps_first_and_drops_missing_urls():
    cases = [
        {"source_url": "https://a", "project_name": "first"},
        {"source_url": "https://a", "project_name": "second"},
        {"source_url": "", "project_name": "no url"},
        {"source_url": "https://b", "project_name": "third"},
    ]
    assert [c["project_name"] for c in processor.dedupe_cases(cases)] == ["first", "third"]


def test_process_raw_data_prefers_higher_score_duplicate():
    low = make_raw(name="low", url="https://github.com/x/same", stars=1)
    high = make_raw(name="high", url="https://github.com/x/same", stars=20000)
    other = make_raw(name="other", stars=50)

    cases, stats = processor.process_raw_data([low, other, high])

    assert [c["project_name"] for c in cases] == ["high", "other"]
    assert stats["total"] == 2
    assert stats["high_quality"] == 1
    # 0.7 is the top of the medium band
    assert stats["medium_quality"] == 1


def test_process_raw_data_min_score_filter():
    cases, _ = processor.process_raw_data(
        [make_raw(name="weak", stars=0, description="", topics=(), source="Reddit")],
        min_score=0.3,
    )
    assert cases == []
