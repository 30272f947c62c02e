"""
Built-in sample cases shown while the case library is empty
"""

SAMPLE_CASES = [
    {
        "id": "1",
        "project_name": "AutoGPT",
        "industry": "General",
        "use_case": "AI Assistant",
        "pain_point": "Complex multi-step tasks need to be automated",
        "technology": ["GPT-4", "LangChain", "Python"],
        "outcome": "Autonomous agent that completes multi-step tasks",
        "source": "GitHub",
        "source_url": "https://github.com/Significant-Gravitas/AutoGPT",
        "quality_score": 0.95,
    },
    {
        "id": "2",
        "project_name": "LangChain",
        "industry": "General",
        "use_case": "LLM Application Development",
        "pain_point": "Building LLM applications is hard",
        "technology": ["Python", "LLM", "RAG", "Vector DB"],
        "outcome": "Framework that simplifies LLM application development",
        "source": "GitHub",
        "source_url": "https://github.com/langchain-ai/langchain",
        "quality_score": 0.92,
    },
    {
        "id": "3",
        "project_name": "BrowserGPT",
        "industry": "General",
        "use_case": "Browser Automation",
        "pain_point": "Repetitive browser work is time consuming",
        "technology": ["Playwright", "GPT-4", "Node.js"],
        "outcome": "AI driven browser automation",
        "source": "GitHub",
        "source_url": "https://github.com/agents-ai/browser-gpt",
        "quality_score": 0.85,
    },
    {
        "id": "4",
        "project_name": "ChatGPT-Next-Web",
        "industry": "General",
        "use_case": "Customer Service",
        "pain_point": "Teams need a customized ChatGPT interface",
        "technology": ["Next.js", "ChatGPT API", "Vercel"],
        "outcome": "One-click private ChatGPT deployment",
        "source": "GitHub",
        "source_url": "https://github.com/ChatGPTNextWeb/ChatGPT-Next-Web",
        "quality_score": 0.88,
    },
    {
        "id": "5",
        "project_name": "DocTer",
        "industry": "Healthcare",
        "use_case": "Medical Document Processing",
        "pain_point": "Medical paperwork is slow to process",
        "technology": ["OCR", "LLM", "Python"],
        "outcome": "Automated medical document processing and analysis",
        "source": "GitHub",
        "source_url": "https://github.com/medical-ai/doc-ter",
        "quality_score": 0.78,
    },
    {
        "id": "6",
        "project_name": "FinGPT",
        "industry": "Finance",
        "use_case": "Financial Analysis",
        "pain_point": "Financial data analysis takes too long",
        "technology": ["LLM", "Python", "Pandas"],
        "outcome": "Open source financial language model",
        "source": "GitHub",
        "source_url": "https://github.com/AI4Finance-Foundation/FinGPT",
        "quality_score": 0.82,
    },
    {
        "id": "7",
        "project_name": "ShopBot",
        "industry": "Retail",
        "use_case": "E-commerce Customer Service",
        "pain_point": "E-commerce support is expensive",
        "technology": ["GPT-4", "RAG", "E-commerce API"],
        "outcome": "Customer service bot for online shops",
        "source": "GitHub",
        "source_url": "https://github.com/retail-ai/shop-bot",
        "quality_score": 0.75,
    },
    {
        "id": "8",
        "project_name": "EduMate",
        "industry": "Education",
        "use_case": "Tutoring",
        "pain_point": "Personal tutoring is costly",
        "technology": ["LLM", "RAG", "Python"],
        "outcome": "AI driven personal learning assistant",
        "source": "GitHub",
        "source_url": "https://github.com/education-ai/edu-mate",
        "quality_score": 0.71,
    },
]


def get_sample_cases() -> list[dict]:
    return [dict(case) for case in SAMPLE_CASES]
