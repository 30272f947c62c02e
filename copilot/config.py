"""
Sales Copilot configuration

All tunables for the collectors, the import pipeline, the LLM client
and the web layer. Values come from the environment (.env supported).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent.parent

# ============ GitHub ============

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_API_BASE = "https://api.github.com"
GITHUB_SEARCH_QUERIES = [
    "AI Agent",
    "LLM Agent",
    "GPT Agent",
    "Autonomous Agent",
    "AI automation",
    "Browser Agent",
    "workflow automation",
    "RPA AI",
]
GITHUB_MAX_PAGES = int(os.getenv("GITHUB_MAX_PAGES", "2"))  # low without a token
GITHUB_RATE_LIMIT_DELAY = 2.0
GITHUB_PAGE_DELAY = 2.0
GITHUB_README_LIMIT = 80
GITHUB_README_MAX_CHARS = 15000
GITHUB_README_DELAY = 0.6

# ============ Reddit ============

REDDIT_CLIENT_ID = os.getenv("REDDIT_CLIENT_ID")
REDDIT_CLIENT_SECRET = os.getenv("REDDIT_CLIENT_SECRET")
REDDIT_USER_AGENT = os.getenv("REDDIT_USER_AGENT", "sales-copilot:v1.0 (by /u/sales_copilot)")
REDDIT_BASE_URL = "https://www.reddit.com"
REDDIT_SUBREDDITS = [
    "LocalLLaMA",
    "ChatGPTTools",
    "artificial",
    "MachineLearning",
    "LLMDevs",
]
REDDIT_SEARCH_QUERIES = ["AI Agent", "automation", "LLM application"]
REDDIT_LIMIT = 50
REDDIT_RATE_LIMIT_DELAY = 1.0
REDDIT_SUBREDDIT_DELAY = 2.0

# ============ Hacker News ============

HN_API_BASE = "https://hacker-news.firebaseio.com/v0"
HN_SEARCH_QUERIES = ["AI", "LLM", "agent", "automation"]
HN_LIMIT = 50
HN_RATE_LIMIT_DELAY = 0.5
HN_ITEM_DELAY = 0.2
HN_LOOP_DELAY = 0.3

# Minimum wait once X-RateLimit-Remaining hits 0
RATE_LIMIT_MIN_WAIT = 5.0
USER_AGENT = "SalesCopilot-Collector/1.0"

# ============ Schedule (hours) ============

SCHEDULE_HOURS = {
    "github": int(os.getenv("SCHEDULE_GITHUB_HOURS", "24")),
    "reddit": int(os.getenv("SCHEDULE_REDDIT_HOURS", "12")),
    "hackernews": int(os.getenv("SCHEDULE_HN_HOURS", "6")),
}

# ============ Processing ============

MIN_QUALITY_SCORE = float(os.getenv("MIN_QUALITY_SCORE", "0.3"))
IMPORT_BATCH_SIZE = 50
IMPORT_BATCH_DELAY = 0.3
LLM_BATCH_DELAY = 0.3

# ============ Paths ============

DATA_DIR = Path(os.getenv("COPILOT_DATA_DIR", BASE_DIR / "data"))
RAW_DATA_DIR = DATA_DIR / "raw"
DB_PATH = Path(os.getenv("COPILOT_DB_PATH", DATA_DIR / "copilot.db"))

# ============ LLM ============

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.0-flash")
LLM_FAST_MODEL = os.getenv("LLM_FAST_MODEL", "gemini-2.0-flash-lite")

# ============ Web ============

PORT = int(os.getenv("PORT", "8080"))
CRON_SECRET = os.getenv("CRON_SECRET", "development-secret")

# ============ Tasks ============

TASK_MAX_AGE_SECONDS = 30 * 60
TASK_CLEANUP_HOURS = 1
