"""
Hacker News Fetcher
Keeps top stories whose titles mention the tracked AI keywords
"""
import re
import time
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from copilot import config
from copilot.ratelimit import rate_limited_get


def clean_html(text: str) -> str:
    """HN item text is HTML; flatten it to plain text."""
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    plain = soup.get_text(separator="\n", strip=True)
    return re.sub(r'\n\s*\n', '\n\n', plain)


def is_relevant(title: str, keywords: list[str] = None) -> bool:
    title = (title or "").lower()
    return any(k.lower() in title for k in (keywords or config.HN_SEARCH_QUERIES))


def fetch_top_story_ids() -> list[int]:
    response = rate_limited_get(
        f"{config.HN_API_BASE}/topstories.json",
        delay=config.HN_RATE_LIMIT_DELAY,
    )
    response.raise_for_status()
    return response.json()[:config.HN_LIMIT]


def fetch_item(item_id: int) -> dict | None:
    """Single HN item, None on a non-200 answer."""
    response = rate_limited_get(
        f"{config.HN_API_BASE}/item/{item_id}.json",
        delay=config.HN_ITEM_DELAY,
    )
    if response.status_code != 200:
        return None
    return response.json()


def to_raw_story(item: dict) -> dict:
    return {
        "source": "HackerNews",
        "source_type": "story",
        "source_url": item["url"],
        "project_name": item.get("title"),
        "description": clean_html(item.get("text")) or item.get("title"),
        "stars": item.get("score") or 0,
        "author": item.get("by"),
        "created_at": datetime.fromtimestamp(item.get("time", 0), tz=timezone.utc).isoformat(),
        "topics": ["HackerNews", "Discussion"],
        "collected_at": datetime.now(timezone.utc).isoformat(),
    }


def collect_hackernews() -> list[dict]:
    """Top stories filtered by keyword, unique by URL."""
    print("\n🔄 [HN] Collecting top stories...")

    results = []
    seen_urls = set()

    try:
        story_ids = fetch_top_story_ids()
    except Exception as e:
        print(f"❌ [HN] Top stories unavailable: {e}")
        return results

    for i, story_id in enumerate(story_ids):
        try:
            item = fetch_item(story_id)
            if item and item.get("url") and is_relevant(item.get("title")) \
                    and item["url"] not in seen_urls:
                seen_urls.add(item["url"])
                results.append(to_raw_story(item))

            if (i + 1) % 10 == 0:
                print(f"  ✓ Fetched {i + 1}/{len(story_ids)}")
        except Exception as e:
            print(f"  ⚠️ [HN] Story {story_id}: {e}")

        time.sleep(config.HN_LOOP_DELAY)

    print(f"✅ [HN] {len(results)} stories collected")
    return results


if __name__ == "__main__":
    for s in collect_hackernews()[:10]:
        print(f"  [{s['stars']}] {s['project_name']}")
