"""
Reddit Fetcher
Hot posts from AI subreddits whose titles match the tracked queries.
Uses PRAW when API credentials exist, the public JSON listing otherwise.
"""
import time
from datetime import datetime, timezone

import praw

from copilot import config
from copilot.ratelimit import rate_limited_get


def get_reddit_client() -> praw.Reddit | None:
    """Read-only PRAW client, or None without credentials."""
    if not config.REDDIT_CLIENT_ID or not config.REDDIT_CLIENT_SECRET:
        return None

    try:
        return praw.Reddit(
            client_id=config.REDDIT_CLIENT_ID,
            client_secret=config.REDDIT_CLIENT_SECRET,
            user_agent=config.REDDIT_USER_AGENT,
        )
    except Exception as e:
        print(f"⚠️ [REDDIT] Client error: {e}")
        return None


def _submission_to_dict(submission) -> dict:
    return {
        "title": submission.title,
        "url": submission.url,
        "permalink": submission.permalink,
        "selftext": submission.selftext or "",
        "score": submission.score,
        "author": str(submission.author) if submission.author else "[deleted]",
        "created_utc": submission.created_utc,
        "num_comments": submission.num_comments,
        "stickied": submission.stickied,
    }


def fetch_subreddit_posts(subreddit: str, reddit: praw.Reddit | None = None) -> list[dict]:
    """Hot posts of one subreddit as plain dicts."""
    if reddit is not None:
        return [
            _submission_to_dict(s)
            for s in reddit.subreddit(subreddit).hot(limit=config.REDDIT_LIMIT)
        ]

    response = rate_limited_get(
        f"{config.REDDIT_BASE_URL}/r/{subreddit}/hot.json",
        headers={"User-Agent": config.REDDIT_USER_AGENT},
        params={"limit": config.REDDIT_LIMIT},
        delay=config.REDDIT_RATE_LIMIT_DELAY,
    )
    if response.status_code != 200:
        print(f"  ⚠️ [REDDIT] r/{subreddit} status: {response.status_code}")
        return []

    children = response.json().get("data", {}).get("children", [])
    return [child.get("data", {}) for child in children]


def is_relevant(title: str) -> bool:
    title = (title or "").lower()
    return any(q.lower() in title for q in config.REDDIT_SEARCH_QUERIES)


def to_raw_post(post: dict, subreddit: str) -> dict:
    return {
        "source": "Reddit",
        "source_type": "post",
        "source_url": f"https://reddit.com{post.get('permalink', '')}",
        "project_name": (post.get("title") or "")[:100],
        "description": post.get("selftext") or post.get("title"),
        "stars": post.get("score") or 0,
        "author": post.get("author"),
        "created_at": datetime.fromtimestamp(post.get("created_utc") or 0, tz=timezone.utc).isoformat(),
        "topics": ["Reddit", subreddit],
        "num_comments": post.get("num_comments"),
        "collected_at": datetime.now(timezone.utc).isoformat(),
    }


def collect_reddit() -> list[dict]:
    """Relevant hot posts across REDDIT_SUBREDDITS, unique by post URL."""
    print("\n🔄 [REDDIT] Collecting posts...")

    reddit = get_reddit_client()
    if reddit is None:
        print("   [REDDIT] No API credentials, using the public JSON listing")

    results = []
    seen_urls = set()

    for subreddit in config.REDDIT_SUBREDDITS:
        print(f"📊 [REDDIT] r/{subreddit}")

        try:
            for post in fetch_subreddit_posts(subreddit, reddit):
                if post.get("stickied") or not is_relevant(post.get("title")):
                    continue
                if post.get("url") in seen_urls:
                    continue
                seen_urls.add(post.get("url"))
                results.append(to_raw_post(post, subreddit))

            print(f"  ✓ {len(results)} relevant posts so far")
        except Exception as e:
            print(f"  ❌ [REDDIT] r/{subreddit}: {e}")

        time.sleep(config.REDDIT_SUBREDDIT_DELAY)

    print(f"✅ [REDDIT] {len(results)} posts collected")
    return results


if __name__ == "__main__":
    for p in collect_reddit()[:10]:
        print(f"  [{p['stars']}] {p['project_name'][:60]}")
