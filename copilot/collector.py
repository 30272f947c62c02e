import json
from datetime import datetime, timezone
from pathlib import Path

from copilot import config
from copilot import db
from copilot import fetcher
from copilot import hn_fetcher
from copilot import reddit_fetcher

# Fixed run order regardless of how sources are passed
COLLECTORS = {
    "github": fetcher.collect_github,
    "hackernews": hn_fetcher.collect_hackernews,
    "reddit": reddit_fetcher.collect_reddit,
}

SOURCE_LABELS = {
    "github": "GitHub",
    "hackernews": "HackerNews",
    "reddit": "Reddit",
}


def _run_source(name: str) -> list[dict]:
    """Run one collector inside a collection_logs entry."""
    log_id = db.start_collection_log(SOURCE_LABELS[name])
    try:
        items = COLLECTORS[name]()
    except Exception as e:
        print(f"❌ [COLLECTOR] {name} failed: {e}")
        db.finish_collection_log(log_id, "failed", 0, str(e))
        return []

    db.finish_collection_log(log_id, "completed", len(items))
    return items


def dedupe_raw_items(items: list[dict]) -> list[dict]:
    seen = set()
    unique = []
    for item in items:
        key = (item.get("source"), item.get("source_url"))
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def save_raw_file(items: list[dict]) -> Path:
    config.RAW_DATA_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    path = config.RAW_DATA_DIR / f"raw_data_{stamp}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(items, f, indent=2, ensure_ascii=False)
    return path


def collect_all(sources=("github",)) -> list[dict]:
    print("=" * 50)
    print("🚀 [COLLECTOR] Data collection started")
    print("=" * 50)

    db.init_db()

    unknown = [s for s in sources if s not in COLLECTORS]
    if unknown:
        print(f"⚠️ [COLLECTOR] Unknown sources ignored: {', '.join(unknown)}")

    all_items = []
    for name in COLLECTORS:
        if name in sources:
            all_items.extend(_run_source(name))

    items = dedupe_raw_items(all_items)
    path = save_raw_file(items)

    print("\n" + "=" * 50)
    print("📊 [COLLECTOR] Collection stats:")
    print(f"   - Total: {len(items)}")
    for label in SOURCE_LABELS.values():
        print(f"   - {label}: {sum(1 for i in items if i.get('source') == label)}")
    print(f"\n💾 [COLLECTOR] Saved to {path}")
    print("=" * 50)

    return items


def latest_raw_file() -> Path | None:
    """Newest raw_data_*.json, None when nothing was collected yet."""
    if not config.RAW_DATA_DIR.exists():
        return None
    files = sorted(config.RAW_DATA_DIR.glob("raw_data_*.json"))
    return files[-1] if files else None


def load_raw_file(path) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)
