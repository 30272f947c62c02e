"""
GitHub Fetcher
Searches repositories for the configured agent/automation queries
"""
import time
from datetime import datetime, timezone

from copilot import config
from copilot.ratelimit import rate_limited_get


def _headers(accept: str = "application/vnd.github.v3+json") -> dict:
    headers = {"Accept": accept}
    if config.GITHUB_TOKEN:
        headers["Authorization"] = f"Bearer {config.GITHUB_TOKEN}"
    return headers


def search_repositories(query: str, page: int = 1, per_page: int = 30) -> list[dict]:
    """One page of the repository search, most starred first."""
    response = rate_limited_get(
        f"{config.GITHUB_API_BASE}/search/repositories",
        headers=_headers(),
        params={
            "q": f"{query} AI",
            "sort": "stars",
            "order": "desc",
            "page": page,
            "per_page": per_page,
        },
        delay=config.GITHUB_RATE_LIMIT_DELAY,
    )
    if response.status_code != 200:
        print(f"   ⚠️ [GITHUB] Page {page}: {response.status_code}")
        return []
    return response.json().get("items", [])


def fetch_readme(full_name: str) -> str | None:
    """Raw README text, or None when the repo has none."""
    try:
        response = rate_limited_get(
            f"{config.GITHUB_API_BASE}/repos/{full_name}/readme",
            headers=_headers("application/vnd.github.raw+json"),
            delay=0.5,
        )
        if response.status_code != 200:
            return None
        return response.text
    except Exception as e:
        print(f"   ⚠️ [GITHUB] README {full_name}: {e}")
        return None


def to_raw_project(repo: dict) -> dict:
    """Map a search API item onto the collector's raw record."""
    return {
        "source": "GitHub",
        "source_type": "repository",
        "source_url": repo["html_url"],
        "project_name": repo["name"],
        "full_name": repo["full_name"],
        "description": repo.get("description"),
        "stars": repo.get("stargazers_count", 0),
        "forks": repo.get("forks_count", 0),
        "language": repo.get("language"),
        "topics": repo.get("topics") or [],
        "owner_type": (repo.get("owner") or {}).get("type"),
        "created_at": repo.get("created_at"),
        "updated_at": repo.get("updated_at"),
        "license": (repo.get("license") or {}).get("name"),
        "collected_at": datetime.now(timezone.utc).isoformat(),
    }


def collect_github() -> list[dict]:
    """Walk every search query page by page and return unique projects."""
    print("\n🔄 [GITHUB] Collecting repositories...")

    results = []
    seen_urls = set()

    for query in config.GITHUB_SEARCH_QUERIES:
        print(f"📊 [GITHUB] Query: \"{query}\"")

        for page in range(1, config.GITHUB_MAX_PAGES + 1):
            try:
                repos = search_repositories(query, page)
                if not repos:
                    break

                for repo in repos:
                    if repo["html_url"] in seen_urls:
                        continue
                    seen_urls.add(repo["html_url"])

                    project = to_raw_project(repo)

                    # README only for the first projects, it costs one request each
                    if len(results) < config.GITHUB_README_LIMIT:
                        readme = fetch_readme(repo["full_name"])
                        project["readme_content"] = readme[:config.GITHUB_README_MAX_CHARS] if readme else None
                        print(f"    ✓ {repo['name']}: {'README OK' if readme else 'no README'}")
                        time.sleep(config.GITHUB_README_DELAY)
                    else:
                        project["readme_content"] = None

                    results.append(project)

                print(f"  ✓ Page {page}: {len(repos)} repos")
            except Exception as e:
                print(f"  ❌ [GITHUB] Error: {e}")

            time.sleep(config.GITHUB_PAGE_DELAY)

    print(f"✅ [GITHUB] {len(results)} projects collected")
    return results


if __name__ == "__main__":
    for p in collect_github()[:10]:
        print(f"  [{p['stars']}] {p['full_name']}")
