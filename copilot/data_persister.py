"""
Data Persister - Bridge between collectors and the case library
Processes raw records, imports only unseen source URLs and enriches
stored cases with LLM-extracted sales fields.
"""
import time

from copilot import collector
from copilot import config
from copilot import db
from copilot import extract
from copilot.processor import process_raw_data


def import_cases(raw_items: list[dict], min_score: float = None) -> dict:
    """
    Process raw records and insert the ones whose source_url is not stored
    yet, in batches. Returns {"imported", "skipped", "total"}.
    """
    if min_score is None:
        min_score = config.MIN_QUALITY_SCORE

    print(f"\n🔄 [IMPORT] {len(raw_items)} raw records to import...")
    cases, _ = process_raw_data(raw_items, min_score=min_score)

    imported = 0
    skipped = 0
    batch_size = config.IMPORT_BATCH_SIZE

    for start in range(0, len(cases), batch_size):
        batch = cases[start:start + batch_size]
        batch_no = start // batch_size + 1

        try:
            existing = db.get_existing_source_urls([c["source_url"] for c in batch])
            new_cases = [c for c in batch if c["source_url"] not in existing]

            if new_cases:
                imported += db.insert_cases(new_cases)
                print(f"  ✓ [IMPORT] Batch {batch_no}: {len(new_cases)} new")
            else:
                print(f"  - [IMPORT] Batch {batch_no}: 0 new (already stored)")
            skipped += len(batch) - len(new_cases)
        except Exception as e:
            print(f"  ⚠️ [IMPORT] Batch {batch_no} failed: {e}")
            skipped += len(batch)

        time.sleep(config.IMPORT_BATCH_DELAY)

    print("\n📊 [IMPORT] Done:")
    print(f"   - Imported: {imported}")
    print(f"   - Skipped: {skipped}")
    print(f"\n📈 [IMPORT] Cases in database: {db.get_case_count()}")

    return {"imported": imported, "skipped": skipped, "total": len(cases)}


def import_file(path=None) -> dict | None:
    """Import a raw data file, the newest one when no path is given."""
    path = path or collector.latest_raw_file()
    if not path:
        print("❌ [IMPORT] No raw data file found")
        return None

    print(f"📂 [IMPORT] Reading {path}")
    return import_cases(collector.load_raw_file(path))


def enrich_cases(limit: int = 5) -> int:
    """Fill the sales fields of stored cases that have no pain_point yet."""
    cases = db.get_cases_missing_enrichment(limit)
    if not cases:
        print("✅ [IMPORT] Nothing to enrich")
        return 0

    print(f"🧠 [IMPORT] Enriching {len(cases)} cases...")
    projects = [
        {
            "id": c["id"],
            "project_name": c["project_name"],
            "description": c.get("description"),
            "readme_content": c["raw_data"].get("readme"),
            "topics": c["raw_data"].get("topics") or [],
        }
        for c in cases
    ]

    def progress(current, total):
        print(f"   [{current}/{total}]")

    enriched = 0
    for project in extract.batch_extract_structured_data(projects, on_progress=progress):
        fields = {k: project[k] for k in extract.StructuredCaseData.model_fields}
        if db.update_case_fields(project["id"], fields):
            enriched += 1

    print(f"✅ [IMPORT] {enriched} cases enriched")
    return enriched
