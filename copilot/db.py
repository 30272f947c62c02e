"""
SQLite Database Layer for Sales Copilot
Case library, scenarios, trends, collection logs and chat history
"""
import json
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from copilot import config

DB_PATH = config.DB_PATH
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

CASE_COLUMNS = [
    "project_name", "description", "industry", "use_case", "technology",
    "quality_score", "source", "source_url", "raw_data", "is_verified",
    "pain_point", "outcome", "solution_approach", "business_function",
    "target_company", "implementation_complexity", "competitive_advantage",
    "use_case_summary",
]
ENRICHMENT_COLUMNS = [
    "pain_point", "outcome", "solution_approach", "business_function",
    "target_company", "implementation_complexity", "competitive_advantage",
    "use_case_summary", "industry", "use_case", "is_verified",
]

DEFAULT_INDUSTRIES = [
    ("Manufacturing", "Manufacturing industry"),
    ("Retail", "Retail and e-commerce"),
    ("Finance", "Financial services"),
    ("Healthcare", "Healthcare"),
    ("Education", "Education"),
    ("Logistics", "Logistics and supply chain"),
    ("Real Estate", "Real estate"),
    ("Food & Beverage", "Food and beverage"),
]

DEFAULT_SCENARIOS = [
    ("Customer Service", "General", "Service", "AI agents answering customer enquiries", "medium"),
    ("Process Automation", "General", "Automation", "Automating repetitive back-office work", "medium"),
    ("Data Analysis", "General", "Analytics", "Data collection and report generation", "high"),
    ("Content Generation", "General", "Content", "Automated marketing content", "low"),
    ("ERP Automation", "Manufacturing", "Enterprise Software", "Automated ERP data entry", "high"),
    ("Inventory Management", "Retail", "Operations", "Inventory monitoring and alerts", "medium"),
    ("Risk Assessment", "Finance", "Risk", "AI driven risk assessment", "high"),
]


@contextmanager
def get_connection():
    """Context manager for database connections."""
    path = Path(DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dump(value):
    return json.dumps(value, ensure_ascii=False) if value is not None else None


def _load(value, default=None):
    if not value:
        return default
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return default


def _case_from_row(row) -> dict:
    case = dict(row)
    case["technology"] = _load(case.get("technology"), [])
    case["raw_data"] = _load(case.get("raw_data"), {})
    case["is_verified"] = bool(case.get("is_verified"))
    return case


def _case_params(case: dict) -> tuple:
    values = []
    for col in CASE_COLUMNS:
        value = case.get(col)
        if col in ("technology", "raw_data"):
            value = _dump(value if value is not None else ([] if col == "technology" else {}))
        elif col == "is_verified":
            value = int(bool(value))
        values.append(value)
    return tuple(values)


def init_db():
    """Create all tables if they don't exist and seed lookup data."""
    with get_connection() as conn:
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))

        for name, description in DEFAULT_INDUSTRIES:
            conn.execute("""
                INSERT OR IGNORE INTO industries (id, name, description)
                VALUES (?, ?, ?)
            """, (_new_id(), name, description))

        for name, industry, category, description, complexity in DEFAULT_SCENARIOS:
            conn.execute("""
                INSERT OR IGNORE INTO scenarios (id, name, industry, category, description, complexity)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (_new_id(), name, industry, category, description, complexity))
    print("   [DB] Database initialized.")


# ============ Case Operations ============

def insert_cases(cases: list[dict]) -> int:
    """
    Insert new cases in one transaction. A duplicate source_url fails the
    whole batch (sqlite3.IntegrityError) and nothing is written.
    """
    columns = ", ".join(["id"] + CASE_COLUMNS)
    placeholders = ", ".join("?" * (len(CASE_COLUMNS) + 1))
    with get_connection() as conn:
        conn.executemany(
            f"INSERT INTO cases ({columns}) VALUES ({placeholders})",
            [(_new_id(),) + _case_params(c) for c in cases],
        )
    return len(cases)


def upsert_case(case: dict) -> str:
    """Insert a case or overwrite the one with the same source_url, return its ID."""
    columns = ", ".join(["id"] + CASE_COLUMNS)
    placeholders = ", ".join("?" * (len(CASE_COLUMNS) + 1))
    updates = ", ".join(f"{c} = excluded.{c}" for c in CASE_COLUMNS if c != "source_url")
    with get_connection() as conn:
        cursor = conn.execute(f"""
            INSERT INTO cases ({columns}) VALUES ({placeholders})
            ON CONFLICT(source_url) DO UPDATE SET
                {updates},
                updated_at = CURRENT_TIMESTAMP
            RETURNING id
        """, (_new_id(),) + _case_params(case))
        return cursor.fetchone()[0]


def get_existing_source_urls(urls: list[str]) -> set[str]:
    if not urls:
        return set()
    placeholders = ", ".join("?" * len(urls))
    with get_connection() as conn:
        rows = conn.execute(
            f"SELECT source_url FROM cases WHERE source_url IN ({placeholders})",
            list(urls),
        ).fetchall()
        return {row["source_url"] for row in rows}


def get_cases(industry: str = None, use_case: str = None,
              limit: int = 20, offset: int = 0, source: str = None) -> list[dict]:
    """Cases ordered by quality score, then newest first."""
    query = "SELECT * FROM cases WHERE 1=1"
    params = []
    if industry:
        query += " AND industry = ?"
        params.append(industry)
    if use_case:
        query += " AND use_case = ?"
        params.append(use_case)
    if source:
        query += " AND source = ?"
        params.append(source)
    query += " ORDER BY quality_score DESC, created_at DESC LIMIT ? OFFSET ?"
    params.extend([limit, offset])

    with get_connection() as conn:
        rows = conn.execute(query, params).fetchall()
        return [_case_from_row(row) for row in rows]


def get_case_by_id(case_id: str) -> dict | None:
    with get_connection() as conn:
        row = conn.execute("SELECT * FROM cases WHERE id = ?", (case_id,)).fetchone()
        return _case_from_row(row) if row else None


def search_cases(keyword: str, limit: int = 20) -> list[dict]:
    """Case-insensitive match on project name or description."""
    pattern = f"%{keyword}%"
    with get_connection() as conn:
        rows = conn.execute("""
            SELECT * FROM cases
            WHERE project_name LIKE ? OR description LIKE ?
            ORDER BY quality_score DESC
            LIMIT ?
        """, (pattern, pattern, limit)).fetchall()
        return [_case_from_row(row) for row in rows]


def get_case_count() -> int:
    with get_connection() as conn:
        return conn.execute("SELECT COUNT(*) FROM cases").fetchone()[0]


def update_case_fields(case_id: str, fields: dict) -> bool:
    """Overwrite enrichment fields of one case. Unknown keys are ignored."""
    updates = {k: v for k, v in fields.items() if k in ENRICHMENT_COLUMNS}
    if not updates:
        return False
    if "is_verified" in updates:
        updates["is_verified"] = int(bool(updates["is_verified"]))

    assignments = ", ".join(f"{k} = ?" for k in updates)
    with get_connection() as conn:
        cursor = conn.execute(
            f"UPDATE cases SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            list(updates.values()) + [case_id],
        )
        return cursor.rowcount > 0


def get_cases_missing_enrichment(limit: int = 5) -> list[dict]:
    with get_connection() as conn:
        rows = conn.execute("""
            SELECT * FROM cases
            WHERE pain_point IS NULL OR pain_point = ''
            ORDER BY quality_score DESC
            LIMIT ?
        """, (limit,)).fetchall()
        return [_case_from_row(row) for row in rows]


# ============ Industry & Scenario Operations ============

def get_industries() -> list[dict]:
    with get_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM industries ORDER BY case_count DESC, name ASC"
        ).fetchall()
        return [dict(row) for row in rows]


def get_scenarios(industry: str = None, limit: int = 50) -> list[dict]:
    query = "SELECT * FROM scenarios"
    params = []
    if industry:
        query += " WHERE industry = ?"
        params.append(industry)
    query += " ORDER BY quality_score DESC, case_count DESC LIMIT ?"
    params.append(limit)

    with get_connection() as conn:
        rows = conn.execute(query, params).fetchall()
        scenarios = []
        for row in rows:
            scenario = dict(row)
            scenario["technology_stack"] = _load(scenario.get("technology_stack"), [])
            scenarios.append(scenario)
        return scenarios


def scenario_exists(name: str) -> bool:
    with get_connection() as conn:
        row = conn.execute("SELECT 1 FROM scenarios WHERE name = ?", (name,)).fetchone()
        return row is not None


def save_scenario(scene: dict) -> str:
    complexity = (scene.get("complexity") or "medium").lower()
    if complexity not in ("low", "medium", "high"):
        complexity = "medium"

    scenario_id = _new_id()
    with get_connection() as conn:
        conn.execute("""
            INSERT INTO scenarios (id, name, industry, category, description,
                                   complexity, technology_stack, quality_score)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            scenario_id,
            scene["name"],
            scene.get("industry") or "General",
            scene.get("category"),
            scene.get("description"),
            complexity,
            _dump(scene.get("technology_stack") or []),
            scene.get("quality_score", 0.75),
        ))
    return scenario_id


# ============ Trend Operations ============

def trend_exists(name: str) -> bool:
    with get_connection() as conn:
        row = conn.execute("SELECT 1 FROM trends WHERE name = ?", (name,)).fetchone()
        return row is not None


def save_trend(trend: dict) -> str:
    trend_id = _new_id()
    with get_connection() as conn:
        conn.execute("""
            INSERT INTO trends (id, name, description, source, url, industry,
                                opportunity_level, quality_score, metadata)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            trend_id,
            trend["name"],
            trend.get("description"),
            trend.get("source") or "brainstorm",
            trend.get("url"),
            trend.get("industry"),
            trend.get("opportunity_level"),
            trend.get("quality_score", 0.8),
            _dump(trend.get("metadata") or {}),
        ))
    return trend_id


def get_trends(limit: int = 20) -> list[dict]:
    with get_connection() as conn:
        rows = conn.execute("""
            SELECT * FROM trends
            ORDER BY quality_score DESC, created_at DESC
            LIMIT ?
        """, (limit,)).fetchall()
        trends = []
        for row in rows:
            trend = dict(row)
            trend["metadata"] = _load(trend.get("metadata"), {})
            trends.append(trend)
        return trends


# ============ Collection Logs ============

def start_collection_log(source: str) -> str:
    log_id = _new_id()
    with get_connection() as conn:
        conn.execute("""
            INSERT INTO collection_logs (id, source, status, started_at)
            VALUES (?, ?, 'running', ?)
        """, (log_id, source, _now()))
    return log_id


def finish_collection_log(log_id: str, status: str, items_collected: int = 0,
                          error_message: str = None):
    with get_connection() as conn:
        conn.execute("""
            UPDATE collection_logs
            SET status = ?, items_collected = ?, error_message = ?, completed_at = ?
            WHERE id = ?
        """, (status, items_collected, error_message, _now(), log_id))


def get_collection_logs(limit: int = 20) -> list[dict]:
    with get_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM collection_logs ORDER BY started_at DESC LIMIT ?",
            (limit,)
        ).fetchall()
        return [dict(row) for row in rows]


# ============ Conversations ============

def add_conversation_message(session_id: str, role: str, content: str,
                             metadata: dict = None) -> str:
    message_id = _new_id()
    with get_connection() as conn:
        conn.execute("""
            INSERT INTO conversations (id, session_id, role, content, metadata, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (message_id, session_id, role, content, _dump(metadata), _now()))
    return message_id


def get_conversation_history(session_id: str, limit: int = 20) -> list[dict]:
    """Last `limit` messages of a session, oldest first."""
    with get_connection() as conn:
        rows = conn.execute("""
            SELECT id, session_id, role, content, metadata, created_at FROM (
                SELECT *, rowid AS seq FROM conversations
                WHERE session_id = ?
                ORDER BY created_at DESC, seq DESC
                LIMIT ?
            ) ORDER BY created_at ASC, seq ASC
        """, (session_id, limit)).fetchall()
        history = []
        for row in rows:
            message = dict(row)
            message["metadata"] = _load(message.get("metadata"), {})
            history.append(message)
        return history
