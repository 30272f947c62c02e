"""
In-memory status store for long-running background tasks.

Tasks live only as long as the process. The web layer creates one per
brainstorm or cron collection and clients poll it by ID.
"""
import random
import threading
import time
from datetime import datetime, timezone

from copilot import config

PENDING = "pending"
PROCESSING = "processing"
COMPLETED = "completed"
FAILED = "failed"

_tasks: dict[str, dict] = {}
_lock = threading.Lock()
_last_cleanup = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_task() -> str:
    # at most once per cleanup interval
    if time.time() - _last_cleanup >= config.TASK_CLEANUP_HOURS * 3600:
        cleanup_tasks()

    task_id = f"task_{int(time.time() * 1000)}_{random.randrange(36 ** 6):06x}"
    now = _now()
    with _lock:
        _tasks[task_id] = {
            "id": task_id,
            "status": PENDING,
            "progress": 0,
            "message": "Task created",
            "result": None,
            "error": None,
            "created_at": now,
            "updated_at": now,
            "_created": time.time(),
        }
    return task_id


def update_task(task_id: str, **fields) -> bool:
    with _lock:
        task = _tasks.get(task_id)
        if task is None:
            return False
        task.update(fields)
        task["updated_at"] = _now()
    return True


def get_task(task_id: str) -> dict | None:
    """Public copy of a task, without internal bookkeeping."""
    with _lock:
        task = _tasks.get(task_id)
        if task is None:
            return None
        return {k: v for k, v in task.items() if not k.startswith("_")}


def cleanup_tasks(max_age: float = config.TASK_MAX_AGE_SECONDS) -> int:
    """Drop tasks older than max_age seconds. Returns how many were removed."""
    global _last_cleanup
    _last_cleanup = time.time()
    cutoff = time.time() - max_age
    with _lock:
        expired = [tid for tid, t in _tasks.items() if t["_created"] < cutoff]
        for tid in expired:
            del _tasks[tid]
    if expired:
        print(f"🧹 [TASK] Removed {len(expired)} expired tasks")
    return len(expired)


def _run(task_id: str, func, args, kwargs):
    update_task(task_id, status=PROCESSING, progress=10, message="Processing")
    try:
        result = func(*args, **kwargs)
    except Exception as e:
        print(f"❌ [TASK] {task_id} failed: {e}")
        update_task(task_id, status=FAILED, error=str(e) or e.__class__.__name__, message="Failed")
        return
    update_task(task_id, status=COMPLETED, progress=100, result=result, message="Completed")
    print(f"✅ [TASK] {task_id} completed")


def run_in_background(task_id: str, func, *args, **kwargs) -> threading.Thread:
    """Run func on a daemon thread, recording the outcome on the task."""
    thread = threading.Thread(target=_run, args=(task_id, func, args, kwargs), daemon=True)
    thread.start()
    return thread
