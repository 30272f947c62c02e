"""
Scheduler - periodic collection jobs

Jobs:
    - GitHub collection + import (every 24 hours by default)
    - Reddit collection + import (every 12 hours)
    - Hacker News collection + import (every 6 hours)
    - Expired task cleanup (hourly)
"""
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from copilot import collector, config, data_persister, tasks


def run_source_job(source: str) -> dict:
    """Collect one source and import what it found."""
    print(f"\n{'='*50}")
    print(f"🕐 [SCHEDULER] {source} job: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"{'='*50}\n")

    try:
        items = collector.collect_all([source])
        result = data_persister.import_cases(items)
    except Exception as e:
        print(f"❌ [SCHEDULER] {source} job failed: {e}")
        return {"imported": 0, "skipped": 0, "total": 0, "error": str(e)}

    print(f"✨ [SCHEDULER] {source} job done: {result['imported']} imported")
    return result


def cleanup_job():
    tasks.cleanup_tasks(config.TASK_MAX_AGE_SECONDS)


def create_scheduler(blocking: bool = False):
    scheduler = BlockingScheduler() if blocking else BackgroundScheduler()

    for source in collector.COLLECTORS:
        scheduler.add_job(
            run_source_job,
            trigger=IntervalTrigger(hours=config.SCHEDULE_HOURS[source]),
            args=[source],
            id=f"collect_{source}",
            name=f"{collector.SOURCE_LABELS[source]} collection",
        )

    scheduler.add_job(
        cleanup_job,
        trigger=IntervalTrigger(hours=config.TASK_CLEANUP_HOURS),
        id="cleanup_tasks",
        name="Task cleanup",
    )

    return scheduler


def run_scheduler(blocking: bool = True):
    """Start the scheduler. Blocks until Ctrl+C unless blocking is False."""
    scheduler = create_scheduler(blocking=blocking)

    print("⏰ [SCHEDULER] Started")
    for source, hours in config.SCHEDULE_HOURS.items():
        print(f"   📡 {collector.SOURCE_LABELS[source]}: every {hours}h")
    print(f"   🧹 Task cleanup: every {config.TASK_CLEANUP_HOURS}h")

    if not blocking:
        scheduler.start()
        return scheduler

    print("\n🔄 Press Ctrl+C to stop\n")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        print("\n🛑 [SCHEDULER] Stopped.")
    return scheduler
