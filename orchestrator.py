"""
Sales Copilot Orchestrator - main entry point

Usage:
    python orchestrator.py                          # Collect GitHub + import
    python orchestrator.py --sources github reddit  # Pick sources
    python orchestrator.py --no-import              # Collect only, keep the raw file
    python orchestrator.py --import-file raw.json   # Import a raw file
    python orchestrator.py --enrich 10              # LLM-enrich 10 stored cases
    python orchestrator.py --serve                  # Web server only
    python orchestrator.py --daemon                 # Scheduler + web server
"""

import argparse

from copilot import collector, data_persister, db


def run_pipeline(sources: list[str], do_import: bool = True) -> dict | None:
    """Collect from the given sources and import the results."""
    print("🚀 SALES COPILOT STARTING...\n")

    items = collector.collect_all(sources)

    if not do_import:
        print("\n⏭️ Import skipped (--no-import)")
        return None

    return data_persister.import_cases(items)


def main():
    parser = argparse.ArgumentParser(
        description="Sales Copilot - AI agent case library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python orchestrator.py                          Collect GitHub + import
  python orchestrator.py --sources github hackernews reddit
  python orchestrator.py --import-file data/raw/raw_data_2026-01-01T00-00-00.json
  python orchestrator.py --enrich 5               Enrich 5 cases with the LLM
  python orchestrator.py --daemon                 Scheduler + web server
        """
    )

    parser.add_argument(
        "--sources", "-s",
        nargs="+",
        default=["github"],
        choices=list(collector.COLLECTORS),
        help="Sources to collect (default: github)"
    )

    parser.add_argument(
        "--import-file", "-f",
        metavar="PATH",
        help="Import a raw data file instead of collecting ('latest' for the newest)"
    )

    parser.add_argument(
        "--no-import",
        action="store_true",
        help="Collect only, don't import into the database"
    )

    parser.add_argument(
        "--enrich", "-e",
        type=int,
        metavar="N",
        help="Extract sales fields for N stored cases with the LLM"
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the web server only"
    )

    parser.add_argument(
        "--daemon", "-d",
        action="store_true",
        help="Daemon mode (scheduler + web server)"
    )

    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the database tables and exit"
    )

    args = parser.parse_args()

    if args.init_db:
        db.init_db()
        print("   ✅ Database ready")

    elif args.daemon:
        print("🤖 Starting daemon mode...")

        db.init_db()
        print("   ✅ Database ready")

        import web
        from copilot.scheduler import run_scheduler

        web.run_in_background()
        run_scheduler(blocking=True)

    elif args.serve:
        import web
        web.run()

    elif args.import_file:
        db.init_db()
        path = None if args.import_file == "latest" else args.import_file
        data_persister.import_file(path)

    elif args.enrich:
        db.init_db()
        data_persister.enrich_cases(limit=args.enrich)

    else:
        run_pipeline(args.sources, do_import=not args.no_import)


if __name__ == "__main__":
    main()
