import argparse
import json
import logging
import os
import sys
import uuid as _uuid
from contextlib import closing
from typing import List, Optional

from config.settings import ERROR_POLICIES, get_settings
from db.connection import get_connection
from errors import ScrapeError
from petrescue_fetcher import PetRescueFetcher
from pipelines.scrape_animals import scrape_animals
from sources.petrescue_dogs import PetRescueDogsSource
from sqlite_storage import SQLiteStorage
from utils.logging_setup import init_logging


def _positive_int(raw: str) -> int:
	value = int(raw)
	if value < 1:
		raise argparse.ArgumentTypeError(f"must be at least 1 (got {value})")
	return value


def cmd_run(args) -> int:
	settings = get_settings()
	if not os.getenv("RUN_ID"):
		os.environ["RUN_ID"] = _uuid.uuid4().hex

	def _progress(cur, total, url):
		print(f"[{cur}/{total}] Fetching {url}")

	source = PetRescueDogsSource(PetRescueFetcher(settings=settings))
	try:
		with closing(get_connection(args.db)) as conn:
			ctx = scrape_animals(
				conn,
				source,
				table_name=args.table,
				error_policy=args.on_error,
				max_pages=args.max_pages,
				refresh=args.refresh,
				on_progress=_progress if args.progress else None,
			)
	finally:
		source.close()

	print(f"Scraped {len(ctx.animals)} animals")
	print(f"Saved {int(ctx.meta.get('rows_inserted') or 0)} rows to {args.table}")
	if ctx.errors:
		print(f"Skipped {len(ctx.errors)} failures")
	return 0


def cmd_report(args) -> int:
	with closing(get_connection(args.db)) as conn:
		storage = SQLiteStorage(conn)
		if not storage.table_exists(args.table):
			print(f"No table {args.table}")
			return 1
		out = {
			"table": args.table,
			"count": storage.count_rows(args.table),
			"rows": storage.fetch_rows(args.table, limit=args.limit),
		}
	print(json.dumps(out, indent=2, ensure_ascii=False))
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	settings = get_settings()
	init_logging(settings.log_level)
	parser = argparse.ArgumentParser(description="PetRescue dog listing scraper")
	parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
	parser.add_argument("--table", default=settings.table_name, help="Table to write/read (default from settings)")
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_run = sub.add_parser("run", help="Crawl search results, fetch breeds, save to SQLite")
	p_run.add_argument("--max-pages", type=_positive_int, default=settings.max_pages, help="Stop after this many result pages (default: no limit)")
	p_run.add_argument("--on-error", choices=list(ERROR_POLICIES), default=settings.error_policy, help="abort the run (default) or skip failing pages/animals")
	p_run.add_argument("--refresh", action=argparse.BooleanOptionalAction, default=settings.refresh_table, help="Delete existing rows before saving (default from settings)")
	p_run.add_argument("--progress", action="store_true", help="Print progress for each detail page")
	p_run.set_defaults(func=cmd_run)

	p_rep = sub.add_parser("report", help="Show row count and a sample of saved rows")
	p_rep.add_argument("--limit", type=int, default=5)
	p_rep.set_defaults(func=cmd_report)

	args = parser.parse_args(argv)
	try:
		return args.func(args)
	except ScrapeError as e:
		logging.getLogger("cli").error(f"Run failed: {e}", extra={"status": "failed", "error": type(e).__name__})
		return 1


if __name__ == "__main__":
	sys.exit(main())
