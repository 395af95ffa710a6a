# etesty_crawler/crawl_site.py
import argparse
import os
import sys
from typing import List, Optional

import sentry_sdk
from loguru import logger
from sentry_sdk.utils import BadDsn

from etesty_crawler import settings
from etesty_crawler.assets import download_media
from etesty_crawler.crawl_utils import CrawlOutcome, CrawlResult, crawl
from etesty_crawler.errors import CrawlerError
from etesty_crawler.fetch import make_session
from etesty_crawler.models import Category
from etesty_crawler.sections import fetch_categories


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        level=level,
    )


def init_sentry(dsn: Optional[str] = settings.SENTRY_DSN) -> bool:
    # Only init if DSN is set and not a placeholder
    if not dsn or "xxx" in dsn:
        return False
    try:
        sentry_sdk.init(dsn=dsn, environment=settings.ENVIRONMENT)
    except BadDsn as e:
        logger.warning(f"Sentry initialization failed: {e}")
        return False
    logger.info("Sentry initialized")
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="etesty-crawl",
        description="Export the etesty question listing to CSV, in full and per category.",
    )
    p.add_argument("--output-dir", default=settings.OUTPUT_DIR)
    p.add_argument("--page-limit", type=int, default=settings.PAGE_LIMIT)
    p.add_argument(
        "--keep-going",
        action="store_true",
        default=settings.KEEP_GOING,
        help="log a failed category and continue with the next one",
    )
    p.add_argument("--skip-full", action="store_true", help="do not crawl the unfiltered listing")
    p.add_argument(
        "--only",
        action="append",
        metavar="SCOPE_ID",
        help="crawl only these categories (repeatable)",
    )
    p.add_argument(
        "--download-media",
        action="store_true",
        help="also save question images and videos under <output-dir>/assets",
    )
    return p


def select_categories(categories: List[Category], only: Optional[List[str]]) -> List[Category]:
    if not only:
        return categories
    wanted = set(only)
    missing = wanted - {c.scope_id for c in categories}
    if missing:
        logger.warning(f"unknown categories: {', '.join(sorted(missing))}")
    return [c for c in categories if c.scope_id in wanted]


def run(args: argparse.Namespace) -> int:
    session = make_session()
    results: List[CrawlResult] = []
    failed: List[str] = []

    def crawl_one(category: Optional[Category]) -> None:
        try:
            results.append(
                crawl(session, category, output_dir=args.output_dir, page_limit=args.page_limit)
            )
        except CrawlerError as e:
            if not args.keep_going:
                raise
            label = category.name if category else "full listing"
            logger.error(f"  {label} failed: {e}")
            sentry_sdk.capture_exception(e)
            failed.append(label)

    if not args.skip_full:
        logger.info("scraping full")
        crawl_one(None)

    logger.info(" listing sections")
    categories = select_categories(fetch_categories(session), args.only)
    for category in categories:
        logger.info(f" scraping {category.name}")
        crawl_one(category)

    if args.download_media:
        media = [m for r in results for m in r.media]
        download_media(session, media, os.path.join(args.output_dir, "assets"))

    total = sum(r.questions for r in results)
    limited = [r for r in results if r.outcome is CrawlOutcome.PAGE_LIMIT]
    logger.info(f"done: {len(results)} crawls, {total} questions")
    if limited:
        logger.warning(f"{len(limited)} crawls stopped at the page limit")
    if failed:
        logger.error(f"{len(failed)} crawls failed: {', '.join(failed)}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    init_sentry()
    try:
        return run(args)
    except CrawlerError as e:
        logger.error(f"crawl aborted: {e}")
        sentry_sdk.capture_exception(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
