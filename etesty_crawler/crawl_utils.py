# etesty_crawler/crawl_utils.py
from enum import Enum
from typing import Dict, List, Optional

import requests
from loguru import logger
from pydantic import BaseModel

from etesty_crawler.extract import extract_questions
from etesty_crawler.fetch import fetch_text
from etesty_crawler.models import Category, Media
from etesty_crawler.output import CrawlOutput, output_paths
from etesty_crawler.settings import (
    DEFAULT_SELECTORS,
    LISTING_URL,
    OUTPUT_DIR,
    PAGE_LIMIT,
    SCOPE_PARAM,
    Selectors,
)


class CrawlOutcome(str, Enum):
    EXHAUSTED = "exhausted"    # listing returned an empty page
    PAGE_LIMIT = "page_limit"  # stopped by the page ceiling


class CrawlResult(BaseModel):
    category: Optional[Category] = None
    outcome: CrawlOutcome
    pages: int
    questions: int
    csv_path: str
    html_path: str
    media: List[Media] = []


def listing_params(page: int, category: Optional[Category] = None) -> Dict[str, str]:
    params = {"page": str(page)}
    if category is not None:
        params[SCOPE_PARAM] = category.scope_id
    return params


def crawl(
    session: requests.Session,
    category: Optional[Category] = None,
    *,
    output_dir: str = OUTPUT_DIR,
    page_limit: int = PAGE_LIMIT,
    listing_url: str = LISTING_URL,
    selectors: Selectors = DEFAULT_SELECTORS,
) -> CrawlResult:
    """Page through the listing for one category (or all of it) and write its outputs."""
    csv_path, html_path = output_paths(output_dir, category)
    outcome = CrawlOutcome.PAGE_LIMIT
    pages = 0
    total = 0
    media: List[Media] = []

    with CrawlOutput(csv_path, html_path) as out:
        for page in range(1, page_limit + 1):
            body = fetch_text(session, listing_url, params=listing_params(page, category))
            if not body.strip():
                outcome = CrawlOutcome.EXHAUSTED
                break

            out.archive_page(page, body)
            questions = extract_questions(body, selectors)
            total += out.write_questions(questions)
            media.extend(q.media for q in questions if q.media is not None)
            pages = page
            logger.info(f"  fetched and parsed page {page} ({len(questions)} questions)")

    if outcome is CrawlOutcome.EXHAUSTED:
        logger.info(f"  done scraping {pages} pages, {total} questions -> {csv_path}")
    else:
        logger.warning(
            f"  stopped at page limit ({page_limit}) without an empty page, "
            f"{total} questions -> {csv_path}"
        )

    return CrawlResult(
        category=category,
        outcome=outcome,
        pages=pages,
        questions=total,
        csv_path=csv_path,
        html_path=html_path,
        media=media,
    )
