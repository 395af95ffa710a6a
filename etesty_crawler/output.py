# etesty_crawler/output.py
import os
import re
from typing import Iterable, Optional, Tuple

import pandas as pd

from etesty_crawler.models import CSV_COLUMNS, Category, Question

OUTPUT_STEM = "scrape"
NAME_LIMIT = 30


def safe_name(name: str, limit: int = NAME_LIMIT) -> str:
    """Filesystem-safe, truncated form of a category name."""
    name = re.sub(r"[^\w.-]+", "_", name).strip("_")
    return name[:limit].rstrip("_")


def output_paths(output_dir: str, category: Optional[Category] = None) -> Tuple[str, str]:
    """(csv, html) paths for one crawl."""
    if category is None:
        stem = OUTPUT_STEM
    else:
        stem = f"{OUTPUT_STEM}.{category.scope_id}.{safe_name(category.name)}"
    base = os.path.join(output_dir, stem)
    return base + ".csv", base + ".html"


class CrawlOutput:
    """CSV sink plus raw HTML archive, held open for the duration of one crawl."""

    def __init__(self, csv_path: str, html_path: str):
        self.csv_path = csv_path
        self.html_path = html_path
        self._csv = None
        self._html = None

    def __enter__(self) -> "CrawlOutput":
        for path in (self.csv_path, self.html_path):
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        self._html = open(self.html_path, "w", encoding="utf-8")
        try:
            self._csv = open(self.csv_path, "w", encoding="utf-8", newline="")
            # header only, so an empty crawl still yields a readable file
            pd.DataFrame(columns=CSV_COLUMNS).to_csv(self._csv, index=False)
        except BaseException:
            self.__exit__(None, None, None)
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        for f in (self._csv, self._html):
            if f is not None:
                f.close()
        self._csv = self._html = None

    def archive_page(self, page: int, body: str) -> None:
        self._html.write(f"<!-- Page {page} -->\n{body}\n")

    def write_questions(self, questions: Iterable[Question]) -> int:
        rows = [q.to_row() for q in questions]
        if rows:
            pd.DataFrame(rows, columns=CSV_COLUMNS).to_csv(self._csv, header=False, index=False)
        return len(rows)
