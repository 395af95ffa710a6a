# etesty_crawler/sections.py
from typing import List
from urllib.parse import parse_qs, urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from etesty_crawler.errors import StructureError
from etesty_crawler.fetch import fetch_text
from etesty_crawler.models import Category
from etesty_crawler.settings import (
    BASE_URL,
    DEFAULT_SELECTORS,
    SCOPE_PARAM,
    SECTIONS_URL,
    Selectors,
)


def list_categories(
    html: str,
    base_url: str = BASE_URL,
    selectors: Selectors = DEFAULT_SELECTORS,
    scope_param: str = SCOPE_PARAM,
) -> List[Category]:
    """Read the category menu of the landing page."""
    soup = BeautifulSoup(html, "html.parser")
    categories: List[Category] = []

    for a in soup.select(selectors.sections):
        href = a.get("href")
        if not href:
            raise StructureError("category link without href", str(a))

        query = parse_qs(urlparse(urljoin(base_url, href)).query)
        scope = query.get(scope_param)
        if not scope:
            raise StructureError(f"category link without {scope_param}", str(a))

        categories.append(Category(name=a.get_text().strip(), scope_id=scope[0]))

    return categories


def fetch_categories(session: requests.Session, url: str = SECTIONS_URL) -> List[Category]:
    return list_categories(fetch_text(session, url))
