# etesty_crawler/fetch.py
from typing import Dict, Optional

import requests

from etesty_crawler.errors import FetchError
from etesty_crawler.settings import TIMEOUT, USER_AGENT


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def fetch_text(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, str]] = None,
    timeout: float = TIMEOUT,
) -> str:
    """GET ``url`` and return the body. Any transport or HTTP error is fatal."""
    try:
        r = session.get(url, params=params, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(url, e) from e
    # the portal serves UTF-8 but often omits the charset
    if "charset" not in (r.headers.get("Content-Type") or "").lower():
        r.encoding = "utf-8"
    return r.text
