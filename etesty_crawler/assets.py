# etesty_crawler/assets.py
import glob
import os
from typing import Dict, Iterable, Optional
from urllib.parse import urljoin, urlparse

import requests
from loguru import logger

from etesty_crawler.models import Media
from etesty_crawler.settings import BASE_URL, TIMEOUT

ASSET_PREFIX = "/Content/ImageQuestion/"
PART_SUFFIX = ".part"

KNOWN_TYPES = {
    "video/mp4": "mp4",
    "image/gif": "gif",
    "image/jpg": "jpg",
    "image/jpeg": "jpg",
    "image/png": "png",
}


def asset_stem(url: str) -> str:
    """File name (without extension) for a media URL."""
    path = urlparse(url).path
    if path.startswith(ASSET_PREFIX):
        path = path[len(ASSET_PREFIX):]
    return path.strip("/").replace("/", "-") or "asset"


def extension_for(content_type: Optional[str]) -> str:
    if not content_type:
        logger.warning("missing content-type")
        return ""
    mime = content_type.split(";")[0].strip().lower()
    if mime in KNOWN_TYPES:
        return KNOWN_TYPES[mime]
    logger.warning(f"unknown content-type: {mime}")
    return mime.replace("/", ".")


def _existing(stem: str) -> Optional[str]:
    candidates = [stem] + sorted(glob.glob(glob.escape(stem) + ".*"))
    for path in (p for p in candidates if not p.endswith(PART_SUFFIX)):
        if os.path.exists(path) and os.path.getsize(path) > 0:
            return path
    return None


def download_asset(
    session: requests.Session,
    url: str,
    out_dir: str,
    base_url: str = BASE_URL,
) -> Optional[str]:
    """Download one media file, returns its path or None when it failed."""
    os.makedirs(out_dir, exist_ok=True)
    abs_url = urljoin(base_url, url)
    stem = os.path.join(out_dir, asset_stem(abs_url))

    existing = _existing(stem)
    if existing:
        return existing

    part_path = None
    try:
        r = session.get(abs_url, stream=True, timeout=TIMEOUT)
        r.raise_for_status()
        ext = extension_for(r.headers.get("Content-Type"))
        out_path = f"{stem}.{ext}" if ext else stem
        part_path = out_path + PART_SUFFIX
        with open(part_path, "wb") as f:
            for chunk in r.iter_content(chunk_size=1024 * 256):
                if chunk:
                    f.write(chunk)
        os.replace(part_path, out_path)
        return out_path
    except requests.RequestException as e:
        logger.warning(f"failed to download {abs_url}: {e}")
        if part_path and os.path.exists(part_path):
            os.remove(part_path)
        return None


def download_media(
    session: requests.Session,
    media: Iterable[Media],
    out_dir: str,
    base_url: str = BASE_URL,
) -> Dict[str, str]:
    """Media URL -> local path, for every file that could be saved."""
    saved: Dict[str, str] = {}
    for m in media:
        if m.url in saved:
            continue
        path = download_asset(session, m.url, out_dir, base_url)
        if path:
            saved[m.url] = path
            logger.debug(f"  saved: {path}")
    logger.info(f"downloaded {len(saved)} media files to {out_dir}")
    return saved
