# etesty_crawler/errors.py


class CrawlerError(Exception):
    """Base class for every fatal crawl failure."""


class FetchError(CrawlerError):
    """The portal could not be reached or answered with an HTTP error."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"failed to fetch {url}: {cause}")
        self.url = url
        self.cause = cause


class StructureError(CrawlerError):
    """Expected markup is missing, the page no longer has the known shape."""

    def __init__(self, message: str, snippet: str = ""):
        if snippet:
            message = f"{message}\n    near: {snippet[:200]}"
        super().__init__(message)
        self.snippet = snippet
