"""Tests for the command-line entry point."""

from types import SimpleNamespace

import pytest

from conftest import FakeSession, question_html
from etesty_crawler import crawl_site
from etesty_crawler.crawl_utils import CrawlOutcome, CrawlResult
from etesty_crawler.errors import StructureError
from etesty_crawler.models import Category

CATEGORIES = [Category(name="Značky", scope_id="1"), Category(name="Pravidla", scope_id="2")]


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(crawl_site, "configure_logging", lambda *a, **kw: None)


@pytest.fixture
def stub_run(monkeypatch, tmp_path):
    """Replace network-facing pieces; records crawled categories."""
    state = SimpleNamespace(crawled=[], fail_on=set())

    def fake_crawl(session, category=None, *, output_dir, page_limit):
        state.crawled.append(category)
        if category is not None and category.scope_id in state.fail_on:
            raise StructureError("site changed")
        return CrawlResult(
            category=category,
            outcome=CrawlOutcome.EXHAUSTED,
            pages=1,
            questions=2,
            csv_path=f"{output_dir}/x.csv",
            html_path=f"{output_dir}/x.html",
        )

    monkeypatch.setattr(crawl_site, "make_session", lambda: FakeSession([]))
    monkeypatch.setattr(crawl_site, "fetch_categories", lambda session: list(CATEGORIES))
    monkeypatch.setattr(crawl_site, "crawl", fake_crawl)
    return state


def test_full_then_each_category(stub_run, tmp_path):
    assert crawl_site.main(["--output-dir", str(tmp_path)]) == 0
    assert stub_run.crawled == [None] + CATEGORIES


def test_skip_full_and_only(stub_run, tmp_path):
    assert crawl_site.main(["--output-dir", str(tmp_path), "--skip-full", "--only", "2"]) == 0
    assert stub_run.crawled == [CATEGORIES[1]]


def test_failure_stops_batch(stub_run, tmp_path):
    stub_run.fail_on.add("1")
    assert crawl_site.main(["--output-dir", str(tmp_path)]) == 1
    assert stub_run.crawled == [None, CATEGORIES[0]]


def test_keep_going_isolates_failure(stub_run, tmp_path):
    stub_run.fail_on.add("1")
    assert crawl_site.main(["--output-dir", str(tmp_path), "--keep-going"]) == 1
    assert stub_run.crawled == [None] + CATEGORIES


def test_end_to_end_with_fake_portal(monkeypatch, tmp_path, landing_html):
    def handler(url, params):
        if url.endswith("/Vestnik"):
            return landing_html
        if params["page"] == "1":
            return question_html(code=params.get("basketScope", "all"))
        return ""

    monkeypatch.setattr(crawl_site, "make_session", lambda: FakeSession(handler=handler))

    assert crawl_site.main(["--output-dir", str(tmp_path)]) == 0
    assert (tmp_path / "scrape.csv").exists()
    assert "101" in (tmp_path / "scrape.101.Pravidla_provozu_na_pozemních.csv").read_text(encoding="utf-8")
    assert (tmp_path / "scrape.102.Dopravní_značky.html").exists()


def test_init_sentry_skips_placeholder():
    assert crawl_site.init_sentry(None) is False
    assert crawl_site.init_sentry("https://xxx@sentry.example/1") is False
