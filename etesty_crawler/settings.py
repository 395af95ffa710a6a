# etesty_crawler/settings.py
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ---------- portal ----------
BASE_URL = os.getenv("ETESTY_BASE_URL", "https://etesty2.mdcr.cz")
SECTIONS_URL = BASE_URL + os.getenv("ETESTY_SECTIONS_PATH", "/Vestnik")
LISTING_URL = BASE_URL + os.getenv("ETESTY_LISTING_PATH", "/Vestnik/ShowPartial")
SCOPE_PARAM = os.getenv("ETESTY_SCOPE_PARAM", "basketScope")

# ---------- crawl ----------
PAGE_LIMIT = int(os.getenv("CRAWL_PAGE_LIMIT", "200"))
OUTPUT_DIR = os.getenv("CRAWL_OUTPUT_DIR", ".")
TIMEOUT = float(os.getenv("CRAWL_TIMEOUT", "25"))
USER_AGENT = os.getenv(
    "CRAWL_USER_AGENT",
    "etesty-crawler/1.0 (question listing export)",
)
KEEP_GOING = _env_flag("CRAWL_KEEP_GOING")

# ---------- logging / error reporting ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SENTRY_DSN = os.getenv("SENTRY_DSN")
ENVIRONMENT = os.getenv("ENVIRONMENT", "production")


class Selectors(BaseModel):
    """CSS selectors describing the portal markup."""

    model_config = ConfigDict(frozen=True)

    sections: str = "#VerticalMenuPanel > ul > li > a"
    question: str = "div.QuestionPanel"
    question_text: str = "div.QuestionText"
    question_code: str = "span.QuestionCode"
    question_change_date: str = "span.QuestionChangeDate"
    answer: str = "div.AnswersPanel > div.Answer"
    answer_text: str = "div.AnswerText > a"
    video: str = "div.QuestionImagePanel > video > source"
    image: str = "div.QuestionImagePanel > img"
    correct_attr: str = "data-correct"
    correct_value: str = "True"


DEFAULT_SELECTORS = Selectors()
