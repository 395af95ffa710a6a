"""
Shared fixtures: portal markup builders and a fake requests session.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import pytest
import requests
from loguru import logger


def answer_html(text: str, correct: bool) -> str:
    return (
        f'<div class="Answer" data-correct="{"True" if correct else "False"}">'
        f'<div class="AnswerText"><a href="#">{text}</a></div></div>'
    )


def question_html(
    code: str = "12A1001",
    date: str = "1.1.2020",
    prompt: str = "Sample?\nMore",
    answers: Sequence[Tuple[str, bool]] = (("Yes", True), ("No", False), ("Maybe", False)),
    media: str = "",
) -> str:
    return (
        '<div class="QuestionPanel">'
        '<div class="QuestionText">'
        f'Kód: <span class="QuestionCode">{code}</span> '
        f'Změněno: <span class="QuestionChangeDate">{date}</span><br/>'
        f"{prompt}"
        "</div>"
        f'<div class="QuestionImagePanel">{media}</div>'
        '<div class="AnswersPanel">'
        + "".join(answer_html(t, c) for t, c in answers)
        + "</div></div>\n"
    )


def page_html(*questions: str) -> str:
    return "".join(questions)


class FakeResponse:
    """Mimics requests: ``text`` decodes ``content`` with ``encoding`` unless given directly."""

    def __init__(self, text: Optional[str] = None, status_code: int = 200,
                 headers: Optional[Dict] = None, content: bytes = b""):
        self._text = text
        self.status_code = status_code
        self.headers = headers or {}
        self.content = content
        content_type = self.headers.get("Content-Type", "")
        if "charset=" in content_type:
            self.encoding = content_type.split("charset=")[1].strip()
        elif content_type.startswith("text/"):
            self.encoding = "ISO-8859-1"
        else:
            self.encoding = None

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return self.content.decode(self.encoding or "utf-8")

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]


class FakeSession:
    """Answers GET requests from a queue (or a callable) and records every call."""

    def __init__(self, responses=None, handler=None):
        self.responses: List = list(responses or [])
        self.handler = handler
        self.calls: List[Tuple[str, Optional[Dict]]] = []

    def get(self, url, params=None, **kwargs):
        self.calls.append((url, dict(params) if params else None))
        if self.handler is not None:
            result = self.handler(url, params)
        else:
            result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, str):
            return FakeResponse(result)
        return result


@pytest.fixture
def warnings_log() -> List[str]:
    """Messages logged at WARNING or above while the test runs."""
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_page() -> str:
    return page_html(question_html())


@pytest.fixture
def landing_html() -> str:
    return """
<html><body>
<div id="VerticalMenuPanel">
  <ul>
    <li><a href="/Vestnik?basketScope=101">Pravidla provozu na pozemních komunikacích</a></li>
    <li><a href="/Vestnik?basketScope=102&amp;x=1">Dopravní značky</a></li>
  </ul>
</div>
<div id="Other"><ul><li><a href="/elsewhere">Not a category</a></li></ul></div>
</body></html>
"""
