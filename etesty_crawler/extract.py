# etesty_crawler/extract.py
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from loguru import logger

from etesty_crawler.errors import StructureError
from etesty_crawler.models import Media, Question
from etesty_crawler.settings import DEFAULT_SELECTORS, Selectors

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def normalize_text(text: str) -> str:
    """Line breaks become single spaces, surrounding whitespace is dropped."""
    return _LINE_BREAK.sub(" ", text).strip()


def _required(parent: Tag, selector: str, what: str) -> Tag:
    el = parent.select_one(selector)
    if el is None:
        raise StructureError(f"missing {what} ({selector})", str(parent))
    return el


def _src(el: Tag, what: str) -> str:
    src = el.get("src")
    if src is None:
        raise StructureError(f"{what} without src", str(el))
    return src


def _last_text(el: Tag) -> str:
    # the prompt follows the code/date labels, so it is the final text segment
    texts = [s for s in el.strings if s.strip()]
    if not texts:
        raise StructureError("question text is empty", str(el))
    return texts[-1]


def _parse_answers(block: Tag, selectors: Selectors) -> List[Tuple[bool, str]]:
    answers = []
    for answer in block.select(selectors.answer):
        flag = answer.get(selectors.correct_attr)
        if flag is None:
            raise StructureError(f"answer without {selectors.correct_attr}", str(answer))
        text_el = _required(answer, selectors.answer_text, "answer text")
        answers.append((flag == selectors.correct_value, normalize_text(text_el.get_text())))
    return answers


def _parse_media(block: Tag, selectors: Selectors) -> Optional[Media]:
    video = block.select_one(selectors.video)
    if video is not None:
        return Media.video(_src(video, "video source"))
    image = block.select_one(selectors.image)
    if image is not None:
        return Media.image(_src(image, "image"))
    return None


def parse_question(block: Tag, selectors: Selectors = DEFAULT_SELECTORS) -> Question:
    text_el = _required(block, selectors.question_text, "question text")
    change_date = _required(text_el, selectors.question_change_date, "change date").get_text()
    code = _required(text_el, selectors.question_code, "question code").get_text()

    answers = _parse_answers(block, selectors)
    if not answers:
        raise StructureError(f"question {code} has no answers", str(block))

    correct = [i for i, (is_correct, _) in enumerate(answers) if is_correct]
    if not correct:
        raise StructureError(f"question {code} has no correct answer", str(block))
    if len(correct) > 1:
        logger.warning(
            f"question {code} has {len(correct)} answers marked correct, keeping the first"
        )

    right = correct[0]
    wrong = [text for i, (_, text) in enumerate(answers) if i != right]

    return Question(
        code=code,
        change_date=change_date,
        question=normalize_text(_last_text(text_el)),
        media=_parse_media(block, selectors),
        right_answer=answers[right][1],
        first_wrong_answer=wrong[0] if len(wrong) > 0 else None,
        second_wrong_answer=wrong[1] if len(wrong) > 1 else None,
    )


def extract_questions(html: str, selectors: Selectors = DEFAULT_SELECTORS) -> List[Question]:
    soup = BeautifulSoup(html, "html.parser")
    return [parse_question(block, selectors) for block in soup.select(selectors.question)]
