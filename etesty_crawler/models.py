# etesty_crawler/models.py
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

CSV_COLUMNS: List[str] = [
    "code",
    "change_date",
    "question",
    "media",
    "right_answer",
    "first_wrong_answer",
    "second_wrong_answer",
]


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    scope_id: str


class Media(BaseModel):
    """Image or video attached to a question. ``src`` is kept as found in the markup."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image", "video"]
    url: str

    @classmethod
    def image(cls, url: str) -> "Media":
        return cls(kind="image", url=url)

    @classmethod
    def video(cls, url: str) -> "Media":
        return cls(kind="video", url=url)

    def to_cell(self) -> str:
        return f"{self.kind}:{self.url}"

    @classmethod
    def from_cell(cls, cell: str) -> Optional["Media"]:
        """Inverse of ``to_cell``; an empty cell means no media."""
        if not cell:
            return None
        kind, sep, url = cell.partition(":")
        if not sep or kind not in ("image", "video"):
            raise ValueError(f"not a media cell: {cell!r}")
        return cls(kind=kind, url=url)


def media_cell(media: Optional[Media]) -> str:
    return media.to_cell() if media is not None else ""


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    change_date: str
    question: str
    media: Optional[Media] = None
    right_answer: str
    first_wrong_answer: Optional[str] = None
    second_wrong_answer: Optional[str] = None

    def to_row(self) -> Dict[str, Optional[str]]:
        return {
            "code": self.code,
            "change_date": self.change_date,
            "question": self.question,
            "media": media_cell(self.media),
            "right_answer": self.right_answer,
            "first_wrong_answer": self.first_wrong_answer,
            "second_wrong_answer": self.second_wrong_answer,
        }
