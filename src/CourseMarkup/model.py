from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Literal, NotRequired, TypedDict, Union


class AlertType(str, Enum):
    INFO = "INFO"
    TIP = "TIP"
    NOTE = "NOTE"
    WARNING = "WARNING"

    @classmethod
    def normalize(cls, token: str | None) -> "AlertType":
        """Map a raw type token to a member; anything unknown renders as NOTE."""
        if token:
            try:
                return cls(token.strip().upper())
            except ValueError:
                pass
        return cls.NOTE

    @property
    def slug(self) -> str:
        return self.value.lower()


@dataclass
class Block:
    """Base class for block-level nodes."""


@dataclass
class Document:
    blocks: List[Block]


@dataclass
class Heading(Block):
    level: int
    text: str


@dataclass
class Paragraph(Block):
    lines: List[str]


@dataclass
class ListBlock(Block):
    items: List[str]
    ordered: bool
    start: int = 1


@dataclass
class Blockquote(Block):
    lines: List[str]


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""


@dataclass
class AlertBlock(Block):
    alert_type: AlertType
    lines: List[str] = field(default_factory=list)


@dataclass
class TableCell:
    text: str
    colspan: int = 1
    key: bool = False


@dataclass
class TableRow:
    cells: List[TableCell]


@dataclass
class TableBlock(Block):
    caption: str
    header: List[str]
    rows: List[TableRow] = field(default_factory=list)


class QuizOption(TypedDict):
    id: str
    text: str


class QuizQuestion(TypedDict):
    id: str
    questionText: str
    options: List[QuizOption]
    correctAnswerId: str
    explanation: str


class QuizSection(TypedDict):
    title: NotRequired[str]
    questions: List[QuizQuestion]


@dataclass
class ContentItem:
    """One segment of rendered course content: an HTML chunk or a quiz payload."""

    type: Literal["html", "quiz"]
    content: Union[str, QuizSection]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}
