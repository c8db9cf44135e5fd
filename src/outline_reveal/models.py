"""Data model for parsed outlines, positioned tokens and connectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from .config import LayoutConfig, TagPalette


class CheckboxState(str, Enum):
    """Checkbox states keyed by the character between the brackets."""

    UNCHECKED = "unchecked"
    DONE = "done"
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"
    ERROR = "error"
    QUESTION = "question"


CHECKBOX_CHAR_TO_STATE: dict[str, CheckboxState] = {
    " ": CheckboxState.UNCHECKED,
    "x": CheckboxState.DONE,
    "X": CheckboxState.DONE,
    "/": CheckboxState.IN_PROGRESS,
    "-": CheckboxState.CANCELLED,
    "!": CheckboxState.ERROR,
    "?": CheckboxState.QUESTION,
}


def checkbox_state_for(char: str) -> CheckboxState:
    return CHECKBOX_CHAR_TO_STATE.get(char, CheckboxState.UNCHECKED)


class MarkerKind(str, Enum):
    CHECKBOX = "checkbox"
    BULLET = "bullet"


class TokenKind(str, Enum):
    CHECKBOX = "checkbox"
    BULLET = "bullet"
    TAG = "tag"
    TEXT = "text"
    SPACE = "space"


# Tokens


@dataclass(frozen=True)
class Token:
    raw: str

    kind: ClassVar[TokenKind] = TokenKind.TEXT

    @property
    def length(self) -> int:
        return len(self.raw)


@dataclass(frozen=True)
class CheckboxToken(Token):
    state: CheckboxState = CheckboxState.UNCHECKED

    kind: ClassVar[TokenKind] = TokenKind.CHECKBOX


@dataclass(frozen=True)
class BulletToken(Token):
    kind: ClassVar[TokenKind] = TokenKind.BULLET


@dataclass(frozen=True)
class TagToken(Token):
    tag_name: str = ""

    kind: ClassVar[TokenKind] = TokenKind.TAG


@dataclass(frozen=True)
class TextToken(Token):
    kind: ClassVar[TokenKind] = TokenKind.TEXT


@dataclass(frozen=True)
class SpaceToken(Token):
    width: float = 0.0

    kind: ClassVar[TokenKind] = TokenKind.SPACE


@dataclass(frozen=True)
class PositionedToken:
    """A token with its global character range.

    Offsets index into the concatenation of every line's tokens in line order;
    no offset is consumed between lines.
    """

    token: Token
    start: int
    end: int
    line_index: int

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    @property
    def raw(self) -> str:
        return self.token.raw

    @property
    def length(self) -> int:
        return self.token.length


# Line analysis and content segments


@dataclass(frozen=True)
class LineAnalysis:
    indent_spaces: int
    indent_level: int
    marker: Optional[MarkerKind]
    connector_tag_name: Optional[str]
    checkbox_state: Optional[CheckboxState] = None


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class TagSegment:
    raw: str
    tag_name: str
    recognized: bool
    color: Optional[str]


@dataclass(frozen=True)
class LinkSegment:
    alias: str
    url: str


Segment = Union[TextSegment, TagSegment, LinkSegment]


# Layout


@dataclass(frozen=True)
class Connector:
    """Vertical bar grouping a tagged row with its indented subtree.

    `height` and `offset` are measured in pixels relative to the owning row's
    center.
    """

    tag_name: str
    color: str
    child_indices: tuple[int, ...]
    height: float
    offset: float


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int


@dataclass(frozen=True)
class ParsedLine:
    index: int
    raw: str
    analysis: LineAnalysis
    segments: tuple[Segment, ...]
    tokens: tuple[PositionedToken, ...]
    indent_tokens: tuple[PositionedToken, ...]
    marker_token: Optional[PositionedToken]
    content_tokens: tuple[PositionedToken, ...]
    center: float
    range: LineRange
    reveal_threshold: int
    parent_index: Optional[int] = None
    connector: Optional[Connector] = None

    @property
    def indent_spaces(self) -> int:
        return self.analysis.indent_spaces

    @property
    def indent_level(self) -> int:
        return self.analysis.indent_level

    @property
    def marker(self) -> Optional[MarkerKind]:
        return self.analysis.marker

    @property
    def checkbox_state(self) -> Optional[CheckboxState]:
        return self.analysis.checkbox_state


@dataclass(frozen=True)
class Document:
    lines: tuple[ParsedLine, ...]
    line_centers: tuple[float, ...]
    total_characters: int
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    palette: TagPalette = field(default_factory=TagPalette)

    def flat_tokens(self) -> list[PositionedToken]:
        return [token for line in self.lines for token in line.tokens]

    @property
    def connectors(self) -> dict[int, Connector]:
        return {line.index: line.connector for line in self.lines if line.connector is not None}
