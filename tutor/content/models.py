from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TableData(BaseModel):
    model_config = ConfigDict(frozen=True)

    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.headers)


class _Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    raw: str  # literal source span, delimiters included


class TextSegment(_Segment):
    kind: Literal["text"] = "text"
    text: str


class InlineMathSegment(_Segment):
    kind: Literal["inline_math"] = "inline_math"
    math: str


class BlockMathSegment(_Segment):
    kind: Literal["block_math"] = "block_math"
    math: str


class TableSegment(_Segment):
    kind: Literal["table"] = "table"
    table: TableData


ContentSegment = Annotated[
    Union[TextSegment, InlineMathSegment, BlockMathSegment, TableSegment],
    Field(discriminator="kind"),
]


class MarkdownBlock(BaseModel):
    """Whole input handed to the markdown formatter in one pass."""

    kind: Literal["markdown"] = "markdown"
    text: str


class InlineGroupBlock(BaseModel):
    """
    Consecutive text and inline-math segments merged into one flow unit.

    `text` holds the prose with every equation swapped for a placeholder token;
    `math_map` maps each token back to its LaTeX source. With `literal=True` the
    prose is shown as-is (line breaks kept) instead of going through markdown.
    """

    kind: Literal["inline_group"] = "inline_group"
    text: str
    math_map: dict[str, str] = Field(default_factory=dict)
    literal: bool = False


class BlockMathBlock(BaseModel):
    kind: Literal["block_math"] = "block_math"
    math: str


class TableBlock(BaseModel):
    kind: Literal["table"] = "table"
    table: TableData


RenderBlock = Annotated[
    Union[MarkdownBlock, InlineGroupBlock, BlockMathBlock, TableBlock],
    Field(discriminator="kind"),
]
