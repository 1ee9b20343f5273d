"""Data models for rendered markup."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FragmentKind(str, Enum):
    """Inline fragment types."""

    TEXT = "text"
    CODE = "code"
    STRONG = "strong"


class BlockKind(str, Enum):
    """Line-level block types."""

    HEADING = "heading"
    BULLET_ITEM = "bullet_item"
    ORDERED_ITEM = "ordered_item"
    SPACER = "spacer"
    PARAGRAPH = "paragraph"


class Fragment(BaseModel):
    """A run of inline text with a single formatting kind."""

    model_config = ConfigDict(frozen=True)

    kind: FragmentKind = Field(default=FragmentKind.TEXT)
    text: str


class DisplayBlock(BaseModel):
    """One rendered line.

    Headings carry a ``level`` (1-3). Spacers carry no fragments.
    """

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    level: int | None = Field(default=None, description="Heading level, headings only")
    fragments: tuple[Fragment, ...] = Field(default_factory=tuple)

    @property
    def plain_text(self) -> str:
        """Concatenated fragment text without formatting."""
        return "".join(fragment.text for fragment in self.fragments)
