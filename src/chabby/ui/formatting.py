"""Text formatting utilities for the TUI.

Hides how rendered markup blocks are turned into Rich text. Fragment text is
always appended as plain content, never parsed as Rich markup.
"""

from datetime import datetime

from rich.text import Text

from ..markup import BlockKind, DisplayBlock, Fragment, FragmentKind, render
from .config import MESSAGE_TIME_FORMAT

HEADING_STYLES = {
    1: "bold underline",
    2: "bold",
    3: "bold italic",
}

FRAGMENT_STYLES = {
    FragmentKind.TEXT: "",
    FragmentKind.CODE: "bold cyan on grey19",
    FragmentKind.STRONG: "bold",
}


def format_time(timestamp: datetime) -> str:
    """Format a message timestamp for display."""
    return timestamp.strftime(MESSAGE_TIME_FORMAT)


def _append_fragments(text: Text, fragments: tuple[Fragment, ...], base_style: str = "") -> None:
    for fragment in fragments:
        style = f"{base_style} {FRAGMENT_STYLES[fragment.kind]}".strip()
        text.append(fragment.text, style=style or None)


def blocks_to_text(blocks: list[DisplayBlock]) -> Text:
    """Convert display blocks to a Rich Text renderable.

    Ordered items are numbered by position within each consecutive run.
    """
    text = Text(overflow="fold")
    ordinal = 0

    for index, block in enumerate(blocks):
        if index:
            text.append("\n")
        ordinal = ordinal + 1 if block.kind is BlockKind.ORDERED_ITEM else 0

        if block.kind is BlockKind.HEADING:
            _append_fragments(text, block.fragments, HEADING_STYLES.get(block.level or 1, "bold"))
        elif block.kind is BlockKind.BULLET_ITEM:
            text.append("  • ", style="dim")
            _append_fragments(text, block.fragments)
        elif block.kind is BlockKind.ORDERED_ITEM:
            text.append(f"  {ordinal}. ", style="dim")
            _append_fragments(text, block.fragments)
        elif block.kind is BlockKind.PARAGRAPH:
            _append_fragments(text, block.fragments)
        # spacers contribute only the line break

    return text


def render_markup(content: str) -> Text:
    """Render agent markup straight to Rich text."""
    return blocks_to_text(render(content))
