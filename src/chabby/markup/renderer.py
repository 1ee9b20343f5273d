"""Line-oriented renderer for the restricted markup subset.

Grammar (first match wins, per line):
- ``### ``, ``## ``, ``# `` headings
- ``- `` / ``* `` bullet items
- ``<digits>. `` ordered items (the number is discarded)
- whitespace-only lines become spacers
- anything else is a paragraph

Inline formatting runs in two passes: backtick code spans first, then
``**strong**`` spans inside the remaining text. Unmatched markers stay literal.
The renderer never raises and never interprets its input as executable markup.
"""

import re

from .models import BlockKind, DisplayBlock, Fragment, FragmentKind

_CODE_SPAN = re.compile(r"`([^`]+)`")
_STRONG_SPAN = re.compile(r"\*\*(.*?)\*\*")
_ORDERED_PREFIX = re.compile(r"^[0-9]+\.\s")

_HEADING_PREFIXES = (
    ("### ", 3),
    ("## ", 2),
    ("# ", 1),
)
_BULLET_PREFIXES = ("- ", "* ")


def _split_strong(text: str) -> list[Fragment]:
    fragments: list[Fragment] = []
    # re.split with one capture group alternates outside/inside spans
    for index, part in enumerate(_STRONG_SPAN.split(text)):
        if index % 2 == 1:
            fragments.append(Fragment(kind=FragmentKind.STRONG, text=part))
        elif part:
            fragments.append(Fragment(kind=FragmentKind.TEXT, text=part))
    return fragments


def format_inline(text: str) -> tuple[Fragment, ...]:
    """Split a line into plain, code and strong fragments.

    Args:
        text: Line content with any block prefix already removed

    Returns:
        Ordered fragments; empty plain-text runs are dropped
    """
    fragments: list[Fragment] = []
    for index, part in enumerate(_CODE_SPAN.split(text)):
        if index % 2 == 1:
            fragments.append(Fragment(kind=FragmentKind.CODE, text=part))
        else:
            fragments.extend(_split_strong(part))
    return tuple(fragments)


def _render_line(line: str) -> DisplayBlock:
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return DisplayBlock(
                kind=BlockKind.HEADING,
                level=level,
                fragments=format_inline(line[len(prefix):]),
            )

    if line.startswith(_BULLET_PREFIXES):
        return DisplayBlock(kind=BlockKind.BULLET_ITEM, fragments=format_inline(line[2:]))

    match = _ORDERED_PREFIX.match(line)
    if match:
        return DisplayBlock(
            kind=BlockKind.ORDERED_ITEM,
            fragments=format_inline(line[match.end():]),
        )

    if not line.strip():
        return DisplayBlock(kind=BlockKind.SPACER)

    return DisplayBlock(kind=BlockKind.PARAGRAPH, fragments=format_inline(line))


def render(text: str) -> list[DisplayBlock]:
    """Render restricted markup into display blocks.

    Args:
        text: Agent output (untrusted)

    Returns:
        One block per input line; an empty list for empty input
    """
    if not text:
        return []
    return [_render_line(line) for line in text.split("\n")]
