"""Restricted markup rendering for agent responses.

Turns the lightweight markdown subset the agent produces into a flat sequence
of display blocks. Only a fixed token set is recognized; everything else is
literal text.
"""

from .models import BlockKind, DisplayBlock, Fragment, FragmentKind
from .renderer import format_inline, render

__all__ = [
    "BlockKind",
    "DisplayBlock",
    "Fragment",
    "FragmentKind",
    "format_inline",
    "render",
]
