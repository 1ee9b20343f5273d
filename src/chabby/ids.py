"""Identifier generation.

Hides how message and conversation identifiers are produced. Callers that need
deterministic identifiers (tests) inject their own ``IdGenerator``.
"""

from collections.abc import Callable
from uuid import uuid4

IdGenerator = Callable[[], str]


def generate_id() -> str:
    """Return a new opaque identifier (random 128-bit UUID, hex encoded)."""
    return uuid4().hex
