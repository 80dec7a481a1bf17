"""Identifier generation for pages, blocks and tags.

Code that creates entities takes an ``IdFactory`` (a zero-argument callable
returning a new process-unique string) instead of calling uuid directly.
"""

import itertools
import uuid
from typing import Callable


IdFactory = Callable[[], str]


def generate_random_uuid() -> str:
    """
    Generate random UUID v4.

    Default identifier factory for new pages, blocks and tags.

    Returns:
        UUID string in standard format

    Example:
        >>> generate_random_uuid()
        "f47ac10b-58cc-4372-a567-0e02b2c3d479"
    """
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "id") -> IdFactory:
    """
    Create a factory producing "prefix-1", "prefix-2", ...

    Deterministic alternative to UUIDs, for reproducible output.

    Example:
        >>> next_id = sequential_ids("tag")
        >>> next_id(), next_id()
        ("tag-1", "tag-2")
    """
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"
