"""Segment name sanitizing.

X-Ray accepts names made of Unicode letters, numbers and whitespace plus the
symbols ``_ . : / % & # = + \\ - @``, up to 200 characters.
"""

from __future__ import annotations

import re

MAX_SEGMENT_NAME_LENGTH = 200
DEFAULT_SEGMENT_NAME = "span"

_INVALID_SEGMENT_NAME_CHARACTERS = re.compile(r"[^\w\s.:/%&#=+\\\-@]")


def fix_segment_name(name: str | None) -> str:
    """
    Remove invalid characters from a span name and bound its length.

    Returns ``"span"`` when nothing usable is left.
    """
    if not name:
        return DEFAULT_SEGMENT_NAME

    name = _INVALID_SEGMENT_NAME_CHARACTERS.sub("", name)
    if len(name) > MAX_SEGMENT_NAME_LENGTH:
        name = name[:MAX_SEGMENT_NAME_LENGTH]
    elif not name:
        name = DEFAULT_SEGMENT_NAME

    return name
