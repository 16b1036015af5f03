"""Image source classification.

Turns a value of unknown shape into exactly one of:
- MissingSource: nothing was supplied
- InvalidSource: something was supplied but cannot be rendered
- ValidSource: a non-blank string, trimmed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class MissingSource:
    """No source supplied."""


@dataclass(frozen=True)
class InvalidSource:
    """Source supplied but unusable.

    Attributes:
        reason: Human-readable reason, for debug logging.
    """

    reason: str


@dataclass(frozen=True)
class ValidSource:
    """Renderable source.

    Attributes:
        text: Source with surrounding whitespace removed; never empty.
    """

    text: str


ImageSource = Union[MissingSource, InvalidSource, ValidSource]


def classify_source(value: Any) -> ImageSource:
    """Classify a candidate image source.

    Args:
        value: Anything a caller passed as an image src.

    Returns:
        MissingSource for None, InvalidSource for non-strings and blank
        strings, otherwise ValidSource with the trimmed text.
    """
    if value is None:
        return MissingSource()
    if not isinstance(value, str):
        return InvalidSource(f"expected str, got {type(value).__name__}")
    text = value.strip()
    if not text:
        return InvalidSource("blank string")
    return ValidSource(text)
