from __future__ import annotations
import re
from typing import Iterator, Sequence
import numpy as np

from .base import RawFeature
from ..errors import InvalidVectorFormat

# Signed decimal or scientific literal in ASCII digits; NaN and Infinity are spelled out
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|nan|inf(?:inity)?)",
    re.IGNORECASE | re.ASCII,
)


def _to_float32(literal: str, position: int) -> float:
    if not _FLOAT_LITERAL.fullmatch(literal):
        raise InvalidVectorFormat(literal, position)
    with np.errstate(over="ignore"):
        # Out-of-range literals become +/-inf, as a binary32 parse would
        return float(np.float32(float(literal)))


def tokenize_vector(text: str) -> Iterator[RawFeature]:
    """
    Lazily parse whitespace-separated float literals into RawFeature pairs.

    Values are rounded to binary32. Empty or blank input yields nothing.
    A malformed literal raises InvalidVectorFormat when it is reached.
    """
    for position, literal in enumerate(text.split()):
        yield RawFeature(position, _to_float32(literal, position))


def parse_vector(text: str) -> np.ndarray:
    """Eagerly parse a textual vector into a float32 array."""
    return np.array([f.value for f in tokenize_vector(text)], dtype=np.float32)


def format_vector(values: Sequence[float]) -> str:
    """Render a vector in the textual format accepted by tokenize_vector."""
    return " ".join(
        np.format_float_positional(np.float32(v), unique=True, trim="-") for v in values
    )
