from __future__ import annotations
import math
from typing import Any, Dict, Iterable, Iterator, Optional
import numpy as np

from .base import BaseAnalyzer, RawFeature
from ..config import FakeWordsConfig
from ..errors import NonFiniteValue, QuantizationOverflow
from ..utils.alphabet import alphabetic_encode

DEFAULT_Q = 60
# Upper bound on the tokens one dimension may emit
MAX_REPETITIONS = 1_000_000


def fake_word(index: int, value: float) -> str:
    """Term for one dimension: a sign marker followed by the alphabetic index."""
    sign = "-" if value < 0 else "+"
    return sign + alphabetic_encode(index)


def quantize(value: float, q: float, index: int = 0) -> int:
    """
    Number of repetitions for a value, floor(|value| * q) computed in binary32.
    Raises QuantizationOverflow when the product overflows or exceeds
    MAX_REPETITIONS.
    """
    with np.errstate(over="ignore"):
        scaled = np.float32(abs(value)) * np.float32(q)
    if not np.isfinite(scaled) or scaled > MAX_REPETITIONS:
        raise QuantizationOverflow(index, value, q, MAX_REPETITIONS)
    return int(math.floor(scaled))


def quantize_and_encode(features: Iterable[RawFeature], q: float) -> Iterator[str]:
    """
    Fake-words filter: each dimension becomes its fake word repeated
    floor(|v| * q) times. NaN dimensions are skipped, infinite ones raise.
    """
    for index, value in features:
        if math.isnan(value):
            continue
        if math.isinf(value):
            raise NonFiniteValue(index, value)
        count = quantize(value, q, index)
        if count <= 0:
            continue
        token = fake_word(index, value)
        for _ in range(count):
            yield token


class FakeWordsAnalyzer(BaseAnalyzer):
    """
    Quantization based encoder. Higher magnitude dimensions repeat their
    fake word more often, so term-frequency scoring approximates an inner
    product between vectors.
    """
    name = "fw"
    similarity = "classic"

    def __init__(self, q: Optional[float] = None, config: Optional[FakeWordsConfig] = None):
        if config is None:
            config = FakeWordsConfig(q=float(DEFAULT_Q if q is None else q))
        self.config = config

    @property
    def q(self) -> float:
        return self.config.q

    @property
    def params(self) -> Dict[str, Any]:
        return {"q": self.config.q}

    def encode(self, features: Iterable[RawFeature]) -> Iterator[str]:
        return quantize_and_encode(features, self.config.q)
