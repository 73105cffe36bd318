"""
Lexical LSH encoder.

A vector goes through four filters, each a generator over the previous one:

1. ``encode_features``  one token per dimension: sign, digits rounded half-up
   to ``decimals`` places with the point removed, "_", alphabetic index.
2. ``shingle``          character n-grams of each feature token, grouped per
   source token so the next stage knows where a feature ends.
3. ``hash_set``         the ``hash_set_size`` lexicographically smallest
   distinct n-grams of every group (a deterministic min-hash surrogate).
4. ``multi_hash``       ``hash_count`` bucket labels per retained n-gram,
   ``<round>_<bucket>`` with the bucket spelled in fixed-width letters.
"""
from __future__ import annotations
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Iterator, List, Optional
import numpy as np

from .base import BaseAnalyzer, RawFeature
from .vector_tokenizer import tokenize_vector
from ..config import LexLshConfig
from ..errors import NonFiniteValue
from ..utils.alphabet import alphabetic_encode, label_width
from ..utils.hashing import token_hash64


def format_digits(value: float, decimals: int) -> str:
    """|value| rounded half-up to ``decimals`` places, decimal point stripped."""
    # Round the shortest binary32 representation, not the widened double
    text = np.format_float_positional(np.float32(abs(value)), unique=True, trim="-")
    quantum = Decimal(1).scaleb(-decimals)
    context = Context(prec=len(text) + decimals + 1)
    rounded = Decimal(text).quantize(quantum, rounding=ROUND_HALF_UP, context=context)
    return format(rounded, "f").replace(".", "")


def feature_token(index: int, value: float, decimals: int) -> str:
    sign = "-" if value < 0 else "+"
    return f"{sign}{format_digits(value, decimals)}_{alphabetic_encode(index)}"


def encode_features(features: Iterable[RawFeature], decimals: int) -> Iterator[str]:
    for index, value in features:
        if math.isnan(value):
            continue
        if math.isinf(value):
            raise NonFiniteValue(index, value)
        yield feature_token(index, value, decimals)


def ngrams(token: str, n: int) -> List[str]:
    if len(token) < n:
        return [token]
    return [token[i:i + n] for i in range(len(token) - n + 1)]


def shingle(tokens: Iterable[str], n: int) -> Iterator[List[str]]:
    """Yield the n-grams of each token as one group per source token."""
    for token in tokens:
        yield ngrams(token, n)


def hash_set(groups: Iterable[List[str]], size: int) -> Iterator[str]:
    for group in groups:
        yield from sorted(set(group))[:size]


def bucket_label(shingle_text: str, round_index: int, bucket_count: int, width: int) -> str:
    bucket = token_hash64(shingle_text, round_index) % bucket_count
    return f"{alphabetic_encode(round_index)}_{alphabetic_encode(bucket, width)}"


def multi_hash(shingles: Iterable[str], hash_count: int, bucket_count: int) -> Iterator[str]:
    width = label_width(bucket_count)
    for text in shingles:
        for k in range(hash_count):
            yield bucket_label(text, k, bucket_count, width)


class LexicalLshAnalyzer(BaseAnalyzer):
    name = "lexlsh"
    similarity = "bm25"

    def __init__(self, decimals: int = 1, ngrams: int = 2, hash_count: int = 1,
                 bucket_count: int = 300, hash_set_size: int = 1,
                 config: Optional[LexLshConfig] = None):
        if config is None:
            config = LexLshConfig(decimals=decimals, ngrams=ngrams, hash_count=hash_count,
                                  bucket_count=bucket_count, hash_set_size=hash_set_size)
        self.config = config

    @property
    def params(self) -> Dict[str, Any]:
        return {
            "decimals": self.config.decimals,
            "ngrams": self.config.ngrams,
            "hash_count": self.config.hash_count,
            "bucket_count": self.config.bucket_count,
            "hash_set_size": self.config.hash_set_size,
        }

    def encode(self, features: Iterable[RawFeature]) -> Iterator[str]:
        cfg = self.config
        stream = encode_features(features, cfg.decimals)
        groups = shingle(stream, cfg.ngrams)
        retained = hash_set(groups, cfg.hash_set_size)
        return multi_hash(retained, cfg.hash_count, cfg.bucket_count)

    def features(self, text: str) -> List[str]:
        """Feature tokens of a textual vector, before shingling."""
        return list(encode_features(tokenize_vector(text), self.config.decimals))
