from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple


class RawFeature(NamedTuple):
    """One (dimension index, value) pair read from a textual vector."""
    index: int
    value: float


class BaseAnalyzer(ABC):
    """
    Turns a textual vector into a stream of index terms.

    Analyzers are immutable once built and keep no per-call state, so a
    single instance can serve concurrent callers.
    """
    name = "base"
    similarity = "classic"  # scoring the index should use for these terms

    @abstractmethod
    def encode(self, features: Iterable[RawFeature]) -> Iterator[str]:
        """Encode already tokenized features into terms, lazily."""

    @property
    @abstractmethod
    def params(self) -> Dict[str, Any]:
        """Encoder parameters, as persisted in an index manifest."""

    def analyze(self, text: str) -> Iterator[str]:
        from .vector_tokenizer import tokenize_vector
        return self.encode(tokenize_vector(text))

    def tokens(self, text: str) -> List[str]:
        return list(self.analyze(text))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{type(self).__name__}({args})"
