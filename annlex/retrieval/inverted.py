from __future__ import annotations
import math
from collections import Counter
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..query import CommonTermsQuery, min_should_match

SIMILARITIES = ("classic", "bm25")


class Hit(NamedTuple):
    ordinal: int
    doc_id: str
    score: float


class InvertedIndex:
    """
    In-memory term index that executes CommonTermsQuery objects.

    Stands in for the full-text engine: postings map term -> {doc ordinal: tf},
    and every document keeps its id, the stored vector string and its length.
    """
    def __init__(self, similarity: str = "classic", k1: float = 1.2, b: float = 0.75):
        if similarity not in SIMILARITIES:
            raise ValueError(f"Unknown similarity: {similarity}. Available: {list(SIMILARITIES)}")
        self.similarity = similarity
        self.k1 = k1
        self.b = b
        self.postings: Dict[str, Dict[int, int]] = {}
        self.docs: List[Dict] = []
        self._total_length = 0

    @classmethod
    def from_state(cls, similarity: str, postings: Dict[str, Dict[int, int]], docs: List[Dict]) -> 'InvertedIndex':
        index = cls(similarity=similarity)
        index.postings = postings
        index.docs = docs
        index._total_length = sum(d["length"] for d in docs)
        return index

    def __len__(self) -> int:
        return len(self.docs)

    @property
    def num_docs(self) -> int:
        return len(self.docs)

    def add(self, doc_id: str, tokens: Iterable[str], vector: Optional[str] = None) -> int:
        """Index one document and return its ordinal."""
        ordinal = len(self.docs)
        tf = Counter(tokens)
        length = sum(tf.values())
        for term, freq in tf.items():
            self.postings.setdefault(term, {})[ordinal] = freq
        self.docs.append({"id": doc_id, "vector": vector, "length": length})
        self._total_length += length
        return ordinal

    def doc_freq(self, term: str) -> int:
        return len(self.postings.get(term, ()))

    def stored_vectors(self, doc_id: str) -> List[str]:
        """Stored vector strings of every document with the given id."""
        return [d["vector"] for d in self.docs if d["id"] == doc_id and d["vector"] is not None]

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _idf(self, df: int) -> float:
        n = self.num_docs
        if self.similarity == "classic":
            return 1.0 + math.log((n + 1) / (df + 1))
        return math.log(1.0 + (n - df + 0.5) / (df + 0.5))

    def _term_score(self, tf: int, idf: float, length: int) -> float:
        if self.similarity == "classic":
            norm = 1.0 / math.sqrt(length) if length else 0.0
            return math.sqrt(tf) * idf * idf * norm
        avg = self._total_length / self.num_docs if self.num_docs else 0.0
        denom = tf + self.k1 * (1 - self.b + self.b * (length / avg if avg else 0.0))
        return idf * tf * (self.k1 + 1) / denom

    def _score_tier(self, tier: List[Tuple[str, int]], msm: float) -> Dict[int, float]:
        """Scores of documents matching enough clauses of one SHOULD tier."""
        if not tier:
            return {}
        clauses = sum(count for _, count in tier)
        required = max(1, min_should_match(msm, clauses))
        matched: Dict[int, int] = {}
        scores: Dict[int, float] = {}
        for term, count in tier:
            posting = self.postings.get(term)
            if not posting:
                continue
            idf = self._idf(len(posting))
            for ordinal, tf in posting.items():
                matched[ordinal] = matched.get(ordinal, 0) + count
                scores[ordinal] = scores.get(ordinal, 0.0) + count * self._term_score(tf, idf, self.docs[ordinal]["length"])
        return {o: s for o, s in scores.items() if matched[o] >= required}

    def search(self, query: CommonTermsQuery, depth: int = 10) -> List[Hit]:
        low, high = query.split(self.doc_freq, self.num_docs)
        low_scores = self._score_tier(low, query.low_freq_msm)
        high_scores = self._score_tier(high, query.high_freq_msm)

        if not low:
            scores = high_scores
        elif not high:
            scores = low_scores
        else:
            # Low-frequency tier is required, high-frequency terms only add score
            scores = {o: s + high_scores.get(o, 0.0) for o, s in low_scores.items()}

        ranked = sorted(scores.items(), key=lambda x: (-x[1], x[0]))[:max(0, depth)]
        return [Hit(o, self.docs[o]["id"], s) for o, s in ranked]
