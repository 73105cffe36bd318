"""
Common-terms query assembly.

A query is a multiset of terms against one field. At execution time the
terms are split by document frequency into a high-frequency and a
low-frequency tier; both tiers are SHOULD disjunctions and each may demand
a minimum number of matching clauses.
"""
from __future__ import annotations
import math
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from .errors import EmptyQuery, InvalidParameter


def min_should_match(msm: float, optional_clauses: int) -> int:
    """
    Number of clauses a tier must match.

    ``msm`` of 0 or >= 1 is an absolute count (truncated); a value strictly
    between 0 and 1 is a fraction of the tier's clauses, rounded half-up.
    """
    if msm == 0 or msm >= 1:
        return int(msm)
    return int(math.floor(msm * optional_clauses + 0.5))


@dataclass(frozen=True)
class CommonTermsQuery:
    field: str
    terms: Tuple[Tuple[str, int], ...]  # (term, occurrences), sorted by term
    cutoff: float
    high_freq_msm: float = 0.0
    low_freq_msm: float = 0.0

    @property
    def counts(self) -> Counter:
        return Counter(dict(self.terms))

    @property
    def clause_count(self) -> int:
        return sum(count for _, count in self.terms)

    def high_freq_threshold(self, num_docs: int) -> int:
        """Document frequency above which a term is high-frequency."""
        return int(math.ceil(self.cutoff * num_docs))

    def split(self, doc_freq: Callable[[str], int], num_docs: int) -> Tuple[List[Tuple[str, int]], List[Tuple[str, int]]]:
        """Partition the terms into (low, high) tiers by document frequency."""
        threshold = self.high_freq_threshold(num_docs)
        low, high = [], []
        for term, count in self.terms:
            (high if doc_freq(term) > threshold else low).append((term, count))
        return low, high

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "terms": dict(self.terms),
            "cutoff": self.cutoff,
            "high_freq_msm": self.high_freq_msm,
            "low_freq_msm": self.low_freq_msm,
        }


def assemble_query(field: str, tokens: Iterable[str], cutoff: float, msm: float = 0.0) -> CommonTermsQuery:
    """
    Build a CommonTermsQuery from an encoder's token stream.

    Only the multiset of tokens matters; any permutation of the same
    tokens yields an equal query. When ``msm`` > 0 it applies to both tiers.
    """
    if not field:
        raise InvalidParameter("query field must be a non-empty string")
    if not 0 < cutoff <= 1:
        raise InvalidParameter(f"cutoff must be in (0, 1], got {cutoff}")
    if msm < 0:
        raise InvalidParameter(f"msm must be >= 0, got {msm}")

    counts = Counter(tokens)
    if not counts:
        raise EmptyQuery()

    tier_msm = float(msm) if msm > 0 else 0.0
    return CommonTermsQuery(
        field=field,
        terms=tuple(sorted(counts.items())),
        cutoff=float(cutoff),
        high_freq_msm=tier_msm,
        low_freq_msm=tier_msm,
    )
