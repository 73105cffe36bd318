"""Tests for annlex/analysis/fake_words.py: the fake-words encoder."""

from __future__ import annotations

from collections import Counter

import pytest

from annlex.analysis import FakeWordsAnalyzer, RawFeature, quantize_and_encode
from annlex.analysis.fake_words import MAX_REPETITIONS, fake_word, quantize
from annlex.errors import EmptyQuery, InvalidParameter, NonFiniteValue, QuantizationOverflow
from annlex.query import assemble_query


class TestEncoding:
    def test_basic_vector(self):
        tokens = FakeWordsAnalyzer(q=10).tokens("0.5 -0.25 0.0")
        assert tokens == ["+a"] * 5 + ["-b"] * 2
        assert len(tokens) == 7

    def test_small_values_suppressed(self):
        assert FakeWordsAnalyzer(q=10).tokens("0.04") == []

    def test_suppressed_vector_is_empty_query(self):
        with pytest.raises(EmptyQuery):
            assemble_query("vector", FakeWordsAnalyzer(q=10).analyze("0.04"), cutoff=0.999)

    def test_count_is_floor_of_scaled_magnitude(self):
        counts = Counter(FakeWordsAnalyzer(q=60).tokens("0.5 0.25 -0.75 0.125"))
        assert counts == {"+a": 30, "+b": 15, "-c": 45, "+d": 7}

    def test_repetitions_are_consecutive(self):
        tokens = FakeWordsAnalyzer(q=10).tokens("0.3 -0.2 0.4")
        runs = [t for i, t in enumerate(tokens) if i == 0 or tokens[i - 1] != t]
        assert runs == ["+a", "-b", "+c"]

    def test_fractional_q(self):
        assert FakeWordsAnalyzer(q=2.5).tokens("1.0") == ["+a", "+a"]

    def test_default_quantization_factor(self):
        assert FakeWordsAnalyzer().q == 60
        assert FakeWordsAnalyzer().params == {"q": 60.0}

    def test_deterministic(self):
        text = "0.1 -0.7 0.33 -0.02 0.9"
        analyzer = FakeWordsAnalyzer(q=60)
        assert analyzer.tokens(text) == analyzer.tokens(text) == FakeWordsAnalyzer(q=60).tokens(text)

    def test_empty_vector(self):
        assert FakeWordsAnalyzer().tokens("") == []


class TestSignSeparation:
    def test_sign_distinguishes_tokens(self):
        assert fake_word(3, 1.0) != fake_word(3, -1.0)

    def test_dimensions_distinguish_tokens(self):
        tokens = {fake_word(i, s) for i in range(1000) for s in (1.0, -1.0)}
        assert len(tokens) == 2000

    def test_negative_zero_counts_as_positive(self):
        assert fake_word(0, -0.0) == "+a"


class TestNonFinite:
    def test_nan_dimension_emits_nothing(self):
        assert FakeWordsAnalyzer(q=10).tokens("nan 0.5") == ["+b"] * 5

    def test_infinity_raises(self):
        with pytest.raises(NonFiniteValue) as exc:
            FakeWordsAnalyzer(q=10).tokens("0.5 -inf")
        assert exc.value.index == 1

    def test_float32_overflow_raises(self):
        with pytest.raises(QuantizationOverflow) as exc:
            FakeWordsAnalyzer(q=60).tokens("0.5 3e38")
        assert exc.value.index == 1

    def test_huge_repetition_count_raises(self):
        with pytest.raises(QuantizationOverflow):
            FakeWordsAnalyzer(q=60).tokens("-1e30")

    def test_overflow_is_a_value_error(self):
        with pytest.raises(ValueError):
            quantize(3e38, 60)

    def test_count_at_limit_is_allowed(self):
        assert quantize(12500.0, 80) == MAX_REPETITIONS
        with pytest.raises(QuantizationOverflow):
            quantize(12500.5, 80)


class TestFilter:
    def test_filter_over_raw_features(self):
        features = [RawFeature(0, 0.2), RawFeature(27, -0.3)]
        assert list(quantize_and_encode(features, 10)) == ["+a"] * 2 + ["-bb"] * 3

    def test_quantize_uses_magnitude(self):
        assert quantize(-0.5, 10) == quantize(0.5, 10) == 5


class TestConfig:
    @pytest.mark.parametrize("q", [0, -1])
    def test_non_positive_q_rejected(self, q):
        with pytest.raises(InvalidParameter):
            FakeWordsAnalyzer(q=q)
