"""Tests for annlex/analysis/vector_tokenizer.py: textual vector parsing."""

from __future__ import annotations

import math

import numpy as np
import pytest

from annlex.analysis import RawFeature, format_vector, parse_vector, tokenize_vector
from annlex.errors import InvalidVectorFormat


class TestTokenize:
    def test_indices_start_at_zero(self):
        assert list(tokenize_vector("0.5 -0.25 2")) == [
            RawFeature(0, 0.5), RawFeature(1, -0.25), RawFeature(2, 2.0),
        ]

    def test_scientific_notation(self):
        features = list(tokenize_vector("4.548397264443338E-4 -9.3e-4 1e2"))
        assert features[0].value == float(np.float32(4.548397264443338e-4))
        assert features[1].value == float(np.float32(-9.3e-4))
        assert features[2].value == 100.0

    def test_values_are_rounded_to_binary32(self):
        (feature,) = tokenize_vector("0.1")
        assert feature.value == float(np.float32(0.1))
        assert feature.value != 0.1

    def test_mixed_whitespace(self):
        assert [f.index for f in tokenize_vector(" 1\t2\n 3 ")] == [0, 1, 2]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_input_is_empty_sequence(self, text):
        assert list(tokenize_vector(text)) == []

    def test_nan_and_infinity_are_parsed(self):
        values = [f.value for f in tokenize_vector("NaN -Infinity inf")]
        assert math.isnan(values[0])
        assert values[1] == -math.inf
        assert values[2] == math.inf

    def test_overflow_becomes_infinity(self):
        (feature,) = tokenize_vector("1e40")
        assert feature.value == math.inf


class TestInvalidFormat:
    def test_malformed_literal(self):
        with pytest.raises(InvalidVectorFormat) as exc:
            list(tokenize_vector("0.1 foo 0.3"))
        assert exc.value.literal == "foo"
        assert exc.value.position == 1

    def test_error_raised_lazily(self):
        it = tokenize_vector("0.1 foo 0.3")
        assert next(it) == RawFeature(0, float(np.float32(0.1)))
        with pytest.raises(InvalidVectorFormat):
            next(it)

    @pytest.mark.parametrize("literal", ["1,5", "0x10", "1_000", "--1", "1e", ".", "e5", "\u0661\u0662", "\uff11.5"])
    def test_rejected_literals(self, literal):
        with pytest.raises(InvalidVectorFormat):
            list(tokenize_vector(literal))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            list(tokenize_vector("abc"))


class TestParseAndFormat:
    def test_parse_vector_dtype(self):
        arr = parse_vector("0.5 -0.25")
        assert arr.dtype == np.float32
        assert arr.tolist() == [0.5, -0.25]

    def test_format_vector_shortest_repr(self):
        assert format_vector([0.5, -0.25, 0.1]) == "0.5 -0.25 0.1"

    def test_format_then_tokenize_preserves_values(self):
        values = np.array([0.123456789, -3.5e-5, 42.0], dtype=np.float32)
        parsed = [f.value for f in tokenize_vector(format_vector(values))]
        assert parsed == [float(v) for v in values]
