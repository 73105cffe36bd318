"""Tests for annlex/config.py: dataclass configuration and YAML loading."""

from __future__ import annotations

import dataclasses

import pytest

from annlex.config import AnnLexConfig, FakeWordsConfig, LexLshConfig
from annlex.errors import InvalidParameter


def test_defaults():
    cfg = AnnLexConfig()
    assert cfg.encoding == "fw"
    assert cfg.fw.q == 60
    assert cfg.lexlsh == LexLshConfig(decimals=1, ngrams=2, hash_count=1, bucket_count=300, hash_set_size=1)
    assert cfg.query.cutoff == 0.999
    assert cfg.query.msm == 0
    assert cfg.query.depth == 10
    assert cfg.telemetry_enabled is False


def test_encoder_configs_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        FakeWordsConfig().q = 10


def test_from_yaml(tmp_path):
    path = tmp_path / "annlex.yaml"
    path.write_text(
        "encoding: lexlsh\n"
        "lexlsh:\n  bucket_count: 26\n  hash_count: 2\n"
        "query:\n  depth: 3\n  msm: 0.5\n",
        encoding="utf-8",
    )
    cfg = AnnLexConfig.from_yaml(str(path))
    assert cfg.encoding == "lexlsh"
    assert cfg.lexlsh.bucket_count == 26
    assert cfg.lexlsh.hash_count == 2
    assert cfg.lexlsh.ngrams == 2
    assert cfg.query.depth == 3
    assert cfg.query.msm == 0.5
    assert cfg.fw == FakeWordsConfig()


def test_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert AnnLexConfig.from_yaml(str(path)) == AnnLexConfig()


def test_round_trip_through_dict():
    cfg = AnnLexConfig(encoding="lexlsh", lexlsh=LexLshConfig(decimals=2))
    assert AnnLexConfig.from_dict(cfg.to_dict()) == cfg


@pytest.mark.parametrize("data", [
    {"bogus": 1},
    {"lexlsh": {"buckets": 3}},
    {"fw": {"q": -1}},
])
def test_invalid_config(data):
    with pytest.raises(InvalidParameter):
        AnnLexConfig.from_dict(data)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("query: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidParameter):
        AnnLexConfig.from_yaml(str(path))
