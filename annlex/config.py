from __future__ import annotations
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, Optional
import yaml

from .errors import InvalidParameter


@dataclass(frozen=True)
class FakeWordsConfig:
    q: float = 60.0  # quantization factor

    def __post_init__(self):
        if not self.q > 0:
            raise InvalidParameter(f"fw.q must be > 0, got {self.q}")


@dataclass(frozen=True)
class LexLshConfig:
    decimals: int = 1
    ngrams: int = 2
    hash_count: int = 1
    bucket_count: int = 300
    hash_set_size: int = 1

    def __post_init__(self):
        if self.decimals < 0:
            raise InvalidParameter(f"lexlsh.d must be >= 0, got {self.decimals}")
        for name, value in (("lexlsh.n", self.ngrams), ("lexlsh.h", self.hash_count),
                            ("lexlsh.b", self.bucket_count), ("lexlsh.hsize", self.hash_set_size)):
            if value < 1:
                raise InvalidParameter(f"{name} must be >= 1, got {value}")


@dataclass
class QueryConfig:
    cutoff: float = 0.999
    msm: float = 0.0
    depth: int = 10


@dataclass
class AnnLexConfig:
    encoding: str = "fw"  # fw|lexlsh
    fw: FakeWordsConfig = field(default_factory=FakeWordsConfig)
    lexlsh: LexLshConfig = field(default_factory=LexLshConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    log_level: str = "INFO"
    telemetry_enabled: bool = False
    telemetry_endpoint: str = "http://localhost:4318/v1/traces"

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> 'AnnLexConfig':
        data = dict(data or {})
        nested = {"fw": FakeWordsConfig, "lexlsh": LexLshConfig, "query": QueryConfig}
        known = {f.name for f in fields(AnnLexConfig)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameter(f"unknown configuration keys: {sorted(unknown)}")
        kwargs = {}
        for key, value in data.items():
            if key in nested:
                try:
                    kwargs[key] = nested[key](**(value or {}))
                except TypeError as e:
                    raise InvalidParameter(f"invalid '{key}' section: {e}") from e
            else:
                kwargs[key] = value
        return AnnLexConfig(**kwargs)

    @staticmethod
    def from_yaml(path: str) -> 'AnnLexConfig':
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidParameter(f"{path}: invalid YAML: {e}") from e
        if data is not None and not isinstance(data, dict):
            raise InvalidParameter(f"{path}: expected a mapping at the top level")
        return AnnLexConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
