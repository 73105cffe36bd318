"""
Query-parser plugins for a host search engine.

The host calls ``init`` once with its configuration arguments and then
``parse`` for every request with the request's local parameters. The
plugin holds one analyzer for its lifetime; analyzers are immutable so
concurrent requests share it without locking.
"""
from __future__ import annotations
from typing import Any, List, Mapping, Optional

from .analysis import BaseAnalyzer, FakeWordsAnalyzer, LexicalLshAnalyzer, list_analyzers
from .config import FakeWordsConfig, LexLshConfig
from .errors import (AnnLexError, BadRequest, EmptyQuery, InvalidParameter, InvalidVectorFormat,
                     MissingParameter, NonFiniteValue, QuantizationOverflow, ServerError, UnknownEncoding)
from .query import CommonTermsQuery, assemble_query
from .retrieval.inverted import Hit, InvertedIndex
from .utils.logger import logger

DEFAULT_CUTOFF = 0.01
DEFAULT_QUANTIZATION_FACTOR = 60
DEFAULT_DEPTH = 10

# lexlsh.* init keys -> LexLshConfig fields
_LEXLSH_KEYS = {
    "lexlsh.d": "decimals",
    "lexlsh.n": "ngrams",
    "lexlsh.h": "hash_count",
    "lexlsh.b": "bucket_count",
    "lexlsh.hsize": "hash_set_size",
}


def _get_int(params: Mapping[str, Any], name: str) -> Optional[int]:
    value = params.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}") from None


def _get_float(params: Mapping[str, Any], name: str) -> Optional[float]:
    value = params.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a number, got {value!r}") from None


def _required(params: Mapping[str, Any], name: str) -> str:
    value = params.get(name)
    if value is None:
        raise MissingParameter(name)
    return value


class AnnQueryParserPlugin:
    """Turns a textual vector into a CommonTermsQuery on a vector field."""

    def __init__(self):
        self.cutoff = DEFAULT_CUTOFF
        self.q = DEFAULT_QUANTIZATION_FACTOR
        self.msm = 0.0
        self.depth = DEFAULT_DEPTH
        self.analyzer: BaseAnalyzer = FakeWordsAnalyzer(self.q)

    def init(self, args: Optional[Mapping[str, Any]] = None) -> 'AnnQueryParserPlugin':
        """
        Read configuration arguments. Unknown analyzer names raise
        UnknownEncoding, out-of-range values raise InvalidParameter.
        """
        args = args or {}
        q = _get_int(args, "q")
        depth = _get_int(args, "depth")
        cutoff = _get_float(args, "cutoff")
        msm = _get_float(args, "msm")
        if q is not None and q <= 0:
            raise InvalidParameter(f"q must be > 0, got {q}")
        if depth is not None and depth < 1:
            raise InvalidParameter(f"depth must be >= 1, got {depth}")
        if cutoff is not None and not 0 < cutoff <= 1:
            raise InvalidParameter(f"cutoff must be in (0, 1], got {cutoff}")
        if msm is not None and not msm >= 0:
            raise InvalidParameter(f"msm must be >= 0, got {msm}")

        if q is not None:
            self.q = q
        if depth is not None:
            self.depth = depth
        if cutoff is not None:
            self.cutoff = cutoff
        if msm is not None:
            self.msm = msm
        self.analyzer = self._build_analyzer(args)
        logger.debug(f"{type(self).__name__} initialized with {self.analyzer!r}, cutoff={self.cutoff}, msm={self.msm}")
        return self

    def _build_analyzer(self, args: Mapping[str, Any]) -> BaseAnalyzer:
        name = str(args.get("analyzer", "fw"))
        if name.lower() == "fw":
            return FakeWordsAnalyzer(config=FakeWordsConfig(q=float(self.q)))
        if name.lower() == "lexlsh":
            overrides = {}
            for key, field_name in _LEXLSH_KEYS.items():
                value = _get_int(args, key)
                if value is not None:
                    overrides[field_name] = value
            return LexicalLshAnalyzer(config=LexLshConfig(**overrides))
        raise UnknownEncoding(name, list_analyzers())

    def parse(self, local_params: Mapping[str, Any]) -> CommonTermsQuery:
        """
        Build the query for one request. ``qf`` names the vector field and
        ``v`` carries the textual vector; both are mandatory.
        """
        try:
            field = _required(local_params, "qf")
            vector = _required(local_params, "v")
            return assemble_query(field, self.analyzer.analyze(vector), self.cutoff, self.msm)
        except (MissingParameter, InvalidVectorFormat, NonFiniteValue, QuantizationOverflow,
                EmptyQuery, InvalidParameter) as e:
            raise BadRequest(str(e)) from e
        except AnnLexError:
            raise
        except Exception as e:
            logger.exception("Unexpected failure while parsing vector query")
            raise ServerError(f"cannot build vector query: {e}") from e

    def search(self, index: InvertedIndex, local_params: Mapping[str, Any]) -> List[Hit]:
        """Parse and execute against ``index`` with the configured depth."""
        return index.search(self.parse(local_params), self.depth)


class CommonTermsQueryParserPlugin(AnnQueryParserPlugin):
    """Fake-words only variant; the ``analyzer`` argument is ignored."""

    def _build_analyzer(self, args: Mapping[str, Any]) -> BaseAnalyzer:
        return FakeWordsAnalyzer(config=FakeWordsConfig(q=float(self.q)))
