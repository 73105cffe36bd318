"""
Vector analyzers: textual vector in, index terms out.
"""

from .base import BaseAnalyzer, RawFeature
from .vector_tokenizer import tokenize_vector, parse_vector, format_vector
from .fake_words import FakeWordsAnalyzer, quantize_and_encode
from .lexlsh import LexicalLshAnalyzer, encode_features, shingle, hash_set, multi_hash
from ..errors import UnknownEncoding

# ============================================================================
# ANALYZER REGISTRY
# ============================================================================
ANALYZER_REGISTRY = {
    'fw': FakeWordsAnalyzer,
    'lexlsh': LexicalLshAnalyzer,
}

def get_analyzer(name: str, **params) -> BaseAnalyzer:
    """Build an analyzer by (case-insensitive) encoding name."""
    key = (name or "").lower()
    if key not in ANALYZER_REGISTRY:
        raise UnknownEncoding(name, ANALYZER_REGISTRY.keys())
    return ANALYZER_REGISTRY[key](**params)

def list_analyzers() -> list:
    """List all available encoding names."""
    return list(ANALYZER_REGISTRY.keys())

__all__ = [
    'BaseAnalyzer',
    'RawFeature',
    'tokenize_vector',
    'parse_vector',
    'format_vector',
    'FakeWordsAnalyzer',
    'quantize_and_encode',
    'LexicalLshAnalyzer',
    'encode_features',
    'shingle',
    'hash_set',
    'multi_hash',
    'ANALYZER_REGISTRY',
    'get_analyzer',
    'list_analyzers',
]
