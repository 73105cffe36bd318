from .analysis import BaseAnalyzer, FakeWordsAnalyzer, LexicalLshAnalyzer, get_analyzer, tokenize_vector
from .config import AnnLexConfig, FakeWordsConfig, LexLshConfig, QueryConfig
from .errors import (AnnLexError, InvalidVectorFormat, NonFiniteValue, QuantizationOverflow, UnknownEncoding,
                     MissingParameter, InvalidParameter, EmptyQuery, IndexIOError, BadRequest, ServerError)
from .query import CommonTermsQuery, assemble_query
from .retrieval.inverted import InvertedIndex, Hit
from .plugin import AnnQueryParserPlugin, CommonTermsQueryParserPlugin

__version__ = "0.1.0"
