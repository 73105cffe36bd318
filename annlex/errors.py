"""Exception hierarchy shared by the encoders, the query layer, the plugins and the CLI."""
from __future__ import annotations
from typing import Iterable, Optional


class AnnLexError(Exception):
    """Base class for every error raised by annlex."""


class InvalidVectorFormat(AnnLexError, ValueError):
    def __init__(self, literal: str, position: int):
        self.literal = literal
        self.position = position
        super().__init__(f"invalid float literal {literal!r} at position {position}")


class NonFiniteValue(AnnLexError, ValueError):
    def __init__(self, index: int, value: float):
        self.index = index
        self.value = value
        super().__init__(f"non-finite value {value} in dimension {index}")


class QuantizationOverflow(AnnLexError, ValueError):
    def __init__(self, index: int, value: float, q: float, limit: int):
        self.index = index
        self.value = value
        self.q = q
        super().__init__(f"value {value} in dimension {index} needs more than {limit} repetitions at q={q}")


class UnknownEncoding(AnnLexError, ValueError):
    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f"unknown encoding {name!r}; must be one of {{{', '.join(self.available)}}}")


class MissingParameter(AnnLexError, KeyError):
    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"{name} parameter is mandatory")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class InvalidParameter(AnnLexError, ValueError):
    pass


class EmptyQuery(AnnLexError):
    def __init__(self, message: str = "encoder produced no tokens for the query vector"):
        super().__init__(message)


class IndexIOError(AnnLexError, OSError):
    pass


class BadRequest(AnnLexError):
    code = 400


class ServerError(AnnLexError):
    code = 500
