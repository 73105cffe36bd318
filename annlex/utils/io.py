from __future__ import annotations
from typing import Dict, Iterator, List, Tuple
import numpy as np

from .logger import logger
from ..analysis.vector_tokenizer import parse_vector

def iter_glove(path: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (word, vector string) for every non-blank line of a GloVe-style
    model file (``WORD v1 v2 ... v_d``). The vector string is passed on
    untouched so it can be stored and re-analyzed later.
    """
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            parts = line.split(None, 1)
            if len(parts) < 2:
                logger.warning(f"{path}:{line_no}: word without vector, skipped")
                continue
            yield parts[0], parts[1]

def read_glove(path: str) -> Dict[str, List[np.ndarray]]:
    """Load a model file into a word -> list of float32 vectors multimap."""
    vectors: Dict[str, List[np.ndarray]] = {}
    for word, vector in iter_glove(path):
        parsed = parse_vector(vector)
        vectors.setdefault(word, []).append(parsed)
    logger.info(f"Loaded {sum(len(v) for v in vectors.values())} vectors for {len(vectors)} words from {path}")
    return vectors
