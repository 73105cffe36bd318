from __future__ import annotations
import os, json, time
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Tuple
import yaml

from ..errors import IndexIOError
from ..retrieval.inverted import InvertedIndex
from ..utils.hashing import HASH_VERSION
from ..utils.logger import logger

MANIFEST_FILE = "manifest.yaml"
POSTINGS_FILE = "postings.json"
DOCS_FILE = "docs.json"


@dataclass
class IndexManifest:
    encoding: str
    params: Dict[str, Any]
    similarity: str
    num_docs: int = 0
    hash_version: str = HASH_VERSION
    created_at: str = field(default_factory=lambda: time.strftime("%Y-%m-%d %H:%M:%S"))

    @staticmethod
    def write(path: str, manifest: 'IndexManifest'):
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(asdict(manifest), f, sort_keys=False, allow_unicode=True)

    @staticmethod
    def read(path: str) -> 'IndexManifest':
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return IndexManifest(**data)


def write_index(root: str, index: InvertedIndex, manifest: IndexManifest) -> None:
    """Persist an index and its manifest under ``root``."""
    try:
        os.makedirs(root, exist_ok=True)
        manifest.num_docs = index.num_docs
        manifest.similarity = index.similarity
        with open(os.path.join(root, POSTINGS_FILE), 'w', encoding='utf-8') as f:
            # JSON object keys must be strings
            json.dump({t: {str(o): tf for o, tf in p.items()} for t, p in index.postings.items()}, f)
        with open(os.path.join(root, DOCS_FILE), 'w', encoding='utf-8') as f:
            json.dump(index.docs, f, ensure_ascii=False)
        IndexManifest.write(os.path.join(root, MANIFEST_FILE), manifest)
    except OSError as e:
        raise IndexIOError(f"cannot write index at {root}: {e}") from e
    logger.info(f"Wrote index with {index.num_docs} documents and {len(index.postings)} terms to {root}")


def read_index(root: str) -> Tuple[InvertedIndex, IndexManifest]:
    """Load an index directory written by write_index."""
    try:
        manifest = IndexManifest.read(os.path.join(root, MANIFEST_FILE))
        with open(os.path.join(root, POSTINGS_FILE), 'r', encoding='utf-8') as f:
            postings = json.load(f)
        with open(os.path.join(root, DOCS_FILE), 'r', encoding='utf-8') as f:
            docs = json.load(f)
    except OSError as e:
        raise IndexIOError(f"cannot read index at {root}: {e}") from e
    except (ValueError, TypeError, yaml.YAMLError) as e:
        raise IndexIOError(f"corrupt index at {root}: {e}") from e

    if manifest.hash_version != HASH_VERSION:
        logger.warning(f"Index at {root} was built with hash {manifest.hash_version}, running {HASH_VERSION}")

    postings = {t: {int(o): tf for o, tf in p.items()} for t, p in postings.items()}
    index = InvertedIndex.from_state(manifest.similarity, postings, docs)
    return index, manifest
