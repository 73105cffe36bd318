"""Tests for annlex/storage/index_store.py: index directories on disk."""

from __future__ import annotations

import os

import pytest

from annlex.errors import IndexIOError
from annlex.query import assemble_query
from annlex.retrieval import InvertedIndex
from annlex.storage import IndexManifest, read_index, write_index
from annlex.storage.index_store import POSTINGS_FILE
from annlex.utils.hashing import HASH_VERSION


@pytest.fixture
def index():
    idx = InvertedIndex(similarity="bm25")
    idx.add("x", ["a", "a", "b"], vector="0.5 0.1")
    idx.add("y", ["a", "c"], vector="0.2 0.9")
    return idx


def test_round_trip(tmp_path, index):
    root = str(tmp_path / "idx")
    write_index(root, index, IndexManifest(encoding="lexlsh", params={"ngrams": 2}, similarity="bm25"))

    loaded, manifest = read_index(root)
    assert manifest.encoding == "lexlsh"
    assert manifest.params == {"ngrams": 2}
    assert manifest.num_docs == 2
    assert manifest.hash_version == HASH_VERSION
    assert loaded.similarity == "bm25"
    assert loaded.postings == index.postings
    assert loaded.stored_vectors("y") == ["0.2 0.9"]

    query = assemble_query("vector", ["a", "c"], 1.0)
    assert loaded.search(query) == index.search(query)


def test_missing_directory(tmp_path):
    with pytest.raises(IndexIOError):
        read_index(str(tmp_path / "nope"))


def test_corrupt_postings(tmp_path, index):
    root = str(tmp_path / "idx")
    write_index(root, index, IndexManifest(encoding="fw", params={"q": 60.0}, similarity="classic"))
    with open(os.path.join(root, POSTINGS_FILE), "w", encoding="utf-8") as f:
        f.write("{not json")
    with pytest.raises(IndexIOError):
        read_index(root)


def test_index_io_error_is_os_error(tmp_path):
    with pytest.raises(OSError):
        read_index(str(tmp_path / "nope"))
