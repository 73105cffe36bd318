"""
Shared pytest fixtures.

``glove_path`` is a tiny GloVe-style model; ``tiny`` quantizes to nothing
under the default fake-words factor, so it is indexed without terms.
"""

from __future__ import annotations

import pytest

GLOVE_LINES = [
    "king 0.5 0.3 -0.2 0.1",
    "queen 0.45 0.35 -0.25 0.1",
    "apple -0.4 0.1 0.6 -0.3",
    "tiny 0.001 0.001 0.001 0.001",
]


@pytest.fixture
def glove_path(tmp_path):
    path = tmp_path / "model.txt"
    path.write_text("\n".join(GLOVE_LINES) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def index_dir(tmp_path):
    return str(tmp_path / "index")


@pytest.fixture
def fw_index(glove_path, index_dir):
    """Index directory built with the default fake-words encoder."""
    from annlex.cli import main

    assert main(["index", "-input", glove_path, "-path", index_dir, "-encoding", "fw"]) == 0
    return index_dir
