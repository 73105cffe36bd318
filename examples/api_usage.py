import numpy as np
from annlex import FakeWordsAnalyzer, LexicalLshAnalyzer, InvertedIndex, assemble_query
from annlex.analysis import format_vector
from annlex.utils.logger import logger

def run_api_demo():
    """
    Index a handful of random vectors with both encoders and query each
    index with a slightly perturbed copy of one of them.
    """

    # 1. Prepare some vectors
    rng = np.random.default_rng(42)
    vectors = {f"w{i}": rng.normal(scale=0.3, size=50).astype(np.float32) for i in range(200)}
    query_vector = vectors["w7"] + rng.normal(scale=0.02, size=50).astype(np.float32)

    for analyzer in (FakeWordsAnalyzer(q=60), LexicalLshAnalyzer(decimals=1, ngrams=2, hash_count=3, hash_set_size=2)):
        # 2. Encode every vector into terms and index them
        index = InvertedIndex(similarity=analyzer.similarity)
        for word, vec in vectors.items():
            text = format_vector(vec)
            index.add(word, analyzer.analyze(text), vector=text)

        # 3. Build the common-terms query for the noisy copy of w7 and run it
        query = assemble_query("vector", analyzer.analyze(format_vector(query_vector)), cutoff=0.999)
        hits = index.search(query, depth=5)

        logger.info(f"{analyzer!r}: {query.clause_count} query clauses")
        for rank, hit in enumerate(hits, start=1):
            logger.info(f"  {rank}. {hit.doc_id} ({hit.score:.3f})")

if __name__ == "__main__":
    run_api_demo()
