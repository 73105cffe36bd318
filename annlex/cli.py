import argparse
import sys
import time
from typing import List, Optional

from .analysis import BaseAnalyzer, get_analyzer, format_vector
from .config import AnnLexConfig
from .errors import AnnLexError, EmptyQuery, IndexIOError, InvalidVectorFormat, NonFiniteValue, QuantizationOverflow
from .query import assemble_query
from .retrieval.inverted import InvertedIndex
from .storage.index_store import IndexManifest, read_index, write_index
from .utils.io import iter_glove, read_glove
from .utils.logger import configure_logging, logger
from .utils.telemetry import get_tracer, init_telemetry

FIELD_VECTOR = "vector"

tracer = get_tracer(__name__)


def _analyzer_from_args(args) -> BaseAnalyzer:
    if args.encoding.lower() == "fw":
        return get_analyzer("fw", q=args.fw_q)
    return get_analyzer(args.encoding, decimals=args.lexlsh_d, ngrams=args.lexlsh_n,
                        hash_count=args.lexlsh_h, bucket_count=args.lexlsh_b,
                        hash_set_size=args.lexlsh_hsize)


def _analyzer_for_index(analyzer: BaseAnalyzer, manifest: IndexManifest) -> BaseAnalyzer:
    """Query terms must be produced exactly like the indexed ones."""
    if analyzer.name == manifest.encoding and analyzer.params == manifest.params:
        return analyzer
    logger.warning(f"Index was built with {manifest.encoding} {manifest.params}; "
                   f"ignoring requested {analyzer.name} {analyzer.params}")
    return get_analyzer(manifest.encoding, **manifest.params)


def cmd_index(args, parser) -> int:
    """Encode every vector of a model file and write an index directory."""
    analyzer = _analyzer_from_args(args)
    logger.info(f"Indexing {args.input} into {args.path} with {analyzer!r}")

    index = InvertedIndex(similarity=analyzer.similarity)
    empty = 0
    with tracer.start_as_current_span("annlex.index") as span:
        for word, vector in iter_glove(args.input):
            ordinal = index.add(word, analyzer.analyze(vector), vector=vector)
            if index.docs[ordinal]["length"] == 0:
                empty += 1
        span.set_attribute("annlex.num_docs", index.num_docs)

    if empty:
        logger.warning(f"{empty} vectors produced no terms and can never be retrieved")
    manifest = IndexManifest(encoding=analyzer.name, params=analyzer.params, similarity=analyzer.similarity)
    write_index(args.path, index, manifest)
    return 0


def cmd_search(args, parser) -> int:
    """Run nearest-neighbor queries for every vector of a word."""
    analyzer = _analyzer_from_args(args)
    if bool(args.stored) == bool(args.input):
        logger.error("Exactly one of -input or -stored must be set")
        parser.print_usage(sys.stderr)
        return 2

    logger.info(f"Reading index at {args.path}")
    index, manifest = read_index(args.path)
    analyzer = _analyzer_for_index(analyzer, manifest)

    if args.stored:
        vector_strings = index.stored_vectors(args.word)
    else:
        logger.info(f"Loading model {args.input}")
        vector_strings = [format_vector(v) for v in read_glove(args.input).get(args.word, [])]

    if not vector_strings:
        logger.warning(f"No vectors found for '{args.word}'")

    for vector_string in vector_strings:
        query = assemble_query(FIELD_VECTOR, analyzer.analyze(vector_string), args.cutoff, args.msm)
        with tracer.start_as_current_span("annlex.search") as span:
            start = time.perf_counter()
            hits = index.search(query, args.depth)
            elapsed = int((time.perf_counter() - start) * 1000)
            span.set_attribute("annlex.hits", len(hits))

        print(f"{args.depth} nearest neighbors of '{args.word}':")
        for rank, hit in enumerate(hits, start=1):
            print(f"{rank}. {hit.doc_id} ({hit.score:.3f})")
        print(f"Search time: {elapsed}ms")
    return 0


def _add_encoder_options(p: argparse.ArgumentParser, cfg: AnnLexConfig):
    p.add_argument("-encoding", required=True, metavar="{fw,lexlsh}", help="encoding must be one of {fw, lexlsh}")
    p.add_argument("-fw.q", dest="fw_q", type=float, default=cfg.fw.q, help="quantization factor")
    p.add_argument("-lexlsh.n", dest="lexlsh_n", type=int, default=cfg.lexlsh.ngrams, help="n-grams")
    p.add_argument("-lexlsh.d", dest="lexlsh_d", type=int, default=cfg.lexlsh.decimals, help="decimals")
    p.add_argument("-lexlsh.h", dest="lexlsh_h", type=int, default=cfg.lexlsh.hash_count, help="hash count")
    p.add_argument("-lexlsh.b", dest="lexlsh_b", type=int, default=cfg.lexlsh.bucket_count, help="bucket count")
    p.add_argument("-lexlsh.hsize", dest="lexlsh_hsize", type=int, default=cfg.lexlsh.hash_set_size, help="hash set size")


def build_parser(cfg: Optional[AnnLexConfig] = None) -> argparse.ArgumentParser:
    cfg = cfg or AnnLexConfig()
    parser = argparse.ArgumentParser(
        prog="annlex",
        description="annlex: approximate nearest-neighbor search over token-encoded vectors",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-config", help="YAML file providing defaults for every option")
    parser.add_argument("-log-level", dest="log_level", default=cfg.log_level, help="Log level")
    parser.add_argument("-telemetry", action="store_true", default=cfg.telemetry_enabled, help="Export OpenTelemetry traces")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Index command
    idx_p = subparsers.add_parser("index", help="Encode a vectors model into an index",
                                  formatter_class=argparse.ArgumentDefaultsHelpFormatter, allow_abbrev=False)
    idx_p.add_argument("-input", required=True, help="vectors model (GloVe text format)")
    idx_p.add_argument("-path", required=True, help="index path")
    _add_encoder_options(idx_p, cfg)

    # Search command
    srch_p = subparsers.add_parser("search", help="Find nearest neighbors of a word",
                                   formatter_class=argparse.ArgumentDefaultsHelpFormatter, allow_abbrev=False)
    srch_p.add_argument("-path", required=True, help="index path")
    srch_p.add_argument("-word", required=True, help="input word")
    srch_p.add_argument("-input", help="vectors model to read the query vector from")
    srch_p.add_argument("-stored", action="store_true", help="fetch stored vectors from index")
    srch_p.add_argument("-depth", type=int, default=cfg.query.depth, help="retrieval depth")
    srch_p.add_argument("-cutoff", type=float, default=cfg.query.cutoff, help="tf cutoff factor")
    srch_p.add_argument("-msm", type=float, default=cfg.query.msm, help="minimum should match")
    _add_encoder_options(srch_p, cfg)

    return parser


def _load_config(argv: List[str]) -> AnnLexConfig:
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre.add_argument("-config")
    known, _ = pre.parse_known_args(argv)
    if known.config:
        return AnnLexConfig.from_yaml(known.config)
    return AnnLexConfig()


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        cfg = _load_config(argv)
    except (OSError, AnnLexError) as e:
        logger.error(f"Cannot load configuration: {e}")
        return 2

    parser = build_parser(cfg)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    init_telemetry(cfg.telemetry_endpoint, enabled=args.telemetry)

    commands = {"index": cmd_index, "search": cmd_search}
    if args.command not in commands:
        parser.print_help()
        return 2

    try:
        return commands[args.command](args, parser)
    except (IndexIOError, InvalidVectorFormat, NonFiniteValue, QuantizationOverflow, EmptyQuery) as e:
        logger.error(str(e))
        return 1
    except AnnLexError as e:
        # Bad flag values: unknown encoding, out-of-range parameters
        logger.error(str(e))
        parser.print_usage(sys.stderr)
        return 2
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
