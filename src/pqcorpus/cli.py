from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional

from .engine.corpus import CorpusWriter
from .engine.registry import get_scenarios
from .errors import CorpusError
from .scenarios import writer_config
from . import __version__

logger = logging.getLogger("pqcorpus")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        "pqcorpus",
        description="Write Parquet files used as seeds for fuzzing Parquet readers.",
    )
    p.add_argument("output_directory", help="Directory receiving pq-table-<n> files")
    p.add_argument("--scenarios", help="Path to a JSON scenario file (default: built-in corpus)")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Diagnostics written to stderr",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(stream=sys.stderr, level=args.log_level, format="%(message)s")

    try:
        scenarios = get_scenarios(args.scenarios)
        CorpusWriter(writer_config()).run(args.output_directory, scenarios)
    except (CorpusError, OSError) as exc:
        logger.error("error: %s", exc)
        return 1
    return 0
