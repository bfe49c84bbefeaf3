"""
Command line entry point.

Usage:
    python -m quantum_shots NODE_DEFINITION [--seed SEED] [--strategy {per-shot,bulk}] [--log-level LEVEL]

Exits with status 0 after the completion marker was written, with status 1 otherwise.
"""

import argparse
import logging
import sys

from ._simulation.simulator import STRATEGIES, get_strategy
from ._utility.errors import QuantumShotsError
from ._utility.node_definition import NodeDefinition
from .runner import run


logger = logging.getLogger("quantum_shots")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quantum-shots",
        description="Simulate pytket circuits described by a node definition file.",
    )
    parser.add_argument("node_definition", help="Path of the node definition JSON file.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the random stream (default: unseeded).")
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default="per-shot",
        help="Shot strategy for submit and submit_single (default: per-shot).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO).",
    )
    return parser


def configure_logging(level: str):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def add_log_file(log_path) -> logging.Handler:
    """ Mirrors the log into the file of the run, the caller removes the handler again. """
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def remove_log_file(handler: logging.Handler):
    logging.getLogger().removeHandler(handler)
    handler.close()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    handler = None
    try:
        node_definition = NodeDefinition.load(args.node_definition)
        if node_definition.log_path is not None:
            handler = add_log_file(node_definition.log_path)
        run(node_definition, strategy=get_strategy(args.strategy), seed=args.seed)
    except (QuantumShotsError, OSError, ValueError) as e:
        logger.error("Run failed: %s", e, exc_info=True)
        return 1
    finally:
        if handler is not None:
            remove_log_file(handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
