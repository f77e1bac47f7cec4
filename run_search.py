#!/usr/bin/env python3
# run_search.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Command-line interface for motif search in vector-clock logs

import sys
import json
import argparse
import re
from pathlib import Path
from typing import List, Optional

from logparsing import (
    DEFAULT_EVENT_PATTERN,
    Execution,
    LogParser,
    MissingCaptureGroupError,
    ParseError,
    UnknownLabelError,
    DuplicateLabelError,
)
from model import BuilderGraph, CausalityError, PatternShapeError, build_graph
from motif import MotifFinder, SearchBudgetExceededError, read_motif
from utils.logger import LogLevel, get_logger


def read_text_file(filepath: Path, what: str) -> str:
    """Read a UTF-8 text file.

    Args:
        filepath: Path to the file
        what: Description of the file for error messages

    Returns:
        File content

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or cannot be read
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"{what} not found: {filepath}")
    except OSError as e:
        raise ValueError(f"Error reading {what.lower()}: {e}")

    if not content.strip():
        raise ValueError(f"{what} is empty: {filepath}")
    return content


def configure_logging_for_search(debug: bool = False) -> None:
    """Configure logging levels for motif search.

    Results are reported at INFO level, so INFO is the floor. Verbose output
    adds detail lines to the results instead of lowering the level.

    Args:
        debug: Enable DEBUG level logging
    """
    logger = get_logger()

    if debug:
        logger.set_level(LogLevel.DEBUG)
    else:
        logger.set_level(LogLevel.INFO)


def select_executions(parser: LogParser, label: Optional[str]) -> List[Execution]:
    if label is None:
        return parser.get_executions()
    return [parser.get_execution(label)]


def search_execution(
    execution: Execution,
    pattern: BuilderGraph,
    finder: MotifFinder,
    find_all: bool,
    verbose: bool = False,
) -> int:
    """Search one execution and report its matches.

    With `verbose`, every match is followed by its events, one per line.

    Returns:
        Number of matches reported
    """
    logger = get_logger()
    shown = execution.label if execution.label else "<unlabeled>"

    graph = build_graph(execution.events)
    if find_all:
        motifs = finder.find_all(graph, pattern)
    else:
        found = finder.search(graph, pattern)
        motifs = [found] if found is not None else []

    if not motifs:
        logger.info(f"💥 {shown}: no occurrence of the motif")
        return 0

    for motif in motifs:
        result = motif.to_dict()
        result["execution"] = execution.label
        result["lines"] = sorted(node.log_event.line_number for node in motif.get_nodes())
        logger.info(json.dumps(result))
        if verbose:
            for node in motif.get_nodes():
                event = node.log_event
                logger.info(f"    {event.host} line {event.line_number}: {event.text}")
    logger.info(f"🎉 {shown}: {len(motifs)} occurrence(s)")
    return len(motifs)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="VCLog motif search over vector-clock logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_search.py -l run.log -m request.motif
  python run_search.py -l runs.log -m request.motif -d "=== (?P<trace>\\w+) ===" --all
  python run_search.py -l run.log --validate-only -v

Motif file format:
  #motif=[{"host":"a","clock":{"a":1}},{"host":"b","clock":{"a":1,"b":1}}]
        """,
    )

    parser.add_argument("-l", "--log", required=True, type=Path, help="Path to the log file")
    parser.add_argument("-m", "--motif", type=Path, help="Path to the motif file")
    parser.add_argument(
        "-e",
        "--event-pattern",
        default=DEFAULT_EVENT_PATTERN,
        help="Regex with 'clock', 'event' and 'host' named groups",
    )
    parser.add_argument(
        "-d", "--delimiter", help="Regex separating executions, optionally with a 'trace' group"
    )
    parser.add_argument("--host", help="Host of every event when the event pattern has no 'host' group")
    parser.add_argument("--label", help="Only search the execution with this label")
    parser.add_argument("--all", action="store_true", help="Report every occurrence, not only the first")
    parser.add_argument("--max-steps", type=int, help="Give up after examining this many candidates")
    parser.add_argument("-v", "--verbose", action="store_true", help="List the events of every match")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--validate-only", action="store_true", help="Only parse the log and build its graphs"
    )

    return parser


def main() -> int:
    """Main entry point for motif search.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    configure_logging_for_search(debug=args.debug)
    logger = get_logger()

    if not args.validate_only and args.motif is None:
        parser.error("--motif is required unless --validate-only is given")

    try:
        raw_log = read_text_file(args.log, "Log file")
        raw_motif = None if args.validate_only else read_text_file(args.motif, "Motif file")
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"File error: {e}")
        return 3

    pattern = None
    if raw_motif is not None:
        try:
            pattern = read_motif(raw_motif)
            pattern.validate()
            logger.info(f"📋 Motif loaded: {len(pattern)} nodes on {len(pattern.get_pattern_hosts())} hosts")
        except (ParseError, PatternShapeError, CausalityError) as e:
            logger.error(f"Motif error: {e}")
            return 2

    try:
        log_parser = LogParser(raw_log, args.delimiter, args.event_pattern, host=args.host)
        executions = select_executions(log_parser, args.label)

        if args.validate_only:
            for execution in executions:
                graph = build_graph(execution.events)
                shown = execution.label if execution.label else "<unlabeled>"
                logger.info(f"{shown}: {len(graph)} events on hosts {graph.get_hosts()}")
            logger.validation_result(True, "Log validation successful. Exiting.")
            return 0

        finder = MotifFinder(max_steps=args.max_steps)
        total = sum(search_execution(e, pattern, finder, args.all, args.verbose) for e in executions)
        logger.info(f"\n>>> {total} occurrence(s) in {len(executions)} execution(s) <<<")
        return 0

    except (
        ParseError,
        MissingCaptureGroupError,
        DuplicateLabelError,
        UnknownLabelError,
        CausalityError,
        re.error,
    ) as e:
        logger.error(f"Log error: {e}")
        return 1

    except SearchBudgetExceededError as e:
        logger.error(f"Search error: {e}")
        return 4

    except KeyboardInterrupt:
        logger.error("Search interrupted by user")
        return 5

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 6


if __name__ == "__main__":
    sys.exit(main())
