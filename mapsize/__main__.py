# PYTHON_ARGCOMPLETE_OK
import argparse
import json
import logging
import os
from pathlib import Path
import sys
from typing import Protocol

import argcomplete

from mapsize import const
from mapsize.core import MapsizeError
from mapsize.helpers import get_bool_env
from mapsize.log import setup_log

_LOGGER = logging.getLogger(__name__)


class ArgsProtocol(Protocol):
    map_file: str
    verbose: bool
    quiet: bool
    log_level: str
    config: str | None
    no_early_exit: bool
    archives: bool
    files: bool
    limit: int | None
    json: str | None


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from err
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be at least 1")
    return number


def parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="mapsize",
        description="Report memory region usage from a GNU ld map file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Version: {const.__version__}",
        help="Print the mapsize version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Enable verbose logs.",
        action="store_true",
        default=get_bool_env(const.ENV_VERBOSE),
    )
    parser.add_argument(
        "-q", "--quiet", help="Disable all logs.", action="store_true"
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help="Set the log level.",
        default=os.getenv(const.ENV_LOG_LEVEL, "INFO"),
        action="store",
        choices=const.LOG_LEVELS,
    )
    parser.add_argument(
        "--config",
        help="YAML settings file overriding section markers and object suffixes.",
    )
    parser.add_argument(
        "--no-early-exit",
        help="Keep scanning after the cross reference table heading.",
        action="store_true",
    )
    parser.add_argument(
        "--archives", help="Show per-archive contributions.", action="store_true"
    )
    parser.add_argument(
        "--files", help="Show per-object file contributions.", action="store_true"
    )
    parser.add_argument(
        "--limit",
        help="Maximum number of archives/object files to show (default: 20).",
        type=positive_int,
        default=20,
    )
    parser.add_argument(
        "--json", help="Also write the full analysis as JSON to this file."
    )
    parser.add_argument("map_file", help="The linker map file to analyze.")

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv[1:])


def command_analyze(args: ArgsProtocol) -> int:
    from dataclasses import replace

    from mapsize.analyze_map import AnalyzerSettings, analyze_map_file
    from mapsize.analyze_map.cli import MapAnalyzerCLI
    from mapsize.config import load_settings

    settings = load_settings(args.config) if args.config else AnalyzerSettings()
    if args.no_early_exit:
        settings = replace(settings, early_exit=False)

    _LOGGER.info("Analyzing %s...", args.map_file)
    analysis = analyze_map_file(args.map_file, settings)

    report = MapAnalyzerCLI(settings).generate_report(
        analysis, archives=args.archives, files=args.files, limit=args.limit
    )
    print(report)

    if args.json:
        json_path = Path(args.json)
        try:
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(analysis.to_dict(), f, indent=2)
        except OSError as err:
            raise MapsizeError(f"Could not write {json_path}: {err}") from err
        _LOGGER.info("Wrote analysis JSON to %s", json_path)
    return 0


def run_mapsize(argv):
    args = parse_args(argv)
    # Override log level if verbose is set
    if args.verbose:
        args.log_level = "DEBUG"
    elif args.quiet:
        args.log_level = "CRITICAL"

    setup_log(log_level=args.log_level)

    try:
        return command_analyze(args)
    except MapsizeError as e:
        _LOGGER.error(e, exc_info=args.verbose)
        return 1


def main():
    try:
        return run_mapsize(sys.argv)
    except KeyboardInterrupt:
        return 1


if __name__ == "__main__":
    sys.exit(main())
