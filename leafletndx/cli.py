"""Command-line entry point: write leaflet-resolved lipid groups to an index file."""

import argparse
import logging
import sys
from typing import List, Optional

import MDAnalysis as mda

from . import config
from .exceptions import EmptySelectionError, LeafletNdxError
from .io.ndx import read_ndx
from .leafletfinder import LeafletFinder
from .logging_config import configure_logging
from .selection import smart_select

logger = logging.getLogger(__name__)


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=config.PROGRAM_NAME,
        description=(
            "Assign membrane lipids to the lower and upper leaflet and write "
            "one index group per lipid type and leaflet."
        ),
    )
    parser.add_argument("-c", dest="gro_file", required=True,
                        help="gro file to read")
    parser.add_argument("-n", dest="ndx_file", default=config.DEFAULT_NDX,
                        help=f"ndx file to read (default: {config.DEFAULT_NDX})")
    parser.add_argument("-s", dest="membrane", default=config.DEFAULT_MEMBRANE,
                        help=("selection of membrane lipids "
                              f"(default: {config.DEFAULT_MEMBRANE})"))
    parser.add_argument("-p", dest="headgroups", default=config.DEFAULT_HEADGROUPS,
                        help=("selection of lipid head identifiers "
                              f"(default: {config.DEFAULT_HEADGROUPS})"))
    parser.add_argument("-o", dest="output", default=None,
                        help=("output ndx file; appended to if it exists "
                              "(default: standard output)"))
    parser.add_argument("-e", dest="empty", action="store_true",
                        help="also create empty ndx groups")
    parser.add_argument("--log-file", default=None,
                        help="write log messages to this file instead of stderr")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug messages")
    return parser.parse_args(argv[1:])


def run(args: argparse.Namespace) -> int:
    try:
        universe = mda.Universe(args.gro_file)
    except (OSError, ValueError, EOFError, IndexError) as exc:
        logger.error("Could not read coordinate file '%s': %s", args.gro_file, exc)
        return 1

    groups = read_ndx(args.ndx_file, universe)

    try:
        membrane = smart_select(universe, args.membrane, groups)
        if not len(membrane):
            raise EmptySelectionError(f"No membrane lipids ('{args.membrane}') found.")
        headgroups = smart_select(universe, args.headgroups, groups)
        if not len(headgroups):
            raise EmptySelectionError(f"No headgroup atoms ('{args.headgroups}') found.")

        finder = LeafletFinder(universe, select=headgroups,
                               select_membrane=membrane)
        finder.run()
    except LeafletNdxError as exc:
        logger.error("%s", exc.message)
        logger.error("Failed to create ndx groups.")
        return 1

    try:
        finder.write_selection(args.output, include_empty=args.empty)
    except OSError as exc:
        logger.error("The output ndx file could not be opened: %s", exc)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv
    args = _parse_args(argv)
    configure_logging(args.log_file, verbose=args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
