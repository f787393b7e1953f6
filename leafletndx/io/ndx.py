"""
GROMACS index files
===================

Reading and writing of named atom groups in the GROMACS ``.ndx`` format::

    [ POPC_upper ]
       1    2    3 ...

Atom numbers are 1-based universe indices.
"""

import logging
import os
import sys
from typing import Dict, Iterable, Optional, Sequence, TextIO, Tuple

from MDAnalysis.core.groups import AtomGroup
from MDAnalysis.core.universe import Universe

from ..config import NDX_WRAP

logger = logging.getLogger(__name__)


class NdxFormatError(ValueError):
    """An index file could not be parsed."""


def parse_ndx(stream: TextIO) -> Dict[str, list]:
    """Parse an index file into ``{name: [atom numbers]}``, keeping file order."""
    groups = {}
    current = None
    for lineno, line in enumerate(stream, 1):
        line = line.split(";", 1)[0].strip()
        if not line:
            continue
        if line.startswith("["):
            if not line.endswith("]") or not line[1:-1].strip():
                raise NdxFormatError(f"line {lineno}: malformed group header {line!r}")
            current = groups[line[1:-1].strip()] = []
            continue
        if current is None:
            raise NdxFormatError(f"line {lineno}: atom numbers before any group header")
        try:
            current.extend(int(x) for x in line.split())
        except ValueError:
            raise NdxFormatError(f"line {lineno}: invalid atom number in {line!r}") from None
    return groups


def read_ndx(filename: str, universe: Universe) -> Dict[str, AtomGroup]:
    """
    Read named groups from an index file.

    A missing or unreadable file, a malformed file, or one referencing
    atoms outside ``universe`` is not an error: a warning is logged and
    no groups are returned.

    Parameters
    ----------
    filename: str
        Path to the index file
    universe: Universe
        Universe the atom numbers refer to

    Returns
    -------
    dict
        Group name to AtomGroup, in file order
    """
    try:
        with open(filename, "r") as handle:
            numbers = parse_ndx(handle)
    except FileNotFoundError:
        logger.debug("Index file '%s' not found; no groups loaded.", filename)
        return {}
    except (OSError, UnicodeDecodeError, NdxFormatError) as exc:
        logger.warning("Could not read index file '%s': %s", filename, exc)
        return {}

    n_atoms = len(universe.atoms)
    groups = {}
    for name, atom_numbers in numbers.items():
        bad = [x for x in atom_numbers if not 1 <= x <= n_atoms]
        if bad:
            logger.warning(
                "Could not read index file '%s': group '%s' references atom "
                "%d, but the system has %d atoms.",
                filename, name, bad[0], n_atoms,
            )
            return {}
        groups[name] = universe.atoms[[x - 1 for x in atom_numbers]]
    logger.debug("Read %d groups from '%s'.", len(groups), filename)
    return groups


def write_ndx_group(stream: TextIO, name: str, ids: Sequence[int],
                    wrap: int = NDX_WRAP):
    """Write one group: a ``[ name ]`` header, then ``wrap`` atom numbers per line."""
    stream.write(f"[ {name} ]\n")
    ids = list(ids)
    for start in range(0, len(ids), wrap):
        chunk = ids[start:start + wrap]
        stream.write("".join(f"{int(i):4d} " for i in chunk) + "\n")


def write_ndx(filename: Optional[str],
              groups: Iterable[Tuple[str, Sequence[int]]],
              mode: Optional[str] = None,
              wrap: int = NDX_WRAP) -> int:
    """
    Write ``(name, ids)`` pairs as an index file.

    With ``filename=None`` the groups go to standard output.
    Unless ``mode`` is given, an existing file is appended to and a
    missing one is created. Appending assumes the existing file ends
    with a newline; its content is not checked.

    Returns
    -------
    int
        Number of groups written
    """
    if filename is None:
        return _write_groups(sys.stdout, groups, wrap)
    if mode is None:
        mode = "a" if os.path.exists(filename) else "w"
    with open(filename, mode) as handle:
        n_written = _write_groups(handle, groups, wrap)
    logger.info("Wrote %d groups to '%s' (mode '%s').", n_written, filename, mode)
    return n_written


def _write_groups(stream, groups, wrap):
    n_written = 0
    for name, ids in groups:
        write_ndx_group(stream, name, ids, wrap=wrap)
        n_written += 1
    return n_written
