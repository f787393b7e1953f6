"""Resolve selection queries against index groups and the MDAnalysis selection language."""

import logging
from typing import Dict, Optional

from MDAnalysis.core.groups import AtomGroup
from MDAnalysis.core.universe import Universe
from MDAnalysis.exceptions import SelectionError

from .exceptions import SelectionQueryError

logger = logging.getLogger(__name__)

#: keyword arguments of ``select_atoms`` that index groups cannot shadow
RESERVED_SELECT_KWARGS = frozenset([
    "periodic", "rtol", "atol", "updating", "sorted",
    "rdkit_kwargs", "smarts_kwargs",
])


def _selection_groups(groups: Dict[str, AtomGroup]) -> Dict[str, AtomGroup]:
    reserved = sorted(RESERVED_SELECT_KWARGS.intersection(groups))
    if reserved:
        logger.warning(
            "Index groups %s clash with selection options and can only be "
            "selected by their exact name, not with 'group <name>'.",
            ", ".join(reserved),
        )
    return {name: group for name, group in groups.items()
            if name not in RESERVED_SELECT_KWARGS}


def smart_select(universe: Universe, query: str,
                 groups: Optional[Dict[str, AtomGroup]] = None) -> AtomGroup:
    """
    Select atoms by index group name or selection string.

    A ``query`` that is exactly the name of one of ``groups`` returns
    that group. Anything else is an MDAnalysis selection string, in which
    index groups can be referenced as ``group <name>``. Groups named like
    a ``select_atoms`` option (e.g. ``sorted``) are only reachable by
    exact name.

    Raises
    ------
    SelectionQueryError
        If the query is invalid or references unknown groups
    """
    groups = groups or {}
    query = query.strip()
    if query in groups:
        logger.debug("Selection '%s' resolved as an index group.", query)
        return groups[query]
    try:
        return universe.select_atoms(query, **_selection_groups(groups))
    except (SelectionError, ValueError, KeyError, TypeError, IndexError) as exc:
        # truncated queries surface as TypeError or IndexError from the parser
        raise SelectionQueryError(
            f"Could not understand the selection query '{query}': {exc}",
            query=query,
        ) from exc
