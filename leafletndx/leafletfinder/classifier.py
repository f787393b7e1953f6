"""
Leaflet classification of single lipids
=======================================

A lipid is assigned to the upper leaflet if its headgroup atom lies
above the membrane center along the bilayer normal, and to the lower
leaflet otherwise. A headgroup exactly at the center is lower.
"""

from typing import Optional, Union

import numpy as np
from numpy.typing import ArrayLike
from MDAnalysis.core.groups import Atom, AtomGroup

from ..config import LOWER, UPPER
from ..exceptions import AmbiguousHeadgroupError, MissingHeadgroupError
from ..lib.mdautils import signed_axis_distance


def find_headgroup(residue: AtomGroup, headgroups: AtomGroup) -> Atom:
    """
    Return the single atom of ``residue`` that is also in ``headgroups``.

    Atoms are compared by identity (universe index), not by value.

    Raises
    ------
    MissingHeadgroupError
        If no atom of ``residue`` is in ``headgroups``
    AmbiguousHeadgroupError
        If more than one atom of ``residue`` is in ``headgroups``
    """
    mask = np.isin(residue.indices, headgroups.indices)
    n_found = int(mask.sum())
    first = residue[0]
    if n_found == 0:
        raise MissingHeadgroupError(
            f"No headgroup atom detected for lipid {first.resname} "
            f"(resid {first.resid}).",
            resname=first.resname, resid=int(first.resid),
        )
    if n_found > 1:
        raise AmbiguousHeadgroupError(
            f"Multiple headgroup atoms ({n_found}) detected for lipid "
            f"{first.resname} (resid {first.resid}).",
            resname=first.resname, resid=int(first.resid),
            n_headgroups=n_found,
        )
    return residue[np.flatnonzero(mask)[0]]


def assign_leaflet(residue: AtomGroup,
                   headgroups: AtomGroup,
                   center: ArrayLike,
                   box: Optional[ArrayLike] = None,
                   normal_axis: Union[str, int] = "z") -> int:
    """
    Leaflet of one lipid: 1 (upper) or 0 (lower).

    Parameters
    ----------
    residue: AtomGroup
        All atoms of one lipid
    headgroups: AtomGroup
        Headgroup atoms of the whole membrane; exactly one of them
        must be in ``residue``
    center: ArrayLike
        Membrane center
    box: ArrayLike, optional
        Box dimensions used for the minimum image convention
    normal_axis: str or int
        Bilayer normal
    """
    head = find_headgroup(residue, headgroups)
    distance = signed_axis_distance(head.position, center,
                                    axis=normal_axis, box=box)
    return UPPER if distance > 0 else LOWER
