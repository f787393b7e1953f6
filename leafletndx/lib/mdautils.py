from typing import List, Optional, Union

import numpy as np
from numpy.typing import ArrayLike
from MDAnalysis.core.groups import AtomGroup

from ..exceptions import EmptySelectionError
from .utils import axis_to_index


def _box_lengths(box: Optional[ArrayLike]) -> Optional[np.ndarray]:
    if box is None:
        return None
    lengths = np.asarray(box, dtype=np.float64)[:3]
    if not np.any(lengths > 0):
        return None
    return lengths


def _minimum_image(delta, lengths):
    # wrap into [-L/2, L/2); exactly half a box maps to -L/2
    return delta - lengths * np.floor(delta / lengths + 0.5)


def unwrap_coordinates(coordinates: ArrayLike,
                       center: Optional[ArrayLike] = None,
                       box: Optional[ArrayLike] = None) -> ArrayLike:
    """
    Move each point to its periodic image nearest to ``center``.

    Only the edge lengths of ``box`` are used; axes with a
    non-positive edge length are left untouched.

    Parameters
    ----------
    coordinates: ArrayLike
        (N, 3) coordinates
    center: ArrayLike, optional
        Reference point. Defaults to the first coordinate.
    box: ArrayLike, optional
        MDAnalysis dimensions ``[lx, ly, lz, alpha, beta, gamma]``.
        If ``None``, the coordinates are returned unchanged.
    """
    coordinates = np.asarray(coordinates, dtype=np.float64).reshape((-1, 3))
    lengths = _box_lengths(box)
    if lengths is None or not len(coordinates):
        return coordinates
    if center is None:
        center = coordinates[0]
    center = np.asarray(center, dtype=np.float64).reshape(3)

    delta = coordinates - center
    periodic = lengths > 0
    safe = np.where(periodic, lengths, 1)
    wrapped = np.where(periodic, _minimum_image(delta, safe), delta)
    return center + wrapped


def signed_axis_distance(point: ArrayLike,
                         reference: ArrayLike,
                         axis: Union[str, int] = "z",
                         box: Optional[ArrayLike] = None) -> float:
    """
    Minimum-image signed distance from ``reference`` to ``point`` along
    one axis. A positive value means ``point`` lies above ``reference``.
    """
    axis = axis_to_index(axis)
    distance = float(point[axis]) - float(reference[axis])
    lengths = _box_lengths(box)
    if lengths is None:
        return distance
    length = lengths[axis]
    if length <= 0:
        return distance
    return float(_minimum_image(distance, length))


def center_of_geometry(selection: AtomGroup,
                       box: Optional[ArrayLike] = None) -> np.ndarray:
    """
    Unweighted center of a selection, unwrapping over periodic boundaries
    around its first atom.

    Parameters
    ----------
    selection: AtomGroup
    box: ArrayLike, optional
        Box dimensions. No unwrapping is done if ``None``.

    Raises
    ------
    EmptySelectionError
        If ``selection`` has no atoms
    """
    if not len(selection):
        raise EmptySelectionError(
            "Cannot compute the center of geometry of an empty selection."
        )
    positions = selection.positions
    unwrapped = unwrap_coordinates(positions, center=positions[0], box=box)
    return unwrapped.mean(axis=0)


def split_by_residue(selection: AtomGroup) -> List[AtomGroup]:
    """
    Split a selection into one AtomGroup per residue number.

    Residues are returned in the order their first atom appears in
    ``selection``, and atoms keep their order within each residue.
    Unlike ``AtomGroup.split("residue")``, residues are keyed on
    ``resids``, not on ``resindices``, and are not sorted.

    Raises
    ------
    EmptySelectionError
        If ``selection`` has no atoms
    """
    if not len(selection):
        raise EmptySelectionError(
            "Could not split atoms based on residue number: "
            "the selection is empty."
        )
    positions_by_resid = {}
    for i, resid in enumerate(selection.resids):
        positions_by_resid.setdefault(resid, []).append(i)
    return [selection[ix] for ix in positions_by_resid.values()]
