"""
LeafletFinder
=============

Assign the lipids of a planar bilayer to the lower or upper leaflet
by the position of one headgroup atom per lipid relative to the
center of geometry of the membrane, and group them by residue name.


Functions
---------

.. autofunction:: classify


Classes
-------

.. autoclass:: LeafletFinder
    :members:
"""

import logging
from typing import Optional, Union

import numpy as np
from numpy.typing import ArrayLike
from MDAnalysis.core.universe import Universe
from MDAnalysis.core.groups import AtomGroup

from .classifier import assign_leaflet
from ..config import LEAFLET_NAMES, NORMAL_AXIS
from ..core.groups import LeafletGroups
from ..core.registry import NameRegistry
from ..exceptions import EmptySelectionError, InternalInconsistencyError
from ..io.ndx import write_ndx
from ..lib.mdautils import center_of_geometry, split_by_residue
from ..lib.utils import axis_to_index, cached_property

logger = logging.getLogger(__name__)


def _check_selections(membrane: AtomGroup, headgroups: AtomGroup):
    if not len(membrane):
        raise EmptySelectionError("No membrane lipids found.")
    if not len(headgroups):
        raise EmptySelectionError("No lipid headgroup atoms found.")


def _classify(membrane, headgroups, registry, box, normal_axis):
    residues = split_by_residue(membrane)
    center = center_of_geometry(membrane, box=box)
    logger.debug("Membrane center of geometry: %s", center)

    groups = LeafletGroups(registry, universe=membrane.universe)
    labels = np.empty(len(residues), dtype=int)
    for i, residue in enumerate(residues):
        leaflet = assign_leaflet(residue, headgroups, center, box=box,
                                 normal_axis=normal_axis)
        resname = residue[0].resname
        try:
            slot = registry.index_of(resname)
        except KeyError:
            raise InternalInconsistencyError(
                f"Internal error. Residue name {resname} of resid "
                f"{residue[0].resid} was not found in the list of detected "
                f"residue names. This should never happen."
            ) from None
        groups.append(slot, leaflet, residue)
        labels[i] = leaflet
    return residues, center, groups, labels


def classify(membrane: AtomGroup,
             headgroups: AtomGroup,
             registry: Optional[NameRegistry] = None,
             box: Optional[ArrayLike] = None,
             normal_axis: Union[str, int] = NORMAL_AXIS) -> LeafletGroups:
    """
    Group membrane lipids by residue name and leaflet.

    Each residue (by residue number) of ``membrane`` must contain exactly
    one atom of ``headgroups``. A lipid whose headgroup lies above the
    center of geometry of ``membrane`` along ``normal_axis`` goes into the
    upper leaflet, otherwise into the lower one.
    The first malformed lipid aborts the whole classification.

    Parameters
    ----------
    membrane: AtomGroup
        Atoms of all membrane lipids
    headgroups: AtomGroup
        One reference atom per lipid, e.g. ``"name PO4"``.
        May contain atoms outside ``membrane``; they are ignored.
    registry: NameRegistry, optional
        Residue names and their group slots.
        Built from ``membrane`` if not given.
    box: ArrayLike, optional
        Box dimensions for the minimum image convention.
        No periodic boundaries are applied if ``None``.
    normal_axis: str or int, optional
        Bilayer normal, "z" by default

    Returns
    -------
    LeafletGroups
        ``2 * len(registry)`` groups, some of which may be empty

    Raises
    ------
    EmptySelectionError
        If ``membrane`` or ``headgroups`` has no atoms
    MissingHeadgroupError, AmbiguousHeadgroupError
        If a lipid does not have exactly one headgroup atom
    InternalInconsistencyError
        If a residue name of ``membrane`` is not in ``registry``
    """
    _check_selections(membrane, headgroups)
    if registry is None:
        registry = NameRegistry.from_atomgroup(membrane)
    return _classify(membrane, headgroups, registry, box, normal_axis)[2]


class LeafletFinder:
    """Assign lipids of a planar bilayer to the lower and upper leaflet.

    Parameters
    ----------
    universe : Universe or AtomGroup
        Atoms to apply the algorithm to
    select : str or AtomGroup
        Headgroup atoms, one per lipid, as a
        :meth:`Universe.select_atoms` selection string
        (e.g. "name PO4" or "name P") or an AtomGroup
    select_membrane : str or AtomGroup
        Atoms of the membrane lipids. Every atom is put into
        exactly one output group.
    pbc : bool (optional)
        If ``False``, does not follow the minimum image convention when
        computing the membrane center and headgroup distances
    normal_axis : str (optional)
        Bilayer normal, "x", "y" or "z"
    update_TopologyAttr : bool (optional)
        If ``True``, set the ``leaflet`` attribute of every membrane
        residue (0 for lower, 1 for upper) when :meth:`run` is called


    Attributes
    ----------
    universe: Universe
    membrane: AtomGroup
        Atoms of the membrane lipids
    headgroups: AtomGroup
        Headgroup atoms
    registry: NameRegistry
        Residue names of the membrane in order of first occurrence
    residues: list of AtomGroup
        Membrane atoms split by residue number
    center: numpy.ndarray
        Center of geometry of the membrane
    residue_leaflets: numpy.ndarray
        Leaflet (0 or 1) of each entry of ``residues``
    leaflet_groups: LeafletGroups
        Membrane atoms grouped by residue name and leaflet
    """

    def __init__(self, universe: Union[AtomGroup, Universe],
                 select: Union[str, AtomGroup] = "name PO4",
                 select_membrane: Union[str, AtomGroup] = "all",
                 pbc: bool = True,
                 normal_axis: str = NORMAL_AXIS,
                 update_TopologyAttr: bool = False):
        self._cache = {}
        self.universe = universe.universe
        self.pbc = pbc
        self._normal_axis = axis_to_index(normal_axis)
        self._select = select
        self._select_membrane = select_membrane

        self.membrane = self._select_atoms(universe, select_membrane)
        self.headgroups = self._select_atoms(universe, select)
        _check_selections(self.membrane, self.headgroups)

        if pbc:
            self._get_box = lambda: self.universe.dimensions
        else:
            self._get_box = lambda: None

        self._update_TopologyAttr = update_TopologyAttr

    @staticmethod
    def _select_atoms(universe, selection):
        if isinstance(selection, AtomGroup):
            return selection
        return universe.select_atoms(selection)

    @property
    def box(self):
        return self._get_box()

    @property
    def normal_axis(self):
        return "xyz"[self._normal_axis]

    def run(self):
        """
        This clears the cache for lazy running.
        """
        self._cache = {}
        self._output
        logger.info(
            "Assigned %d lipids: %s",
            len(self.residues),
            ", ".join(f"{group.name}={len(group.atoms.residues)}"
                      for group in self.leaflet_groups.nonempty()),
        )
        if self._update_TopologyAttr:
            self.universe.add_TopologyAttr("leaflets")
            for residue, leaflet in zip(self.residues, self.residue_leaflets):
                residue.residues.leaflets = leaflet
        return self

    @cached_property
    def registry(self):
        return NameRegistry.from_atomgroup(self.membrane)

    @cached_property
    def _output(self):
        return _classify(self.membrane, self.headgroups, self.registry,
                         self.box, self._normal_axis)

    @cached_property
    def residues(self):
        return self._output[0]

    @cached_property
    def center(self):
        return self._output[1]

    @cached_property
    def leaflet_groups(self):
        return self._output[2]

    @cached_property
    def residue_leaflets(self):
        return self._output[3]

    @cached_property
    def leaflet_atoms(self):
        """Membrane atoms in the lower and upper leaflet, in traversal order."""
        atoms = []
        for leaflet in range(len(LEAFLET_NAMES)):
            selected = [self.residues[i].indices
                        for i in np.flatnonzero(self.residue_leaflets == leaflet)]
            if selected:
                atoms.append(self.universe.atoms[np.concatenate(selected)])
            else:
                atoms.append(self.membrane[[]])
        return atoms

    def write_selection(self, filename=None, mode=None,
                        include_empty: bool = False):
        """Write the leaflet groups to the index file *filename*.

        Writes to standard output if *filename* is ``None``.
        An existing file is appended to unless ``mode="w"`` is given.
        Empty groups are only written if *include_empty* is ``True``.
        """
        return write_ndx(filename, self.leaflet_groups.to_list(include_empty),
                         mode=mode)

    def __repr__(self):
        return (f"LeafletFinder(select='{self._select}', "
                f"select_membrane='{self._select_membrane}', "
                f"normal_axis='{self.normal_axis}', pbc={self.pbc})")
