import typing

import numpy as np
import MDAnalysis as mda

from leafletndx.config import LEAFLET_NAMES, LOWER, UPPER
from leafletndx.core.registry import NameRegistry


class LeafletGroup:
    """
    Growing, ordered collection of the atoms of one residue name
    in one leaflet.

    Parameters
    ----------
    resname: str
        Residue name shared by all lipids in the group
    leaflet: int
        0 for the lower leaflet, 1 for the upper leaflet
    universe: mda.Universe, optional
        Universe the atoms belong to. Set by the first :meth:`append`
        if not given.

    Attributes
    ----------
    name: str
        Group name, ``"<resname>_lower"`` or ``"<resname>_upper"``
    """

    def __init__(
        self,
        resname: str,
        leaflet: int,
        universe: typing.Optional[mda.Universe] = None,
    ):
        if leaflet not in (LOWER, UPPER):
            raise ValueError(
                f"leaflet must be {LOWER} (lower) or {UPPER} (upper), "
                f"but {leaflet} was given."
            )
        self.resname = resname
        self.leaflet = leaflet
        self.name = f"{resname}_{LEAFLET_NAMES[leaflet]}"
        self.universe = universe
        self._indices: typing.List[int] = []

    def append(self, atoms: mda.core.groups.AtomGroup):
        """Append ``atoms`` to the end of the group, keeping their order."""
        if self.universe is None:
            self.universe = atoms.universe
        elif atoms.universe is not self.universe:
            raise ValueError("atoms must belong to the same universe as the group")
        self._indices.extend(atoms.indices.tolist())

    @property
    def n_atoms(self) -> int:
        return len(self._indices)

    @property
    def indices(self) -> np.ndarray:
        """Universe atom indices in accumulation order."""
        return np.array(self._indices, dtype=int)

    @property
    def ids(self) -> np.ndarray:
        """1-based atom numbers, as written to index files."""
        return self.indices + 1

    @property
    def atoms(self) -> mda.core.groups.AtomGroup:
        if self.universe is None:
            raise ValueError(f"{self.name} has no atoms and no universe")
        return self.universe.atoms[self.indices]

    def __len__(self):
        return self.n_atoms

    def __repr__(self):
        return f"<LeafletGroup {self.name} with {self.n_atoms} atoms>"


class LeafletGroups:
    """
    Accumulator of :class:`LeafletGroup`, one per residue name and leaflet.

    All ``2 * len(registry)`` groups are created up front, so that groups
    which never receive a lipid are still available.
    Group ``2 * slot + leaflet`` holds the lipids of residue name
    ``registry[slot]``. Atoms can be appended but never removed.

    Parameters
    ----------
    registry: NameRegistry
        Residue names and their slots
    universe: mda.Universe, optional
        Universe the atoms belong to
    """

    def __init__(
        self,
        registry: NameRegistry,
        universe: typing.Optional[mda.Universe] = None,
    ):
        self.registry = registry
        self._groups = [
            LeafletGroup(resname, leaflet, universe=universe)
            for resname in registry
            for leaflet in (LOWER, UPPER)
        ]

    def append(self, slot: int, leaflet: int,
               atoms: mda.core.groups.AtomGroup):
        self[slot, leaflet].append(atoms)

    def __getitem__(self, key: typing.Tuple[int, int]) -> LeafletGroup:
        slot, leaflet = key
        if not 0 <= slot < len(self.registry) or leaflet not in (LOWER, UPPER):
            raise IndexError(f"No group for slot {slot} and leaflet {leaflet}")
        return self._groups[2 * slot + leaflet]

    def get(self, name: str) -> LeafletGroup:
        """Group called ``name``, e.g. ``"POPC_upper"``."""
        for group in self._groups:
            if group.name == name:
                return group
        raise KeyError(name)

    def __iter__(self) -> typing.Iterator[LeafletGroup]:
        return iter(self._groups)

    def __len__(self):
        return len(self._groups)

    @property
    def n_atoms(self) -> int:
        return sum(group.n_atoms for group in self._groups)

    def nonempty(self) -> typing.List[LeafletGroup]:
        return [group for group in self._groups if group.n_atoms]

    def select(self, include_empty: bool = False) -> typing.List[LeafletGroup]:
        """Groups to emit: all of them, or only those holding atoms."""
        if include_empty:
            return list(self._groups)
        return self.nonempty()

    def to_list(
        self,
        include_empty: bool = True,
    ) -> typing.List[typing.Tuple[str, np.ndarray]]:
        """``(name, ids)`` pairs, in slot order with lower before upper."""
        return [(group.name, group.ids) for group in self.select(include_empty)]

    def __repr__(self):
        return (f"<LeafletGroups with {len(self)} groups, "
                f"{len(self.nonempty())} non-empty>")
