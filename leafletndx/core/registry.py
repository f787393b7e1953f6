from typing import Dict, Iterator, List

from MDAnalysis.core.groups import AtomGroup


class NameRegistry:
    """
    Ordered set of residue names, each mapped to a fixed slot.

    Slots are allocated in order of first occurrence and never change
    for the lifetime of the registry.

    Parameters
    ----------
    names: iterable of str
        Residue names. Duplicates are ignored after their first occurrence.
    """

    def __init__(self, names=()):
        self._slots: Dict[str, int] = {}
        for name in names:
            self.add(name)

    @classmethod
    def from_atomgroup(cls, atomgroup: AtomGroup) -> "NameRegistry":
        """Build a registry from the residue names of ``atomgroup``, in atom order."""
        return cls(str(name) for name in atomgroup.resnames)

    def add(self, name: str) -> int:
        try:
            return self._slots[name]
        except KeyError:
            slot = self._slots[name] = len(self._slots)
            return slot

    def index_of(self, name: str) -> int:
        """
        Slot of ``name``.

        Raises
        ------
        KeyError
            If ``name`` was never registered
        """
        try:
            return self._slots[name]
        except KeyError:
            raise KeyError(f"Residue name {name!r} is not registered.") from None

    @property
    def names(self) -> List[str]:
        return list(self._slots)

    def __getitem__(self, slot: int) -> str:
        return self.names[slot]

    def __contains__(self, name) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self):
        return f"NameRegistry({self.names})"
