import numpy as np

from MDAnalysis.core.topologyattrs import ResidueAttr


class Leaflet(ResidueAttr):
    """Leaflet assignment for residues: 0 is lower, 1 is upper, -1 is unassigned."""

    attrname = "leaflets"
    singular = "leaflet"
    dtype = int

    @staticmethod
    def _gen_initial_values(na, nr, ns):
        return np.ones(nr, dtype=int) * -1
