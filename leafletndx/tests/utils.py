import numpy as np
import MDAnalysis as mda


def lipid(resname, resid, head, direction=-1, n_tail=3, step=3.0,
          head_name="PO4", tail_name="C"):
    """
    One lipid: a headgroup atom at ``head`` followed by ``n_tail`` tail
    atoms stacked along z, ``step`` apart, in ``direction``.
    """
    head = np.asarray(head, dtype=float)
    names = [head_name] + [f"{tail_name}{i}" for i in range(1, n_tail + 1)]
    positions = [head + [0, 0, direction * step * i]
                 for i in range(n_tail + 1)]
    return resname, resid, names, positions


def make_universe(residues, box=(100.0, 100.0, 100.0)):
    """
    Build a universe from ``(resname, resid, names, positions)`` tuples.
    ``box=None`` leaves the universe without dimensions.
    """
    atom_resindex = []
    names = []
    positions = []
    for i, (_, _, res_names, res_positions) in enumerate(residues):
        atom_resindex.extend([i] * len(res_names))
        names.extend(res_names)
        positions.extend(res_positions)

    u = mda.Universe.empty(len(names), n_residues=len(residues),
                           atom_resindex=atom_resindex, trajectory=True)
    u.add_TopologyAttr("names", names)
    u.add_TopologyAttr("resnames", [r[0] for r in residues])
    u.add_TopologyAttr("resids", [r[1] for r in residues])
    u.atoms.positions = np.array(positions, dtype=np.float32)
    if box is not None:
        u.dimensions = np.array(list(box) + [90, 90, 90], dtype=np.float32)
    return u


def grid_xy(i, n_side=16, spacing=6.0):
    return (i % n_side) * spacing + 1.0, (i // n_side) * spacing % 96 + 1.0


def make_mixed_bilayer(upper_z=70.0, lower_z=30.0, box=(100.0, 100.0, 100.0)):
    """
    256 POPC (128 per leaflet), 120 DOPE below and 60 DOPE above the
    membrane center, and 64 POPI above it.
    Upper tails point down and lower tails point up.
    """
    residues = []
    resid = 1

    def add(resname, z, direction, n):
        nonlocal resid
        for _ in range(n):
            x, y = grid_xy(resid)
            residues.append(lipid(resname, resid, (x, y, z), direction))
            resid += 1

    for _ in range(128):
        add("POPC", upper_z, -1, 1)
        add("POPC", lower_z, 1, 1)
    add("DOPE", lower_z, 1, 120)
    add("DOPE", upper_z, -1, 60)
    add("POPI", upper_z, -1, 64)
    return make_universe(residues, box=box)
