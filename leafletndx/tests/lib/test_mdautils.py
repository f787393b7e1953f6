import pytest

import numpy as np
from numpy.testing import assert_allclose, assert_equal

from leafletndx.exceptions import EmptySelectionError
from leafletndx.lib.mdautils import (unwrap_coordinates, signed_axis_distance,
                                     center_of_geometry, split_by_residue)
from ..utils import lipid, make_universe


class TestUnwrap:

    @pytest.mark.parametrize(
        "center, unwrapped",
        [
            (
                [0, 0, 0],
                [
                    [0, -2, 0],
                    [1, -2, 0],
                    [-1, -2, 0],
                    [0, 2, 0],
                    [-1, 2, 0],
                ]
            ),
            (
                [0, 3, 0],
                [
                    [0, 3, 0],
                    [1, 3, 0],
                    [-1, 3, 0],
                    [0, 2, 0],
                    [-1, 2, 0],
                ]
            ),
            (
                [9, 2, 0],
                [
                    [10, 3, 0],
                    [11, 3, 0],
                    [9, 3, 0],
                    [10, 2, 0],
                    [9, 2, 0],
                ]
            )
        ]
    )
    def test_unwrap_small_ortho(self, center, unwrapped):
        """

            ------------------
            |                |
            |                |
            |XX             X|
            |X              X|
            |                |
            ------------------

        """
        coordinates = np.array([
            [0, 3, 0],
            [1, 3, 0],
            [9, 3, 0],
            [0, 2, 0],
            [9, 2, 0],
        ], dtype=float)

        box = np.array([10, 5, 3, 90, 90, 90], dtype=float)
        output = unwrap_coordinates(
            coordinates,
            center=center,
            box=box,
        )
        assert np.allclose(output, unwrapped)

    def test_unwrap_no_box(self):
        coordinates = [[0, 3, 0], [9, 3, 0]]
        output = unwrap_coordinates(coordinates, center=[0, 0, 0], box=None)
        assert_allclose(output, coordinates)

    def test_unwrap_defaults_to_first_point(self):
        coordinates = [[9, 1, 1], [1, 1, 1]]
        output = unwrap_coordinates(coordinates, box=[10, 10, 10, 90, 90, 90])
        assert_allclose(output, [[9, 1, 1], [11, 1, 1]])


class TestSignedAxisDistance:

    box = [10, 10, 20, 90, 90, 90]

    @pytest.mark.parametrize("point, reference, distance", [
        ([0, 0, 12], [0, 0, 10], 2),
        ([0, 0, 8], [0, 0, 10], -2),
        ([0, 0, 10], [0, 0, 10], 0),
        # across the upper boundary: 1 is above 19
        ([0, 0, 1], [0, 0, 19], 2),
        # across the lower boundary: 19 is below 1
        ([0, 0, 19], [0, 0, 1], -2),
        ([0, 0, 16], [0, 0, 2], -6),
    ])
    def test_minimum_image(self, point, reference, distance):
        assert signed_axis_distance(point, reference, "z", self.box) == pytest.approx(distance)

    def test_no_box_is_naive(self):
        assert signed_axis_distance([0, 0, 19], [0, 0, 1], "z") == pytest.approx(18)

    @pytest.mark.parametrize("axis", ["x", 0])
    def test_other_axis(self, axis):
        distance = signed_axis_distance([9, 0, 0], [1, 0, 0], axis, self.box)
        assert distance == pytest.approx(-2)

    def test_zero_box_length_disables_wrapping(self):
        box = [10, 10, 0, 90, 90, 90]
        assert signed_axis_distance([0, 0, 19], [0, 0, 1], "z", box) == pytest.approx(18)

    @pytest.mark.parametrize("offset", [10, 30, -10, -30])
    def test_half_box_matches_unwrap(self, offset):
        # exactly half a box (or an odd multiple of it) maps to -L/2 in both
        point, reference = [0, 0, 5 + offset], [0, 0, 5]
        distance = signed_axis_distance(point, reference, "z", self.box)
        unwrapped = unwrap_coordinates([point], center=reference, box=self.box)
        assert distance == pytest.approx(-10)
        assert unwrapped[0, 2] - reference[2] == pytest.approx(distance)

    def test_invalid_axis(self):
        with pytest.raises(ValueError, match="axis"):
            signed_axis_distance([0, 0, 0], [0, 0, 0], "w")


class TestCenterOfGeometry:

    def test_center(self):
        u = make_universe([lipid("POPC", 1, (5, 5, 10), direction=1, n_tail=2,
                                 step=5)])
        assert_allclose(center_of_geometry(u.atoms), [5, 5, 15])

    def test_center_across_boundary(self):
        # residue spans the z boundary: 95, 98, 1, 4 -> centered on 99.5
        u = make_universe([lipid("POPC", 1, (5, 5, 95), direction=1, n_tail=3)])
        positions = u.atoms.positions
        positions[:, 2] %= 100
        u.atoms.positions = positions
        center = center_of_geometry(u.atoms, box=u.dimensions)
        assert center[2] == pytest.approx(99.5, abs=1e-4)
        naive = center_of_geometry(u.atoms)
        assert naive[2] == pytest.approx(49.5, abs=1e-4)

    def test_empty(self):
        u = make_universe([lipid("POPC", 1, (5, 5, 10))])
        with pytest.raises(EmptySelectionError):
            center_of_geometry(u.atoms[[]])


class TestSplitByResidue:

    def test_first_seen_order(self):
        u = make_universe([
            lipid("POPC", 7, (0, 0, 10)),
            lipid("DOPE", 3, (0, 0, 10)),
            lipid("POPC", 5, (0, 0, 10)),
        ])
        residues = split_by_residue(u.atoms)
        assert [r.resids[0] for r in residues] == [7, 3, 5]
        assert all(len(r) == 4 for r in residues)
        assert_equal(np.concatenate([r.indices for r in residues]),
                     u.atoms.indices)

    def test_keeps_selection_order(self):
        u = make_universe([
            lipid("POPC", 1, (0, 0, 10)),
            lipid("POPC", 2, (0, 0, 10)),
        ])
        selection = u.atoms[[6, 1, 0, 7, 2]]
        residues = split_by_residue(selection)
        assert_equal(residues[0].indices, [6, 7])
        assert_equal(residues[1].indices, [1, 0, 2])

    def test_groups_by_residue_number(self):
        # two topology residues sharing one residue number
        u = make_universe([
            lipid("POPC", 1, (0, 0, 10)),
            lipid("DOPE", 2, (0, 0, 10)),
            lipid("POPC", 1, (0, 0, 10)),
        ])
        residues = split_by_residue(u.atoms)
        assert len(residues) == 2
        assert_equal(residues[0].indices, [0, 1, 2, 3, 8, 9, 10, 11])

    def test_empty(self):
        u = make_universe([lipid("POPC", 1, (0, 0, 10))])
        with pytest.raises(EmptySelectionError):
            split_by_residue(u.atoms[[]])
