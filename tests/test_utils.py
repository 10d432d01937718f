"""
Coordinate helper tests: offset conversion and lattice distance.
"""
import pytest

from hexkudo.core.hex_grid import HexGrid
from hexkudo.utils import axial_neighbors, axial_to_evenr, evenr_to_axial, hex_distance, symmetry_transform


@pytest.mark.parametrize("row", range(-3, 4))
@pytest.mark.parametrize("col", range(-3, 4))
def test_evenr_round_trip(row, col):
    assert axial_to_evenr(*evenr_to_axial(row, col)) == (row, col)


def test_rectangle_rows_line_up():
    # each even-r row keeps its columns
    grid = HexGrid.build("rectangle", 4)
    offsets = sorted(axial_to_evenr(q, r) for q, r in grid)
    assert offsets == [(row, col) for row in range(4) for col in range(4)]


def test_neighbors_are_one_step_away():
    for nbr in axial_neighbors(2, -1):
        assert hex_distance((2, -1), nbr) == 1


def test_grid_distance_never_shorter_than_lattice():
    grid = HexGrid.build("classic", 2)
    for a in grid:
        for b in grid:
            assert grid.distance(a, b) >= hex_distance(a, b)


def test_symmetry_transforms_are_bijections():
    cells = HexGrid.build("hexagon", 2).cells
    for index in range(12):
        moved = {symmetry_transform(index)(c) for c in cells}
        assert moved == set(cells)
    with pytest.raises(ValueError):
        symmetry_transform(12)
