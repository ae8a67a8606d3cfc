"""Tests for the grid and hat tilings."""

import itertools
import math

import pytest

from einstein_puzzle import (
    HAT_INFO,
    INV_PHI,
    PHI,
    Polygon,
    explain_formula,
    generate_grid_polygons,
    generate_hat_tiling,
    generate_polygons,
)


def _bounds(polygon: Polygon) -> tuple[float, float, float, float]:
    xs = [p.x for p in polygon.points]
    ys = [p.y for p in polygon.points]
    return (min(xs), min(ys), max(xs), max(ys))


def _overlap_area(a: Polygon, b: Polygon) -> float:
    ax0, ay0, ax1, ay1 = _bounds(a)
    bx0, by0, bx1, by1 = _bounds(b)
    width = min(ax1, bx1) - max(ax0, bx0)
    height = min(ay1, by1) - max(ay0, by0)
    return max(0.0, width) * max(0.0, height)


class TestGridTiling:
    """Test suite for the rectangular grid."""

    def test_scenario_600_by_4x4(self):
        """A 600px board cut 4x4 gives 16 squares of 150px."""
        polygons = generate_grid_polygons(600, 4, 4)

        assert len(polygons) == 16
        first = polygons[0]
        assert [p.to_tuple() for p in first.points] == [(0, 0), (150, 0), (150, 150), (0, 150)]
        for polygon in polygons:
            x0, y0, x1, y1 = _bounds(polygon)
            assert (x1 - x0, y1 - y0) == (150, 150)
            assert polygon.metadata is None

    @pytest.mark.parametrize("canvas_size,rows,cols", [(600, 3, 5), (400, 2, 8), (100, 1, 1)])
    def test_rectangles_cover_canvas_exactly(self, canvas_size, rows, cols):
        """Rectangles sum to the canvas area without overlapping."""
        polygons = generate_grid_polygons(canvas_size, rows, cols)

        assert len(polygons) == rows * cols
        total_area = 0.0
        for polygon in polygons:
            assert len(polygon.points) == 4
            x0, y0, x1, y1 = _bounds(polygon)
            assert x0 >= 0 and y0 >= 0
            assert x1 <= canvas_size and y1 <= canvas_size
            total_area += (x1 - x0) * (y1 - y0)

        assert total_area == pytest.approx(canvas_size * canvas_size)
        for a, b in itertools.combinations(polygons, 2):
            assert _overlap_area(a, b) == pytest.approx(0.0)

    def test_row_major_order(self):
        """Cells are emitted row by row, left to right."""
        polygons = generate_grid_polygons(300, 3, 2)
        origins = [polygon.points[0].to_tuple() for polygon in polygons]
        assert origins == [(0, 0), (150, 0), (0, 100), (150, 100), (0, 200), (150, 200)]

    def test_rectangles_are_axis_aligned(self):
        for polygon in generate_grid_polygons(600, 4, 4):
            a, b, c, d = polygon.points
            assert a.y == b.y and c.y == d.y
            assert a.x == d.x and b.x == c.x


class TestHatTiling:
    """Test suite for the quasi-periodic hexagon layout."""

    @pytest.mark.parametrize("complexity", [1, 3, 6, 8])
    def test_count_and_row_major_metadata(self, complexity):
        polygons = generate_hat_tiling(600, complexity)

        assert len(polygons) == complexity * complexity
        cells = [(p.metadata.row, p.metadata.col) for p in polygons]
        assert cells == [(r, c) for r in range(complexity) for c in range(complexity)]

    def test_fib_offset_matches_formula(self):
        canvas_size, complexity = 600, 6
        cell_size = canvas_size / complexity

        for polygon in generate_hat_tiling(canvas_size, complexity):
            meta = polygon.metadata
            expected = ((meta.row * PHI + meta.col * (1 / PHI)) % 1) * cell_size * 0.3
            assert meta.fib_offset == pytest.approx(expected, abs=1e-12)
            assert meta.center_x == pytest.approx(meta.col * cell_size + cell_size / 2 + meta.fib_offset)
            assert meta.center_y == pytest.approx(meta.row * cell_size + cell_size / 2 + meta.fib_offset * 0.7)
            assert meta.variant == (meta.row + meta.col) % 3

    def test_first_cell_has_no_offset(self):
        polygon = generate_hat_tiling(600, 6)[0]
        assert polygon.metadata.fib_offset == 0.0
        assert (polygon.metadata.center_x, polygon.metadata.center_y) == (50.0, 50.0)

    def test_hexagon_vertices(self):
        """Six vertices; those with index % 3 == variant are pushed out by 20%."""
        canvas_size, complexity = 600, 6
        cell_size = canvas_size / complexity

        for polygon in generate_hat_tiling(canvas_size, complexity):
            meta = polygon.metadata
            assert len(polygon.points) == 6
            for i, point in enumerate(polygon.points):
                radius = math.hypot(point.x - meta.center_x, point.y - meta.center_y)
                expected_radius = cell_size * 0.45 * (1.2 if i % 3 == meta.variant else 1.0)
                assert radius == pytest.approx(expected_radius)

                angle = math.atan2(point.y - meta.center_y, point.x - meta.center_x)
                expected_angle = i * math.pi / 3 + meta.variant * math.pi / 6
                assert math.cos(angle) == pytest.approx(math.cos(expected_angle), abs=1e-9)
                assert math.sin(angle) == pytest.approx(math.sin(expected_angle), abs=1e-9)

    def test_deterministic(self):
        """Repeated calls produce identical polygons."""
        assert generate_hat_tiling(600, 7) == generate_hat_tiling(600, 7)
        assert generate_grid_polygons(600, 3, 4) == generate_grid_polygons(600, 3, 4)


class TestGeneratePolygons:
    """Test suite for the mode dispatcher."""

    def test_dispatches_by_mode(self):
        assert len(generate_polygons(600, "grid", rows=2, cols=3)) == 6
        assert len(generate_polygons(600, "hat", complexity=4)) == 16

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"canvas_size": 0, "mode": "grid"},
            {"canvas_size": -10, "mode": "hat"},
            {"canvas_size": 600, "mode": "grid", "rows": 0},
            {"canvas_size": 600, "mode": "grid", "cols": -1},
            {"canvas_size": 600, "mode": "hat", "complexity": 0},
            {"canvas_size": 600, "mode": "penrose"},
        ],
    )
    def test_rejects_invalid_input(self, kwargs):
        with pytest.raises(ValueError):
            generate_polygons(**kwargs)


def test_explain_formula():
    """The breakdown reproduces the stored offset."""
    cell_size = 100.0
    polygon = generate_hat_tiling(600, 6)[9]  # row 1, col 3
    breakdown = explain_formula(polygon.metadata)

    assert (breakdown["row"], breakdown["col"]) == (1, 3)
    assert breakdown["phi"] == pytest.approx(1.6180339887)
    assert breakdown["inv_phi"] == pytest.approx(INV_PHI)
    assert 0.0 <= breakdown["fraction"] < 1.0
    assert breakdown["fraction"] * cell_size * 0.3 == pytest.approx(breakdown["fib_offset"])
    assert breakdown["angle_offset"] == pytest.approx(breakdown["variant"] * math.pi / 6)


def test_hat_info_attribution():
    assert HAT_INFO["year"] == 2023
    assert "Craig S. Kaplan" in HAT_INFO["discoverers"]
