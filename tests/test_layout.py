"""Tests for the initial piece layout."""

import pytest

from einstein_puzzle import (
    create_puzzle_pieces,
    generate_grid_polygons,
    generate_hat_tiling,
    layout_pieces,
    missing_start_index,
    select_missing_indices,
    tray_bounds,
    tray_grid_position,
)


@pytest.fixture
def hat_pieces():
    return create_puzzle_pieces(generate_hat_tiling(600, 6))


@pytest.mark.parametrize("num_missing", [0, 1, 5, 20, 36])
def test_exactly_num_missing_pieces_are_displaced(hat_pieces, num_missing):
    layout_pieces(hat_pieces, num_missing, 600)

    unplaced = [piece for piece in hat_pieces if not piece.is_placed]
    assert len(unplaced) == num_missing
    for piece in hat_pieces:
        if piece.is_placed:
            assert (piece.current_x, piece.current_y) == (piece.correct_x, piece.correct_y)


@pytest.mark.parametrize(
    "total,num_missing,expected_start",
    [
        (36, 5, 10),
        (36, 26, 10),
        (36, 30, 6),
        (16, 10, 6),
        (16, 16, 0),
        (4, 1, 3),
    ],
)
def test_start_index_prefers_interior(total, num_missing, expected_start):
    assert missing_start_index(total, num_missing) == expected_start
    assert select_missing_indices(total, num_missing) == list(range(expected_start, expected_start + num_missing))


def test_start_index_is_never_negative():
    assert missing_start_index(3, 10) == 0


def test_displaced_run_is_contiguous(hat_pieces):
    layout_pieces(hat_pieces, 5, 600)
    assert [piece.id for piece in hat_pieces if not piece.is_placed] == [f"piece-{i}" for i in range(10, 15)]


def test_tray_grid_positions(hat_pieces):
    layout_pieces(hat_pieces, 7, 600)
    displaced = [piece for piece in hat_pieces if not piece.is_placed]

    positions = [(piece.current_x, piece.current_y) for piece in displaced]
    assert positions == [
        (650, 50),
        (720, 50),
        (790, 50),
        (650, 120),
        (720, 120),
        (790, 120),
        (650, 190),
    ]
    assert tray_grid_position(4, 600) == (720, 120)


def test_random_scatter_is_seeded(hat_pieces):
    other = create_puzzle_pieces(generate_hat_tiling(600, 6))
    layout_pieces(hat_pieces, 8, 600, scatter="board_random", seed=7)
    layout_pieces(other, 8, 600, scatter="board_random", seed=7)

    assert [(p.current_x, p.current_y) for p in hat_pieces] == [(p.current_x, p.current_y) for p in other]


def test_board_random_stays_on_board(hat_pieces):
    layout_pieces(hat_pieces, 20, 600, scatter="board_random", seed=1)
    for piece in hat_pieces:
        assert 0 <= piece.current_x <= 600
        assert 0 <= piece.current_y <= 600


def test_tray_random_stays_in_tray(hat_pieces):
    layout_pieces(hat_pieces, 20, 600, scatter="tray_random", seed=3)
    x_min, y_min, x_max, y_max = tray_bounds(600)

    for piece in hat_pieces:
        if not piece.is_placed:
            assert x_min <= piece.current_x <= x_max
            assert y_min <= piece.current_y <= y_max


def test_selection_does_not_depend_on_scatter():
    selections = []
    for scatter in ("tray_grid", "tray_random", "board_random"):
        pieces = create_puzzle_pieces(generate_grid_polygons(600, 4, 4))
        layout_pieces(pieces, 6, 600, scatter=scatter, seed=11)
        selections.append([piece.id for piece in pieces if not piece.is_placed])

    assert selections[0] == selections[1] == selections[2]


def test_rejects_too_many_missing_pieces():
    pieces = create_puzzle_pieces(generate_grid_polygons(600, 2, 2))
    with pytest.raises(ValueError, match="num_missing"):
        layout_pieces(pieces, 5, 600)


def test_rejects_unknown_scatter(hat_pieces):
    with pytest.raises(ValueError, match="scatter"):
        layout_pieces(hat_pieces, 1, 600, scatter="everywhere")
