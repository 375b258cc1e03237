import numpy as np
import pytest

from hex_gen.engine.game_engine import HexEngine
from hex_gen.enums import GameStatus, Player, Winner
from hex_gen.error_handling import ExhaustedBoardError, InsufficientHistoryError, RewoundBoardError
from hex_gen.utils.format_conversion import rowcol_to_logical

X = Player.BLUE
O = Player.RED


def play(engine, player, row, col):
    """Place a stone and run the per-move win check, as a driver would."""
    position = engine.place(player, rowcol_to_logical(row, col, engine.board_dim))
    return engine.check_win(player, position)


@pytest.fixture
def engine3():
    return HexEngine(3, rng=np.random.default_rng(0))


def test_initial_state(engine3):
    engine = engine3
    assert engine.board_dim == 3
    assert engine.moves == []
    assert engine.number_of_open_positions == 9
    assert not engine.is_full()
    assert engine.winner is None
    assert engine.status == GameStatus.EMPTY
    assert list(engine.to_cell_vector()) == [0] * 9


def test_border_seeds_connectivity(engine3):
    width = engine3.width
    grid = engine3.connected.reshape(width, width, 2)
    assert grid[0, :, X.value].all()
    assert not grid[1:, :, X.value].any()
    assert grid[:, 0, O.value].all()
    assert not grid[:, 1:, O.value].any()


def test_left_column_wins_for_blue(engine3):
    engine = engine3
    assert not play(engine, X, 0, 0)
    assert not play(engine, O, 1, 1)
    assert not play(engine, X, 1, 0)
    assert not play(engine, O, 0, 1)
    assert play(engine, X, 2, 0)
    assert engine.winner == Winner.BLUE
    assert engine.status == GameStatus.WON


def test_top_row_wins_for_red():
    engine = HexEngine(2)
    assert not play(engine, O, 0, 0)
    assert play(engine, O, 0, 1)
    assert engine.winner == Winner.RED


def test_blue_top_row_is_not_a_win():
    engine = HexEngine(3)
    for col in range(3):
        assert not play(engine, X, 0, col)
    assert engine.winner is None


def test_diagonal_chain_wins_along_hex_neighbors():
    # (0,2) -> (1,1) -> (2,0) are hex neighbours via the (+1, -1) direction
    engine = HexEngine(3)
    assert not play(engine, X, 0, 2)
    assert not play(engine, X, 1, 1)
    assert play(engine, X, 2, 0)


def test_other_diagonal_is_not_connected():
    # (0,0) and (1,1) are not hex neighbours
    engine = HexEngine(3)
    assert not play(engine, X, 0, 0)
    assert not play(engine, X, 1, 1)
    assert not play(engine, X, 2, 2)
    assert engine.winner is None


def test_stone_placed_before_its_link_is_picked_up_later():
    engine = HexEngine(3)
    # Bottom stone first: not yet connected to the top edge
    assert not play(engine, X, 2, 0)
    assert not play(engine, X, 0, 0)
    # The middle stone links both and the fill reaches the bottom row
    assert play(engine, X, 1, 0)


def test_single_cell_board():
    engine = HexEngine(1)
    position = engine.place_random(X)
    assert position == 0
    assert engine.check_win(X, position)
    assert engine.is_full()


def test_place_random_fills_board():
    engine = HexEngine(4, rng=np.random.default_rng(7))
    player = X
    for _ in range(16):
        engine.place_random(player)
        player = player.opponent
    assert engine.is_full()
    assert engine.number_of_open_positions == 0
    assert sorted(engine.moves) == list(range(16))
    assert engine.status == GameStatus.FULL
    with pytest.raises(ExhaustedBoardError):
        engine.place_random(X)


def test_open_positions_plus_history_is_constant():
    engine = HexEngine(5, rng=np.random.default_rng(3))
    player = X
    while not engine.is_full():
        engine.place_random(player)
        assert engine.number_of_open_positions + len(engine.moves) == 25
        live = set(int(p) for p in engine.open_positions[:engine.number_of_open_positions])
        assert len(live) == engine.number_of_open_positions
        player = player.opponent


def test_place_random_is_roughly_uniform():
    engine = HexEngine(3, rng=np.random.default_rng(2024))
    counts = np.zeros(9, dtype=int)
    for _ in range(9000):
        engine.init()
        counts[engine.place_random(X)] += 1
    assert counts.min() > 850
    assert counts.max() < 1150


def test_place_rejects_occupied_and_out_of_range(engine3):
    engine3.place(X, 4)
    with pytest.raises(ValueError):
        engine3.place(O, 4)
    with pytest.raises(ValueError):
        engine3.place(O, 9)
    with pytest.raises(ValueError):
        engine3.place(O, -1)


def test_scripted_and_random_placement_mix(engine3):
    engine3.place(X, 4)
    for _ in range(8):
        position = engine3.place_random(O)
        assert position != 4
    assert engine3.is_full()


@pytest.mark.parametrize("board_dim", [0, -3, 2.5, True])
def test_invalid_dimension(board_dim):
    with pytest.raises(ValueError):
        HexEngine(board_dim)


def test_undo_returns_oldest_first():
    engine = HexEngine(4)
    for position in [5, 0, 15, 9, 2]:
        engine.place(X, position)
    removed = engine.undo_last_n(2)
    assert removed == [9, 2]
    assert engine.moves == [5, 0, 15]
    cells = engine.to_cell_vector()
    assert cells[9] == 0 and cells[2] == 0
    assert cells[5] == 1 and cells[0] == 1 and cells[15] == 1


def test_undo_entire_history_on_5x5():
    engine = HexEngine(5, rng=np.random.default_rng(11))
    played = [engine.place_random(X), engine.place_random(O), engine.place_random(X)]
    removed = engine.undo_last_n(3)
    assert removed == played
    assert engine.moves == []
    assert not engine.to_cell_vector().any()


def test_undo_more_than_history_fails():
    engine = HexEngine(5)
    engine.place(X, 0)
    engine.place(O, 1)
    engine.place(X, 2)
    with pytest.raises(InsufficientHistoryError):
        engine.undo_last_n(4)
    with pytest.raises(InsufficientHistoryError):
        engine.undo_last_n(-1)
    assert engine.moves == [0, 1, 2]


def test_undo_zero_is_a_no_op(engine3):
    engine3.place(X, 0)
    assert engine3.undo_last_n(0) == []
    assert not engine3.rewound
    engine3.place(O, 1)


def test_undo_is_terminal_only(engine3):
    engine = engine3
    assert not play(engine, X, 0, 0)
    assert not play(engine, O, 1, 1)
    assert not play(engine, X, 1, 0)
    assert not play(engine, O, 0, 1)
    assert play(engine, X, 2, 0)

    open_before = engine.number_of_open_positions
    marks_before = engine.connected.copy()
    engine.undo_last_n(2)

    # Open set, marks and the recorded outcome keep their terminal values
    assert engine.number_of_open_positions == open_before
    assert np.array_equal(engine.connected, marks_before)
    assert engine.winner == Winner.BLUE
    assert engine.status == GameStatus.WON
    assert engine.rewound

    with pytest.raises(RewoundBoardError):
        engine.place_random(O)
    with pytest.raises(RewoundBoardError):
        engine.place(O, 8)


def test_init_resets_for_reuse(engine3):
    engine = engine3
    play(engine, X, 0, 0)
    play(engine, X, 1, 0)
    play(engine, X, 2, 0)
    engine.undo_last_n(1)

    engine.init()
    assert engine.moves == []
    assert engine.winner is None
    assert not engine.rewound
    assert engine.status == GameStatus.EMPTY
    assert engine.number_of_open_positions == 9
    assert not engine.to_cell_vector().any()
    fresh = HexEngine(3)
    assert np.array_equal(engine.connected, fresh.connected)
    assert np.array_equal(engine.board, fresh.board)
    assert not play(engine, X, 0, 0)


def test_status_playing(engine3):
    engine3.place_random(X)
    assert engine3.status == GameStatus.PLAYING


def test_cell_vector_and_display_projections(engine3):
    engine = engine3
    play(engine, X, 0, 0)
    play(engine, O, 1, 1)
    play(engine, X, 1, 0)
    play(engine, O, 0, 1)
    play(engine, X, 2, 0)

    cells = engine.to_cell_vector()
    assert cells.dtype == np.int8
    assert list(cells) == [1, -1, 0, 1, -1, 0, 1, 0, 0]
    assert engine.to_display_string() == "XO XO X  "
    assert engine.to_ascii_grid() == " X O .\n  X O .\n   X . ."
    assert "status=won" in str(engine)
