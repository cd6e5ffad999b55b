import numpy as np
import pytest

from multiconnect.game.players import Player, PlayerRegistry
from multiconnect.game.rules import GameEngine, GameState, MoveOutcome
from multiconnect.utils import EMPTY


def play(engine, columns):
    return [engine.apply_move(col) for col in columns]


def snapshot(engine):
    return (engine.get_state(), engine.turn_index, engine.state, engine.moves_made)


def assert_unchanged(engine, before):
    grid, turn_index, state, moves = before
    assert np.array_equal(engine.get_state(), grid)
    assert engine.turn_index == turn_index
    assert engine.state == state
    assert engine.moves_made == moves


def solo(color="red"):
    registry = PlayerRegistry()
    registry.register(color)
    return registry


@pytest.mark.parametrize("width,height", [(1, 1), (7, 6), (3, 10), (12, 2)])
def test_fresh_engine_is_active_and_empty(width, height, registry):
    engine = GameEngine(width, height, registry)
    assert engine.state == GameState.ACTIVE
    assert not engine.game_over
    assert engine.turn_index == 0
    assert engine.current_player.identifier == "p1"
    assert engine.winner is None
    assert engine.get_state().shape == (height, width)
    assert np.all(engine.get_state() == EMPTY)


def test_legal_drop_column_is_a_pure_query(engine):
    assert engine.legal_drop_column(3) == 5
    assert engine.legal_drop_column(3) == 5
    engine.apply_move(3)
    assert engine.legal_drop_column(3) == 4
    assert engine.legal_drop_column(-1) is None
    assert engine.legal_drop_column(7) is None


def test_vertical_win_scenario(engine, registry):
    a, b = registry.players()
    results = play(engine, [0, 1, 0, 1, 0, 1, 0])

    for result in results[:-1]:
        assert result.outcome == MoveOutcome.CONTINUE

    last = results[-1]
    assert last.outcome == MoveOutcome.WIN
    assert last.winner == a
    assert (last.row, last.column) == (2, 0)
    assert last.winning_line == ((2, 0), (3, 0), (4, 0), (5, 0))
    assert engine.state == GameState.WON
    assert engine.winner == a
    assert [engine.cell(row, 0) for row in range(2, 6)] == [a, a, a, a]
    assert engine.cell(5, 1) == b


def test_horizontal_win(engine, registry):
    results = play(engine, [0, 0, 1, 1, 2, 2, 3])
    assert results[-1].outcome == MoveOutcome.WIN
    assert results[-1].player == registry.players()[0]
    assert results[-1].winning_line == ((5, 0), (5, 1), (5, 2), (5, 3))


def test_rising_diagonal_win(engine, registry):
    results = play(engine, [0, 1, 1, 2, 2, 3, 2, 3, 4, 3, 3])
    assert [r.outcome for r in results[:-1]] == [MoveOutcome.CONTINUE] * 10
    assert results[-1].outcome == MoveOutcome.WIN
    assert results[-1].player == registry.players()[0]
    assert results[-1].winning_line == ((2, 3), (3, 2), (4, 1), (5, 0))


def test_falling_diagonal_win(engine, registry):
    results = play(engine, [3, 2, 2, 1, 1, 0, 1, 0, 5, 0, 0])
    assert [r.outcome for r in results[:-1]] == [MoveOutcome.CONTINUE] * 10
    assert results[-1].outcome == MoveOutcome.WIN
    assert results[-1].player == registry.players()[0]
    assert results[-1].winning_line == ((2, 0), (3, 1), (4, 2), (5, 3))


def test_second_player_can_win(engine, registry):
    results = play(engine, [6, 0, 6, 1, 5, 2, 4, 3])
    assert results[-1].outcome == MoveOutcome.WIN
    assert results[-1].winner == registry.players()[1]


def test_moves_after_win_are_rejected(engine):
    play(engine, [0, 1, 0, 1, 0, 1, 0])
    before = snapshot(engine)

    for col in (2, 0, 6):
        result = engine.apply_move(col)
        assert result.outcome == MoveOutcome.REJECTED
        assert not result.accepted
        assert_unchanged(engine, before)
    assert engine.valid_moves() == []


def test_full_column_is_rejected(registry):
    engine = GameEngine(3, 2, registry)
    play(engine, [0, 0])
    before = snapshot(engine)

    result = engine.apply_move(0)
    assert result.outcome == MoveOutcome.REJECTED
    assert result.row is None and result.player is None
    assert_unchanged(engine, before)
    assert engine.current_player.identifier == "p1"
    assert engine.valid_moves() == [1, 2]


@pytest.mark.parametrize("column", [-1, 7, 100, "3", 1.5, None, True])
def test_invalid_columns_are_rejected(engine, column):
    before = snapshot(engine)
    assert engine.apply_move(column).outcome == MoveOutcome.REJECTED
    assert_unchanged(engine, before)


def test_numpy_integer_column_is_accepted(engine):
    result = engine.apply_move(np.int64(4))
    assert result.outcome == MoveOutcome.CONTINUE
    assert result.column == 4


def test_turns_rotate_in_registration_order():
    registry = PlayerRegistry()
    for color in ("red", "blue", "green"):
        registry.register(color)
    engine = GameEngine(7, 6, registry)

    results = play(engine, range(7))
    movers = [r.player.identifier for r in results]
    upcoming = [r.next_player.identifier for r in results]

    assert movers == ["p1", "p2", "p3", "p1", "p2", "p3", "p1"]
    assert upcoming == ["p2", "p3", "p1", "p2", "p3", "p1", "p2"]
    assert engine.current_player.identifier == "p2"
    assert engine.moves_made == list(range(7))


def test_full_board_without_line_is_a_tie(registry):
    engine = GameEngine(3, 3, registry)
    results = play(engine, [0, 0, 0, 1, 1, 1, 2, 2, 2])

    assert [r.outcome for r in results[:-1]] == [MoveOutcome.CONTINUE] * 8
    assert results[-1].outcome == MoveOutcome.TIE
    assert results[-1].winner is None
    assert results[-1].message == "Tie!"
    assert engine.state == GameState.TIED
    assert engine.game_over
    assert engine.winner is None
    assert engine.apply_move(0).outcome == MoveOutcome.REJECTED


def test_single_player_narrow_board_wins_vertically():
    engine = GameEngine(1, 4, solo())
    results = play(engine, [0, 0, 0, 0])

    for result in results[:-1]:
        assert result.outcome == MoveOutcome.CONTINUE
        assert result.next_player.identifier == "p1"
    # The fourth piece fills the board and completes the line; the win counts
    assert results[-1].outcome == MoveOutcome.WIN
    assert engine.state == GameState.WON


def test_win_takes_precedence_over_tie_on_wide_board():
    engine = GameEngine(4, 1, solo())
    results = play(engine, [0, 1, 2, 3])
    assert results[-1].outcome == MoveOutcome.WIN
    assert results[-1].winning_line == ((0, 0), (0, 1), (0, 2), (0, 3))


def test_short_column_ties():
    engine = GameEngine(1, 3, solo())
    results = play(engine, [0, 0, 0])
    assert results[-1].outcome == MoveOutcome.TIE


def test_win_message_uses_color(engine):
    results = play(engine, [0, 1, 0, 1, 0, 1, 0])
    assert results[-1].message == "red player won!!"
    assert results[0].message is None


def test_engine_ignores_later_registrations(registry):
    engine = GameEngine(7, 6, registry)
    registry.register("green")
    assert len(engine.players) == 2
    play(engine, [0, 1])
    assert engine.current_player.identifier == "p1"


def test_engine_accepts_plain_sequence():
    players = [Player("a", "red"), Player("b", "blue")]
    engine = GameEngine(7, 6, players)
    players.append(Player("c", "green"))
    assert [p.identifier for p in engine.players] == ["a", "b"]
    assert engine.token_for(players[1]) == 2


@pytest.mark.parametrize("width,height", [(0, 6), (7, 0), (-1, 6), (7, -3), (2.5, 6), (True, 6), ("7", 6)])
def test_bad_dimensions_fail_fast(width, height, registry):
    with pytest.raises(ValueError):
        GameEngine(width, height, registry)


def test_no_players_fails_fast():
    with pytest.raises(ValueError):
        GameEngine(7, 6, PlayerRegistry())
    with pytest.raises(ValueError):
        GameEngine(7, 6, [])


def test_duplicate_identifiers_fail_fast():
    with pytest.raises(ValueError):
        GameEngine(7, 6, [Player("p1", "red"), Player("p1", "blue")])


def test_non_player_entries_fail_fast():
    with pytest.raises(TypeError):
        GameEngine(7, 6, ["red", "blue"])


def test_render_reflects_moves(engine):
    play(engine, [3, 4])
    bottom = engine.render().splitlines()[6]
    assert bottom == "|      X O    |"


@pytest.mark.parametrize("row,column", [(-1, 0), (0, -1), (6, 0), (0, 7)])
def test_cell_off_the_board_raises(engine, row, column):
    engine.apply_move(0)
    with pytest.raises(IndexError):
        engine.cell(row, column)
