"""
Tests for the save-file handler.
"""

import pytest

from oligarchy import Board, MissingFileError, SaveFileHandler, load_game


def test_handler_accessors(save_path, game_config):
    handler = SaveFileHandler(save_path, game_config)

    assert handler.time == 5
    assert handler.go_payout == 200
    assert handler.jail_position == 10
    assert handler.active_players == 1
    assert handler.player_turn == 0
    assert isinstance(handler.board, Board)
    assert [p.name for p in handler.players] == ["Alice"]
    assert handler.state.board is handler.board


def test_handler_from_handle(save_path, game_config):
    with open(save_path) as f:
        handler = SaveFileHandler(f, game_config)

    assert handler.time == 5


def test_handler_default_file(tmp_path, monkeypatch, example_save, game_config):
    """With no source the default file from settings is loaded."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "defaultFile.txt").write_text(example_save)

    handler = SaveFileHandler(config=game_config)

    assert handler.players[0].name == "Alice"


def test_handler_default_file_from_env(tmp_path, monkeypatch, example_save, game_config):
    path = tmp_path / "elsewhere.txt"
    path.write_text(example_save)
    monkeypatch.setenv("OLIGARCHY_DEFAULT_FILE", str(path))

    handler = SaveFileHandler(config=game_config)

    assert handler.go_payout == 200


def test_handler_missing_file(tmp_path, game_config):
    with pytest.raises(MissingFileError):
        SaveFileHandler(tmp_path / "nope.txt", game_config)


def test_handler_save_uses_given_values(save_path, tmp_path, game_config):
    """Save writes what it is given, not what was loaded."""
    handler = SaveFileHandler(save_path, game_config)
    alice = handler.players[0]
    alice.money -= 350
    out = tmp_path / "next.txt"

    handler.save(out, 9, handler.players, handler.board, 0, go_payout=400)

    game = load_game(out, game_config)
    assert game.elapsed_time == 9
    assert game.go_payout == 400
    assert game.turn_player_id == 0
    assert game.players[0].money == 1150
    assert game.board[3].owner is game.players[0]


def test_handler_save_accepts_square_list(save_path, tmp_path, game_config):
    handler = SaveFileHandler(save_path, game_config)
    out = tmp_path / "next.txt"

    handler.save(out, handler.time, handler.players, list(handler.board), handler.player_turn, handler.go_payout)

    assert out.read_text().splitlines()[-2:] == [
        "Property\t3\tParkLane\t350\t35\t0\tu",
        "Jail\t10",
    ]
