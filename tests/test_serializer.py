"""
Tests for writing games to save files.
"""

import io
import os

import pytest

from oligarchy import (
    ActionSquare,
    WriteFailureError,
    dump_game,
    dumps_game,
    load_game,
    loads_game,
    save_game,
    serialize_snapshot,
)
from oligarchy.serializer import format_color


def test_dumps_game_layout(example_state):
    """Header, players, a blank line, then squares by position; action squares omitted."""
    text = dumps_game(example_state)

    assert text.splitlines() == [
        "Time\t5",
        "GoPayout\t200",
        "Player\t0\tAlice\t0xff0000\t1500\t0\t*\t-1",
        "Player\t1\tBob\t0x00ff00\t-50\t2\t-\t3",
        "",
        "Go\t0",
        "Property\t3\tParkLane\t350\t35\t0\tu",
        "Jail\t10",
        "Property\t39\tMayfair\t400\t50\t0\tm",
    ]
    assert text.endswith("\n")


def test_unowned_property_writes_no_owner(example_state):
    example_state.players[0].remove_property(example_state.board[3])

    assert "Property\t3\tParkLane\t350\t35\t-1\tu" in dumps_game(example_state).splitlines()


def test_round_trip_preserves_snapshot(example_state, game_config):
    """Loading a save reproduces everything the save holds."""
    restored = loads_game(dumps_game(example_state), game_config)

    assert serialize_snapshot(restored) == serialize_snapshot(example_state)


def test_round_trip_board_variants(example_state, game_config):
    restored = loads_game(dumps_game(example_state), game_config)

    for original, loaded in zip(example_state.board, restored.board):
        assert type(original) is type(loaded)
    assert restored.board[39].mortgaged
    assert restored.board[39].owner is restored.players[0]
    assert isinstance(restored.board[20], ActionSquare)


def test_round_trip_is_stable(example_state, game_config):
    once = dumps_game(example_state)
    twice = dumps_game(loads_game(once, game_config))

    assert once == twice


def test_save_game_to_path(tmp_path, example_state, game_config):
    path = tmp_path / "save.txt"

    save_game(path, example_state)

    assert load_game(path, game_config).elapsed_time == 5
    assert os.listdir(tmp_path) == ["save.txt"]


def test_dump_game_to_handle(example_state):
    buf = io.StringIO()

    dump_game(example_state, buf)

    assert buf.getvalue() == dumps_game(example_state)


def test_name_with_tab_rejected_before_writing(tmp_path, example_state):
    """A name that cannot be represented fails the save and leaves the old file alone."""
    path = tmp_path / "save.txt"
    path.write_text("old contents\n")
    example_state.players[0].name = "Al\tice"

    with pytest.raises(WriteFailureError):
        save_game(path, example_state)

    assert path.read_text() == "old contents\n"


def test_empty_names_rejected_before_writing(tmp_path, example_state):
    """An empty name would vanish into the field separator and the save could not be read back."""
    path = tmp_path / "save.txt"
    path.write_text("old contents\n")
    example_state.players[0].name = ""

    with pytest.raises(WriteFailureError, match="player name is empty"):
        save_game(path, example_state)

    assert path.read_text() == "old contents\n"


def test_empty_property_name_rejected(example_state):
    example_state.board[3].name = ""

    with pytest.raises(WriteFailureError, match="property name is empty"):
        dumps_game(example_state)


def test_failed_replace_keeps_previous_save(tmp_path, example_state, monkeypatch):
    path = tmp_path / "save.txt"
    path.write_text("old contents\n")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(WriteFailureError) as exc_info:
        save_game(path, example_state)

    assert exc_info.value.path == str(path)
    assert path.read_text() == "old contents\n"
    assert os.listdir(tmp_path) == ["save.txt"]


def test_missing_directory_is_write_failure(tmp_path, example_state):
    with pytest.raises(WriteFailureError):
        save_game(tmp_path / "missing" / "save.txt", example_state)


def test_closed_handle_is_write_failure(example_state):
    buf = io.StringIO()
    buf.close()

    with pytest.raises(WriteFailureError):
        dump_game(example_state, buf)


def test_format_color():
    assert format_color(0xFF0000) == "0xff0000"
    assert format_color(0) == "0x000000"
    assert format_color(-16) == "-0x000010"


def test_turn_id_without_player_writes_no_marker(example_state):
    example_state.turn_player_id = 42

    players = [line for line in dumps_game(example_state).splitlines() if line.startswith("Player")]

    assert all(line.split("\t")[6] == "-" for line in players)
