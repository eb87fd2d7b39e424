"""Shared test fixtures for save-file tests."""

import pytest

from oligarchy import Board, GameConfig, GameState, GoSquare, JailSquare, Player, Property
from oligarchy.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start and end every test without a cached copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def game_config():
    """Standard 40-square board."""
    return GameConfig(number_of_tiles=40)


@pytest.fixture
def example_save():
    """Minimal save: one player owning one property."""
    return (
        "Time\t5\n"
        "GoPayout\t200\n"
        "Player\t0\tAlice\t0xff0000\t1500\t0\t*\t-1\n"
        "Property\t3\tParkLane\t350\t35\t0\tu\n"
        "Jail\t10\n"
    )


@pytest.fixture
def example_state():
    """Game with an active owner and a jailed loser, built by hand."""
    board = Board(40)
    board.place(0, GoSquare(0))
    jail = JailSquare(10)
    board.place(10, jail)
    park_lane = Property("ParkLane", 3, 350, 35)
    board.place(3, park_lane)
    mayfair = Property("Mayfair", 39, 400, 50)
    mayfair.set_mortgaged(True)
    board.place(39, mayfair)
    board.fill_gaps()

    alice = Player(0, 1500, "Alice", color=0xFF0000)
    alice.add_property(park_lane)
    alice.add_property(mayfair)

    bob = Player(1, -50, "Bob", color=0x00FF00)
    bob.set_loser(True)
    bob.set_position(2)
    bob.go_to_jail()
    for _ in range(3):
        bob.add_to_jail_counter()
    jail.add_prisoner(bob)

    return GameState(
        board,
        [alice, bob],
        elapsed_time=5,
        go_payout=200,
        turn_player_id=0,
        jail_position=10,
    )


@pytest.fixture
def save_path(tmp_path, example_save):
    """The minimal save written to disk."""
    path = tmp_path / "game.txt"
    path.write_text(example_save)
    return path
