import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tilesearch.board import Board, Direction, Row
from tilesearch.dictionary import WordListDictionary
from tilesearch.placement import (
    Accepted,
    Rejected,
    check_connectivity,
    check_tile_sets,
    complete_word,
    lay_word,
    try_placement,
)


def _board(cells, size=15):
    letters = [""] * (size * size)
    for (r, c), ch in cells.items():
        letters[r * size + c] = ch
    return Board.from_letters(letters, size=size)


def test_complete_word_extends_both_ways():
    line = Row.from_letters(["A", "T", "", "", "P", "H", "O"]).as_line()
    assert complete_word(line, "LOP", 2) == "ATLOPHO"

    padded = Row.from_letters(["A", "T", "", "", "P", "H", "O"], length=10).as_line()
    assert complete_word(padded, "HOSE", 5) == "PHOSE"
    assert complete_word(padded, "AT", 0) == "AT"


def test_lay_word_rejects_mismatch_and_missing_tiles():
    line = Row.from_letters(["", "C", "A", "T"]).as_line()
    assert isinstance(lay_word(line, "DOG", 1, ["D", "O", "G"]), Rejected)
    assert isinstance(lay_word(line, "SCAT", 0, ["X"]), Rejected)
    assert isinstance(lay_word(line, "CATS", 1, ["S"]), Rejected)  # runs off the end


def test_lay_word_requires_a_hand_tile():
    line = Row.from_letters(["", "C", "A", "T", ""]).as_line()
    outcome = lay_word(line, "CAT", 1, ["S"])
    assert isinstance(outcome, Rejected)
    assert outcome.reason == "no hand tiles used"


def test_lay_word_tracks_hand_and_board_letters():
    line = Row.from_letters(["", "C", "A", "T", ""]).as_line()
    outcome = lay_word(line, "SCAT", 0, ["S", "S"])
    assert isinstance(outcome, Accepted)
    attempt = outcome.attempt
    assert attempt.hand_tiles_used == ("S",)
    assert attempt.board_tiles_used == ("C", "A", "T")
    assert attempt.end == 3


def test_first_word_must_cover_centre():
    board = Board.empty()
    middle = board.line(Direction.HORIZONTAL, 7)
    off = board.line(Direction.HORIZONTAL, 6)

    attempt = lay_word(middle, "AT", 7, ["A", "T"]).attempt
    assert check_connectivity(middle, attempt, board_has_tiles=False) is None

    attempt = lay_word(middle, "AT", 8, ["A", "T"]).attempt
    assert isinstance(check_connectivity(middle, attempt, board_has_tiles=False), Rejected)

    attempt = lay_word(off, "AT", 6, ["A", "T"]).attempt
    assert isinstance(check_connectivity(off, attempt, board_has_tiles=False), Rejected)


def test_diagonal_contact_is_not_a_connection():
    board = _board({(6, 6): "X"})
    line = board.line(Direction.HORIZONTAL, 7)
    attempt = lay_word(line, "AT", 7, ["A", "T"]).attempt
    assert isinstance(check_connectivity(line, attempt, board_has_tiles=True), Rejected)


def test_perpendicular_neighbour_connects():
    board = _board({(6, 7): "X"})
    line = board.line(Direction.HORIZONTAL, 7)
    attempt = lay_word(line, "AT", 7, ["A", "T"]).attempt
    assert check_connectivity(line, attempt, board_has_tiles=True) is None


def test_abutting_a_run_connects():
    line = Row.from_letters(["", "", "", "C", "A", "T"], length=9).as_line()
    attempt = lay_word(line, "SO", 6, ["S", "O"]).attempt
    assert check_connectivity(line, attempt, board_has_tiles=True) is None

    attempt = lay_word(line, "SO", 7, ["S", "O"]).attempt
    assert isinstance(check_connectivity(line, attempt, board_has_tiles=True), Rejected)


def test_starting_inside_a_run_is_rejected():
    line = Row.from_letters(["", "", "P", "H", "O"], length=15).as_line()
    attempt = lay_word(line, "HOSE", 3, ["S", "E"]).attempt
    assert isinstance(check_tile_sets(line, attempt), Rejected)

    attempt = lay_word(line, "PHONE", 2, ["N", "E"]).attempt
    assert check_tile_sets(line, attempt) is None

    # starting on the last tile of a run skips its start too
    attempt = lay_word(line, "ON", 4, ["N"]).attempt
    assert isinstance(check_tile_sets(line, attempt), Rejected)

    # a word that ends right before a run does not start inside it
    attempt = lay_word(line, "AN", 0, ["A", "N"]).attempt
    assert check_tile_sets(line, attempt) is None


def test_try_placement_rejects_invalid_complete_word():
    line = Row.from_letters(["A", "T", "", "", "P", "H", "O"], length=15).as_line()
    outcome = try_placement(line, "LOP", 2, ["L", "O", "P"], WordListDictionary(["LOP"]), True, tile_runs=True)
    assert isinstance(outcome, Rejected)
    assert "ATLOPHO" in outcome.reason


def test_try_placement_accepts_valid_complete_word():
    line = Row.from_letters(["A", "T", "", "", "P", "H", "O"], length=15).as_line()
    dictionary = WordListDictionary(["LOP", "ATLOPHO"])
    outcome = try_placement(line, "LOP", 2, ["L", "O", "P"], dictionary, True, tile_runs=True)
    assert isinstance(outcome, Accepted)
    assert outcome.attempt.complete_word == "ATLOPHO"
    assert outcome.attempt.hand_tiles_used == ("L", "O")
