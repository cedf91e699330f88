import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tilesearch.board import SpecialTile
from tilesearch.placement import PlacedLetter
from tilesearch.scoring import (
    calculate_score_with_special_tiles,
    letter_score,
    letter_scores_legend,
    score_placement,
    word_score,
)


def _hand(word, specials=None, row=7, col=0):
    specials = specials or [SpecialTile.NORMAL] * len(word)
    return [PlacedLetter(row, col + i, ch, True, sp) for i, (ch, sp) in enumerate(zip(word, specials))]


def test_letter_table():
    assert letter_score("q") == 10
    assert letter_score("K") == 5
    assert letter_score("?") == 0
    legend = letter_scores_legend()
    assert len(legend) == 26
    assert legend["Z"] == 10 and legend["D"] == 2


def test_plain_word_score():
    assert word_score("TEST") == 4
    assert word_score("quiz") == 22
    assert word_score("") == 0
    assert score_placement(_hand("TEST")).total == 4


def test_letter_and_word_multipliers():
    b = calculate_score_with_special_tiles("TEST", [0, 1, 2, 3], ["dl", "normal", "tw", "normal"])
    assert b.base == 5
    assert b.word_multiplier == 3
    assert b.total == 15
    assert b.bonuses == ["Double Letter at position 0 ('T')", "Triple Word at position 2"]


def test_word_multipliers_compound():
    specials = [SpecialTile.DOUBLE_WORD, SpecialTile.NORMAL, SpecialTile.DOUBLE_WORD]
    b = score_placement(_hand("CAT", specials))
    assert b.word_multiplier == 4
    assert b.total == 5 * 4


def test_board_letters_never_use_specials():
    letters = [
        PlacedLetter(7, 7, "C", False, SpecialTile.TRIPLE_WORD),
        PlacedLetter(7, 8, "A", True, SpecialTile.TRIPLE_LETTER),
        PlacedLetter(7, 9, "T", True, SpecialTile.NORMAL),
    ]
    b = score_placement(letters)
    assert b.word_multiplier == 1
    assert b.total == 3 + 3 + 1


def test_specials_disabled_gives_plain_sum():
    specials = [SpecialTile.DOUBLE_LETTER, SpecialTile.NORMAL, SpecialTile.TRIPLE_WORD, SpecialTile.NORMAL]
    b = score_placement(_hand("TEST", specials), special_tiles_enabled=False)
    assert b.total == 4
    assert b.bonuses == []


def test_bingo_only_for_exactly_seven_hand_tiles():
    seven = score_placement(_hand("ABCDEFG"))
    assert seven.bingo == 50
    assert seven.total == 16 + 50

    six = score_placement(_hand("ABCDEF"))
    assert six.bingo == 0
    assert six.total == 14

    # seven letters but one of them already on the board
    mixed = _hand("ABCDEFG")
    mixed[0] = PlacedLetter(7, 0, "A", False)
    assert score_placement(mixed).bingo == 0


def test_bingo_added_after_word_multiplier():
    specials = [SpecialTile.DOUBLE_WORD] + [SpecialTile.NORMAL] * 6
    b = score_placement(_hand("ABCDEFG", specials))
    assert b.total == 16 * 2 + 50


def test_unknown_special_token_is_normal():
    assert SpecialTile.parse("zz") is SpecialTile.NORMAL
    assert SpecialTile.parse(None) is SpecialTile.NORMAL
    assert SpecialTile.parse("DW") is SpecialTile.DOUBLE_WORD
    assert SpecialTile.parse("triple_letter") is SpecialTile.TRIPLE_LETTER
    b = calculate_score_with_special_tiles("TEST", [0, 1, 2, 3], ["zz", "??", "normal", "x"])
    assert b.total == 4
