"""Axis-agnostic placement checks shared by the grid and row searches.

Every check works on a :class:`~tilesearch.board.Line`, so a grid row, a grid
column and a native word-finder row all go through the same code. Each step
returns either an :class:`Accepted` attempt or a :class:`Rejected` reason.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .board import Line, SpecialTile
from .dictionary import Dictionary

log = logging.getLogger("tilesearch.placement")


@dataclass(frozen=True)
class PlacedLetter:
    row: int
    col: int
    letter: str
    uses_hand_tile: bool
    special: SpecialTile = SpecialTile.NORMAL


@dataclass(frozen=True)
class PlacementAttempt:
    word: str
    start: int
    letters: Tuple[PlacedLetter, ...]
    hand_tiles_used: Tuple[str, ...]
    complete_word: str = ""

    @property
    def end(self) -> int:
        return self.start + len(self.word) - 1

    @property
    def board_tiles_used(self) -> Tuple[str, ...]:
        return tuple(pl.letter for pl in self.letters if not pl.uses_hand_tile)


@dataclass(frozen=True)
class Accepted:
    attempt: PlacementAttempt


@dataclass(frozen=True)
class Rejected:
    reason: str


Outcome = Union[Accepted, Rejected]


def lay_word(line: Line, word: str, start: int, hand: Iterable[str]) -> Outcome:
    """Lay ``word`` along ``line`` from ``start``, consuming hand tiles for empty cells.

    Rejects when the span leaves the line, an existing letter disagrees with the
    word, the hand lacks a needed letter, or no hand tile is used at all.
    """
    end = start + len(word) - 1
    if start < 0 or end >= len(line) or not word:
        return Rejected("out of bounds")

    available = Counter(hand)
    used: List[str] = []
    letters: List[PlacedLetter] = []
    for i, ch in enumerate(word):
        idx = start + i
        r, c = line.coords[idx]
        existing = line.cells[idx]
        if existing is not None:
            if existing != ch:
                return Rejected(f"board has '{existing}' at ({r},{c}) but word needs '{ch}'")
            letters.append(PlacedLetter(r, c, existing, False, line.specials[idx]))
        else:
            if available[ch] <= 0:
                return Rejected(f"missing hand tile '{ch}'")
            available[ch] -= 1
            used.append(ch)
            letters.append(PlacedLetter(r, c, ch, True, line.specials[idx]))

    if not used:
        return Rejected("no hand tiles used")
    return Accepted(PlacementAttempt(word, start, tuple(letters), tuple(used)))


def check_connectivity(line: Line, attempt: PlacementAttempt, board_has_tiles: bool) -> Optional[Rejected]:
    """Return a rejection if the attempt is not geometrically connected, else None."""
    if not board_has_tiles:
        if line.center is None or not attempt.start <= line.center <= attempt.end:
            return Rejected("first word must cover the centre")
        return None

    overlaps = any(not pl.uses_hand_tile for pl in attempt.letters)
    if overlaps:
        return None
    for i, pl in enumerate(attempt.letters):
        if pl.uses_hand_tile and line.touches_existing(attempt.start + i):
            return None
    return Rejected("does not touch existing tiles")


def complete_word(line: Line, word: str, start: int) -> str:
    """Return the full contiguous run formed once ``word`` is laid at ``start``.

    Example: a row ``A T . . P H O`` with ``LOP`` laid at 2 forms ``ATLOPHO``.
    """
    first = start
    while line.occupied(first - 1):
        first -= 1
    last = start + len(word) - 1
    while line.occupied(last + 1):
        last += 1

    out: List[str] = []
    for idx in range(first, last + 1):
        offset = idx - start
        existing = line.cells[idx]
        if existing is not None:
            out.append(existing)
        else:
            out.append(word[offset])
    return "".join(out)


def check_complete_word(line: Line, attempt: PlacementAttempt, dictionary: Dictionary) -> Outcome:
    full = complete_word(line, attempt.word, attempt.start)
    if full != attempt.word and not dictionary.is_valid_word(full):
        return Rejected(f"forms invalid complete word '{full}'")
    return Accepted(PlacementAttempt(
        attempt.word, attempt.start, attempt.letters, attempt.hand_tiles_used, complete_word=full,
    ))


def check_tile_sets(line: Line, attempt: PlacementAttempt) -> Optional[Rejected]:
    """Row-only rule: a word may not start strictly inside a run of tiles.

    Cells inside the span already match the word (see :func:`lay_word`), so
    the only way to skip part of a run is to begin after its first tile.
    """
    for tile_set in line.tile_sets():
        if tile_set.strictly_inside(attempt.start):
            return Rejected(f"skips the start of run [{tile_set.start}-{tile_set.end}]")
    return None


def try_placement(
    line: Line,
    word: str,
    start: int,
    hand: Iterable[str],
    dictionary: Dictionary,
    board_has_tiles: bool,
    tile_runs: bool = False,
) -> Outcome:
    """Run every gate for one attempt: lay, connect, (runs), complete word."""
    outcome = lay_word(line, word, start, hand)
    if isinstance(outcome, Rejected):
        return outcome
    attempt = outcome.attempt

    rejected = check_connectivity(line, attempt, board_has_tiles)
    if rejected is None and tile_runs:
        rejected = check_tile_sets(line, attempt)
    if rejected is not None:
        return rejected

    outcome = check_complete_word(line, attempt, dictionary)
    if isinstance(outcome, Rejected):
        log.debug("Rejecting '%s' at %s: %s", word, line.coords[start], outcome.reason)
    return outcome
