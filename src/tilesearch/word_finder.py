"""Word finder: placements along a single row of board tiles.

Positions are computed 0-based and reported 1-based; the conversion happens
only in :func:`to_user_positions`.

An empty row follows the board's first-move rule: the word must cover index
``len(row) // 2``. Earlier row finders accepted a first word anywhere on an
empty row, so results on empty rows are a subset of theirs.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from .board import Row, normalize_hand, render
from .config import EngineSettings, Feature
from .dictionary import Dictionary
from .placement import Rejected, try_placement
from .ranking import rank
from .scoring import score_placement

log = logging.getLogger("tilesearch.word_finder")


@dataclass(frozen=True)
class PossibleWord:
    word: str
    score: int
    start: int
    positions: List[int]
    used_hand_tiles: List[str]
    used_board_tiles: List[str]
    bonuses_applied: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WordFinderResult:
    possible_words: List[PossibleWord]
    total_found: int
    message: str


def to_user_positions(word: PossibleWord) -> PossibleWord:
    return replace(word, start=word.start + 1, positions=[p + 1 for p in word.positions])


class WordFinder:
    def __init__(self, dictionary: Dictionary, settings: Optional[EngineSettings] = None):
        self.dictionary = dictionary
        self.settings = settings or EngineSettings()

    @property
    def enabled(self) -> bool:
        return self.settings.is_enabled(Feature.WORD_FINDER)

    def find_words(
        self,
        board_tiles: Optional[Sequence[Optional[str]]],
        hand_tiles: Optional[Sequence[Optional[str]]],
        special_tiles: Optional[Sequence[Optional[str]]] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> WordFinderResult:
        self.settings.require(Feature.WORD_FINDER)

        hand = normalize_hand(hand_tiles)
        if not hand:
            return WordFinderResult([], 0, "No hand tiles provided")

        row = Row.from_letters(board_tiles, special_tiles, length=self.settings.row_length)
        log.info("Finding possible words for row %s and hand %s", render(row.tiles), "".join(hand))

        words = self.find_all(row, hand, min_length=min_length, max_length=max_length)
        top = [to_user_positions(w) for w in rank(words, top_n=self.settings.top_n, by_length=True)]
        if words:
            message = f"Found {len(words)} possible words (showing top {len(top)})"
        else:
            message = "No words found with the available tiles"
        return WordFinderResult(top, len(words), message)

    def find_all(
        self,
        row: Row,
        hand: List[str],
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> List[PossibleWord]:
        """Every legal placement on ``row``, 0-based and unranked."""
        pool = hand + row.occupied_letters()
        lo = min_length if min_length is not None else self.settings.word_finder_min_length
        hi = min(
            max_length if max_length is not None else self.settings.word_finder_max_length,
            len(row),
            len(pool),
        )
        if hi < lo:
            return []
        candidates = self.dictionary.find_possible_words(pool, lo, hi)
        log.debug("Dictionary returned %d potential words", len(candidates))

        line = row.as_line()
        has_tiles = row.has_tiles()
        special_enabled = self.settings.special_tiles_enabled(Feature.WORD_FINDER)

        found: List[PossibleWord] = []
        for raw in candidates:
            word = raw.strip().upper()
            if not self.dictionary.is_valid_word(word):
                log.debug("Skipping invalid dictionary word: '%s'", word)
                continue
            for start in range(len(row) - len(word) + 1):
                outcome = try_placement(line, word, start, hand, self.dictionary, has_tiles, tile_runs=True)
                if isinstance(outcome, Rejected):
                    continue
                attempt = outcome.attempt
                breakdown = score_placement(
                    attempt.letters,
                    special_tiles_enabled=special_enabled,
                    label=lambda pl: f"position {pl.col + 1}",
                )
                found.append(PossibleWord(
                    word=word,
                    score=breakdown.total,
                    start=attempt.start,
                    positions=[pl.col for pl in attempt.letters],
                    used_hand_tiles=list(attempt.hand_tiles_used),
                    used_board_tiles=list(attempt.board_tiles_used),
                    bonuses_applied=list(breakdown.bonuses),
                ))
        return found
