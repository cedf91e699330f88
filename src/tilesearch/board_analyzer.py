"""Full-board search for the best-scoring word placements."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .board import Board, Direction, Line, normalize_hand
from .config import EngineSettings, Feature
from .dictionary import Dictionary
from .placement import PlacementAttempt, Rejected, try_placement
from .ranking import rank
from .scoring import score_placement

log = logging.getLogger("tilesearch.board_analyzer")


@dataclass(frozen=True)
class BoardPosition:
    row: int
    col: int
    letter: str
    uses_hand_tile: bool


@dataclass(frozen=True)
class WordCombination:
    word: str
    total_score: int
    start_row: int
    start_col: int
    direction: Direction
    used_hand_tiles: List[str]
    positions: List[BoardPosition]
    bonuses_applied: List[str] = field(default_factory=list)
    complete_word: str = ""

    @property
    def score(self) -> int:
        return self.total_score


@dataclass(frozen=True)
class AnalysisResult:
    combinations: List[WordCombination]
    total_found: int
    message: str


class BoardAnalyzer:
    """Finds the top-scoring placements of dictionary words on a square board."""

    def __init__(self, dictionary: Dictionary, settings: Optional[EngineSettings] = None):
        self.dictionary = dictionary
        self.settings = settings or EngineSettings()

    @property
    def enabled(self) -> bool:
        return self.settings.is_enabled(Feature.BOARD_ANALYZER)

    def analyze(
        self,
        board_letters: Optional[Sequence[Optional[str]]],
        hand_letters: Optional[Sequence[Optional[str]]],
        special_tiles: Optional[Sequence[Optional[str]]] = None,
    ) -> AnalysisResult:
        self.settings.require(Feature.BOARD_ANALYZER)

        hand = normalize_hand(hand_letters)
        if not hand:
            return AnalysisResult([], 0, "No hand tiles provided")

        board = Board.from_letters(board_letters, special_tiles, size=self.settings.board_size)
        special_enabled = self.settings.special_tiles_enabled(Feature.BOARD_ANALYZER)
        log.info(
            "Analyzing board: %d tiles on board, %d in hand, special tiles %s",
            len(board.occupied_letters()), len(hand), "on" if special_enabled else "off",
        )

        combinations = self.find_all(board, hand)
        top = rank(combinations, top_n=self.settings.top_n)
        if combinations:
            message = f"Found {len(combinations)} valid combinations (showing top {len(top)})"
        else:
            message = "No valid word combinations found"
        log.info(
            "Board analysis completed: %d total combinations, top score: %d",
            len(combinations), top[0].total_score if top else 0,
        )
        return AnalysisResult(top, len(combinations), message)

    def find_all(self, board: Board, hand: List[str]) -> List[WordCombination]:
        """Every legal placement of every candidate word, unranked."""
        pool = hand + board.occupied_letters()
        max_length = min(board.size, len(pool))
        words = self.dictionary.find_possible_words(pool, self.settings.board_analyzer_min_length, max_length)
        log.debug("Dictionary returned %d candidate words", len(words))

        has_tiles = board.has_tiles()
        lines = {d: board.lines(d) for d in (Direction.HORIZONTAL, Direction.VERTICAL)}
        special_enabled = self.settings.special_tiles_enabled(Feature.BOARD_ANALYZER)

        found: List[WordCombination] = []
        for raw in words:
            word = raw.strip().upper()
            if len(word) > board.size:
                continue
            for direction in (Direction.HORIZONTAL, Direction.VERTICAL):
                for line in lines[direction]:
                    for start in range(board.size - len(word) + 1):
                        outcome = try_placement(line, word, start, hand, self.dictionary, has_tiles)
                        if isinstance(outcome, Rejected):
                            continue
                        found.append(self._combination(line, direction, outcome.attempt, special_enabled))
        return found

    def _combination(
        self, line: Line, direction: Direction, attempt: PlacementAttempt, special_enabled: bool,
    ) -> WordCombination:
        breakdown = score_placement(attempt.letters, special_tiles_enabled=special_enabled)
        start_row, start_col = line.coords[attempt.start]
        log.debug(
            "Word: %s, Base: %d, Multiplier: %d, Final: %d",
            attempt.word, breakdown.base, breakdown.word_multiplier, breakdown.total,
        )
        return WordCombination(
            word=attempt.word,
            total_score=breakdown.total,
            start_row=start_row,
            start_col=start_col,
            direction=direction,
            used_hand_tiles=list(attempt.hand_tiles_used),
            positions=[BoardPosition(pl.row, pl.col, pl.letter, pl.uses_hand_tile) for pl in attempt.letters],
            bonuses_applied=list(breakdown.bonuses),
            complete_word=attempt.complete_word,
        )
