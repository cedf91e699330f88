"""Engine configuration and feature flags."""

from enum import Enum
from typing import Optional

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class Feature(str, Enum):
    SCORE_CALCULATOR = "score-calculator"
    WORD_FINDER = "word-finder"
    BOARD_ANALYZER = "board-analyzer"


class FeatureUnavailableError(RuntimeError):
    """Raised when a search is invoked while its feature flag is off."""

    def __init__(self, feature: Feature):
        super().__init__(f"{feature.value} feature is disabled")
        self.feature = feature


class EngineSettings(BaseSettings):
    """Settings for the placement search engine.

    Every field can be set from the environment with the ``TILESEARCH_`` prefix,
    e.g. ``TILESEARCH_BOARD_ANALYZER_ENABLED=false``.
    """

    board_analyzer_enabled: bool = True
    """Whether full-board analysis may run. Default: True."""

    word_finder_enabled: bool = True
    """Whether the single-row word finder may run. Default: True."""

    score_calculator_enabled: bool = True

    special_tiles_board_analyzer: bool = True
    """Apply letter/word multipliers in board analysis. Default: True."""

    special_tiles_word_finder: bool = False
    """Apply letter/word multipliers in the word finder. Default: False (plain letter sums)."""

    special_tiles_score_calculator: bool = True

    board_size: int = 15

    row_length: int = 15
    """Length the word-finder row is padded or truncated to."""

    board_analyzer_min_length: int = 2

    word_finder_min_length: int = 3

    word_finder_max_length: int = 15

    top_n: int = 10
    """How many ranked results each search returns. Default: 10."""

    dictionary_path: Optional[str] = None
    """Word list used by the web app and CLI when none is passed explicitly."""

    model_config = SettingsConfigDict(
        env_prefix="TILESEARCH_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    def is_enabled(self, feature: Feature) -> bool:
        return {
            Feature.BOARD_ANALYZER: self.board_analyzer_enabled,
            Feature.WORD_FINDER: self.word_finder_enabled,
            Feature.SCORE_CALCULATOR: self.score_calculator_enabled,
        }[feature]

    def special_tiles_enabled(self, feature: Feature) -> bool:
        return {
            Feature.BOARD_ANALYZER: self.special_tiles_board_analyzer,
            Feature.WORD_FINDER: self.special_tiles_word_finder,
            Feature.SCORE_CALCULATOR: self.special_tiles_score_calculator,
        }[feature]

    def require(self, feature: Feature) -> None:
        if not self.is_enabled(feature):
            raise FeatureUnavailableError(feature)
