import logging
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from .board import SpecialTile
from .board_analyzer import AnalysisResult, BoardAnalyzer
from .config import EngineSettings, Feature, FeatureUnavailableError
from .dictionary import Dictionary, FeatureDictionaries, open_dictionary
from .scoring import calculate_score_with_special_tiles, letter_scores_legend, word_score
from .word_finder import WordFinder, WordFinderResult

log = logging.getLogger("tilesearch.webapp")

_SPECIAL_TOKENS = {t.value for t in SpecialTile}


def _list_field(data: Dict[str, Any], key: str, strings: bool = True) -> Optional[List[Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    if strings:
        for i, item in enumerate(value):
            if item is not None and not isinstance(item, str):
                raise ValueError(f"{key}[{i}] must be a string or null")
    return value


def _analysis_json(result: AnalysisResult) -> Dict[str, Any]:
    return {
        "combinations": [
            {
                "word": c.word,
                "totalScore": c.total_score,
                "startRow": c.start_row,
                "startCol": c.start_col,
                "direction": c.direction.value,
                "usedHandTiles": c.used_hand_tiles,
                "positions": [
                    {"row": p.row, "col": p.col, "letter": p.letter, "usesHandTile": p.uses_hand_tile}
                    for p in c.positions
                ],
                "bonusesApplied": c.bonuses_applied,
            }
            for c in result.combinations
        ],
        "totalFound": result.total_found,
        "message": result.message,
    }


def _finder_json(result: WordFinderResult) -> Dict[str, Any]:
    return {
        "possibleWords": [
            {
                "word": w.word,
                "score": w.score,
                "startIndex": w.start,
                "positions": w.positions,
                "usedHandTiles": w.used_hand_tiles,
                "usedBoardTiles": w.used_board_tiles,
                "bonusesApplied": w.bonuses_applied,
            }
            for w in result.possible_words
        ],
        "totalFound": result.total_found,
        "message": result.message,
    }


def create_app(
    dictionary: Optional[Dictionary] = None,
    settings: Optional[EngineSettings] = None,
    dictionaries: Optional[FeatureDictionaries] = None,
) -> Flask:
    app = Flask(__name__)
    settings = settings or EngineSettings()
    if dictionaries is None:
        dictionaries = FeatureDictionaries(dictionary or open_dictionary(settings.dictionary_path))

    analyzer = BoardAnalyzer(dictionaries.for_feature(Feature.BOARD_ANALYZER), settings)
    finder = WordFinder(dictionaries.for_feature(Feature.WORD_FINDER), settings)
    calculator_dictionary = dictionaries.for_feature(Feature.SCORE_CALCULATOR)

    @app.errorhandler(FeatureUnavailableError)
    def feature_unavailable(exc: FeatureUnavailableError):
        log.error("Service unavailable: %s", exc)
        return jsonify({"error": str(exc), "feature": exc.feature.value}), 503

    @app.post("/api/board-analyzer/analyze")
    def api_analyze():
        data = request.get_json(silent=True) or {}
        try:
            board_letters = _list_field(data, "boardLetters")
            hand_letters = _list_field(data, "handLetters")
            special_tiles = _list_field(data, "specialTiles")
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        result = analyzer.analyze(board_letters, hand_letters, special_tiles)
        return jsonify(_analysis_json(result))

    @app.get("/api/board-analyzer/status")
    def api_analyzer_status():
        return jsonify({
            "enabled": analyzer.enabled,
            "feature": Feature.BOARD_ANALYZER.value,
            "specialTiles": settings.special_tiles_enabled(Feature.BOARD_ANALYZER),
            "description": "Full board analysis for optimal word placement",
        })

    @app.post("/api/word-finder/find")
    def api_find_words():
        data = request.get_json(silent=True) or {}
        try:
            board_tiles = _list_field(data, "boardTiles")
            hand_tiles = _list_field(data, "handTiles")
            special_tiles = _list_field(data, "specialTiles")
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        result = finder.find_words(board_tiles, hand_tiles, special_tiles)
        return jsonify(_finder_json(result))

    @app.get("/api/word-finder/status")
    def api_finder_status():
        return jsonify({
            "enabled": finder.enabled,
            "feature": Feature.WORD_FINDER.value,
            "specialTiles": settings.special_tiles_enabled(Feature.WORD_FINDER),
        })

    @app.post("/api/score/calculate")
    def api_calculate_score():
        settings.require(Feature.SCORE_CALCULATOR)
        data = request.get_json(silent=True) or {}
        word = str(data.get("word") or "").strip().upper()
        if not word:
            return jsonify({"word": "", "baseScore": 0, "totalScore": 0, "isValidWord": False,
                            "validationMessage": "Word cannot be empty", "bonusesApplied": []})
        if not word.isalpha():
            return jsonify({"error": "word must contain only letters A-Z"}), 400
        try:
            positions = _list_field(data, "positions", strings=False)
            special_tiles = _list_field(data, "specialTiles")
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        for i, tok in enumerate(special_tiles or []):
            if tok is not None and str(tok).lower() not in _SPECIAL_TOKENS:
                return jsonify({"error": f"specialTiles[{i}] must be one of: normal, dl, tl, dw, tw"}), 400
        if positions is not None and any(not isinstance(p, int) or p < 0 for p in positions):
            return jsonify({"error": "positions must be non-negative integers"}), 400

        base = word_score(word)
        total = base
        bonuses: List[str] = []
        if settings.special_tiles_enabled(Feature.SCORE_CALCULATOR) and positions and special_tiles:
            breakdown = calculate_score_with_special_tiles(word, positions, special_tiles)
            total = breakdown.total
            bonuses = breakdown.bonuses
        valid = calculator_dictionary.is_valid_word(word)
        return jsonify({
            "word": word,
            "baseScore": base,
            "totalScore": total,
            "isValidWord": valid,
            "validationMessage": None if valid else "Word not found in dictionary",
            "bonusesApplied": bonuses,
        })

    @app.get("/api/letter-scores")
    def api_letter_scores():
        return jsonify({"letterScores": letter_scores_legend(), "message": "Standard Scrabble letter scores"})

    @app.get("/api/config")
    def api_config():
        return jsonify(_public_settings(settings))

    return app


def _public_settings(settings: EngineSettings) -> Dict[str, Any]:
    data = settings.model_dump()
    data.pop("dictionary_path", None)
    return data


if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=8765, debug=True)
