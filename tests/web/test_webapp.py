import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tilesearch.config import EngineSettings
from tilesearch.dictionary import WordListDictionary
from tilesearch.webapp import create_app

WORDS = ["QI", "PHONE", "TEST", "CAT"]


def _client(**settings):
    app = create_app(dictionary=WordListDictionary(WORDS), settings=EngineSettings(**settings))
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def client():
    return _client()


def test_analyze_empty_board(client):
    resp = client.post("/api/board-analyzer/analyze", json={"boardLetters": [], "handLetters": ["Q", "I"]})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["totalFound"] == 4
    first = data["combinations"][0]
    assert first["word"] == "QI"
    assert first["totalScore"] == 11
    assert first["direction"] in ("HORIZONTAL", "VERTICAL")
    assert {"row", "col", "letter", "usesHandTile"} <= set(first["positions"][0])


def test_analyze_rejects_non_list(client):
    resp = client.post("/api/board-analyzer/analyze", json={"boardLetters": "QI", "handLetters": ["Q"]})
    assert resp.status_code == 400
    assert "boardLetters" in resp.get_json()["error"]


def test_disabled_feature_is_503():
    client = _client(board_analyzer_enabled=False)
    resp = client.post("/api/board-analyzer/analyze", json={"handLetters": ["Q", "I"]})
    assert resp.status_code == 503
    assert resp.get_json()["feature"] == "board-analyzer"

    status = client.get("/api/board-analyzer/status").get_json()
    assert status["enabled"] is False


def test_word_finder(client):
    resp = client.post(
        "/api/word-finder/find",
        json={"boardTiles": ["", "", "P", "H", "O"], "handTiles": ["N", "E"]},
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["totalFound"] == 1
    word = data["possibleWords"][0]
    assert word["word"] == "PHONE"
    assert word["startIndex"] == 3
    assert word["positions"] == [3, 4, 5, 6, 7]
    assert word["usedBoardTiles"] == ["P", "H", "O"]


def test_word_finder_status(client):
    status = client.get("/api/word-finder/status").get_json()
    assert status == {"enabled": True, "feature": "word-finder", "specialTiles": False}


def test_score_calculator(client):
    resp = client.post(
        "/api/score/calculate",
        json={"word": "test", "positions": [0, 1, 2, 3], "specialTiles": ["dl", "normal", "tw", "normal"]},
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["word"] == "TEST"
    assert data["baseScore"] == 4
    assert data["totalScore"] == 15
    assert data["isValidWord"] is True
    assert data["validationMessage"] is None
    assert len(data["bonusesApplied"]) == 2


def test_score_calculator_unknown_word(client):
    data = client.post("/api/score/calculate", json={"word": "zzz"}).get_json()
    assert data["totalScore"] == 30
    assert data["isValidWord"] is False
    assert data["validationMessage"] == "Word not found in dictionary"


def test_score_calculator_empty_word(client):
    data = client.post("/api/score/calculate", json={"word": "  "}).get_json()
    assert data["isValidWord"] is False
    assert data["validationMessage"] == "Word cannot be empty"


def test_score_calculator_validation(client):
    resp = client.post("/api/score/calculate", json={"word": "TEST", "positions": [0], "specialTiles": ["xx"]})
    assert resp.status_code == 400
    resp = client.post("/api/score/calculate", json={"word": "TEST", "positions": [-1], "specialTiles": ["dl"]})
    assert resp.status_code == 400
    resp = client.post("/api/score/calculate", json={"word": "T3ST"})
    assert resp.status_code == 400


def test_score_calculator_disabled():
    resp = _client(score_calculator_enabled=False).post("/api/score/calculate", json={"word": "TEST"})
    assert resp.status_code == 503


def test_letter_scores(client):
    data = client.get("/api/letter-scores").get_json()
    assert data["letterScores"]["Q"] == 10
    assert data["letterScores"]["E"] == 1


def test_config_hides_dictionary_path():
    app = create_app(
        dictionary=WordListDictionary(WORDS),
        settings=EngineSettings(dictionary_path="/srv/words.txt"),
    )
    data = app.test_client().get("/api/config").get_json()
    assert "dictionary_path" not in data
    assert data["top_n"] == 10


def test_non_string_entries_are_rejected(client):
    resp = client.post(
        "/api/board-analyzer/analyze",
        json={"boardLetters": [{"x": 1}], "handLetters": ["Q", "I"]},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "boardLetters[0] must be a string or null"

    resp = client.post(
        "/api/word-finder/find",
        json={"boardTiles": ["", None, "P"], "handTiles": ["N"], "specialTiles": ["dl", 3]},
    )
    assert resp.status_code == 400
    assert "specialTiles[1]" in resp.get_json()["error"]
