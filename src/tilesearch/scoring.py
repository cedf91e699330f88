import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from .board import SpecialTile

if TYPE_CHECKING:
    from .placement import PlacedLetter

log = logging.getLogger("tilesearch.scoring")

LETTER_SCORES = {
    **{c: 1 for c in list("AEILNORSTU")},
    **{c: 2 for c in list("DG")},
    **{c: 3 for c in list("BCMP")},
    **{c: 4 for c in list("FHVWY")},
    "K": 5,
    **{c: 8 for c in list("JX")},
    **{c: 10 for c in list("QZ")},
}

BINGO_TILE_COUNT = 7
BINGO_BONUS = 50


def letter_score(ch: Optional[str]) -> int:
    if not ch:
        return 0
    return LETTER_SCORES.get(ch.upper(), 0)


def word_score(word: Optional[str]) -> int:
    """Face value of a word: the plain sum of its letters."""
    if not word:
        return 0
    return sum(letter_score(ch) for ch in word.strip() if ch.isalpha())


def letter_scores_legend() -> Dict[str, int]:
    return {ch: LETTER_SCORES[ch] for ch in sorted(LETTER_SCORES)}


@dataclass(frozen=True)
class ScoreBreakdown:
    base: int
    word_multiplier: int
    bingo: int
    total: int
    bonuses: List[str] = field(default_factory=list)


def grid_label(pl: "PlacedLetter") -> str:
    return f"({pl.row},{pl.col})"


def score_placement(
    letters: Sequence["PlacedLetter"],
    special_tiles_enabled: bool = True,
    bingo_enabled: bool = True,
    label: Callable[["PlacedLetter"], str] = grid_label,
) -> ScoreBreakdown:
    """Score a laid word.

    Rules:
    - Letter and word premiums apply only under newly placed (hand) tiles; a
      square already covered by a board letter is spent.
    - Word multipliers compound: two double-word squares give x4.
    - Using exactly seven hand tiles adds a flat bingo bonus after multiplying.
    - With special tiles disabled the score is the plain letter sum (plus bingo).

    ``label`` renders a square's location in the bonus descriptions.
    """
    base = 0
    word_mult = 1
    bonuses: List[str] = []
    for pl in letters:
        value = letter_score(pl.letter)
        if special_tiles_enabled and pl.uses_hand_tile and pl.special is not SpecialTile.NORMAL:
            where = label(pl)
            if pl.special.letter_multiplier > 1:
                log.debug("%s at %s: %s -> %s", pl.special.label, where, value, value * pl.special.letter_multiplier)
                value *= pl.special.letter_multiplier
                bonuses.append(f"{pl.special.label} at {where} ('{pl.letter}')")
            elif pl.special.word_multiplier > 1:
                log.debug("%s at %s", pl.special.label, where)
                word_mult *= pl.special.word_multiplier
                bonuses.append(f"{pl.special.label} at {where}")
        base += value

    total = base * word_mult
    hand_used = sum(1 for pl in letters if pl.uses_hand_tile)
    bingo = BINGO_BONUS if bingo_enabled and hand_used == BINGO_TILE_COUNT else 0
    if bingo:
        total += bingo
        bonuses.append(f"Bingo: all {BINGO_TILE_COUNT} tiles used (+{BINGO_BONUS})")
    return ScoreBreakdown(base=base, word_multiplier=word_mult, bingo=bingo, total=total, bonuses=bonuses)


def calculate_score_with_special_tiles(
    word: str,
    positions: Optional[Sequence[int]] = None,
    special_tiles: Optional[Sequence[Optional[str]]] = None,
) -> ScoreBreakdown:
    """Score a free-standing word whose i-th letter sits on ``special_tiles[positions[i]]``.

    Every letter counts as newly placed but no bingo applies, since no hand is
    involved. Missing or out-of-range positions leave the letter on a normal square.
    """
    from .placement import PlacedLetter

    normalized = (word or "").strip().upper()
    positions = list(positions or [])
    kinds = [SpecialTile.parse(tok) for tok in (special_tiles or [])]
    letters: List[PlacedLetter] = []
    for i, ch in enumerate(normalized):
        special = SpecialTile.NORMAL
        pos = positions[i] if i < len(positions) else i
        if i < len(positions) and 0 <= pos < len(kinds):
            special = kinds[pos]
        letters.append(PlacedLetter(row=0, col=pos, letter=ch, uses_hand_tile=True, special=special))
    return score_placement(
        letters,
        special_tiles_enabled=bool(kinds),
        bingo_enabled=False,
        label=lambda pl: f"position {pl.col}",
    )
