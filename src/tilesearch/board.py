from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

BOARD_SIZE = 15
ROW_LENGTH = 15

Cell = Optional[str]


class OutOfBoundsError(IndexError):
    pass


class Direction(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.HORIZONTAL else (1, 0)


class SpecialTile(str, Enum):
    NORMAL = "normal"
    DOUBLE_LETTER = "dl"
    TRIPLE_LETTER = "tl"
    DOUBLE_WORD = "dw"
    TRIPLE_WORD = "tw"

    @staticmethod
    def parse(token: Optional[str]) -> "SpecialTile":
        # Unknown or missing tokens mean a plain square.
        if token is None:
            return SpecialTile.NORMAL
        key = str(token).strip().lower()
        return _SPECIAL_ALIASES.get(key, SpecialTile.NORMAL)

    @property
    def letter_multiplier(self) -> int:
        if self is SpecialTile.DOUBLE_LETTER:
            return 2
        if self is SpecialTile.TRIPLE_LETTER:
            return 3
        return 1

    @property
    def word_multiplier(self) -> int:
        if self is SpecialTile.DOUBLE_WORD:
            return 2
        if self is SpecialTile.TRIPLE_WORD:
            return 3
        return 1

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


_SPECIAL_ALIASES = {
    "normal": SpecialTile.NORMAL,
    "..": SpecialTile.NORMAL,
    "dl": SpecialTile.DOUBLE_LETTER,
    "double_letter": SpecialTile.DOUBLE_LETTER,
    "tl": SpecialTile.TRIPLE_LETTER,
    "triple_letter": SpecialTile.TRIPLE_LETTER,
    "dw": SpecialTile.DOUBLE_WORD,
    "double_word": SpecialTile.DOUBLE_WORD,
    "tw": SpecialTile.TRIPLE_WORD,
    "triple_word": SpecialTile.TRIPLE_WORD,
}

# Standard 15x15 premium layout, one character per square:
# "T" triple word, "D" double word, "t" triple letter, "d" double letter, "." normal
_STANDARD_ROWS = [
    "T..d...T...d..T",
    ".D...t...t...D.",
    "..D...d.d...D..",
    "d..D...d...D..d",
    "....D.....D....",
    ".t...t...t...t.",
    "..d...d.d...d..",
    "T..d...D...d..T",
    "..d...d.d...d..",
    ".t...t...t...t.",
    "....D.....D....",
    "d..D...d...D..d",
    "..D...d.d...D..",
    ".D...t...t...D.",
    "T..d...T...d..T",
]
_LAYOUT_CODES = {
    "T": SpecialTile.TRIPLE_WORD,
    "D": SpecialTile.DOUBLE_WORD,
    "t": SpecialTile.TRIPLE_LETTER,
    "d": SpecialTile.DOUBLE_LETTER,
    ".": SpecialTile.NORMAL,
}
STANDARD_LAYOUT: List[SpecialTile] = [_LAYOUT_CODES[ch] for row in _STANDARD_ROWS for ch in row]


def normalize_letter(raw: Optional[str]) -> Cell:
    """Map a raw cell token to ``None`` (empty) or a single uppercase letter."""
    if raw is None:
        return None
    text = str(raw).strip().upper()
    if not text:
        return None
    return text[0]


def normalize_hand(letters: Optional[Sequence[Optional[str]]]) -> List[str]:
    """Uppercase hand letters, dropping blanks and ``None``."""
    return [ch for ch in (normalize_letter(raw) for raw in (letters or [])) if ch is not None]


def _fit(values: Sequence, length: int, fill) -> list:
    # Pad short inputs, truncate long ones.
    out = list(values[:length])
    out.extend([fill] * (length - len(out)))
    return out


def _run_bounds(cells: Sequence[Cell]) -> List[Tuple[int, int]]:
    runs: List[Tuple[int, int]] = []
    start = -1
    for i, cell in enumerate(cells):
        if cell is not None and start == -1:
            start = i
        elif cell is None and start != -1:
            runs.append((start, i - 1))
            start = -1
    if start != -1:
        runs.append((start, len(cells) - 1))
    return runs


@dataclass(frozen=True)
class TileSet:
    """A maximal run of occupied cells, inclusive on both ends."""

    start: int
    end: int

    def strictly_inside(self, i: int) -> bool:
        """True when ``i`` falls within the run but after its first tile."""
        return self.start < i <= self.end


@dataclass(frozen=True)
class Line:
    """A 1-D slice of cells that the placement logic walks along.

    Grid rows and columns and native rows all become a ``Line``. ``coords``
    holds the (row, col) of each index, ``side_occupied`` records whether a
    perpendicular neighbour of the index holds a letter, and ``center`` is the
    index of the board centre when the line crosses it.
    """

    cells: Tuple[Cell, ...]
    specials: Tuple[SpecialTile, ...]
    coords: Tuple[Tuple[int, int], ...]
    side_occupied: Tuple[bool, ...]
    center: Optional[int] = None

    def __len__(self) -> int:
        return len(self.cells)

    def occupied(self, i: int) -> bool:
        return 0 <= i < len(self.cells) and self.cells[i] is not None

    def touches_existing(self, i: int) -> bool:
        return self.occupied(i - 1) or self.occupied(i + 1) or self.side_occupied[i]

    def tile_sets(self) -> List[TileSet]:
        return [TileSet(s, e) for s, e in _run_bounds(self.cells)]


@dataclass(frozen=True)
class Board:
    # grid[r][c] is None for empty, 'A'-'Z' for letters
    grid: Tuple[Tuple[Cell, ...], ...]
    specials: Tuple[Tuple[SpecialTile, ...], ...]

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def center(self) -> Tuple[int, int]:
        return self.size // 2, self.size // 2

    @staticmethod
    def empty(size: int = BOARD_SIZE) -> "Board":
        return Board.from_letters([], size=size)

    @staticmethod
    def from_letters(
        letters: Optional[Sequence[Optional[str]]],
        special_tiles: Optional[Sequence[Optional[str]]] = None,
        size: int = BOARD_SIZE,
    ) -> "Board":
        area = size * size
        flat = _fit([normalize_letter(ch) for ch in (letters or [])], area, None)
        kinds = _fit([_as_special(tok) for tok in (special_tiles or [])], area, SpecialTile.NORMAL)
        grid = tuple(tuple(flat[r * size:(r + 1) * size]) for r in range(size))
        specials = tuple(tuple(kinds[r * size:(r + 1) * size]) for r in range(size))
        return Board(grid, specials)

    @staticmethod
    def from_string(multiline: str, special_tiles: Optional[Sequence[Optional[str]]] = None) -> "Board":
        # N lines of N chars; '.' empty, letters otherwise
        rows = [line.strip() for line in multiline.strip().splitlines() if line.strip()]
        size = len(rows)
        if size == 0 or any(len(r) != size for r in rows):
            raise ValueError("Board string must be N lines of N characters")
        letters: List[Optional[str]] = []
        for r in rows:
            for ch in r:
                if ch == '.':
                    letters.append(None)
                elif ch.isalpha():
                    letters.append(ch)
                else:
                    raise ValueError(f"Invalid board character: {ch}")
        return Board.from_letters(letters, special_tiles, size=size)

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def cell_at(self, r: int, c: int) -> Cell:
        if not self.in_bounds(r, c):
            raise OutOfBoundsError(f"({r},{c}) is outside a {self.size}x{self.size} board")
        return self.grid[r][c]

    def special_at(self, r: int, c: int) -> SpecialTile:
        if not self.in_bounds(r, c):
            raise OutOfBoundsError(f"({r},{c}) is outside a {self.size}x{self.size} board")
        return self.specials[r][c]

    def has_tiles(self) -> bool:
        return any(cell is not None for row in self.grid for cell in row)

    def is_empty(self) -> bool:
        return not self.has_tiles()

    def occupied_letters(self) -> List[str]:
        return [cell for row in self.grid for cell in row if cell is not None]

    def line(self, direction: Direction, index: int) -> Line:
        """Return row ``index`` (horizontal) or column ``index`` (vertical) as a Line."""
        if not 0 <= index < self.size:
            raise OutOfBoundsError(f"line {index} is outside a {self.size}x{self.size} board")
        dr, dc = direction.step
        pr, pc = dc, dr  # perpendicular
        r0, c0 = (index, 0) if direction is Direction.HORIZONTAL else (0, index)
        coords = tuple((r0 + i * dr, c0 + i * dc) for i in range(self.size))
        side = tuple(
            any(
                self.in_bounds(r + s * pr, c + s * pc) and self.grid[r + s * pr][c + s * pc] is not None
                for s in (-1, 1)
            )
            for r, c in coords
        )
        center_r, center_c = self.center
        center: Optional[int] = None
        if direction is Direction.HORIZONTAL and index == center_r:
            center = center_c
        elif direction is Direction.VERTICAL and index == center_c:
            center = center_r
        return Line(
            cells=tuple(self.grid[r][c] for r, c in coords),
            specials=tuple(self.specials[r][c] for r, c in coords),
            coords=coords,
            side_occupied=side,
            center=center,
        )

    def lines(self, direction: Direction) -> List[Line]:
        return [self.line(direction, i) for i in range(self.size)]


@dataclass(frozen=True)
class Row:
    """A single sequence of board tiles, used by the word finder."""

    tiles: Tuple[Cell, ...]
    specials: Tuple[SpecialTile, ...]

    @staticmethod
    def from_letters(
        letters: Optional[Sequence[Optional[str]]],
        special_tiles: Optional[Sequence[Optional[str]]] = None,
        length: Optional[int] = None,
    ) -> "Row":
        tiles = [normalize_letter(ch) for ch in (letters or [])]
        if length is not None:
            tiles = _fit(tiles, length, None)
        kinds = _fit([_as_special(tok) for tok in (special_tiles or [])], len(tiles), SpecialTile.NORMAL)
        return Row(tuple(tiles), tuple(kinds))

    def __len__(self) -> int:
        return len(self.tiles)

    def cell_at(self, i: int) -> Cell:
        if not 0 <= i < len(self.tiles):
            raise OutOfBoundsError(f"index {i} is outside a row of {len(self.tiles)}")
        return self.tiles[i]

    def has_tiles(self) -> bool:
        return any(t is not None for t in self.tiles)

    def occupied_letters(self) -> List[str]:
        return [t for t in self.tiles if t is not None]

    def tile_sets(self) -> List[TileSet]:
        return [TileSet(s, e) for s, e in _run_bounds(self.tiles)]

    def as_line(self) -> Line:
        n = len(self.tiles)
        return Line(
            cells=self.tiles,
            specials=self.specials,
            coords=tuple((0, i) for i in range(n)),
            side_occupied=(False,) * n,
            center=n // 2 if n else None,
        )


def _as_special(token) -> SpecialTile:
    if isinstance(token, SpecialTile):
        return token
    return SpecialTile.parse(token)


def render(cells: Iterable[Cell]) -> str:
    return "".join('.' if ch is None else ch for ch in cells)
