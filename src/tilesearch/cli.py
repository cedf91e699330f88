import argparse
import logging
from typing import List, Optional

from .board import BOARD_SIZE, STANDARD_LAYOUT, Board, Direction, render
from .board_analyzer import BoardAnalyzer
from .config import EngineSettings
from .dictionary import WordListDictionary
from .scoring import calculate_score_with_special_tiles, word_score
from .word_finder import WordFinder


def _split_tokens(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None:
        return None
    return [tok.strip() for tok in raw.split(",")]


def _row_letters(row_string: str) -> List[Optional[str]]:
    # '.' empty, letters otherwise
    return [None if ch == '.' else ch for ch in row_string.strip()]


def _cmd_analyze(args: argparse.Namespace, settings: EngineSettings, parser: argparse.ArgumentParser) -> int:
    board = Board.from_string(args.board_string) if args.board_string else Board.empty(settings.board_size)
    if args.standard_premiums and board.size != BOARD_SIZE:
        parser.error(f"--standard-premiums needs a {BOARD_SIZE}x{BOARD_SIZE} board, got {board.size}x{board.size}")
    if board.size != settings.board_size:
        settings = settings.model_copy(update={"board_size": board.size})
    letters = [cell for row in board.grid for cell in row]
    specials = None
    if args.standard_premiums:
        specials = [tile.value for tile in STANDARD_LAYOUT]
    elif args.special_tiles:
        specials = _split_tokens(args.special_tiles)

    analyzer = BoardAnalyzer(WordListDictionary.from_file(args.dict_path), settings)
    result = analyzer.analyze(letters, list(args.hand), specials)
    print(result.message)
    if not result.combinations:
        return 1

    for i, c in enumerate(result.combinations, start=1):
        arrow = ">" if c.direction is Direction.HORIZONTAL else "v"
        extra = "  ".join(c.bonuses_applied)
        print(f" {i:>2}  {c.total_score:>5}  {c.word:<15} ({c.start_row},{c.start_col}) {arrow}  {extra}")

    best = result.combinations[0]
    out_grid = [list(row) for row in board.grid]
    for p in best.positions:
        out_grid[p.row][p.col] = p.letter
    print("Board after best move:")
    print("\n".join(render(row) for row in out_grid))
    return 0


def _cmd_find(args: argparse.Namespace, settings: EngineSettings) -> int:
    letters = _row_letters(args.row)
    settings = settings.model_copy(update={"row_length": len(letters)})
    finder = WordFinder(WordListDictionary.from_file(args.dict_path), settings)
    result = finder.find_words(
        letters,
        list(args.hand),
        _split_tokens(args.special_tiles),
        min_length=args.min_length,
    )
    print(result.message)
    for w in result.possible_words:
        print(f" {w.score:>5}  {w.word:<15} start={w.start} positions={w.positions}")
    return 0 if result.possible_words else 1


def _cmd_score(args: argparse.Namespace) -> int:
    word = args.word.strip().upper()
    specials = _split_tokens(args.special_tiles)
    if specials:
        breakdown = calculate_score_with_special_tiles(word, list(range(len(word))), specials)
        print(f"{word}: {breakdown.total} (base {word_score(word)})")
        for bonus in breakdown.bonuses:
            print(f"  {bonus}")
    else:
        print(f"{word}: {word_score(word)}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scrabble placement search and scoring")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info logs, -vv for debug")
    sub = p.add_subparsers(dest="command", required=True)

    pa = sub.add_parser("analyze", help="Best placements on a full board")
    pa.add_argument("--board-string", type=str, help="N lines of N chars; '.' empty; A-Z tiles")
    pa.add_argument("--hand", required=True, type=str, help="Your hand letters, e.g. AEIRST")
    pa.add_argument("--dict", required=True, type=str, dest="dict_path", help="Path to dictionary file (one word per line)")
    pa.add_argument("--standard-premiums", action="store_true", help="Use the standard 15x15 premium layout")
    pa.add_argument("--special-tiles", type=str, help="Comma-separated tokens (normal,dl,tl,dw,tw), row-major")
    pa.add_argument("--no-special-tiles", action="store_true", help="Score plain letter sums only")

    pf = sub.add_parser("find", help="Words that fit a single row of tiles")
    pf.add_argument("--row", required=True, type=str, help="Row tiles; '.' empty, e.g. ..PHO.....")
    pf.add_argument("--hand", required=True, type=str, help="Your hand letters")
    pf.add_argument("--dict", required=True, type=str, dest="dict_path", help="Path to dictionary file (one word per line)")
    pf.add_argument("--special-tiles", type=str, help="Comma-separated tokens for the row")
    pf.add_argument("--min-length", type=int, help="Minimum word length (default 3)")

    ps = sub.add_parser("score", help="Score a single word")
    ps.add_argument("word", type=str)
    ps.add_argument("--special-tiles", type=str, help="Comma-separated token per letter, e.g. dl,normal,tw,normal")

    args = p.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    settings = EngineSettings()
    if args.command == "analyze":
        if args.no_special_tiles:
            settings = settings.model_copy(update={"special_tiles_board_analyzer": False})
        return _cmd_analyze(args, settings, pa)
    if args.command == "find":
        if args.special_tiles:
            settings = settings.model_copy(update={"special_tiles_word_finder": True})
        return _cmd_find(args, settings)
    return _cmd_score(args)


if __name__ == "__main__":
    raise SystemExit(main())
