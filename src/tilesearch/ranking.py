from typing import List, Sequence, TypeVar

TOP_N = 10

T = TypeVar("T")


def rank(placements: Sequence[T], top_n: int = TOP_N, by_length: bool = False) -> List[T]:
    """Order placements by score (descending), optionally longer words first on ties.

    The sort is stable, so equal keys keep their discovery order.
    Items need ``score`` and ``word`` attributes.
    """
    if by_length:
        ordered = sorted(placements, key=lambda p: (-p.score, -len(p.word)))
    else:
        ordered = sorted(placements, key=lambda p: -p.score)
    return ordered[:max(top_n, 0)]
