"""Dictionary collaborators: the protocol the searches rely on and a word-list backend."""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from .config import Feature

log = logging.getLogger("tilesearch.dictionary")


class Dictionary(Protocol):
    def is_valid_word(self, word: str) -> bool:
        ...

    def find_possible_words(self, letters: Sequence[str], min_length: int, max_length: int) -> List[str]:
        ...


def load_dictionary(path: str) -> set[str]:
    with open(path, "r", encoding="utf-8") as f:
        return {line.strip().upper() for line in f if line.strip() and line[0].isalpha()}


class WordListDictionary:
    """Case-insensitive in-memory word list.

    ``find_possible_words`` returns every word whose letters fit inside the
    pool (as a multiset), longest first and then alphabetically, so repeated
    searches see the same candidate order.
    """

    def __init__(self, words: Iterable[str]):
        self.words: set[str] = set()
        self._by_length: Dict[int, List[str]] = defaultdict(list)
        for w in words:
            word = str(w).strip().upper()
            if not word or not word.isalpha() or word in self.words:
                continue
            self.words.add(word)
            self._by_length[len(word)].append(word)
        for bucket in self._by_length.values():
            bucket.sort()

    @classmethod
    def from_file(cls, path: str) -> "WordListDictionary":
        words = load_dictionary(path)
        log.info("Loaded %s words from %s", f"{len(words):,}", path)
        return cls(words)

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid_word(word)

    def is_valid_word(self, word: str) -> bool:
        if not word or not word.strip():
            return False
        return word.strip().upper() in self.words

    def find_possible_words(self, letters: Sequence[str], min_length: int, max_length: int) -> List[str]:
        pool = Counter(
            str(ch).strip().upper()[0]
            for ch in letters
            if ch is not None and str(ch).strip() and str(ch).strip()[0].isalpha()
        )
        if not pool:
            return []
        max_length = min(max_length, sum(pool.values()))
        found: List[str] = []
        for length in range(max_length, min_length - 1, -1):
            for word in self._by_length.get(length, ()):
                need = Counter(word)
                if all(pool[ch] >= n for ch, n in need.items()):
                    found.append(word)
        return found


@dataclass(frozen=True)
class FeatureDictionaries:
    """Explicit per-feature dictionary routing.

    Features without an override use ``default``.
    """

    default: Dictionary
    overrides: Mapping[Feature, Dictionary] = field(default_factory=dict)

    def for_feature(self, feature: Feature) -> Dictionary:
        return self.overrides.get(feature, self.default)


def open_dictionary(path: Optional[str]) -> WordListDictionary:
    if not path:
        raise ValueError("a dictionary path is required")
    return WordListDictionary.from_file(path)
