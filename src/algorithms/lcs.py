from typing import TypeVar, List, Optional, Sequence
from .utils import Alignment, EqualityPredicate, resolve_equal

T = TypeVar('T')


class LCSAligner:
    def __init__(self, old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None):
        self.old = old
        self.new = new
        self.eq = resolve_equal(eq)
        self.n = len(old)
        self.m = len(new)
        self._lengths: Optional[List[List[int]]] = None

    def compute(self) -> Alignment:
        if self.n == 0 or self.m == 0:
            return Alignment(frozenset(), frozenset(range(self.n)), frozenset(range(self.m)))
        lengths = self._build_lengths()
        common = self._common_indexes(lengths)
        removed = frozenset(range(self.n)).difference(common)
        inserted = self._inserted_indexes(common)
        return Alignment(frozenset(common), removed, frozenset(inserted))

    def _build_lengths(self) -> List[List[int]]:
        # lengths[i][j] is the LCS length of old[i:] and new[j:]
        n, m = self.n, self.m
        lengths = [[0] * (m + 1) for _ in range(n + 1)]
        for i in range(n - 1, -1, -1):
            row, below = lengths[i], lengths[i + 1]
            for j in range(m - 1, -1, -1):
                if self.eq(self.old[i], self.new[j]):
                    row[j] = 1 + below[j + 1]
                else:
                    row[j] = max(below[j], row[j + 1])
        self._lengths = lengths
        return lengths

    def _common_indexes(self, lengths: List[List[int]]) -> List[int]:
        common = []
        i = j = 0
        while i < self.n and j < self.m:
            if self.eq(self.old[i], self.new[j]):
                common.append(i)
                i += 1
                j += 1
            elif lengths[i + 1][j] >= lengths[i][j + 1]:
                i += 1
            else:
                j += 1
        return common

    def _inserted_indexes(self, common: List[int]) -> List[int]:
        common_objects = [self.old[i] for i in common]
        inserted = []
        i = 0
        for j in range(self.m):
            if i < len(common_objects) and self.eq(common_objects[i], self.new[j]):
                i += 1
            else:
                inserted.append(j)
        return inserted

    def lcs_length(self) -> int:
        if self.n == 0 or self.m == 0:
            return 0
        if self._lengths is None:
            self._build_lengths()
        return self._lengths[0][0]


def align(old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None) -> Alignment:
    return LCSAligner(old, new, eq).compute()


def lcs_length(old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None) -> int:
    return LCSAligner(old, new, eq).lcs_length()


def common_elements(old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None) -> List[T]:
    alignment = align(old, new, eq)
    return [old[i] for i in sorted(alignment.common)]
