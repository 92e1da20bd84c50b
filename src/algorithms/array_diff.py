import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TypeVar, List, Dict, Tuple, Optional, Mapping, FrozenSet, Iterator, Sequence

from .lcs import align
from .utils import (
    Alignment, Change, ChangeType, ContentSignature, EqualityPredicate, TokenType,
    resolve_equal, count_in_range, elements_at, remove_at_indexes, insert_at_indexes, get_tokenizer
)

T = TypeVar('T')

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArrayDiff:
    common_indexes: FrozenSet[int]
    removed_indexes: FrozenSet[int]
    inserted_indexes: FrozenSet[int]
    moved_indexes: Mapping[int, int] = field(default_factory=dict)
    modified_indexes: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'common_indexes', frozenset(self.common_indexes))
        object.__setattr__(self, 'removed_indexes', frozenset(self.removed_indexes))
        object.__setattr__(self, 'inserted_indexes', frozenset(self.inserted_indexes))
        object.__setattr__(self, 'moved_indexes', MappingProxyType(dict(self.moved_indexes)))
        object.__setattr__(self, 'modified_indexes', MappingProxyType(dict(self.modified_indexes)))

    def __hash__(self) -> int:
        return hash((self.common_indexes, self.removed_indexes, self.inserted_indexes,
                     frozenset(self.moved_indexes.items()), frozenset(self.modified_indexes.items())))

    @property
    def old_count(self) -> int:
        return len(self.common_indexes) + len(self.removed_indexes) + len(self.moved_indexes)

    @property
    def new_count(self) -> int:
        return len(self.common_indexes) + len(self.inserted_indexes) + len(self.moved_indexes)

    @property
    def is_empty(self) -> bool:
        return (not self.removed_indexes and not self.inserted_indexes
                and not self.moved_indexes and not self.modified_indexes)

    def merged_with_moves(self) -> Tuple[FrozenSet[int], FrozenSet[int]]:
        """Removed and inserted indexes with every move counted as a remove plus an insert."""
        removed = self.removed_indexes.union(self.moved_indexes.keys())
        inserted = self.inserted_indexes.union(self.moved_indexes.values())
        return removed, inserted

    def new_index_for_old_index(self, index: int) -> Optional[int]:
        """Position in the new sequence of the old element at *index*; None if it was removed."""
        self._check_range(index, self.old_count, 'old')
        if index in self.removed_indexes:
            return None
        if index in self.moved_indexes:
            return self.moved_indexes[index]
        removed, inserted = self.merged_with_moves()
        deleted_before = count_in_range(removed, 0, index)
        result = index - deleted_before
        inserted_at_or_before = 0
        for i in sorted(inserted):
            if i <= result:
                inserted_at_or_before += 1
                result += 1
            else:
                break
        log.debug("old -> new: removed %s inserted %s: %d - %d + %d = %d",
                  sorted(self.removed_indexes), sorted(self.inserted_indexes),
                  index, deleted_before, inserted_at_or_before, result)
        return result

    def old_index_for_new_index(self, index: int) -> Optional[int]:
        """Position in the old sequence of the new element at *index*; None if it was inserted."""
        self._check_range(index, self.new_count, 'new')
        if index in self.inserted_indexes:
            return None
        for old_index, new_index in self.moved_indexes.items():
            if new_index == index:
                return old_index
        removed, inserted = self.merged_with_moves()
        inserted_before = count_in_range(inserted, 0, index)
        result = index - inserted_before
        removed_at_or_before = 0
        # every qualifying removal counts, so no early exit here
        for i in sorted(removed):
            if i <= result:
                removed_at_or_before += 1
                result += 1
        log.debug("new -> old: removed %s inserted %s: %d - %d + %d = %d",
                  sorted(self.removed_indexes), sorted(self.inserted_indexes),
                  index, inserted_before, removed_at_or_before, result)
        return result

    def with_modifications(self, modified: Mapping[int, int]) -> 'ArrayDiff':
        stray = set(modified).difference(self.common_indexes)
        if stray:
            raise ValueError(f"Modified indexes {sorted(stray)} are not common indexes")
        return replace(self, modified_indexes=modified)

    def iter_changes(self, include_kept: bool = False) -> Iterator[Change]:
        if include_kept:
            for i in sorted(self.common_indexes):
                if i not in self.modified_indexes:
                    yield Change(ChangeType.KEPT, i, self.new_index_for_old_index(i))
        for i in sorted(self.removed_indexes):
            yield Change(ChangeType.REMOVED, i, None)
        for j in sorted(self.inserted_indexes):
            yield Change(ChangeType.INSERTED, None, j)
        for i in sorted(self.moved_indexes):
            yield Change(ChangeType.MOVED, i, self.moved_indexes[i])
        for i in sorted(self.modified_indexes):
            yield Change(ChangeType.MODIFIED, i, self.modified_indexes[i])

    def _check_range(self, index: int, count: int, space: str):
        if not 0 <= index < count:
            raise IndexError(f"Index {index} out of range for {space} sequence of length {count}")

    def __repr__(self) -> str:
        return (f"ArrayDiff(common={sorted(self.common_indexes)}, removed={sorted(self.removed_indexes)}, "
                f"inserted={sorted(self.inserted_indexes)}, moved={dict(sorted(self.moved_indexes.items()))}, "
                f"modified={dict(sorted(self.modified_indexes.items()))})")


def extract_moves(old: Sequence[T], new: Sequence[T], alignment: Alignment,
                  eq: Optional[EqualityPredicate] = None) -> Tuple[FrozenSet[int], FrozenSet[int], Dict[int, int]]:
    eq = resolve_equal(eq)
    removed = set(alignment.removed)
    candidates = sorted(alignment.inserted)
    moved: Dict[int, int] = {}
    for old_index in sorted(alignment.removed):
        item = old[old_index]
        for pos, new_index in enumerate(candidates):
            if eq(item, new[new_index]):
                removed.discard(old_index)
                del candidates[pos]
                moved[old_index] = new_index
                log.debug("move %d -> %d", old_index, new_index)
                break
    return frozenset(removed), frozenset(candidates), moved


def diff(old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None) -> ArrayDiff:
    alignment = align(old, new, eq)
    removed, inserted, moved = extract_moves(old, new, alignment, eq)
    return ArrayDiff(
        common_indexes=alignment.common,
        removed_indexes=removed,
        inserted_indexes=inserted,
        moved_indexes=moved
    )


def detect_modifications(result: ArrayDiff, old: Sequence[T], new: Sequence[T],
                         signature: ContentSignature = hash) -> Dict[int, int]:
    modified: Dict[int, int] = {}
    for old_index in sorted(result.common_indexes):
        new_index = result.new_index_for_old_index(old_index)
        if new_index is None:
            continue
        if signature(old[old_index]) != signature(new[new_index]):
            modified[old_index] = new_index
    return modified


def diff_with_content(old: Sequence[T], new: Sequence[T], eq: Optional[EqualityPredicate] = None,
                      signature: ContentSignature = hash) -> ArrayDiff:
    identity = diff(old, new, eq)
    return identity.with_modifications(detect_modifications(identity, old, new, signature))


def patch(old: Sequence[T], new: Sequence[T], result: ArrayDiff) -> List[T]:
    if len(old) != result.old_count:
        raise ValueError(f"Diff expects {result.old_count} old items, got {len(old)}")
    if len(new) != result.new_count:
        raise ValueError(f"Diff expects {result.new_count} new items, got {len(new)}")
    removed, inserted = result.merged_with_moves()
    kept = remove_at_indexes(old, removed)
    return insert_at_indexes(kept, elements_at(new, inserted), inserted)


class DiffEngine:
    def __init__(self, eq: Optional[EqualityPredicate] = None,
                 signature: Optional[ContentSignature] = None):
        self.eq = eq
        self.signature = signature

    def diff(self, old: Sequence[T], new: Sequence[T]) -> ArrayDiff:
        if self.signature is None:
            return diff(old, new, self.eq)
        return diff_with_content(old, new, self.eq, self.signature)

    def diff_text(self, original: str, modified: str, token_type: TokenType = TokenType.LINE) -> ArrayDiff:
        tokenize = get_tokenizer(token_type)
        return self.diff(tokenize(original), tokenize(modified))

    def diff_all_against_base(self, base: Sequence[T], targets: List[Sequence[T]]) -> List[ArrayDiff]:
        return [self.diff(base, target) for target in targets]
