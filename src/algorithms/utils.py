from typing import TypeVar, List, Tuple, NamedTuple, Optional, Callable, Iterable, Sequence, FrozenSet, Any, Hashable
from enum import Enum

T = TypeVar('T')

EqualityPredicate = Callable[[Any, Any], bool]
ContentSignature = Callable[[Any], Hashable]
IndexPath = Tuple[int, int]


class ChangeType(str, Enum):
    KEPT = 'kept'
    REMOVED = 'removed'
    INSERTED = 'inserted'
    MOVED = 'moved'
    MODIFIED = 'modified'


class Alignment(NamedTuple):
    common: FrozenSet[int]
    removed: FrozenSet[int]
    inserted: FrozenSet[int]


class Change(NamedTuple):
    kind: ChangeType
    old_index: Optional[int]
    new_index: Optional[int]

    def __repr__(self) -> str:
        return f"Change({self.kind.value!r}, {self.old_index!r}, {self.new_index!r})"


def default_equal(a: Any, b: Any) -> bool:
    return a == b


def resolve_equal(eq: Optional[EqualityPredicate]) -> EqualityPredicate:
    return eq if eq is not None else default_equal


def count_in_range(indexes: Iterable[int], start: int, stop: int) -> int:
    return sum(1 for i in indexes if start <= i < stop)


def elements_at(seq: Sequence[T], indexes: Iterable[int]) -> List[T]:
    return [seq[i] for i in sorted(indexes)]


def remove_at_indexes(seq: Sequence[T], indexes: Iterable[int]) -> List[T]:
    doomed = set(indexes)
    for i in doomed:
        if i < 0 or i >= len(seq):
            raise ValueError(f"Cannot remove index {i} from sequence of length {len(seq)}")
    return [item for i, item in enumerate(seq) if i not in doomed]


def insert_at_indexes(seq: Sequence[T], elements: Sequence[T], indexes: Iterable[int]) -> List[T]:
    targets = sorted(indexes)
    if len(targets) != len(elements):
        raise ValueError(f"Got {len(elements)} elements for {len(targets)} indexes")
    result = list(seq)
    for index, item in zip(targets, elements):
        if index > len(result):
            raise ValueError(f"Insert index {index} beyond end of sequence of length {len(result)}")
        result.insert(index, item)
    return result


def index_paths(indexes: Iterable[int], section: int, ascending: bool = True) -> List[IndexPath]:
    ordered = sorted(indexes, reverse=not ascending)
    return [(section, i) for i in ordered]


def changes_to_tuples(changes: Iterable[Change]) -> List[Tuple[str, Optional[int], Optional[int]]]:
    return [(c.kind.value, c.old_index, c.new_index) for c in changes]


def count_changes(changes: Iterable[Change]) -> dict:
    counts = {kind.value: 0 for kind in ChangeType}
    total = 0
    for change in changes:
        counts[change.kind.value] += 1
        total += 1
    counts['total'] = total
    return counts


def tokenize_lines(text: str) -> List[str]:
    if not text:
        return []
    return text.split('\n')


def tokenize_words(text: str) -> List[str]:
    return text.split()


def tokenize_chars(text: str) -> List[str]:
    return list(text)


class TokenType(str, Enum):
    LINE = 'line'
    WORD = 'word'
    CHAR = 'char'


def get_tokenizer(token_type: TokenType) -> Callable[[str], List[str]]:
    tokenizers = {
        TokenType.LINE: tokenize_lines,
        TokenType.WORD: tokenize_words,
        TokenType.CHAR: tokenize_chars
    }
    return tokenizers[token_type]
