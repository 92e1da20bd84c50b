from dataclasses import dataclass
from typing import List, Tuple, Optional, NamedTuple, Sequence, Any

from .array_diff import ArrayDiff, diff, diff_with_content
from .utils import EqualityPredicate, ContentSignature, IndexPath


class Section(NamedTuple):
    name: str
    items: List[Any]


def sections_named_alike(a: Section, b: Section) -> bool:
    return a.name == b.name


def item_at_path(sections: Sequence[Section], path: IndexPath) -> Optional[Any]:
    section, item = path
    if not 0 <= section < len(sections):
        return None
    items = sections[section].items
    if not 0 <= item < len(items):
        return None
    return items[item]


@dataclass(frozen=True)
class NestedDiff:
    sections_diff: ArrayDiff
    item_diffs: Tuple[Optional[ArrayDiff], ...]

    @property
    def is_empty(self) -> bool:
        if not self.sections_diff.is_empty:
            return False
        return all(d is None or d.is_empty for d in self.item_diffs)

    def new_path_for_old_path(self, path: IndexPath) -> Optional[IndexPath]:
        old_section, old_item = path
        new_section = self.sections_diff.new_index_for_old_index(old_section)
        item_diff = self.item_diffs[old_section]
        if new_section is None or item_diff is None:
            return None
        new_item = item_diff.new_index_for_old_index(old_item)
        if new_item is None:
            return None
        return new_section, new_item

    def old_path_for_new_path(self, path: IndexPath) -> Optional[IndexPath]:
        new_section, new_item = path
        old_section = self.sections_diff.old_index_for_new_index(new_section)
        if old_section is None:
            return None
        item_diff = self.item_diffs[old_section]
        if item_diff is None:
            return None
        old_item = item_diff.old_index_for_new_index(new_item)
        if old_item is None:
            return None
        return old_section, old_item


def nested_diff(old_sections: Sequence[Section], new_sections: Sequence[Section],
                section_eq: Optional[EqualityPredicate] = None,
                item_eq: Optional[EqualityPredicate] = None,
                item_signature: Optional[ContentSignature] = None) -> NestedDiff:
    sections_diff = diff(old_sections, new_sections, section_eq or sections_named_alike)
    item_diffs: List[Optional[ArrayDiff]] = []
    for old_index, old_section in enumerate(old_sections):
        new_index = sections_diff.new_index_for_old_index(old_index)
        if new_index is None:
            item_diffs.append(None)
            continue
        new_items = new_sections[new_index].items
        if item_signature is None:
            item_diffs.append(diff(old_section.items, new_items, item_eq))
        else:
            item_diffs.append(diff_with_content(old_section.items, new_items, item_eq, item_signature))
    return NestedDiff(sections_diff, tuple(item_diffs))
