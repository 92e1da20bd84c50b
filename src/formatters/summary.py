from typing import List

from algorithms.array_diff import ArrayDiff
from algorithms.utils import ChangeType, count_changes
from formatters.base import BaseFormatter, FormatterFactory, MARKERS


SECTION_TITLES = [
    (ChangeType.REMOVED, "Removed"),
    (ChangeType.INSERTED, "Inserted"),
    (ChangeType.MOVED, "Moved"),
    (ChangeType.MODIFIED, "Modified"),
    (ChangeType.KEPT, "Kept"),
]


class SummaryFormatter(BaseFormatter):
    def _format_impl(self, result, label1, label2, old, new):
        c = self.colors
        self._writeln(f"{c.bold}--- {label1} ({result.old_count} items){c.reset}")
        self._writeln(f"{c.bold}+++ {label2} ({result.new_count} items){c.reset}")
        counts = count_changes(result.iter_changes())
        stats = ", ".join(f"{kind.value} {counts[kind.value]}" for kind, _ in SECTION_TITLES[:4])
        self._writeln(f"{c.cyan}@@ kept {len(result.common_indexes)}, {stats} @@{c.reset}")
        changes = self.changes(result)
        for kind, title in SECTION_TITLES:
            group = [ch for ch in changes if ch.kind == kind]
            if not group:
                continue
            self._writeln(f"{title}:")
            color = c.for_change(kind)
            for change in group:
                self._writeln(f"  {color}{self._describe(change, old, new)}{c.reset}")

    def _describe(self, change, old, new) -> str:
        marker = MARKERS[change.kind]
        if change.kind == ChangeType.REMOVED:
            return self._join(f"{marker}[{change.old_index}]", self.value_of(old, change.old_index))
        if change.kind == ChangeType.INSERTED:
            return self._join(f"{marker}[{change.new_index}]", self.value_of(new, change.new_index))
        text = self._join(f"{marker}[{change.old_index}]", self.value_of(old, change.old_index))
        target = f"-> [{change.new_index}]"
        if change.kind == ChangeType.MODIFIED:
            target = self._join(target, self.value_of(new, change.new_index))
        return f"{text} {target}"

    @staticmethod
    def _join(prefix: str, value: str) -> str:
        return f"{prefix} {value}" if value else prefix


class MappingFormatter(BaseFormatter):
    def _format_impl(self, result, label1, label2, old, new):
        width = max(3, len(str(max(result.old_count, result.new_count))))
        self._writeln(f"{'old':>{width}} {'new':>{width}}  {'change':<9} {label1} -> {label2}")
        for row in self._rows(result):
            old_index, new_index, kind = row
            old_text = '-' if old_index is None else str(old_index)
            new_text = '-' if new_index is None else str(new_index)
            value = self.value_of(new, new_index) if old_index is None else self.value_of(old, old_index)
            color = self.colors.for_change(kind)
            line = f"{old_text:>{width}} {new_text:>{width}}  {kind.value:<9} {value}".rstrip()
            if color:
                line = f"{color}{line}{self.colors.reset}"
            self._writeln(line)

    def _rows(self, result: ArrayDiff) -> List[tuple]:
        rows = []
        for old_index in range(result.old_count):
            new_index = result.new_index_for_old_index(old_index)
            if new_index is None:
                kind = ChangeType.REMOVED
            elif old_index in result.moved_indexes:
                kind = ChangeType.MOVED
            elif old_index in result.modified_indexes:
                kind = ChangeType.MODIFIED
            else:
                kind = ChangeType.KEPT
            rows.append((old_index, new_index, kind))
        for new_index in sorted(result.inserted_indexes):
            rows.append((None, new_index, ChangeType.INSERTED))
        return rows


FormatterFactory.register("summary", SummaryFormatter)
FormatterFactory.register("mapping", MappingFormatter)
