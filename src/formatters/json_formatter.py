import json

from algorithms.utils import count_changes
from formatters.base import BaseFormatter, FormatterFactory


class JSONFormatter(BaseFormatter):
    def _format_impl(self, result, label1, label2, old, new):
        data = {
            "old": label1,
            "new": label2,
            "old_count": result.old_count,
            "new_count": result.new_count,
            "is_empty": result.is_empty,
            "common": sorted(result.common_indexes),
            "removed": sorted(result.removed_indexes),
            "inserted": sorted(result.inserted_indexes),
            "moved": [{"old": o, "new": n} for o, n in sorted(result.moved_indexes.items())],
            "modified": [{"old": o, "new": n} for o, n in sorted(result.modified_indexes.items())],
            "mapping": [result.new_index_for_old_index(i) for i in range(result.old_count)],
            "stats": count_changes(result.iter_changes()),
        }
        if self.config.show_values and old is not None and new is not None:
            data["changes"] = [
                {
                    "type": change.kind.value,
                    "old_index": change.old_index,
                    "new_index": change.new_index,
                    "old_value": None if change.old_index is None else str(old[change.old_index]),
                    "new_value": None if change.new_index is None else str(new[change.new_index]),
                }
                for change in self.changes(result)
            ]
        self._write(json.dumps(data, indent=self.config.json_indent, ensure_ascii=False))


FormatterFactory.register("json", JSONFormatter)
