from abc import ABC, abstractmethod
from typing import List, TextIO, Optional, Any, Dict, Sequence
from enum import Enum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.array_diff import ArrayDiff
from algorithms.utils import ChangeType, Change


class OutputTarget(Enum):
    STDOUT = "stdout"
    FILE = "file"
    STRING = "string"


class FormatterConfig:
    def __init__(
        self,
        use_color: bool = True,
        show_values: bool = True,
        show_unchanged: bool = False,
        value_width: int = 60,
        json_indent: int = 2
    ):
        self.use_color = use_color
        self.show_values = show_values
        self.show_unchanged = show_unchanged
        self.value_width = value_width
        self.json_indent = json_indent

    def copy(self) -> 'FormatterConfig':
        return FormatterConfig(
            use_color=self.use_color,
            show_values=self.show_values,
            show_unchanged=self.show_unchanged,
            value_width=self.value_width,
            json_indent=self.json_indent
        )

    def with_color(self, use_color: bool) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.use_color = use_color
        return cfg

    def with_unchanged(self, show_unchanged: bool) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.show_unchanged = show_unchanged
        return cfg


class ColorScheme:
    CODES = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[31m',
        'green': '\033[32m',
        'yellow': '\033[33m',
        'magenta': '\033[35m',
        'cyan': '\033[36m',
    }

    def __init__(self):
        for name, code in self.CODES.items():
            setattr(self, name, code)

    def disable_colors(self):
        for name in self.CODES:
            setattr(self, name, '')

    def for_change(self, kind: ChangeType) -> str:
        return {
            ChangeType.REMOVED: self.red,
            ChangeType.INSERTED: self.green,
            ChangeType.MOVED: self.yellow,
            ChangeType.MODIFIED: self.magenta,
        }.get(kind, '')

    @classmethod
    def no_color(cls) -> 'ColorScheme':
        scheme = cls()
        scheme.disable_colors()
        return scheme


class OutputWriter:
    def __init__(self, target: OutputTarget = OutputTarget.STDOUT, output: Optional[TextIO] = None):
        self.target = target
        self._output = output or sys.stdout
        self._buffer: List[str] = []

    def write(self, text: str):
        if self.target == OutputTarget.STRING:
            self._buffer.append(text)
        else:
            self._output.write(text)

    def writeln(self, text: str = ""):
        self.write(text + "\n")

    def get_output(self) -> str:
        return "".join(self._buffer)


MARKERS = {
    ChangeType.KEPT: ' ',
    ChangeType.REMOVED: '-',
    ChangeType.INSERTED: '+',
    ChangeType.MOVED: '>',
    ChangeType.MODIFIED: '~',
}


class BaseFormatter(ABC):
    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme() if self.config.use_color else ColorScheme.no_color()
        self.writer: Optional[OutputWriter] = None

    def format(
        self,
        result: ArrayDiff,
        label1: str,
        label2: str,
        old: Optional[Sequence[Any]] = None,
        new: Optional[Sequence[Any]] = None,
        output: Optional[TextIO] = None
    ) -> str:
        if output is None:
            self.writer = OutputWriter(OutputTarget.STRING)
        else:
            self.writer = OutputWriter(OutputTarget.FILE, output)
        self._format_impl(result, label1, label2, old, new)
        if output is None:
            return self.writer.get_output()
        return ""

    @abstractmethod
    def _format_impl(
        self,
        result: ArrayDiff,
        label1: str,
        label2: str,
        old: Optional[Sequence[Any]],
        new: Optional[Sequence[Any]]
    ):
        pass

    def changes(self, result: ArrayDiff) -> List[Change]:
        return list(result.iter_changes(include_kept=self.config.show_unchanged))

    def value_of(self, seq: Optional[Sequence[Any]], index: Optional[int]) -> str:
        if seq is None or index is None or not self.config.show_values:
            return ""
        text = str(seq[index])
        width = self.config.value_width
        if width > 3 and len(text) > width:
            return text[:width - 3] + "..."
        return text

    def _write(self, text: str):
        if self.writer:
            self.writer.write(text)

    def _writeln(self, text: str = ""):
        if self.writer:
            self.writer.writeln(text)


def describe_position(change: Change) -> str:
    if change.old_index is None:
        return f"[{change.new_index}]"
    if change.new_index is None:
        return f"[{change.old_index}]"
    return f"[{change.old_index}->{change.new_index}]"


class SimpleFormatter(BaseFormatter):
    def _format_impl(self, result, label1, label2, old, new):
        for change in self.changes(result):
            if change.kind == ChangeType.INSERTED:
                value = self.value_of(new, change.new_index)
            else:
                value = self.value_of(old, change.old_index)
            line = f"{MARKERS[change.kind]}{describe_position(change)}"
            if value:
                line += f" {value}"
            color = self.colors.for_change(change.kind)
            if color:
                line = f"{color}{line}{self.colors.reset}"
            self._writeln(line)


class FormatterFactory:
    _formatters: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, formatter_class: type):
        cls._formatters[name] = formatter_class

    @classmethod
    def create(cls, name: str, config: Optional[FormatterConfig] = None) -> BaseFormatter:
        if name not in cls._formatters:
            raise ValueError(f"Unknown formatter: {name}")
        return cls._formatters[name](config)

    @classmethod
    def available(cls) -> List[str]:
        return list(cls._formatters.keys())


FormatterFactory.register("simple", SimpleFormatter)
