from typing import List, Optional, NamedTuple
from .binary_check import is_binary_file, get_file_encoding


class LineRecord(NamedTuple):
    key: str
    text: str


class RecordOptions(NamedTuple):
    key_separator: Optional[str] = None
    ignore_case: bool = False
    ignore_whitespace: bool = False


def read_file_lines(filepath: str, encoding: Optional[str] = None) -> List[str]:
    if is_binary_file(filepath):
        raise ValueError(f"Cannot read binary file: {filepath}")
    enc = encoding or get_file_encoding(filepath, default='utf-8')
    with open(filepath, 'r', encoding=enc, errors='replace') as f:
        content = f.read()
    if not content:
        return []
    if content.endswith('\n'):
        content = content[:-1]
    return content.split('\n')


def line_key(line: str, options: RecordOptions) -> str:
    key = line
    if options.key_separator:
        key = key.split(options.key_separator, 1)[0]
    if options.ignore_whitespace:
        key = ''.join(key.split())
    if options.ignore_case:
        key = key.lower()
    return key


def to_records(lines: List[str], options: RecordOptions = RecordOptions()) -> List[LineRecord]:
    return [LineRecord(line_key(line, options), line) for line in lines]


def read_records(filepath: str, options: RecordOptions = RecordOptions()) -> List[LineRecord]:
    return to_records(read_file_lines(filepath), options)


def same_key(a: LineRecord, b: LineRecord) -> bool:
    return a.key == b.key


def record_text(record: LineRecord) -> str:
    return record.text
