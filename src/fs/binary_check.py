import os
from typing import BinaryIO, Optional


MAGIC_PREFIXES = (
    b'\x89PNG\r\n\x1a\n',
    b'\xff\xd8\xff',
    b'GIF87a',
    b'GIF89a',
    b'PK\x03\x04',
    b'%PDF',
    b'\x7fELF',
    b'\x1f\x8b',
    b'BZh',
    b'\xfd7zXZ\x00',
    b'\xca\xfe\xba\xbe',
)


BINARY_EXTENSIONS = {
    '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.ico', '.webp',
    '.pdf', '.zip', '.gz', '.bz2', '.xz', '.7z',
    '.exe', '.dll', '.so', '.dylib', '.bin',
    '.pyc', '.class', '.o', '.sqlite', '.db',
}


PROBE_SIZE = 8192
NON_TEXT_THRESHOLD = 0.30
TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))
BOMS = (
    (b'\xef\xbb\xbf', 'utf-8-sig'),
    (b'\xff\xfe', 'utf-16'),
    (b'\xfe\xff', 'utf-16'),
)
FALLBACK_ENCODINGS = ('utf-8', 'cp1252')


class ContentProbe:
    def __init__(self, probe_size: int = PROBE_SIZE, threshold: float = NON_TEXT_THRESHOLD):
        self.probe_size = probe_size
        self.threshold = threshold

    def looks_binary(self, chunk: bytes) -> bool:
        if not chunk:
            return False
        # UTF-16 text is full of NUL bytes
        if chunk.startswith(tuple(bom for bom, _ in BOMS)):
            return False
        if chunk.startswith(MAGIC_PREFIXES) or b'\x00' in chunk:
            return True
        try:
            chunk.decode('utf-8')
            return False
        except UnicodeDecodeError:
            pass
        non_text = len(chunk.translate(None, TEXT_BYTES))
        return non_text / len(chunk) > self.threshold

    def guess_encoding(self, chunk: bytes) -> str:
        for bom, encoding in BOMS:
            if chunk.startswith(bom):
                return encoding
        for encoding in FALLBACK_ENCODINGS:
            try:
                chunk.decode(encoding)
                return encoding
            except UnicodeDecodeError:
                continue
        return 'latin-1'

    def read_head(self, filepath: str) -> bytes:
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")
        if not os.path.isfile(filepath):
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, 'rb') as f:
            return f.read(self.probe_size)

    def check_file(self, filepath: str) -> bool:
        chunk = self.read_head(filepath)
        if not chunk:
            return False
        if os.path.splitext(filepath)[1].lower() in BINARY_EXTENSIONS:
            return True
        return self.looks_binary(chunk)

    def check_stream(self, stream: BinaryIO) -> bool:
        chunk = stream.read(self.probe_size)
        stream.seek(0)
        return self.looks_binary(chunk)


def is_binary_file(filepath: str) -> bool:
    return ContentProbe().check_file(filepath)


def get_file_encoding(filepath: str, default: Optional[str] = None) -> str:
    probe = ContentProbe()
    chunk = probe.read_head(filepath)
    if not chunk and default:
        return default
    return probe.guess_encoding(chunk)
