import subprocess
import sys
import os
import json
import tempfile
import shutil
import time
from typing import Tuple

CLI_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__)))), 'src', 'cli.py')
PYTHON = sys.executable


def run_cli(*args, timeout: int = 30) -> Tuple[int, str, str]:
    try:
        r = subprocess.run([PYTHON, CLI_PATH] + list(args),
                           capture_output=True, text=True, timeout=timeout)
        return r.returncode, r.stdout, r.stderr
    except subprocess.TimeoutExpired:
        return -1, '', 'Timeout'


class TempFileManager:
    def __init__(self):
        self.temp_dir = tempfile.mkdtemp()

    def create_file(self, name: str, content: str) -> str:
        path = os.path.join(self.temp_dir, name)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        return path

    def create_binary(self, name: str, content: bytes) -> str:
        path = os.path.join(self.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(content)
        return path

    def cleanup(self):
        shutil.rmtree(self.temp_dir)


class TestCLIBasic:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_version_flag(self):
        code, out, err = run_cli('--version')
        assert code == 0 and '1.0.0' in out + err

    def test_version_short(self):
        assert run_cli('-v')[0] == 0

    def test_help_flag(self):
        code, out, _ = run_cli('--help')
        assert code == 0 and 'usage' in out.lower()

    def test_help_shows_options(self):
        _, out, _ = run_cli('--help')
        assert '--mapping' in out and '--plan' in out and '--detect-modified' in out

    def test_missing_file_error(self):
        f = self.temp.create_file('exists.txt', 'x')
        assert run_cli('nonexistent.txt', f)[0] == 2
        assert run_cli(f, 'nonexistent.txt')[0] == 2

    def test_missing_both_files(self):
        code, _, err = run_cli('a.txt', 'b.txt')
        assert code == 2 and 'not found' in err.lower()

    def test_directory_argument(self):
        f = self.temp.create_file('a.txt', 'x')
        code, _, err = run_cli(self.temp.temp_dir, f)
        assert code == 2 and 'directory' in err.lower()

    def test_conflicting_formats(self):
        f = self.temp.create_file('a.txt', 'x')
        assert run_cli('--json', '--plan', f, f)[0] == 2


class TestCLICompare:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_identical_files(self):
        c = "line1\nline2\n"
        f1, f2 = self.temp.create_file('a.txt', c), self.temp.create_file('b.txt', c)
        code, out, _ = run_cli(f1, f2)
        assert code == 0 and out == ''

    def test_identical_empty(self):
        f1, f2 = self.temp.create_file('a.txt', ''), self.temp.create_file('b.txt', '')
        assert run_cli(f1, f2)[0] == 0

    def test_different_files(self):
        f1 = self.temp.create_file('a.txt', 'hello\nworld\n')
        f2 = self.temp.create_file('b.txt', 'hello\nplanet\n')
        code, out, _ = run_cli(f1, f2)
        assert code == 1
        assert 'Removed:' in out and '-[1] world' in out
        assert 'Inserted:' in out and '+[1] planet' in out

    def test_moved_line(self):
        f1 = self.temp.create_file('a.txt', 'a\nb\nc\n')
        f2 = self.temp.create_file('b.txt', 'c\na\nb\n')
        code, out, _ = run_cli('--simple', f1, f2)
        assert code == 1
        assert out.splitlines() == ['>[2->0] c']

    def test_empty_vs_nonempty(self):
        f1 = self.temp.create_file('a.txt', '')
        f2 = self.temp.create_file('b.txt', 'x\ny\n')
        code, out, _ = run_cli('-s', f1, f2)
        assert code == 1
        assert out.splitlines() == ['+[0] x', '+[1] y']

    def test_show_unchanged_identical(self):
        c = "same\n"
        f1, f2 = self.temp.create_file('a.txt', c), self.temp.create_file('b.txt', c)
        code, out, _ = run_cli('-a', f1, f2)
        assert code == 0 and 'Kept:' in out


class TestCLIFormats:
    def setup_method(self):
        self.temp = TempFileManager()
        self.f1 = self.temp.create_file('a.txt', 'a\nb\nc\nd\ne\n')
        self.f2 = self.temp.create_file('b.txt', 'm\nc\nb\nf\na\n')

    def teardown_method(self):
        self.temp.cleanup()

    def test_quiet_mode(self):
        code, out, _ = run_cli('--quiet', self.f1, self.f2)
        assert code == 1 and 'differ' in out

    def test_quiet_identical(self):
        code, out, _ = run_cli('-q', self.f1, self.f1)
        assert code == 0 and out == ''

    def test_mapping_format(self):
        code, out, _ = run_cli('--mapping', self.f1, self.f2)
        assert code == 1
        rows = [line.split() for line in out.splitlines()[1:]]
        assert rows[0] == ['0', '4', 'moved', 'a']
        assert rows[3] == ['3', '-', 'removed', 'd']

    def test_plan_format(self):
        code, out, _ = run_cli('-p', self.f1, self.f2)
        assert code == 1
        lines = out.splitlines()
        assert lines[0].endswith('6 steps')
        assert lines[1] == '1. delete 4 e'

    def test_json_format(self):
        code, out, _ = run_cli('--json', self.f1, self.f2)
        assert code == 1
        data = json.loads(out)
        assert data['mapping'] == [4, 2, 1, None, None]
        assert data['moved'] == [{'old': 0, 'new': 4}, {'old': 1, 'new': 2}]
        assert data['changes'][0]['old_value'] == 'd'

    def test_no_color_output(self):
        _, out, _ = run_cli('--no-color', self.f1, self.f2)
        assert '\033[' not in out


class TestCLIOutput:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_output_to_file(self):
        f1 = self.temp.create_file('a.txt', 'a\n')
        f2 = self.temp.create_file('b.txt', 'b\n')
        target = os.path.join(self.temp.temp_dir, 'out.txt')
        code, out, _ = run_cli('-o', target, f1, f2)
        assert code == 1 and out == ''
        with open(target, encoding='utf-8') as f:
            written = f.read()
        assert '-[0] a' in written and '\033[' not in written

    def test_unwritable_output_path(self):
        f1 = self.temp.create_file('a.txt', 'a\n')
        f2 = self.temp.create_file('b.txt', 'b\n')
        target = os.path.join(self.temp.temp_dir, 'missing-dir', 'out.txt')
        code, out, err = run_cli('-o', target, f1, f2)
        assert code == 2
        assert 'Error:' in err and 'Traceback' not in err
        assert not os.path.exists(target)

    def test_json_to_file(self):
        f1 = self.temp.create_file('a.txt', 'a\n')
        f2 = self.temp.create_file('b.txt', 'a\nb\n')
        target = os.path.join(self.temp.temp_dir, 'out.json')
        assert run_cli('--json', '--output', target, f1, f2)[0] == 1
        with open(target, encoding='utf-8') as f:
            assert json.load(f)['inserted'] == [1]

    def test_debug_logs_to_stderr(self):
        f1 = self.temp.create_file('a.txt', 'a\nb\nc\n')
        f2 = self.temp.create_file('b.txt', 'x\na\nc\n')
        code, out, err = run_cli('--debug', '--mapping', f1, f2)
        assert code == 1
        assert 'DEBUG' in err and 'old -> new' in err
        assert 'DEBUG' not in out


class TestCLISpecial:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_binary_file_error(self):
        f1 = self.temp.create_binary('a.dat', b'\x00\x01\x02\x03')
        f2 = self.temp.create_file('b.txt', 'text\n')
        code, _, err = run_cli(f1, f2)
        assert code == 2 and 'Binary file' in err

    def test_unicode_files(self):
        f1 = self.temp.create_file('a.txt', 'café\n☃\n')
        f2 = self.temp.create_file('b.txt', 'café\n☃\n')
        assert run_cli(f1, f2)[0] == 0

    def test_ignore_whitespace(self):
        f1 = self.temp.create_file('a.txt', 'a b\n')
        f2 = self.temp.create_file('b.txt', 'a   b\n')
        assert run_cli(f1, f2)[0] == 1
        assert run_cli('--ignore-whitespace', f1, f2)[0] == 0

    def test_ignore_case(self):
        f1 = self.temp.create_file('a.txt', 'Hello\n')
        f2 = self.temp.create_file('b.txt', 'hello\n')
        assert run_cli(f1, f2)[0] == 1
        assert run_cli('--ignore-case', f1, f2)[0] == 0

    def test_key_separator_with_modified(self):
        f1 = self.temp.create_file('a.cfg', 'host = a\nport = 1\n')
        f2 = self.temp.create_file('b.cfg', 'host = b\nport = 1\n')
        code, out, _ = run_cli('-k', '=', '-M', f1, f2)
        assert code == 1
        assert 'Modified:' in out and '~[0] host = a -> [0] host = b' in out

    def test_key_separator_without_modified(self):
        f1 = self.temp.create_file('a.cfg', 'host = a\n')
        f2 = self.temp.create_file('b.cfg', 'host = b\n')
        assert run_cli('-k', '=', f1, f2)[0] == 0


class TestCLIPerformance:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_medium_files_fast(self):
        lines = [f"line {i}" for i in range(400)]
        shuffled = lines[200:] + lines[:200]
        f1 = self.temp.create_file('a.txt', '\n'.join(lines))
        f2 = self.temp.create_file('b.txt', '\n'.join(shuffled))
        start = time.time()
        code, out, _ = run_cli('--json', f1, f2)
        assert code == 1
        assert time.time() - start < 20
        assert len(json.loads(out)['moved']) == 200


class TestCLIEdgeCases:
    def setup_method(self):
        self.temp = TempFileManager()

    def teardown_method(self):
        self.temp.cleanup()

    def test_single_newline(self):
        f1 = self.temp.create_file('a.txt', '\n')
        f2 = self.temp.create_file('b.txt', '\n')
        assert run_cli(f1, f2)[0] == 0

    def test_no_trailing_newline(self):
        f1 = self.temp.create_file('a.txt', 'a\nb')
        f2 = self.temp.create_file('b.txt', 'a\nb\n')
        assert run_cli(f1, f2)[0] == 0

    def test_duplicate_lines(self):
        f1 = self.temp.create_file('a.txt', 'x\ny\nx\n')
        f2 = self.temp.create_file('b.txt', 'y\nx\nx\n')
        code, out, _ = run_cli('-s', f1, f2)
        assert code == 1
        assert out.splitlines() == ['>[0->2] x']
