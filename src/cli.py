#!/usr/bin/env python3
import argparse
import logging
import sys
import os
from typing import Optional, List, TextIO

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

log = logging.getLogger(__name__)


class ANSIColors:
    RESET = '\033[0m'
    RED = '\033[31m'

    @classmethod
    def disable(cls):
        cls.RESET = ''
        cls.RED = ''


class ColorPrinter:
    def __init__(self, use_color: bool = True, output: Optional[TextIO] = None):
        self.use_color = use_color
        self.output = output or sys.stdout
        if not use_color:
            ANSIColors.disable()

    def print(self, text: str, end: str = '\n'):
        self.output.write(text + end)

    def print_error(self, text: str):
        sys.stderr.write(f"{ANSIColors.RED}Error: {text}{ANSIColors.RESET}\n")


class CLIApplication:
    def __init__(self):
        self.parser = self._create_parser()
        self.printer: Optional[ColorPrinter] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='array-diff',
            description='Compare two files as ordered lists of lines: kept, removed, inserted, moved and modified',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
Examples:
  %(prog)s old.txt new.txt
  %(prog)s --mapping old.txt new.txt
  %(prog)s --plan old.txt new.txt
  %(prog)s -k '=' -M old.cfg new.cfg
  %(prog)s --json -o diff.json old.txt new.txt
            '''
        )
        parser.add_argument('file1', help='Old version')
        parser.add_argument('file2', help='New version')
        format_group = parser.add_mutually_exclusive_group()
        format_group.add_argument(
            '--summary',
            action='store_true',
            default=True,
            help='Output grouped change summary (default)'
        )
        format_group.add_argument(
            '-s', '--simple',
            action='store_true',
            help='Output one line per change'
        )
        format_group.add_argument(
            '-m', '--mapping',
            action='store_true',
            help='Output old -> new index mapping table'
        )
        format_group.add_argument(
            '-p', '--plan',
            action='store_true',
            help='Output batch update steps in safe order'
        )
        format_group.add_argument(
            '--json',
            action='store_true',
            help='Output JSON'
        )
        parser.add_argument(
            '-a', '--show-unchanged',
            action='store_true',
            help='Also list kept lines'
        )
        parser.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Report only whether files differ'
        )
        parser.add_argument(
            '--no-color',
            action='store_true',
            help='Disable colored output'
        )
        parser.add_argument(
            '-o', '--output',
            type=str,
            metavar='FILE',
            help='Write output to file'
        )
        parser.add_argument(
            '--ignore-whitespace',
            action='store_true',
            help='Ignore whitespace when matching lines'
        )
        parser.add_argument(
            '--ignore-case',
            action='store_true',
            help='Ignore case when matching lines'
        )
        parser.add_argument(
            '-k', '--key-separator',
            type=str,
            metavar='SEP',
            help='Match lines on the text before SEP only'
        )
        parser.add_argument(
            '-M', '--detect-modified',
            action='store_true',
            help='Report matched lines whose full text changed as modified'
        )
        parser.add_argument(
            '--debug',
            action='store_true',
            help='Log index arithmetic to stderr'
        )
        parser.add_argument(
            '-v', '--version',
            action='version',
            version='%(prog)s 1.0.0'
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        if args.debug:
            logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                                format='%(levelname)s %(name)s: %(message)s')
        use_color = not args.no_color and not args.output and sys.stdout.isatty()
        output_file = None
        self.printer = ColorPrinter(use_color=use_color)
        try:
            if args.output:
                output_file = open(args.output, 'w', encoding='utf-8')
                self.printer = ColorPrinter(use_color=False, output=output_file)
            result = self._execute(args, use_color)
        except KeyboardInterrupt:
            self.printer.print_error("Interrupted")
            result = 130
        except Exception as e:
            log.debug("Unhandled error", exc_info=True)
            self.printer.print_error(str(e))
            result = 2
        finally:
            if output_file is not None:
                output_file.close()
        return result

    def _execute(self, args, use_color: bool) -> int:
        for path in (args.file1, args.file2):
            if not os.path.exists(path):
                self.printer.print_error(f"File not found: {path}")
                return 2
            if os.path.isdir(path):
                self.printer.print_error(f"Is a directory: {path}")
                return 2
        return self._compare_files(args, args.file1, args.file2, use_color)

    def _compare_files(self, args, file1: str, file2: str, use_color: bool) -> int:
        from fs.binary_check import is_binary_file
        from fs.reader import read_file_lines, to_records, RecordOptions, same_key, record_text
        from algorithms.array_diff import DiffEngine
        from formatters import create_formatter, FormatterConfig
        for path in (file1, file2):
            if is_binary_file(path):
                self.printer.print_error(f"Binary file: {path}")
                return 2
        try:
            lines1 = read_file_lines(file1)
            lines2 = read_file_lines(file2)
        except (OSError, ValueError) as e:
            self.printer.print_error(f"Error reading files: {e}")
            return 2
        options = RecordOptions(
            key_separator=args.key_separator,
            ignore_case=args.ignore_case,
            ignore_whitespace=args.ignore_whitespace
        )
        engine = DiffEngine(eq=same_key, signature=record_text if args.detect_modified else None)
        result = engine.diff(to_records(lines1, options), to_records(lines2, options))
        log.debug("Compared %d old lines with %d new lines: %r", len(lines1), len(lines2), result)
        if args.quiet:
            if not result.is_empty:
                self.printer.print(f"Files {file1} and {file2} differ")
            return 0 if result.is_empty else 1
        if result.is_empty and not args.show_unchanged:
            return 0
        config = FormatterConfig(use_color=use_color, show_unchanged=args.show_unchanged)
        formatter = create_formatter(self._formatter_name(args), config)
        self.printer.print(formatter.format(result, file1, file2, lines1, lines2).rstrip('\n'))
        return 0 if result.is_empty else 1

    def _formatter_name(self, args) -> str:
        if args.simple:
            return 'simple'
        if args.mapping:
            return 'mapping'
        if args.plan:
            return 'plan'
        if args.json:
            return 'json'
        return 'summary'


def main(argv: Optional[List[str]] = None) -> int:
    app = CLIApplication()
    return app.run(argv)


if __name__ == '__main__':
    sys.exit(main())
