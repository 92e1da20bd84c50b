from formatters.base import (
    BaseFormatter, SimpleFormatter, FormatterConfig, FormatterFactory,
    ColorScheme, OutputWriter, OutputTarget, MARKERS
)
from formatters.summary import SummaryFormatter, MappingFormatter
from formatters.plan import PlanFormatter
from formatters.json_formatter import JSONFormatter


__all__ = [
    "BaseFormatter", "SimpleFormatter", "FormatterConfig", "FormatterFactory",
    "ColorScheme", "OutputWriter", "OutputTarget", "MARKERS",
    "SummaryFormatter", "MappingFormatter", "PlanFormatter", "JSONFormatter"
]


def create_formatter(name: str, config: FormatterConfig = None) -> BaseFormatter:
    return FormatterFactory.create(name, config)


def get_available_formatters():
    return FormatterFactory.available()


def format_diff(
    result,
    label1: str,
    label2: str,
    old=None,
    new=None,
    formatter_name: str = "summary",
    config: FormatterConfig = None
) -> str:
    formatter = create_formatter(formatter_name, config)
    return formatter.format(result, label1, label2, old, new)
