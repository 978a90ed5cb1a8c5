# Services package

from ghactivity.services.activity_filter import filter_activity
from ghactivity.services.formatters import (
    MarkdownFormatter,
    PlainTextFormatter,
    format_json,
    get_formatter,
)

__all__ = [
    # Post-fetch filtering
    "filter_activity",
    # Report rendering
    "MarkdownFormatter",
    "PlainTextFormatter",
    "format_json",
    "get_formatter",
]
