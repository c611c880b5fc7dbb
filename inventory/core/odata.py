"""
Helpers for building Microsoft Graph ``$filter`` expressions.

User input only ever reaches a filter through ``sanitize_for_filter``.
"""
import re

MAX_FILTER_VALUE_LENGTH = 256

_CONTROL_CHARS_RE = re.compile(r"[\r\n\t\0]")
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
_QUOTE_RUN_RE = re.compile(r"'+")
_INJECTION_RE = re.compile(r"(\s+(or|and|eq|ne|gt|ge|lt|le|not)\s+)|['\"\\]", re.IGNORECASE)


def _escape_quote_run(match: re.Match) -> str:
    run = match.group(0)
    # An even run is already a sequence of escaped pairs
    return run + "'" if len(run) % 2 else run


def _trailing_quote_run(value: str) -> int:
    return len(value) - len(value.rstrip("'"))


def sanitize_for_filter(value: str | None) -> str:
    if value is None or not value.strip():
        return ""

    cleaned = _CONTROL_CHARS_RE.sub("", value).strip()
    cleaned = _WHITESPACE_RUN_RE.sub(" ", cleaned)
    cleaned = _QUOTE_RUN_RE.sub(_escape_quote_run, cleaned)

    if len(cleaned) > MAX_FILTER_VALUE_LENGTH:
        cleaned = cleaned[:MAX_FILTER_VALUE_LENGTH]
        # Never end on half of an escaped pair
        if _trailing_quote_run(cleaned) % 2:
            cleaned = cleaned[:-1]
        cleaned = cleaned.rstrip()

    return cleaned


def is_valid_filter_value(value: str | None) -> bool:
    """False when the value looks like an attempt to extend the filter expression."""
    if value is None or not value.strip():
        return True
    if _INJECTION_RE.search(value):
        return False
    return value.count("'") % 2 == 0


def create_equality_filter(field_name: str, value: str | None) -> str:
    return f"{field_name} eq '{sanitize_for_filter(value)}'"


def create_starts_with_filter(field_name: str, value: str | None) -> str:
    return f"startswith({field_name}, '{sanitize_for_filter(value)}')"
