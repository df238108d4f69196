"""SQL literal formatting.

Strings are double-quoted (MySQL default mode). Only double quotes are
escaped; backslashes and control characters pass through unchanged.
"""

__all__ = ["NULL", "escape_value", "quote", "value_literal"]

NULL = "NULL"


def escape_value(value: str) -> str:
    """Escape a field value for use inside a double-quoted literal.

    Examples
    --------
        >>> escape_value('He said "hi"')
        'He said \\\\"hi\\\\"'
    """
    return value.replace('"', '\\"')


def quote(text: str) -> str:
    """Wrap text in double quotes without escaping."""
    return f'"{text}"'


def value_literal(value: str | None) -> str:
    """Render an optional field value as an escaped literal or NULL."""
    if value is None:
        return NULL
    return quote(escape_value(value))
