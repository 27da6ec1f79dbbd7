import html
from typing import Any, Optional


def sanitize_string(value: Any) -> Optional[str]:
    """
    Escape HTML special characters so payload values can be interpolated into templates.
    Returns None if input is None.
    """
    if value is None:
        return None
    return html.escape(str(value), quote=True)


def sanitize_fields(data: dict[str, Any], fields: list[str]) -> dict[str, Any]:
    """
    Return a copy of data with the named string fields escaped.

    Args:
        data: Event payload
        fields: Field names to escape; others are copied unchanged

    Returns:
        New dictionary with sanitized values
    """
    sanitized = dict(data)
    for key in fields:
        if key in sanitized:
            sanitized[key] = sanitize_string(sanitized[key])
    return sanitized
