"""Shared validation utilities"""

import re
from typing import Any

# local@domain; the domain may be a bare host name (e.g. intranet mail servers)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*$")


def is_valid_email(email: Any) -> bool:
    """
    Check email format.

    Args:
        email: Candidate address (anything; non-strings are rejected)

    Returns:
        True if the address looks like local@domain
    """
    if not isinstance(email, str) or not email:
        return False

    return EMAIL_PATTERN.fullmatch(email.strip()) is not None
