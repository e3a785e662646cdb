"""Query-string pagination helpers."""

from typing import Any

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE


def clamp_int(value: Any, fallback: int, minimum: int, maximum: int) -> int:
    """
    Parse ``value`` as an int and clamp it into [minimum, maximum].

    Unparseable or missing values yield ``fallback`` (unclamped).
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return fallback
    return min(max(number, minimum), maximum)


def clamp_page(value: Any) -> int:
    return clamp_int(value, DEFAULT_PAGE, 1, MAX_PAGE)


def clamp_page_size(value: Any) -> int:
    return clamp_int(value, DEFAULT_PAGE_SIZE, 1, MAX_PAGE_SIZE)
