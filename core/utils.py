import logging
from decimal import Decimal
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)


def safe_float(value: Optional[Any], default: float = 0.0) -> float:
    """
    Safely convert value to float.

    Form submissions carry GPA and amounts as strings ("3.75", "", "N/A"),
    so anything that does not parse as a finite number becomes `default`.

    Args:
        value: Value to convert (can be Decimal, int, float, str or None).
        default: Default value if conversion fails or value is None.

    Returns:
        Float value.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        return float(value)

    try:
        result = float(value)
    except (ValueError, TypeError):
        return default

    if result != result or result in (float("inf"), float("-inf")):
        return default
    return result


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def normalize_text(value: Optional[Any]) -> str:
    """Lowercase and strip a free-text field; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip().lower()


def as_str_list(value: Optional[Any]) -> List[str]:
    """
    Normalize a list-ish form field into a list of non-empty strings.

    Accepts a list, a comma-separated string, or None.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]
