"""
Text Utilities

Helper functions for cleaning raw spreadsheet cell values.
"""

from typing import Any, List

from .constants import LIST_SEPARATOR


def normalize_text(value: Any) -> str:
    """
    Normalize a raw cell value to a trimmed string.

    Args:
        value: Cell value (None and non-string values are tolerated)

    Returns:
        Trimmed text, or "" for missing values
    """
    if value is None:
        return ""

    # str.strip() also trims non-breaking and other Unicode spaces
    # that locale spreadsheet exports like to leave behind
    return str(value).strip()


def split_list(value: Any, separator: str = LIST_SEPARATOR) -> List[str]:
    """
    Split a multi-value cell into its trimmed, non-empty pieces.

    Args:
        value: Cell value, e.g. "Рожден ден | Кръщене"
        separator: Piece separator (default: pipe)

    Returns:
        List of pieces in their original order
    """
    text = normalize_text(value)
    if not text:
        return []

    return [piece.strip() for piece in text.split(separator) if piece.strip()]
