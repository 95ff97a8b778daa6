"""
Keypad menu classification.

The digit collected by <Gather> is compared as text: only the exact strings
"1" and "2" (surrounding whitespace ignored) select a menu entry.
"""

from enum import Enum
from typing import Optional


class MenuSelection(Enum):
    SUPPORT = "support"
    INSPIRATION = "inspiration"
    INVALID = "invalid"
    ABSENT = "absent"


MENU_DIGITS = {
    "1": MenuSelection.SUPPORT,
    "2": MenuSelection.INSPIRATION,
}


def parse_selection(digits: Optional[str]) -> MenuSelection:
    """
    Map the raw ``Digits`` form value to a menu selection.

    Args:
        digits (Optional[str]): Value posted by Twilio, or None when the field is missing.

    Returns:
        MenuSelection: ABSENT for a missing or blank value, the matching entry for
        "1" or "2", INVALID for anything else ("01", "1a", "#", ...).
    """
    if digits is None:
        return MenuSelection.ABSENT
    value = digits.strip()
    if not value:
        return MenuSelection.ABSENT
    return MENU_DIGITS.get(value, MenuSelection.INVALID)
