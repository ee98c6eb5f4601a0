"""
Final check character of an RFC, computed over the 12-character prefix.
"""

from __future__ import annotations

from typing import Dict

# Ordinal of each character. 24 belongs to '&'; 'Ñ' has no entry.
CHECK_DIGIT_VALUES: Dict[str, int] = {
    **{str(i): i for i in range(10)},
    **{ch: 10 + i for i, ch in enumerate("ABCDEFGHIJKLMN")},
    "&": 24,
    **{ch: 25 + i for i, ch in enumerate("OPQRSTUVWXYZ")},
    " ": 37,
}

# sum mod 11 -> check character, as published.
CHECK_DIGIT_BY_REMAINDER: Dict[int, str] = {
    0: "0",
    1: "A",
    2: "9",
    3: "8",
    4: "7",
    5: "6",
    6: "5",
    7: "4",
    8: "3",
    9: "2",
    10: "1",
}

PREFIX_LENGTH = 12


def check_digit(prefix: str) -> str:
    """
    Check character for letters + date + homoclave.

    Weights run 13 down to 2. A short prefix is padded with spaces, and
    characters outside the table count as 0.
    """
    padded = prefix[:PREFIX_LENGTH].ljust(PREFIX_LENGTH)
    total = sum(CHECK_DIGIT_VALUES.get(ch, 0) * (13 - i) for i, ch in enumerate(padded))
    return CHECK_DIGIT_BY_REMAINDER[total % 11]
