"""
Register file definitions.

The machine has 26 sixteen-bit registers named by the letters a-z
(case-insensitive). Register ``a`` is index 0, ``z`` is index 25.
"""

from typing import Optional

REGISTER_COUNT = 26
MAX_VALUE = 0xFFFF


def letter_to_index(letter: str) -> Optional[int]:
    """
    Map a register letter to its index.

    Args:
        letter: Register name (only the first character is examined)

    Returns:
        Alphabet position 0-25, or None if it is not an ASCII letter
    """
    if not letter:
        return None
    ch = letter[0]
    if "a" <= ch <= "z":
        return ord(ch) - ord("a")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A")
    return None


def index_to_letter(num: int) -> str:
    """Get the lowercase letter naming register ``num``."""
    if not is_valid_register(num):
        raise ValueError(f"Invalid register number: {num}")
    return chr(ord("a") + num)


def is_valid_register(num: int) -> bool:
    """Check if a number addresses one of the 26 registers."""
    return 0 <= num < REGISTER_COUNT
