"""
Operand resolution.

An operand token becomes an unsigned 16-bit number. Resolution order:

1. Binary literal: starts with ``b``/``B`` and has a digit directly after a
   ``b`` marker somewhere in the token (``b101`` -> 5).
2. Decimal literal: ``0`` - ``65535``.
3. Register letter: the first character's alphabet position (``c`` -> 2).
   Anything else resolves to 0 unless strict resolution is requested.
"""

from typing import Optional, Tuple

from .errors import ParseError
from .registers import MAX_VALUE, letter_to_index


def has_binary_marker(token: str) -> bool:
    """
    Check whether a ``b``/``B`` in the token is directly followed by a digit.

    A non-digit after a marker resets the scan, so ``bx1`` has no marker
    while ``bxb1`` does.
    """
    found_b = False
    for ch in token:
        if found_b:
            if ch.isascii() and ch.isdigit():
                return True
            found_b = False
        if ch in ("b", "B"):
            found_b = True
    return False


def parse_decimal(token: str) -> Optional[int]:
    """Parse a plain unsigned 16-bit decimal (one leading + allowed), or return None."""
    if token.startswith("+"):
        token = token[1:]
    if not token or not (token.isascii() and token.isdigit()):
        return None
    value = int(token, 10)
    if value > MAX_VALUE:
        return None
    return value


def parse_binary(token: str, line_num: int = None, line_text: str = None) -> int:
    """
    Parse a ``b``-prefixed binary literal.

    Raises:
        ParseError: If the digits after the marker are not base 2 or the
            value does not fit in 16 bits
    """
    digits = token[1:]
    if not digits or set(digits) - {"0", "1"}:
        raise ParseError(f"Not a valid binary number: {token}", line_num, line_text)
    value = int(digits, 2)
    if value > MAX_VALUE:
        raise ParseError(
            f"Binary number {token} does not fit in 16 bits", line_num, line_text
        )
    return value


def resolve_register(
    token: str, line_num: int = None, line_text: str = None, strict: bool = False
) -> int:
    """
    Resolve a token's first character as a register letter.

    Unrecognised characters resolve to register 0; with ``strict`` they are
    rejected instead.
    """
    index = letter_to_index(token)
    if index is None:
        if strict:
            raise ParseError(f"Cannot resolve operand: {token}", line_num, line_text)
        return 0
    return index


def resolve_operand(
    token: str, line_num: int = None, line_text: str = None, strict: bool = False
) -> int:
    """
    Resolve an operand token to a 16-bit value.

    Args:
        token: Operand token as produced by the lexer
        line_num: Source line (0-based) for error reporting
        line_text: Original line text for error reporting
        strict: Reject tokens that are neither numbers nor register letters

    Returns:
        Integer value 0-65535
    """
    if token[:1] in ("b", "B") and has_binary_marker(token):
        return parse_binary(token, line_num, line_text)

    value = parse_decimal(token)
    if value is not None:
        return value

    return resolve_register(token, line_num, line_text, strict)


def resolve_mov_source(
    token: str, line_num: int = None, line_text: str = None, strict: bool = False
) -> Tuple[bool, int]:
    """
    Resolve the source operand of MOV.

    Returns:
        ``(True, literal)`` for a decimal literal, otherwise
        ``(False, register_index)``
    """
    value = parse_decimal(token)
    if value is not None:
        return True, value
    return False, resolve_register(token, line_num, line_text, strict)
