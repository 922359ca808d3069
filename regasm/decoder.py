"""
Instruction decoder.

Turns one line's tokens into an ``Instruction``. Most opcodes resolve both
operands with the generic resolver; MOV and POW have their own strategies.
"""

from typing import Callable, Dict, List

from .errors import ParseError
from .instructions import OPCODES, POW_EXPONENT_BITS, Instruction, Opcode, get_opcode
from .operands import resolve_mov_source, resolve_operand


def _operand_token(tokens: List[str], index: int) -> str:
    if index < len(tokens):
        return tokens[index]
    return "0"


def _decode_generic(opcode, tokens, line_num, line_text, strict) -> Instruction:
    # Both slots are resolved even when the opcode ignores them, so a bad
    # binary literal is reported on any line.
    dest = resolve_operand(_operand_token(tokens, 1), line_num, line_text, strict)
    src = resolve_operand(_operand_token(tokens, 2), line_num, line_text, strict)

    arity = OPCODES[opcode].arity
    if arity < 2:
        src = 0
    if arity < 1:
        dest = 0
    return Instruction(opcode, dest, src)


def _decode_mov(opcode, tokens, line_num, line_text, strict) -> Instruction:
    dest = resolve_operand(_operand_token(tokens, 1), line_num, line_text, strict)
    if len(tokens) < 3:
        return Instruction(Opcode.MOV, dest, 0)
    is_literal, value = resolve_mov_source(tokens[2], line_num, line_text, strict)
    if is_literal:
        return Instruction(Opcode.MOV, dest, value)
    return Instruction(Opcode.MOVR, dest, value)


def _decode_pow(opcode, tokens, line_num, line_text, strict) -> Instruction:
    dest = resolve_operand(_operand_token(tokens, 1), line_num, line_text, strict)
    exponent = resolve_operand(_operand_token(tokens, 2), line_num, line_text, strict)
    if exponent >= 1 << POW_EXPONENT_BITS:
        raise ParseError(
            f"POW exponent {exponent} does not fit in {POW_EXPONENT_BITS} bits",
            line_num,
            line_text,
        )
    return Instruction(Opcode.POW, dest, exponent)


DecodeStrategy = Callable[..., Instruction]

DECODERS: Dict[Opcode, DecodeStrategy] = {
    Opcode.MOV: _decode_mov,
    Opcode.POW: _decode_pow,
}


def decode_instruction(
    tokens: List[str], line_num: int, line_text: str = None, strict: bool = False
) -> Instruction:
    """
    Decode a single instruction from its tokens.

    Args:
        tokens: Non-empty token list, opcode first
        line_num: Source line (0-based) for error reporting
        line_text: Original line text for error reporting
        strict: Reject operands that are neither numbers nor register letters

    Returns:
        Decoded Instruction

    Raises:
        ParseError: For unknown opcodes or malformed operands
    """
    if not tokens:
        raise ParseError("Empty instruction", line_num, line_text)

    opcode = get_opcode(tokens[0])
    if opcode is None:
        raise ParseError(f'Unknown instruction: "{tokens[0]}"', line_num, line_text)

    decode = DECODERS.get(opcode, _decode_generic)
    return decode(opcode, tokens, line_num, line_text, strict)
