"""
Instruction set definitions.

Every instruction carries up to two 16-bit operands. Whether an operand
names a register or is an immediate value depends on the opcode, which is
recorded in ``OPCODES`` so the executor and the serializer agree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# POW exponents are stored in 8 bits
POW_EXPONENT_BITS = 8


class Opcode(Enum):
    """Supported operations."""

    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    MOV = "MOV"  # dest <- immediate
    MOVR = "MOVR"  # dest <- register
    SWAP = "SWAP"
    CLR = "CLR"
    DEC = "DEC"
    INC = "INC"
    CMP = "CMP"
    POW = "POW"
    PRINT = "PRINT"
    JMP = "JMP"
    HALT = "HALT"


class OperandKind(Enum):
    """How an operand value is interpreted at execution time."""

    REGISTER = "register"
    IMMEDIATE = "immediate"
    TARGET = "target"  # instruction index


@dataclass(frozen=True)
class OpcodeInfo:
    """
    Static description of an opcode.

    Attributes:
        operands: Kind of each operand, in order (length is the arity)
    """

    operands: Tuple[OperandKind, ...]

    @property
    def arity(self) -> int:
        return len(self.operands)


_REG = OperandKind.REGISTER
_IMM = OperandKind.IMMEDIATE

OPCODES = {
    Opcode.ADD: OpcodeInfo((_REG, _REG)),
    Opcode.SUB: OpcodeInfo((_REG, _REG)),
    Opcode.MUL: OpcodeInfo((_REG, _REG)),
    Opcode.DIV: OpcodeInfo((_REG, _REG)),
    Opcode.MOV: OpcodeInfo((_REG, _IMM)),
    Opcode.MOVR: OpcodeInfo((_REG, _REG)),
    Opcode.SWAP: OpcodeInfo((_REG, _REG)),
    Opcode.CLR: OpcodeInfo((_REG,)),
    Opcode.DEC: OpcodeInfo((_REG,)),
    Opcode.INC: OpcodeInfo((_REG,)),
    Opcode.CMP: OpcodeInfo((_REG, _REG)),
    Opcode.POW: OpcodeInfo((_REG, _IMM)),
    Opcode.PRINT: OpcodeInfo((_REG,)),
    Opcode.JMP: OpcodeInfo((OperandKind.TARGET,)),
    Opcode.HALT: OpcodeInfo(()),
}


@dataclass(frozen=True)
class Instruction:
    """
    A decoded instruction.

    Attributes:
        opcode: Operation to perform
        dest: First operand (0 when unused)
        src: Second operand (0 when unused)
    """

    opcode: Opcode
    dest: int = 0
    src: int = 0

    @property
    def info(self) -> OpcodeInfo:
        return OPCODES[self.opcode]

    @property
    def operands(self) -> Tuple[int, ...]:
        """Operands actually used by this opcode."""
        return (self.dest, self.src)[: self.info.arity]

    def __str__(self) -> str:
        if not self.operands:
            return self.opcode.value
        return f"{self.opcode.value}({', '.join(str(op) for op in self.operands)})"

    def to_source(self) -> str:
        """Render as a source line that decodes back to this instruction."""
        return " ".join([self.opcode.value] + [str(op) for op in self.operands])


HALT = Instruction(Opcode.HALT)


def get_opcode(mnemonic: str) -> Optional[Opcode]:
    """
    Look up an opcode by mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-insensitive)

    Returns:
        Opcode if found, None otherwise
    """
    try:
        return Opcode(mnemonic.upper())
    except ValueError:
        return None


def is_valid_opcode(mnemonic: str) -> bool:
    """Check if a mnemonic names a supported opcode."""
    return get_opcode(mnemonic) is not None


def get_all_mnemonics() -> list:
    """Get a list of all supported instruction mnemonics."""
    return [op.value for op in Opcode]
