"""
Register machine.

Executes the global instruction list of an assembled Program over 26
unsigned 16-bit registers. Results that would be negative or exceed 16 bits
are errors rather than wrapping, and no register is changed by a failing
instruction.
"""

from enum import Enum, auto
from typing import Callable, List, Optional

from .assembler import Program
from .errors import (
    DivisionByZeroError,
    ExecutionError,
    NegativeResultError,
    ValueOverflowError,
)
from .instructions import Instruction, Opcode, OperandKind
from .registers import (
    MAX_VALUE,
    REGISTER_COUNT,
    index_to_letter,
    is_valid_register,
    letter_to_index,
)


class MachineState(Enum):
    """Execution state."""

    RUNNING = auto()
    HALTED = auto()


class Comparison(Enum):
    """Outcome of the last CMP."""

    LESS = "LESS"
    EQUAL = "EQUAL"
    GREATER = "GREATER"


class Machine:
    """
    Fetch-decode-execute loop over a Program's global instructions.

    Function blocks are carried by the Program but cannot be entered, since
    the instruction set has no call instruction.
    """

    def __init__(
        self,
        program: Program,
        output: Optional[Callable[[str], None]] = None,
        verbose: bool = False,
    ):
        """
        Initialize the machine.

        Args:
            program: Assembled program
            output: Called with each line produced by PRINT and CMP
            verbose: If True, print every executed instruction
        """
        self.program = program
        self.output_fn = output
        self.verbose = verbose
        self.registers: List[int] = [0] * REGISTER_COUNT
        self.ip = 0
        self.state = MachineState.RUNNING
        self.comparison: Optional[Comparison] = None
        self.output: List[str] = []
        self.steps = 0

        self._handlers = {
            Opcode.ADD: self._add,
            Opcode.SUB: self._sub,
            Opcode.MUL: self._mul,
            Opcode.DIV: self._div,
            Opcode.MOV: self._mov,
            Opcode.MOVR: self._movr,
            Opcode.SWAP: self._swap,
            Opcode.CLR: self._clr,
            Opcode.DEC: self._dec,
            Opcode.INC: self._inc,
            Opcode.CMP: self._cmp,
            Opcode.POW: self._pow,
            Opcode.PRINT: self._print,
            Opcode.JMP: self._jmp,
            Opcode.HALT: self._halt,
        }

    @property
    def halted(self) -> bool:
        return self.state is MachineState.HALTED

    def log(self, message: str) -> None:
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(message)

    def register(self, name: str) -> int:
        """Read a register by letter."""
        index = letter_to_index(name)
        if index is None or len(name) != 1:
            raise ValueError(f"Invalid register name: {name}")
        return self.registers[index]

    def step(self) -> None:
        """
        Execute one instruction.

        Raises:
            ExecutionError: If the machine is halted, the instruction pointer
                is outside the program, or the instruction fails
        """
        if self.halted:
            raise ExecutionError("Machine is halted")

        instructions = self.program.instructions
        if not 0 <= self.ip < len(instructions):
            raise ExecutionError(f"Instruction pointer {self.ip} is outside the program")

        instr = instructions[self.ip]
        self._check_operands(instr)
        self.log(f"  [{self.ip:4d}] {instr}")

        next_ip = self._handlers[instr.opcode](instr)
        self.steps += 1
        self.ip = self.ip + 1 if next_ip is None else next_ip

    def run(self, max_steps: Optional[int] = None) -> List[str]:
        """
        Run until HALT.

        Args:
            max_steps: Fail once this many instructions have executed
                without halting (unbounded when None)

        Returns:
            Output lines produced by the program

        Raises:
            ExecutionError: If an instruction fails or the step limit is hit
        """
        while not self.halted:
            if max_steps is not None and self.steps >= max_steps:
                raise ExecutionError(
                    f"Step limit of {max_steps} reached without HALT (ip {self.ip})"
                )
            self.step()
        self.log(f"Halted after {self.steps} steps")
        return self.output

    def dump_registers(self) -> dict:
        """Get all register values keyed by letter."""
        return {index_to_letter(i): value for i, value in enumerate(self.registers)}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(self, error_cls, message: str, instr: Instruction):
        raise error_cls(message, self.ip, instr)

    def _check_operands(self, instr: Instruction) -> None:
        for kind, value in zip(instr.info.operands, instr.operands):
            if kind is OperandKind.REGISTER and not is_valid_register(value):
                self._fail(ExecutionError, f"Invalid register: {value}", instr)
            if kind is OperandKind.TARGET and not 0 <= value < len(self.program.instructions):
                self._fail(ExecutionError, f"Jump target {value} is outside the program", instr)

    def _store(self, instr: Instruction, reg: int, value: int) -> None:
        if value < 0:
            self._fail(
                NegativeResultError,
                f"{instr.to_source()} will result in negative number",
                instr,
            )
        if value > MAX_VALUE:
            self._fail(
                ValueOverflowError,
                f"{instr.to_source()} will overflow 16 bits ({value})",
                instr,
            )
        self.registers[reg] = value

    def _emit(self, line: str) -> None:
        self.output.append(line)
        if self.output_fn is not None:
            self.output_fn(line)

    # ------------------------------------------------------------------
    # Instruction handlers; return the next ip or None to fall through
    # ------------------------------------------------------------------

    def _add(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] + self.registers[instr.src])

    def _sub(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] - self.registers[instr.src])

    def _mul(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] * self.registers[instr.src])

    def _div(self, instr):
        divisor = self.registers[instr.src]
        if divisor == 0:
            self._fail(DivisionByZeroError, "Division by zero", instr)
        self._store(instr, instr.dest, self.registers[instr.dest] // divisor)

    def _mov(self, instr):
        self._store(instr, instr.dest, instr.src)

    def _movr(self, instr):
        self._store(instr, instr.dest, self.registers[instr.src])

    def _swap(self, instr):
        regs = self.registers
        regs[instr.dest], regs[instr.src] = regs[instr.src], regs[instr.dest]

    def _clr(self, instr):
        self._store(instr, instr.dest, 0)

    def _dec(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] - 1)

    def _inc(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] + 1)

    def _cmp(self, instr):
        left = self.registers[instr.dest]
        right = self.registers[instr.src]
        if left < right:
            self.comparison = Comparison.LESS
        elif left > right:
            self.comparison = Comparison.GREATER
        else:
            self.comparison = Comparison.EQUAL
        self._emit(
            f"CMP {index_to_letter(instr.dest)} {index_to_letter(instr.src)}: "
            f"{self.comparison.value}"
        )

    def _pow(self, instr):
        self._store(instr, instr.dest, self.registers[instr.dest] ** instr.src)

    def _print(self, instr):
        self._emit(f"{index_to_letter(instr.dest)}: {self.registers[instr.dest]}")

    def _jmp(self, instr):
        return instr.dest

    def _halt(self, instr):
        self.state = MachineState.HALTED
