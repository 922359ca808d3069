"""
Block assembler.

Groups decoded instructions into the global instruction stream or into
named function blocks. A block opens with a line whose first token starts
with ``.`` and closes with ``.end``. Blocks cannot nest.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Config
from .decoder import decode_instruction
from .errors import BlockError
from .instructions import HALT, Instruction
from .lexer import lex, split_lines
from .source import read_source

DIRECTIVE_MARKER = "."
BLOCK_END = ".end"


@dataclass
class FunctionBlock:
    """
    A named group of instructions.

    Attributes:
        name: Block name without the leading marker (``myfunc``)
        directive: Directive token that opened the block (``.myfunc``)
        line_num: Source line (0-based) of the directive
        instructions: Instructions between the directive and ``.end``
    """

    name: str
    directive: str
    line_num: int
    instructions: List[Instruction] = field(default_factory=list)


@dataclass
class Program:
    """
    An assembled program.

    The global instruction list always ends with a single HALT appended by
    the assembler.
    """

    instructions: List[Instruction] = field(default_factory=list)
    functions: Dict[str, FunctionBlock] = field(default_factory=dict)

    def to_source(self) -> str:
        """Render the program as source text that assembles back to it."""
        lines = [instr.to_source() for instr in self.instructions[:-1]]
        for block in self.functions.values():
            lines.append(block.directive)
            lines.extend(instr.to_source() for instr in block.instructions)
            lines.append(BLOCK_END)
        return "\n".join(lines)


class Assembler:
    """
    Single-pass assembler from source text to a Program.
    """

    def __init__(self, verbose: bool = False, strict: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: If True, print the token lists and the assembled program
            strict: Reject operands that are neither numbers nor register letters
        """
        self.verbose = verbose
        self.strict = strict
        self.program: Optional[Program] = None
        self.source_map: List[tuple] = []  # (line_num, block name or None, instruction)

    @classmethod
    def from_config(cls, config: Config) -> "Assembler":
        return cls(verbose=config.verbose, strict=config.strict_operands)

    def log(self, message: str) -> None:
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(message)

    def assemble_file(self, input_path: str, create_missing: bool = True) -> Program:
        """
        Assemble a source file, creating it with the default program if absent.

        Args:
            input_path: Path to the source file
            create_missing: Write the default program when the file is missing

        Returns:
            Assembled Program
        """
        self.log(f"Assembling: {input_path}")
        return self.assemble_string(read_source(input_path, create_missing))

    def assemble_string(self, source: str) -> Program:
        """
        Assemble from a string.

        Args:
            source: Program text

        Returns:
            Assembled Program

        Raises:
            ParseError: For undecodable lines
            BlockError: For misplaced, nested or unterminated blocks
        """
        lines = split_lines(source)
        token_lines = lex(source)
        self.log(f"Tokenized lines: {token_lines}")

        instructions: List[Instruction] = []
        functions: Dict[str, FunctionBlock] = {}
        current: Optional[FunctionBlock] = None
        self.source_map = []

        for line_num, tokens in enumerate(token_lines):
            if not tokens:
                continue
            line_text = lines[line_num]
            head = tokens[0]

            if head == BLOCK_END:
                if current is None:
                    raise BlockError(
                        ".end without a corresponding function", line_num, line_text
                    )
                functions[current.name] = current
                self.log(
                    f"  Function '{current.name}': {len(current.instructions)} instructions"
                )
                current = None
            elif head.startswith(DIRECTIVE_MARKER):
                if current is not None:
                    raise BlockError(
                        f"Nested function definitions are not allowed "
                        f"({head} inside {current.directive})",
                        line_num,
                        line_text,
                    )
                if head[len(DIRECTIVE_MARKER):] in functions:
                    raise BlockError(f"Duplicate function: {head}", line_num, line_text)
                current = FunctionBlock(
                    name=head[len(DIRECTIVE_MARKER):], directive=head, line_num=line_num
                )
            else:
                instr = decode_instruction(tokens, line_num, line_text, self.strict)
                if current is not None:
                    current.instructions.append(instr)
                else:
                    instructions.append(instr)
                self.source_map.append(
                    (line_num, current.name if current else None, instr)
                )

        if current is not None:
            raise BlockError(
                f"Function {current.directive} is missing {BLOCK_END}",
                current.line_num,
                lines[current.line_num],
            )

        instructions.append(HALT)

        self.program = Program(instructions=instructions, functions=functions)
        self.log(f"Global instructions: {[str(i) for i in instructions]}")
        self.log(f"Functions: {list(functions)}")
        return self.program

    def get_listing(self) -> str:
        """
        Get a listing of the assembled program with source line numbers.

        Returns:
            Formatted listing string
        """
        if self.program is None:
            return ""

        line_nums: Dict[Optional[str], List[int]] = {}
        for line_num, block_name, _ in self.source_map:
            line_nums.setdefault(block_name, []).append(line_num)
        global_lines = line_nums.get(None, [])

        lines = []
        lines.append("Index  Line  Instruction")
        lines.append("-" * 40)

        for idx, instr in enumerate(self.program.instructions):
            line_col = f"{global_lines[idx]:4d}" if idx < len(global_lines) else "   -"
            lines.append(f"{idx:5d}  {line_col}  {instr}")

        for block in self.program.functions.values():
            lines.append("")
            lines.append(f"{block.directive}  (line {block.line_num})")
            block_lines = line_nums.get(block.name, [])
            for idx, (line_num, instr) in enumerate(zip(block_lines, block.instructions)):
                lines.append(f"{idx:5d}  {line_num:4d}  {instr}")

        return "\n".join(lines)


def assemble(source: str, config: Config = None) -> Program:
    """Assemble source text with an optional configuration."""
    return Assembler.from_config(config or Config()).assemble_string(source)
