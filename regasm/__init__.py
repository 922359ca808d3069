"""
regasm - A small register-machine assembler and interpreter.

This package lexes and assembles letter-register assembly into typed
instructions and runs them on a 26-register, 16-bit machine.
"""

from .assembler import Assembler, FunctionBlock, Program, assemble
from .config import Config, load_config, parse_config
from .errors import AssemblerError, BlockError, ExecutionError, ParseError
from .machine import Machine

__version__ = "1.0.0"
__all__ = [
    "Assembler",
    "FunctionBlock",
    "Program",
    "assemble",
    "Config",
    "load_config",
    "parse_config",
    "Machine",
    "AssemblerError",
    "BlockError",
    "ExecutionError",
    "ParseError",
]
