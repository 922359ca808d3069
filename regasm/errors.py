"""
Custom exception types for the regasm assembler and register machine.
"""


class AssemblerError(Exception):
    """Base exception for assembler errors."""

    def __init__(self, message: str, line_num: int = None, line_text: str = None):
        self.line_num = line_num
        self.line_text = line_text
        self.detail = message
        if line_num is not None:
            if line_text:
                message = f"Line {line_num}: {message}\n  {line_text}"
            else:
                message = f"Line {line_num}: {message}"
        super().__init__(message)


class ParseError(AssemblerError):
    """Exception raised for operand and opcode decoding errors."""

    pass


class BlockError(AssemblerError):
    """Exception raised for malformed function blocks."""

    pass


class ConfigError(AssemblerError):
    """Exception raised for an invalid configuration file."""

    pass


class SourceFileError(AssemblerError):
    """Exception raised when the source file cannot be read or created."""

    pass


class ExecutionError(AssemblerError):
    """Exception raised while running a program."""

    def __init__(self, message: str, ip: int = None, instruction=None):
        self.ip = ip
        self.instruction = instruction
        detail = message
        if ip is not None:
            message = f"Instruction {ip} ({instruction}): {message}"
        super().__init__(message)
        self.detail = detail


class NegativeResultError(ExecutionError):
    """Exception raised when a result would drop below zero."""

    pass


class DivisionByZeroError(ExecutionError):
    """Exception raised for DIV with a zero divisor."""

    pass


class ValueOverflowError(ExecutionError):
    """Exception raised when a result does not fit in 16 bits."""

    pass
