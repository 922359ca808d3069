"""
Source tokenizer.

Splits program text into one token list per line. Comments start at ``;``
and run to the end of the line. Tokens are separated purely by whitespace,
so a comma stays attached to the token it follows.
"""

from typing import List


def strip_comment(line: str) -> str:
    """Remove a ``;`` comment from a line."""
    comment_pos = line.find(";")
    if comment_pos >= 0:
        return line[:comment_pos]
    return line


def tokenize_line(line: str) -> List[str]:
    """Split one comment-stripped line into whitespace-separated tokens."""
    return strip_comment(line).split()


def split_lines(source: str) -> List[str]:
    """
    Split program text into lines.

    Only ``\n`` ends a line; a ``\r`` before it is dropped. A final newline
    does not produce an extra empty line.
    """
    if not source:
        return []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def lex(source: str) -> List[List[str]]:
    """
    Tokenize a whole program.

    Blank and comment-only lines produce an empty list, so index ``i`` of the
    result always corresponds to line ``i`` of the source.

    Args:
        source: Program text

    Returns:
        List of token lists, one per source line
    """
    return [tokenize_line(line) for line in split_lines(source)]
