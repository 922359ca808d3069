"""
Source file access.
"""

from pathlib import Path

from .errors import SourceFileError

DEFAULT_PROGRAM = "MOV 1, 5\nMOV 2, 3\nADD 0, 1\nSUB 1, 2\nMUL 1, 2"


def read_source(path: str, create_missing: bool = True) -> str:
    """
    Read a program file.

    If the file does not exist and ``create_missing`` is set, it is created
    with ``DEFAULT_PROGRAM`` and that text is returned.

    Raises:
        SourceFileError: If the file cannot be read or created
    """
    source_path = Path(path)
    if source_path.exists():
        try:
            return source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(f"Error reading file '{path}': {e}")

    if not create_missing:
        raise SourceFileError(f"Input file not found: {path}")

    try:
        source_path.write_text(DEFAULT_PROGRAM)
    except OSError as e:
        raise SourceFileError(f"Could not write to file '{path}': {e}")
    return DEFAULT_PROGRAM
