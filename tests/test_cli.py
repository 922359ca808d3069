"""
Tests for the command line interface.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from regasm.__main__ import main
from regasm.source import DEFAULT_PROGRAM


class TestMain:
    """Tests for main()."""

    def test_run_program(self, tmp_path, capsys):
        """Test that PRINT output reaches stdout."""
        path = tmp_path / "prog.asm"
        path.write_text("MOV a 2\nPOW a 3\nPRINT a\n")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == "a: 8\n"

    def test_missing_file_is_created(self, tmp_path):
        """Test that the default program is written and run."""
        path = tmp_path / "new.asm"
        assert main([str(path)]) == 0
        assert path.read_text() == DEFAULT_PROGRAM

    def test_undecodable_file(self, tmp_path, capsys):
        """Test that a non-UTF-8 file is a reported error, not a crash."""
        path = tmp_path / "bad.asm"
        path.write_bytes(b"\xff")
        assert main([str(path)]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Error reading file")
        assert "Unexpected error" not in err

    def test_missing_file_with_create_disabled(self, tmp_path, capsys):
        """Test that create_missing: false turns a missing file into an error."""
        config = tmp_path / "regasm.yaml"
        config.write_text("create_missing: false\n")
        assert main([str(tmp_path / "absent.asm"), "-c", str(config)]) == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_parse_error_exit_code(self, tmp_path, capsys):
        """Test that assembly errors go to stderr with status 1."""
        path = tmp_path / "bad.asm"
        path.write_text("INC a\nFOO 1,2\n")
        assert main([str(path)]) == 1
        err = capsys.readouterr().err
        assert 'Error: Line 1: Unknown instruction: "FOO"' in err

    def test_execution_error_exit_code(self, tmp_path, capsys):
        """Test that runtime errors go to stderr with status 1."""
        path = tmp_path / "neg.asm"
        path.write_text("DEC a\n")
        assert main([str(path)]) == 1
        assert "will result in negative number" in capsys.readouterr().err

    def test_listing_without_run(self, tmp_path, capsys):
        """Test --listing with --no-run."""
        path = tmp_path / "prog.asm"
        path.write_text("PRINT a\n")
        assert main([str(path), "--listing", "--no-run"]) == 0
        out = capsys.readouterr().out
        assert "PRINT(0)" in out
        assert "a: 0" not in out

    def test_strict_flag(self, tmp_path, capsys):
        """Test that --strict rejects comma-suffixed operands."""
        path = tmp_path / "prog.asm"
        path.write_text("MOV 1, 5\n")
        assert main([str(path), "--strict"]) == 1
        assert "Cannot resolve operand" in capsys.readouterr().err

    def test_verbose(self, tmp_path, capsys):
        """Test that -v prints the token list and register summary."""
        path = tmp_path / "prog.asm"
        path.write_text("MOV c 4\n")
        assert main([str(path), "-v"]) == 0
        out = capsys.readouterr().out
        assert "Tokenized lines:" in out
        assert "  c = 4" in out
