#!/usr/bin/env python3
"""
regasm - Command Line Interface

Usage:
    python3 -m regasm program.asm
    python3 -m regasm program.asm -v
    python3 -m regasm program.asm --listing --no-run
    python3 -m regasm program.asm -c regasm.yaml
"""

import argparse
import sys

from .assembler import Assembler
from .config import Config, load_config
from .errors import AssemblerError
from .machine import Machine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regasm",
        description="Letter-register assembler and interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s programs/demo.asm
  %(prog)s programs/demo.asm -v
  %(prog)s programs/demo.asm --listing --no-run
        """,
    )

    parser.add_argument(
        "input",
        type=str,
        help="Input assembly file (created with a default program if missing)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="YAML configuration file",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print token lists, the assembled program and an execution trace",
    )

    parser.add_argument(
        "-l",
        "--listing",
        action="store_true",
        help="Print assembly listing",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject operands that are neither numbers nor register letters",
    )

    parser.add_argument(
        "--no-run",
        action="store_true",
        help="Assemble only; do not execute the program",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else Config()
        if args.verbose:
            config.verbose = True
        if args.strict:
            config.strict_operands = True

        asm = Assembler.from_config(config)
        program = asm.assemble_file(args.input, create_missing=config.create_missing)

        if args.listing:
            print(asm.get_listing())

        if not args.no_run:
            machine = Machine(program, output=print, verbose=config.verbose)
            machine.run()

            if config.verbose:
                print(f"\nExecution finished: {machine.steps} instructions")
                for name, value in machine.dump_registers().items():
                    if value:
                        print(f"  {name} = {value}")

    except AssemblerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
