#!/usr/bin/env python3
"""
Command line entry point: weebasic <source-file>

Compiles the file and runs it. With any other number of arguments the
command does nothing and exits with status 0.

Author: xwest
"""

import sys
from typing import List, Optional

from .parser import compile_file
from .vm import run_program


def main(argv: Optional[List[str]] = None) -> int:
    """Compile and run one WeeBasic source file; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) != 1:
        return 0

    result = compile_file(args[0])
    if result.has_errors():
        for error in result.errors:
            print(error, file=sys.stderr, end="")
        return 1

    execution = run_program(result.program)
    if execution.has_errors():
        print(execution.error, file=sys.stderr, end="")

    return execution.exit_code


if __name__ == "__main__":
    sys.exit(main())
