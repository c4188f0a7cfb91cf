#!/usr/bin/env python3
"""
Run one puzzle variant on an input file and print its answer.

Usage: run_puzzle.py <puzzle> <part> <input file> [--verbose]

<puzzle> is a name from puzzles.PUZZLES or a "year-day" alias such as 2023-17.
"""

import logging
import sys

from puzzles import lookup


def main(argv: list[str]) -> int:
    args = [arg for arg in argv[1:] if arg != "--verbose"]
    logging.basicConfig(
        level=logging.INFO if "--verbose" in argv else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if len(args) != 3:
        executable_name = argv[0] if argv else "run_puzzle.py"
        print(f"Usage: {executable_name} <puzzle> <part> <input file> [--verbose]", file=sys.stderr)
        return 1

    name, part_arg, path = args
    try:
        puzzle = lookup(name)
        part = int(part_arg)
        with open(path) as f:
            text = f.read()
        answer = puzzle(text, part)
    except KeyError as error:
        print(error.args[0], file=sys.stderr)
        return 1
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1

    print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
