from __future__ import annotations

import argparse
import io
import logging
import sys
import time
from typing import BinaryIO, List, Optional

from .errors import BFVMError
from .instructions import format_program
from .machine import VirtualMachine

logger = logging.getLogger(__name__)


def _format_cells(tape, count: int) -> str:
    cells = [int(b) for b in tape[:count]]
    return "\n".join(" ".join(map(str, cells[i:i + 8])) for i in range(0, len(cells), 8))


def _decode_source(raw: bytes) -> str:
    # latin-1 maps every byte to a character
    return raw.decode("latin-1")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Run a Brainfuck program on a 30000-cell circular byte tape.",
    )
    parser.add_argument("file", nargs="?", help="program source (default: read from stdin)")
    parser.add_argument("--input-file", help="read program input from this file instead of stdin")
    parser.add_argument("--no-jit", action="store_true", help="use the pure-Python step loop")
    parser.add_argument("--dump", type=int, default=0, metavar="N",
                        help="print the first N tape cells to stderr after the run")
    parser.add_argument("--show-program", action="store_true",
                        help="print the compiled instruction list to stderr before running")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.file:
        try:
            with open(args.file, "rb") as f:
                source = _decode_source(f.read())
        except FileNotFoundError:
            print(f"Couldn't find file: {args.file}", file=sys.stderr)
            return 1
    else:
        source = _decode_source(sys.stdin.buffer.read())

    if args.input_file:
        try:
            program_input: BinaryIO = open(args.input_file, "rb")
        except FileNotFoundError:
            print(f"Couldn't find file: {args.input_file}", file=sys.stderr)
            return 1
    elif args.file:
        program_input = sys.stdin.buffer
    else:
        # stdin already held the program text
        program_input = io.BytesIO()

    output = sys.stdout.buffer
    vm = VirtualMachine(program_input, output)
    try:
        start = time.time()
        vm.compile(source)
        logger.debug("compilation took %.2f ms", (time.time() - start) * 1000)
        if args.show_program:
            print(format_program(vm.program), file=sys.stderr)

        vm.run(use_jit=not args.no_jit)
        output.flush()
    except BFVMError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: output failed: {e}", file=sys.stderr)
        return 1
    finally:
        if args.input_file:
            program_input.close()

    logger.debug("%d steps executed", vm.steps)
    if args.dump > 0:
        print(_format_cells(vm.state.tape, args.dump), file=sys.stderr)
    return 0
