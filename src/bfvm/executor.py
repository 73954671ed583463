from __future__ import annotations

import logging
import time
from typing import BinaryIO, Tuple

import numpy as np
from numba import njit

from .errors import InputExhaustedError, OutputWriteError
from .instructions import Op, Program
from .state import MachineState

logger = logging.getLogger(__name__)

DEFAULT_BATCH_STEPS = 100000

# Reasons the batch kernel hands control back to Python.
STOP_LIMIT = 0
STOP_IO = 1
STOP_END = 2


@njit(cache=True)
def run_batch(ops, targets, memory, pc, pointer, max_steps):
    """
    Run up to max_steps instructions without leaving compiled code.

    Stops before any ',' or '.' so the caller can perform the I/O, and
    returns (pc, pointer, stop_reason, steps).
    """
    stop_reason = STOP_LIMIT
    mem_len = len(memory)
    prog_len = len(ops)
    steps = 0

    while pc < prog_len and steps < max_steps:
        op = ops[pc]

        if op == 62:  # '>'
            pointer += 1
            if pointer >= mem_len:
                pointer = 0
        elif op == 60:  # '<'
            pointer -= 1
            if pointer < 0:
                pointer = mem_len - 1
        elif op == 43:  # '+'
            memory[pointer] = (memory[pointer] + 1) & 255
        elif op == 45:  # '-'
            memory[pointer] = (memory[pointer] - 1) & 255
        elif op == 44 or op == 46:  # ',' or '.'
            stop_reason = STOP_IO
            break
        elif op == 91:  # '['
            if memory[pointer] == 0:
                pc = targets[pc]
                steps += 1
                continue
        elif op == 93:  # ']'
            if memory[pointer] != 0:
                pc = targets[pc]
                steps += 1
                continue

        pc += 1
        steps += 1

    if pc >= prog_len:
        stop_reason = STOP_END

    return pc, pointer, stop_reason, steps


def lower_program(program: Program) -> Tuple[np.ndarray, np.ndarray]:
    """Flatten a Program into opcode and target arrays for run_batch."""
    ops = np.array([int(ins.op) for ins in program], dtype=np.int64)
    targets = np.array(
        [-1 if ins.target is None else ins.target for ins in program], dtype=np.int64
    )
    return ops, targets


class Executor:
    """Runs a compiled Program against a MachineState and borrowed byte streams."""

    def __init__(
        self,
        program: Program,
        state: MachineState,
        input: BinaryIO,
        output: BinaryIO,
        *,
        batch_steps: int = DEFAULT_BATCH_STEPS,
    ):
        if batch_steps < 1:
            raise ValueError("batch_steps must be positive")
        self.program = program
        self.state = state
        self.input = input
        self.output = output
        self.batch_steps = batch_steps
        self.pc = 0
        self.steps = 0

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    def step(self) -> bool:
        """
        Execute a single instruction.

        Returns False once the program has run off its end.
        """
        if self.finished:
            return False

        ins = self.program[self.pc]
        op = ins.op
        state = self.state
        tape = state.tape
        next_pc = self.pc + 1

        if op is Op.INCREMENT:
            tape[state.pointer] = (int(tape[state.pointer]) + 1) & 0xFF
        elif op is Op.DECREMENT:
            tape[state.pointer] = (int(tape[state.pointer]) - 1) & 0xFF
        elif op is Op.MOVE_RIGHT:
            state.pointer = (state.pointer + 1) % len(tape)
        elif op is Op.MOVE_LEFT:
            state.pointer = (state.pointer - 1) % len(tape)
        elif op is Op.READ_BYTE:
            self._read_byte()
        elif op is Op.WRITE_BYTE:
            self._write_byte()
        elif op is Op.LOOP_OPEN:
            if tape[state.pointer] == 0:
                next_pc = ins.target
        elif op is Op.LOOP_CLOSE:
            if tape[state.pointer] != 0:
                next_pc = ins.target

        self.pc = next_pc
        self.steps += 1
        return not self.finished

    def run(self, *, use_jit: bool = True) -> None:
        start = time.time()
        if use_jit:
            self._run_jit()
        else:
            while self.step():
                pass
        logger.debug(
            "executed %d steps in %.2f ms (jit=%s)",
            self.steps, (time.time() - start) * 1000, use_jit,
        )

    def _run_jit(self) -> None:
        ops, targets = lower_program(self.program)
        state = self.state

        while not self.finished:
            pc, pointer, stop_reason, steps = run_batch(
                ops, targets, state.tape, self.pc, state.pointer, self.batch_steps
            )
            self.pc = int(pc)
            state.pointer = int(pointer)
            self.steps += int(steps)

            if stop_reason == STOP_IO:
                if self.program[self.pc].op is Op.READ_BYTE:
                    self._read_byte()
                else:
                    self._write_byte()
                self.pc += 1
                self.steps += 1

    def _read_byte(self) -> None:
        # Anything already written should be visible before we block on input.
        flush = getattr(self.output, "flush", None)
        if flush is not None:
            try:
                flush()
            except OSError as exc:
                raise OutputWriteError(message=f"OutputError: flush failed: {exc}") from exc

        try:
            data = self.input.read(1)
        except OSError as exc:
            raise InputExhaustedError(
                message=f"InputError: read failed at instruction {self.pc}: {exc}"
            ) from exc
        if not data:
            raise InputExhaustedError(
                message=f"InputError: input exhausted at instruction {self.pc}"
            )
        self.state.tape[self.state.pointer] = data[0]

    def _write_byte(self) -> None:
        value = bytes((self.state.cell,))
        try:
            written = self.output.write(value)
        except OSError as exc:
            raise OutputWriteError(
                message=f"OutputError: write failed at instruction {self.pc}: {exc}"
            ) from exc
        if written == 0:
            raise OutputWriteError(
                message=f"OutputError: write accepted no bytes at instruction {self.pc}"
            )
