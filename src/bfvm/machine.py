from __future__ import annotations

from typing import BinaryIO

from .compiler import compile_program
from .executor import DEFAULT_BATCH_STEPS, Executor
from .instructions import Program
from .state import MachineState


class VirtualMachine:
    """
    One interpreter instance.

    Owns its compiled Program and tape, and borrows the input/output
    streams for the duration of a run. Instances share nothing, so
    separate instances may run on separate threads.
    """

    def __init__(self, input: BinaryIO, output: BinaryIO):
        self.state = MachineState()
        self.program: Program = ()
        self.input = input
        self.output = output
        self.steps = 0

    def reset(self) -> None:
        self.state.reset()
        self.steps = 0

    def clear(self) -> None:
        self.reset()
        self.program = ()

    def compile(self, source: str) -> Program:
        self.clear()
        self.program = compile_program(source)
        return self.program

    def run(self, *, use_jit: bool = True, batch_steps: int = DEFAULT_BATCH_STEPS) -> None:
        executor = Executor(
            self.program, self.state, self.input, self.output, batch_steps=batch_steps
        )
        try:
            executor.run(use_jit=use_jit)
        finally:
            self.steps = executor.steps
