from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

MEMORY_SIZE = 30000


def _zero_tape() -> np.ndarray:
    return np.zeros(MEMORY_SIZE, dtype=np.uint8)


@dataclass
class MachineState:
    tape: np.ndarray = field(default_factory=_zero_tape)
    pointer: int = 0

    @property
    def cell(self) -> int:
        return int(self.tape[self.pointer])

    def reset(self) -> None:
        self.tape[:] = 0
        self.pointer = 0
