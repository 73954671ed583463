from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple


class Op(IntEnum):
    # Values are the source characters' code points.
    INCREMENT = 43    # '+'
    DECREMENT = 45    # '-'
    MOVE_RIGHT = 62   # '>'
    MOVE_LEFT = 60    # '<'
    READ_BYTE = 44    # ','
    WRITE_BYTE = 46   # '.'
    LOOP_OPEN = 91    # '['
    LOOP_CLOSE = 93   # ']'

    @property
    def is_jump(self) -> bool:
        return self in (Op.LOOP_OPEN, Op.LOOP_CLOSE)


@dataclass(frozen=True)
class Instruction:
    op: Op
    target: Optional[int] = None  # only set on LOOP_OPEN / LOOP_CLOSE

    def __post_init__(self) -> None:
        if self.op.is_jump and self.target is None:
            raise ValueError(f"{self.op.name} requires a jump target")
        if not self.op.is_jump and self.target is not None:
            raise ValueError(f"{self.op.name} does not take a jump target")

    def __str__(self) -> str:
        if self.target is None:
            return self.op.name
        return f"{self.op.name}({self.target})"


Program = Tuple[Instruction, ...]

# Shared instances for the six ops without a payload.
INCREMENT = Instruction(Op.INCREMENT)
DECREMENT = Instruction(Op.DECREMENT)
MOVE_RIGHT = Instruction(Op.MOVE_RIGHT)
MOVE_LEFT = Instruction(Op.MOVE_LEFT)
READ_BYTE = Instruction(Op.READ_BYTE)
WRITE_BYTE = Instruction(Op.WRITE_BYTE)


def loop_open(target: int) -> Instruction:
    return Instruction(Op.LOOP_OPEN, target)


def loop_close(target: int) -> Instruction:
    return Instruction(Op.LOOP_CLOSE, target)


def format_program(program: Program) -> str:
    """One instruction per line, prefixed with its index."""
    width = len(str(max(len(program) - 1, 0)))
    return "\n".join(f"{i:{width}d} {ins}" for i, ins in enumerate(program))
