from __future__ import annotations

import logging
from typing import Dict, List

from .errors import unclosed_open_error, unmatched_close_error
from .instructions import (
    DECREMENT,
    INCREMENT,
    MOVE_LEFT,
    MOVE_RIGHT,
    READ_BYTE,
    WRITE_BYTE,
    Instruction,
    Program,
    loop_close,
    loop_open,
)

logger = logging.getLogger(__name__)

_SIMPLE_OPS: Dict[str, Instruction] = {
    '>': MOVE_RIGHT,
    '<': MOVE_LEFT,
    '+': INCREMENT,
    '-': DECREMENT,
    '.': WRITE_BYTE,
    ',': READ_BYTE,
}


def compile_program(source: str) -> Program:
    """
    Translate source text into a flat Program with resolved loop targets.

    Characters outside the instruction set are treated as comments.
    Raises BracketMismatchError on an unmatched '[' or ']'.
    """
    instructions: List[Instruction] = []
    pending: List[int] = []  # indices of unresolved LOOP_OPEN placeholders

    for ch in source:
        simple = _SIMPLE_OPS.get(ch)
        if simple is not None:
            instructions.append(simple)
        elif ch == '[':
            pending.append(len(instructions))
            instructions.append(loop_open(0))
        elif ch == ']':
            if not pending:
                raise unmatched_close_error()
            start = pending.pop()
            instructions.append(loop_close(start))
            instructions[start] = loop_open(len(instructions))

    if pending:
        raise unclosed_open_error(len(pending))

    logger.debug("compiled %d instructions from %d source chars", len(instructions), len(source))
    return tuple(instructions)
