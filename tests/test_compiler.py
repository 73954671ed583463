#!/usr/bin/env python3
"""
Compiler tests: instruction mapping, loop target resolution and bracket errors.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfvm import BracketMismatchError, Instruction, Op, compile_program
from bfvm.instructions import (
    DECREMENT,
    INCREMENT,
    MOVE_LEFT,
    MOVE_RIGHT,
    READ_BYTE,
    WRITE_BYTE,
    format_program,
    loop_close,
    loop_open,
)


def test_simple_ops():
    program = compile_program("><+-.,")
    assert program == (MOVE_RIGHT, MOVE_LEFT, INCREMENT, DECREMENT, WRITE_BYTE, READ_BYTE)


def test_comments_are_ignored():
    assert compile_program("hello world\n\t 123 # !") == ()
    assert compile_program("a+b-c") == (INCREMENT, DECREMENT)


def test_loop_targets():
    # LOOP_OPEN points just past its LOOP_CLOSE, LOOP_CLOSE points back at LOOP_OPEN
    program = compile_program("+[-]")
    assert program == (INCREMENT, loop_open(4), DECREMENT, loop_close(1))


def test_nested_loops_match_innermost_first():
    program = compile_program("[[]]")
    assert program == (loop_open(4), loop_open(3), loop_close(1), loop_close(0))


def test_sibling_loops():
    program = compile_program("[][-]")
    assert program[0] == loop_open(2)
    assert program[1] == loop_close(0)
    assert program[2] == loop_open(5)
    assert program[4] == loop_close(2)


def test_compile_is_deterministic():
    source = "++++++ [ > ++++++++++ < - ] > +++++ ."
    assert compile_program(source) == compile_program(source)


def test_program_is_immutable():
    program = compile_program("+-")
    assert isinstance(program, tuple)


def test_unmatched_close():
    with pytest.raises(BracketMismatchError) as exc_info:
        compile_program("+]")
    assert "unmatched ']'" in str(exc_info.value)


def test_close_before_open():
    with pytest.raises(BracketMismatchError):
        compile_program("][")


def test_unclosed_open():
    with pytest.raises(BracketMismatchError) as exc_info:
        compile_program("[[]")
    assert "1 unclosed" in str(exc_info.value)


def test_loop_ops_need_targets():
    with pytest.raises(ValueError):
        Instruction(Op.LOOP_OPEN)
    with pytest.raises(ValueError):
        Instruction(Op.INCREMENT, 3)


def test_op_values_are_source_chars():
    assert {chr(op) for op in Op} == set("+-<>,.[]")


def test_format_program():
    text = format_program(compile_program("+[-]"))
    assert text.splitlines() == [
        "0 INCREMENT",
        "1 LOOP_OPEN(4)",
        "2 DECREMENT",
        "3 LOOP_CLOSE(1)",
    ]
