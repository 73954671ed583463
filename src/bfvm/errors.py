from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BFVMError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BracketMismatchError(BFVMError):
    pass


@dataclass
class BFVMIOError(BFVMError):
    pass


@dataclass
class InputExhaustedError(BFVMIOError):
    pass


@dataclass
class OutputWriteError(BFVMIOError):
    pass


def unmatched_close_error() -> BracketMismatchError:
    return BracketMismatchError(message="CompileError: unmatched ']' (no open '[' to close)")


def unclosed_open_error(count: int) -> BracketMismatchError:
    plural = "" if count == 1 else "s"
    return BracketMismatchError(message=f"CompileError: {count} unclosed '['{plural}")
