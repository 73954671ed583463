from .api import ExecuteOptions, execute, execute_file, run_string
from .compiler import compile_program
from .errors import (
    BFVMError,
    BFVMIOError,
    BracketMismatchError,
    InputExhaustedError,
    OutputWriteError,
)
from .instructions import Instruction, Op, Program
from .machine import VirtualMachine
from .state import MEMORY_SIZE, MachineState

__all__ = [
    'ExecuteOptions',
    'execute',
    'execute_file',
    'run_string',
    'compile_program',
    'BFVMError',
    'BFVMIOError',
    'BracketMismatchError',
    'InputExhaustedError',
    'OutputWriteError',
    'Instruction',
    'Op',
    'Program',
    'VirtualMachine',
    'MEMORY_SIZE',
    'MachineState',
]
