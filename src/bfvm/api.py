from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .executor import DEFAULT_BATCH_STEPS
from .machine import VirtualMachine


@dataclass(frozen=True)
class ExecuteOptions:
    use_jit: bool = True
    batch_steps: int = DEFAULT_BATCH_STEPS


def execute(
    source: str,
    input: BinaryIO,
    output: BinaryIO,
    *,
    options: Optional[ExecuteOptions] = None,
) -> None:
    opts = options or ExecuteOptions()
    vm = VirtualMachine(input, output)
    vm.compile(source)
    vm.run(use_jit=opts.use_jit, batch_steps=opts.batch_steps)


def execute_file(
    path: str | Path,
    input: BinaryIO,
    output: BinaryIO,
    *,
    options: Optional[ExecuteOptions] = None,
    encoding: str = "utf-8",
) -> None:
    p = Path(path)
    execute(p.read_text(encoding=encoding), input, output, options=options)


def run_string(source: str, input_data: bytes = b"", *, options: Optional[ExecuteOptions] = None) -> bytes:
    output = io.BytesIO()
    execute(source, io.BytesIO(input_data), output, options=options)
    return output.getvalue()
