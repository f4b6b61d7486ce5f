"""File helpers and compiler options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Options:
    """Switches controlling what the compiler dumps and how it runs."""

    dump_tokens: bool = False
    dump_ast: bool = False
    dump_each_ast_json: bool = False
    single_file: bool = False
    dump_type_store: bool = False
    verbose_sema: bool = False
    verbose_lowering: bool = False
    verbose_ir_build: bool = True


def read_entire_file(path: str | Path) -> str:
    """Read the whole file as text; undecodable bytes are kept as surrogates.

    Raises OSError when the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()
    return data.decode("utf-8", errors="surrogateescape")


def write_file(path: str | Path, contents: str | bytes) -> None:
    """Write ``contents`` to ``path``, replacing what was there.

    Raises OSError when the file cannot be written.
    """
    if isinstance(contents, str):
        contents = contents.encode("utf-8", errors="surrogateescape")
    with open(path, "wb") as f:
        f.write(contents)