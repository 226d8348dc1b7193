"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from typing import Callable

name = "gelf_formatter"
title = "Format structured log records as GELF JSON lines"
version = "0.1.0"
author = "gelf_formatter maintainers"
shell_command = "gelf_formatter"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (defaults to stdout)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


def summary_info() -> str:
    """Return the metadata banner as a single string.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    lines: list[str] = []
    print_info(writer=lines.append)
    return "".join(lines)
