"""Reading of simple separated-value lines and small console helpers."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable, Iterable, Iterator

MAX_FIELDS = 128
CONTINUE_PROMPT = "Presione una tecla para continuar..."


def parse_csv_line(line: str, separator: str = ",") -> list[str]:
    """Split one line into fields.

    Fields may be quoted with ``"``; a doubled quote inside a quoted field is a
    literal quote. Text after the first line break is ignored, a trailing
    separator does not produce an empty field, and at most ``MAX_FIELDS - 1``
    fields are returned.
    """
    for brk in ("\r", "\n"):
        cut = line.find(brk)
        if cut != -1:
            line = line[:cut]

    fields: list[str] = []
    pos = 0
    end = len(line)
    while pos < end and len(fields) < MAX_FIELDS - 1:
        if line[pos] == '"':
            pos += 1
            chars: list[str] = []
            while pos < end:
                ch = line[pos]
                if ch == '"':
                    if pos + 1 < end and line[pos + 1] == '"':
                        chars.append('"')
                        pos += 2
                        continue
                    pos += 1
                    break
                chars.append(ch)
                pos += 1
            if pos < end and line[pos] == separator:
                pos += 1
            fields.append("".join(chars))
        else:
            stop = line.find(separator, pos)
            if stop == -1:
                fields.append(line[pos:])
                pos = end
            else:
                fields.append(line[pos:stop])
                pos = stop + 1
    return fields


def read_csv_rows(stream: Iterable[str], separator: str = ",") -> Iterator[list[str]]:
    """Yield the parsed fields of every line in ``stream``."""
    for line in stream:
        yield parse_csv_line(line, separator)


def split_string(text: str, delimiters: str) -> list[str]:
    """Split on any character of ``delimiters``, dropping empty pieces and
    trimming spaces around each token."""
    tokens: list[str] = []
    current: list[str] = []
    for ch in text:
        if ch in delimiters:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return [token.strip(" ") for token in tokens]


def clear_screen() -> None:
    """Clear the terminal."""
    try:
        subprocess.run(["clear"], check=False)
    except OSError:
        sys.stdout.write("\033[2J\033[H")
        sys.stdout.flush()


def wait_for_key(read_line: Callable[[], str] | None = None) -> None:
    """Prompt the user and wait until a line of input arrives."""
    print(CONTINUE_PROMPT)
    (read_line or sys.stdin.readline)()