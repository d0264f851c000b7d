"""
Raw-mode terminal access.

``Terminal`` puts stdin into raw mode and switches to the alternate screen
for the duration of a ``with`` block, restoring both on exit.
"""

from __future__ import annotations

import os
import select
import shutil
import sys
import termios
import tty
from typing import TextIO

from ssh_admin.logging import get_logger
from ssh_admin.tui.ansi import enter_alt_screen, exit_alt_screen, show_cursor
from ssh_admin.tui.keys import Key, parse_key, split_keys

logger = get_logger("tui.terminal")


class TerminalError(RuntimeError):
    """The controlling terminal cannot be used interactively."""


class Terminal:
    """
    Context manager owning the controlling terminal.

    Example
    -------
    >>> with Terminal() as term:          # doctest: +SKIP
    ...     for key in term.read_keys():
    ...         print(key.name)
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._fd = self._stdin.fileno()
        self._saved_attrs: list | None = None

    @property
    def output(self) -> TextIO:
        return self._stdout

    def __enter__(self) -> Terminal:
        if not os.isatty(self._fd):
            raise TerminalError("ssh-admin needs an interactive terminal")
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd, when=termios.TCSANOW)
        self._stdout.write(enter_alt_screen())
        self._stdout.flush()
        logger.debug("Terminal in raw mode")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._stdout.write(show_cursor() + exit_alt_screen())
        self._stdout.flush()
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        logger.debug("Terminal restored")

    def size(self) -> tuple[int, int]:
        """Current ``(columns, rows)``."""
        size = shutil.get_terminal_size()
        return size.columns, size.lines

    def read_keys(self, timeout: float | None = None) -> list[Key]:
        """
        Block until input arrives (or *timeout* seconds pass) and return
        the keys read.  An empty list means the timeout expired.
        """
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return []
        data = os.read(self._fd, 1024)
        return [parse_key(chunk) for chunk in split_keys(data)]
