from __future__ import annotations

import logging
import os
import select
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, TextIO

from .constants import READ_TIMEOUT
from .errors import TerminalUnavailable

logger = logging.getLogger(__name__)

_CLEAR_SCREEN = "\033[2J\033[H"


def make_raw_reader(
    fd: int, timeout: float = READ_TIMEOUT
) -> Callable[[], Optional[str]]:
    """Return a single-character reader on the raw file descriptor *fd*.

    ``os.read`` is used instead of ``sys.stdin.read`` so that ``select()``
    and the read operate on the same OS-level buffer; a buffered reader could
    swallow the tail of an escape sequence and leave ``select()`` reporting
    no data.  Returns ``None`` when nothing arrives within *timeout*.
    """

    def read_char() -> Optional[str]:
        if not select.select([fd], [], [], timeout)[0]:
            return None
        data = os.read(fd, 1)
        if not data:
            return None
        return data.decode("utf-8", errors="replace")

    return read_char


class Terminal:
    """Keyboard input and screen output for the interactive picker.

    Input mode changes are scoped: use :meth:`capturing` so the original
    terminal attributes are restored on every exit path.
    """

    def __init__(
        self, input_fd: Optional[int] = None, output: Optional[TextIO] = None
    ) -> None:
        if input_fd is None:
            try:
                input_fd = sys.stdin.fileno()
            except (AttributeError, ValueError) as exc:
                # io.UnsupportedOperation is a ValueError
                raise TerminalUnavailable(
                    "standard input has no file descriptor"
                ) from exc
        self.input_fd = input_fd
        self.output = output or sys.stdout
        self._saved_attrs: Optional[List] = None
        self._read_char = make_raw_reader(self.input_fd)

    def enter_capturing_mode(self) -> None:
        """Put the input fd in cbreak mode (no echo, unbuffered keys).

        Raises :class:`TerminalUnavailable` when the fd is not a terminal or
        its attributes cannot be changed.
        """
        if not os.isatty(self.input_fd):
            raise TerminalUnavailable("standard input is not a terminal")

        try:
            import termios
            import tty
        except ImportError as exc:
            raise TerminalUnavailable(
                "interactive mode requires a POSIX terminal"
            ) from exc

        try:
            self._saved_attrs = termios.tcgetattr(self.input_fd)
            tty.setcbreak(self.input_fd)
        except termios.error as exc:
            self._saved_attrs = None
            raise TerminalUnavailable(f"cannot configure terminal: {exc}") from exc

        logger.debug("Entered capturing mode on fd %s", self.input_fd)

    def reset(self) -> None:
        """Restore the terminal attributes saved by :meth:`enter_capturing_mode`."""
        if self._saved_attrs is None:
            return

        import termios

        termios.tcsetattr(self.input_fd, termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None
        logger.debug("Restored terminal attributes on fd %s", self.input_fd)

    @contextmanager
    def capturing(self) -> Iterator["Terminal"]:
        self.enter_capturing_mode()
        try:
            yield self
        finally:
            self.reset()

    def read_char(self) -> Optional[str]:
        return self._read_char()

    def write(self, s: str) -> None:
        self.output.write(s)
        self.output.flush()

    def clear(self) -> None:
        self.write(_CLEAR_SCREEN)


def get_terminal() -> Terminal:
    return Terminal()
