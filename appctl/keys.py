"""Key decoding and command resolution for the picker.

Raw terminal input is turned into :class:`KeyEvent` objects by
:func:`read_key_event`; :func:`resolve_command` then maps each event to a
:class:`Command` according to the picker mode:

    browse      o = open, k = kill, q = quit, printable keys are ignored
    search      every printable key edits the query
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .constants import ACTION_OPEN, ACTION_TERMINATE, MODE_BROWSE, MODE_SEARCH

# -- Key constants -----------------------------------------------------------

KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_BACKSPACE = "backspace"
KEY_UP = "up"
KEY_DOWN = "down"
KEY_INTERRUPT = "interrupt"  # Ctrl-C delivered as a byte
KEY_UNKNOWN = "unknown"  # escape sequence we do not handle
KEY_CHAR = "char"  # regular printable character


@dataclass
class KeyEvent:
    kind: str
    char: str = ""


# -- Command constants -------------------------------------------------------

CMD_MOVE_UP = "move_up"
CMD_MOVE_DOWN = "move_down"
CMD_APPEND = "append"
CMD_BACKSPACE = "backspace"
CMD_CONFIRM = "confirm"
CMD_CANCEL = "cancel"
CMD_ACTION = "action"
CMD_NOOP = "noop"


@dataclass(frozen=True)
class Command:
    kind: str
    char: str = ""
    action: Optional[str] = None


NOOP = Command(CMD_NOOP)

BROWSE_SHORTCUTS = {
    "o": Command(CMD_ACTION, action=ACTION_OPEN),
    "k": Command(CMD_ACTION, action=ACTION_TERMINATE),
    "q": Command(CMD_CANCEL),
}


# -- Decoding ----------------------------------------------------------------

_ESC_READ_RETRIES = 4  # max None returns to tolerate inside an escape sequence


def _read_continuation(
    read_char: Callable[[], Optional[str]],
) -> Optional[str]:
    """Read the next real character, skipping up to *_ESC_READ_RETRIES* ``None``
    returns.

    The reader polls with a short ``select()`` timeout, so the bytes of one
    escape sequence may arrive across several polls.
    """
    for _ in range(_ESC_READ_RETRIES):
        ch = read_char()
        if ch is not None:
            return ch
    return None


def _parse_arrow(direction: Optional[str]) -> Optional[KeyEvent]:
    if direction == "A":
        return KeyEvent(KEY_UP)
    if direction == "B":
        return KeyEvent(KEY_DOWN)
    return None


def read_key_event(read_char: Callable[[], Optional[str]]) -> Optional[KeyEvent]:
    """Read one logical key event using *read_char* (a single-char reader).

    Handles arrow keys in both normal mode (``ESC [ A/B``) and application
    mode (``ESC O A/B``).  A lone ``ESC`` is the Escape key; any other
    sequence is reported as ``KEY_UNKNOWN`` so that, for instance, a right
    arrow does not cancel the session.
    """
    ch = read_char()
    if ch is None:
        return None

    if ch == "\x1b":
        seq1 = _read_continuation(read_char)
        if seq1 is None:
            return KeyEvent(KEY_ESCAPE)
        if seq1 in ("[", "O"):
            seq2 = _read_continuation(read_char)
            arrow = _parse_arrow(seq2)
            if arrow is not None:
                return arrow
            if seq2 is not None:
                _drain_csi_params(seq2, read_char)
            return KeyEvent(KEY_UNKNOWN)
        if seq1 == "\x1b":
            return KeyEvent(KEY_ESCAPE)
        return KeyEvent(KEY_UNKNOWN)

    if ch in ("\n", "\r"):
        return KeyEvent(KEY_ENTER)

    if ch in ("\x7f", "\x08"):  # DEL / Backspace
        return KeyEvent(KEY_BACKSPACE)

    if ch == "\x03":
        return KeyEvent(KEY_INTERRUPT)

    if ch.isprintable():
        return KeyEvent(KEY_CHAR, ch)

    return None  # ignore other control characters


def _drain_csi_params(
    last: Optional[str], read_char: Callable[[], Optional[str]]
) -> None:
    # ESC [ 3 ~ and friends: parameter bytes end at the first byte in @..~
    while last is not None and not ("@" <= last <= "~"):
        last = _read_continuation(read_char)


# -- Resolution --------------------------------------------------------------


def resolve_command(event: Optional[KeyEvent], mode: str) -> Command:
    """Classify *event* into the command it means in *mode*."""
    if event is None:
        return NOOP

    if event.kind == KEY_UP:
        return Command(CMD_MOVE_UP)
    if event.kind == KEY_DOWN:
        return Command(CMD_MOVE_DOWN)
    if event.kind == KEY_ENTER:
        return Command(CMD_CONFIRM)
    if event.kind in (KEY_ESCAPE, KEY_INTERRUPT):
        return Command(CMD_CANCEL)

    if mode == MODE_SEARCH:
        if event.kind == KEY_BACKSPACE:
            return Command(CMD_BACKSPACE)
        if event.kind == KEY_CHAR:
            return Command(CMD_APPEND, char=event.char)
        return NOOP

    if mode == MODE_BROWSE and event.kind == KEY_CHAR:
        return BROWSE_SHORTCUTS.get(event.char.lower(), NOOP)

    return NOOP
