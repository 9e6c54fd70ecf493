"""Interactive picker for running applications.

Renders a list of candidates in the terminal:

    Search Applications: sa_
      2/14 matches
      ❯ 🌐 Safari
        💬 Slack
      ↑/↓ navigate  enter open  backspace delete  esc cancel

Browse mode keys:
    ↑ / ↓       – move the selection cursor
    Enter / o   – open the highlighted application
    k           – kill the highlighted application
    q / Escape  – cancel

Search mode keys:
    typing      – refine the query
    ↑ / ↓       – move the selection cursor
    Backspace   – delete the last query character
    Enter       – accept the highlighted item
    Escape      – cancel
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, List, Mapping, Optional, Sequence, Union

from .constants import DEFAULT_MAX_VISIBLE, MODE_BROWSE, MODE_SEARCH, MODES
from .fuzzy import Candidate, as_candidates
from .icons import get_icon
from .keys import (
    CMD_ACTION,
    CMD_APPEND,
    CMD_BACKSPACE,
    CMD_CANCEL,
    CMD_CONFIRM,
    CMD_MOVE_DOWN,
    CMD_MOVE_UP,
    Command,
    read_key_event,
    resolve_command,
)
from .state import ListState, Outcome
from .terminal import make_raw_reader

logger = logging.getLogger(__name__)

# ANSI helpers
_CSI = "\033["
_CLEAR_LINE = f"{_CSI}2K"
_CURSOR_UP = f"{_CSI}1A"
_HIDE_CURSOR = f"{_CSI}?25l"
_SHOW_CURSOR = f"{_CSI}?25h"
_BOLD = f"{_CSI}1m"
_DIM = f"{_CSI}2m"
_GREEN = f"{_CSI}32m"
_YELLOW = f"{_CSI}33m"
_CYAN = f"{_CSI}36m"
_REVERSE = f"{_CSI}7m"
_RESET = f"{_CSI}0m"

SELECTED_MARKER = "❯"

_HINTS = {
    MODE_BROWSE: "↑/↓ navigate  enter/o open  k kill  q/esc quit",
    MODE_SEARCH: "↑/↓ navigate  enter open  backspace delete  esc cancel",
}


# -- Rendering ---------------------------------------------------------------


def _highlight(label: str, positions: Sequence[int], base: str) -> str:
    """Wrap the characters of *label* at *positions* in the match style.

    *base* is the style of the surrounding row and is re-applied after each
    highlighted character.
    """
    if not positions:
        return label
    marked = set(positions)
    parts: List[str] = []
    for i, ch in enumerate(label):
        if i in marked:
            parts.append(f"{_BOLD}{_YELLOW}{ch}{_RESET}{base}")
        else:
            parts.append(ch)
    return "".join(parts)


def scroll_top(top: int, cursor: Optional[int], count: int, height: int) -> int:
    """Return the first visible row so that *cursor* stays on screen."""
    if cursor is None or count <= height:
        return 0
    if cursor < top:
        return cursor
    if cursor >= top + height:
        return cursor - height + 1
    return min(top, count - height)


def render(
    state: ListState,
    mode: str = MODE_BROWSE,
    *,
    top: int = 0,
    height: int = DEFAULT_MAX_VISIBLE,
    show_icons: bool = True,
    icons: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the full screen content for the current state."""
    lines: List[str] = []

    if mode == MODE_SEARCH:
        lines.append(
            f"{_BOLD}{_GREEN}Search Applications:{_RESET} "
            f"{_BOLD}{_YELLOW}{state.query}{_RESET}_"
        )
    else:
        lines.append(f"{_BOLD}{_CYAN}Running Applications{_RESET}")

    lines.append(f"  {_CYAN}{len(state.view)}/{state.total} matches{_RESET}")

    visible = state.view[top : top + height]
    for offset, item in enumerate(visible):
        label = item.candidate.label
        icon = f"{get_icon(label, icons)} " if show_icons else ""
        if top + offset == state.selection:
            base = f"{_REVERSE}{_BOLD}"
            text = _highlight(label, item.positions, base)
            lines.append(f"  {base}{SELECTED_MARKER} {icon}{text}{_RESET}")
        else:
            lines.append(f"    {icon}{_highlight(label, item.positions, '')}")

    if not visible:
        lines.append(f"  {_CYAN}(no matches){_RESET}")

    lines.append(f"  {_DIM}{_HINTS.get(mode, '')}{_RESET}")

    return "\n".join(lines)


def _printed_line_count(text: str) -> int:
    return text.count("\n") + 1


# -- Core loop ---------------------------------------------------------------


def update_state(state: ListState, command: Command) -> Optional[Outcome]:
    """Apply *command* to *state*.

    Returns the session :class:`Outcome` when *command* ends the session,
    ``None`` while it keeps running.
    """
    if command.kind == CMD_CANCEL:
        return Outcome.cancelled()

    if command.kind == CMD_CONFIRM:
        current = state.current()
        if current is None:
            return None
        return Outcome.confirmed(current)

    if command.kind == CMD_ACTION:
        current = state.current()
        if current is None or command.action is None:
            return None
        return Outcome.action_requested(current, command.action)

    if command.kind == CMD_MOVE_UP:
        state.move_selection(-1)
    elif command.kind == CMD_MOVE_DOWN:
        state.move_selection(1)
    elif command.kind == CMD_APPEND:
        state.append_char(command.char)
    elif command.kind == CMD_BACKSPACE:
        state.backspace()

    return None


def run_picker(
    candidates: Sequence[Union[str, Candidate]],
    mode: str = MODE_BROWSE,
    *,
    max_visible: int = DEFAULT_MAX_VISIBLE,
    show_icons: bool = True,
    icons: Optional[Mapping[str, str]] = None,
    _read_char: Optional[Callable[[], Optional[str]]] = None,
    _write: Optional[Callable[[str], None]] = None,
) -> Outcome:
    """Run the interactive picker and return the session :class:`Outcome`.

    The caller is responsible for putting the terminal in capturing mode
    (see :meth:`appctl.terminal.Terminal.capturing`).

    *_read_char* and *_write* are injectable for testing; when ``None`` they
    default to an unbuffered reader on ``sys.stdin`` and to ``sys.stdout``.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown picker mode: {mode!r}")

    if _write is None:

        def _write(s: str) -> None:
            sys.stdout.write(s)
            sys.stdout.flush()

    if _read_char is None:
        _read_char = make_raw_reader(sys.stdin.fileno())

    state = ListState(as_candidates(candidates))
    logger.debug("Picker started in %s mode with %d candidates", mode, state.total)

    _write(_HIDE_CURSOR)
    prev_lines = 0
    top = 0
    dirty = True
    outcome: Optional[Outcome] = None

    try:
        while outcome is None:
            if dirty:
                # Erase previous frame
                if prev_lines:
                    _write(_CURSOR_UP * (prev_lines - 1))
                    _write("\r")
                    for _ in range(prev_lines):
                        _write(f"{_CLEAR_LINE}\n")
                    _write(_CURSOR_UP * prev_lines)
                    _write("\r")

                top = scroll_top(top, state.selection, len(state.view), max_visible)
                frame = render(
                    state,
                    mode,
                    top=top,
                    height=max_visible,
                    show_icons=show_icons,
                    icons=icons,
                )
                _write(frame)
                prev_lines = _printed_line_count(frame)
                dirty = False

            try:
                event = read_key_event(_read_char)
            except KeyboardInterrupt:
                logger.debug("Interrupted while waiting for input")
                outcome = Outcome.cancelled()
                break

            if event is None:
                continue
            outcome = update_state(state, resolve_command(event, mode))
            dirty = True
    finally:
        _write(_SHOW_CURSOR)
        # Move below the rendered frame so the next output starts clean
        _write("\n")

    logger.debug("Picker finished: %s", outcome)
    return outcome
