from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple, Union

from . import picker
from .config import Config
from .constants import ACTION_OPEN
from .errors import EnumerationFailed
from .fuzzy import Candidate, as_candidates
from .state import OUTCOME_ACTION, OUTCOME_CONFIRMED, Outcome
from .terminal import Terminal, get_terminal

logger = logging.getLogger(__name__)

CandidateSource = Callable[[], Iterable[Union[str, Candidate]]]
ActionExecutor = Callable[[str, str], object]


def configure_logging() -> None:
    if _is_debug_mode():
        log_format = "[appctl] %(levelname)s %(threadName)s %(name)s: %(message)s"
        level = logging.DEBUG
    else:
        log_format = "[appctl] %(message)s"
        level = logging.INFO

    logging.basicConfig(level=level, format=log_format)


def load_candidates(source: CandidateSource) -> Tuple[Candidate, ...]:
    """Call *source* once and normalize its result.

    Any failure of the source is reported as :class:`EnumerationFailed`.
    """
    try:
        candidates = as_candidates(source())
    except Exception as exc:
        raise EnumerationFailed(
            f"Could not list running applications: {exc}"
        ) from exc

    logger.debug("Enumerated %d candidates", len(candidates))
    return candidates


def dispatch(outcome: Outcome, executor: ActionExecutor) -> Optional[str]:
    """Hand a finished session's choice to *executor*.

    A confirmed choice opens the application.  Returns the action that was
    dispatched, or ``None`` for a cancelled session.  Errors raised by
    *executor* propagate to the caller.
    """
    if outcome.candidate is None:
        return None

    if outcome.kind == OUTCOME_CONFIRMED:
        action = ACTION_OPEN
    elif outcome.kind == OUTCOME_ACTION and outcome.action is not None:
        action = outcome.action
    else:
        return None

    logger.debug("Dispatching %s to %s", action, outcome.candidate.identifier)
    executor(outcome.candidate.identifier, action)
    return action


def run_session(
    source: CandidateSource,
    executor: Optional[ActionExecutor] = None,
    *,
    mode: Optional[str] = None,
    config: Optional[Config] = None,
    terminal: Optional[Terminal] = None,
) -> Outcome:
    """Run one interactive selection over the applications listed by *source*.

    Raises :class:`~appctl.errors.EnumerationFailed` or
    :class:`~appctl.errors.TerminalUnavailable` before anything is drawn.
    """
    if config is None:
        config = Config.create(Path.cwd(), {"mode": mode})
    elif mode is not None:
        config.mode = mode
        config.validate()

    candidates = load_candidates(source)
    if not candidates:
        logger.info("No running applications found")
        return Outcome.cancelled()

    term = terminal or get_terminal()
    with term.capturing():
        outcome = picker.run_picker(
            candidates,
            config.mode,
            max_visible=config.max_visible,
            show_icons=config.show_icons,
            icons=config.icons,
            _read_char=term.read_char,
            _write=term.write,
        )

    logger.debug("Session ended with %s", outcome)
    if executor is not None:
        dispatch(outcome, executor)
    return outcome


def _is_debug_mode() -> bool:
    debug_value = os.getenv("APPCTL_DEBUG", "")

    normalized = debug_value.lower().strip()
    return normalized not in {"", "0", "false", "no", "off"}
