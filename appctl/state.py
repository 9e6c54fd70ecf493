from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .fuzzy import Candidate, RankedItem, fuzzy_filter

OUTCOME_CONFIRMED = "confirmed"
OUTCOME_ACTION = "action"
OUTCOME_CANCELLED = "cancelled"


@dataclass(frozen=True)
class Outcome:
    """The single terminal result of an interactive session."""

    kind: str
    candidate: Optional[Candidate] = None
    action: Optional[str] = None

    @classmethod
    def confirmed(cls, candidate: Candidate) -> "Outcome":
        return cls(OUTCOME_CONFIRMED, candidate)

    @classmethod
    def action_requested(cls, candidate: Candidate, action: str) -> "Outcome":
        return cls(OUTCOME_ACTION, candidate, action)

    @classmethod
    def cancelled(cls) -> "Outcome":
        return cls(OUTCOME_CANCELLED)

    @property
    def is_cancelled(self) -> bool:
        return self.kind == OUTCOME_CANCELLED


@dataclass
class ListState:
    """Candidates of one session, the ranked view for the query and the
    selection cursor.

    ``selection`` is ``None`` exactly when the view is empty.
    """

    candidates: Tuple[Candidate, ...]
    query: str = ""
    view: List[RankedItem] = field(default_factory=list, init=False)
    selection: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.candidates = tuple(self.candidates)
        self.set_query(self.query)

    @property
    def total(self) -> int:
        return len(self.candidates)

    def set_query(self, text: str) -> None:
        self.query = text
        self.view = fuzzy_filter(text, self.candidates)
        self.selection = 0 if self.view else None

    def append_char(self, char: str) -> None:
        self.set_query(self.query + char)

    def backspace(self) -> None:
        if self.query:
            self.set_query(self.query[:-1])

    def move_selection(self, delta: int) -> None:
        if self.selection is None:
            return
        last = len(self.view) - 1
        self.selection = max(0, min(last, self.selection + delta))

    def current(self) -> Optional[Candidate]:
        if self.selection is None:
            return None
        return self.view[self.selection].candidate

    def labels(self) -> Sequence[str]:
        return [item.candidate.label for item in self.view]
