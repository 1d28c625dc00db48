"""Edit bookkeeping: which fields the user owns and which one has focus."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Set

from models import AUTO_CALCULATED_FIELDS, describe


@dataclass
class EditState:
    """Metadata about user edits, keyed by catalog field names."""

    manually_edited: Set[str] = field(default_factory=set)
    last_changed_field: str | None = None
    focused_field: str | None = None

    def snapshot(self) -> "EditState":
        return EditState(
            manually_edited=set(self.manually_edited),
            last_changed_field=self.last_changed_field,
            focused_field=self.focused_field,
        )


class EditTracker:
    """Record user edits and focus transitions on an :class:`EditState`.

    A field that enters ``manually_edited`` stays there for the lifetime of
    the tracker; the only way out is a fresh tracker (form reset).
    """

    def __init__(self, state: EditState | None = None) -> None:
        self._state = state if state is not None else EditState()

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def manually_edited(self) -> FrozenSet[str]:
        return frozenset(self._state.manually_edited)

    @property
    def last_changed_field(self) -> str | None:
        return self._state.last_changed_field

    @property
    def focused_field(self) -> str | None:
        return self._state.focused_field

    def record_change(self, name: str) -> None:
        describe(name)
        self._state.last_changed_field = name
        if name in AUTO_CALCULATED_FIELDS:
            self._state.manually_edited.add(name)

    def mark_manual(self, name: str) -> None:
        """Protect an auto-calculated output without touching ``last_changed_field``."""
        describe(name)
        if name in AUTO_CALCULATED_FIELDS:
            self._state.manually_edited.add(name)

    def record_focus(self, name: str) -> None:
        describe(name)
        self._state.focused_field = name

    def record_blur(self) -> None:
        self._state.focused_field = None

    def is_overridable(self, name: str) -> bool:
        describe(name)
        return name not in self._state.manually_edited


def is_overridable(state: EditState, name: str) -> bool:
    return name not in state.manually_edited


__all__ = ["EditState", "EditTracker", "is_overridable"]
