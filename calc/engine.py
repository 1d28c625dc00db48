"""Recalculation engine keeping the derived form fields consistent."""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence

from models import FormValues, default_form_values, describe

from .rules import DEFAULT_RULES, DerivationRule
from .tracking import EditState, EditTracker, is_overridable

logger = logging.getLogger(__name__)

Patch = Dict[str, Any]


class EngineStatus(str, Enum):
    IDLE = "idle"
    SUSPENDED = "suspended"
    RECOMPUTING = "recomputing"


def _same_value(current: Any, proposed: Any) -> bool:
    if isinstance(current, (int, float)) and not isinstance(current, bool):
        return math.isclose(float(current), float(proposed), rel_tol=1e-9, abs_tol=1e-6)
    return current == proposed


def derive(
    values: Mapping[str, Any],
    edit: EditState,
    rules: Sequence[DerivationRule] = DEFAULT_RULES,
) -> Patch:
    """Evaluate *rules* in order and return the fields that would change.

    Each rule sees the stored values merged with outputs of earlier rules in
    the same pass. Outputs the user has edited by hand are skipped, and values
    equal to the stored ones are left out of the patch.
    """

    working: Dict[str, Any] = dict(values)
    patch: Patch = {}
    for rule in rules:
        for name, value in rule.evaluate(working, edit).items():
            if not is_overridable(edit, name):
                continue
            working[name] = value
            if name in values and _same_value(values[name], value):
                patch.pop(name, None)
                continue
            patch[name] = value
    return patch


def recompute(
    values: Mapping[str, Any],
    edit: EditState,
    rules: Sequence[DerivationRule] = DEFAULT_RULES,
) -> Patch:
    """Return the patch to apply now; empty while a field holds focus."""
    if edit.focused_field is not None:
        return {}
    return derive(values, edit, rules)


class RecalculationEngine:
    """Owns one form session: the field values, the edit state and the rules."""

    def __init__(
        self,
        seed: Mapping[str, Any] | None = None,
        *,
        rules: Sequence[DerivationRule] = DEFAULT_RULES,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._rules = tuple(rules)
        self._defaults = dict(defaults) if defaults is not None else None
        self._start(seed)

    def _start(self, seed: Mapping[str, Any] | None) -> None:
        base = dict(self._defaults) if self._defaults is not None else default_form_values()
        for name, value in (seed or {}).items():
            describe(name)
            if value is not None:
                base[name] = value
        self._values: FormValues = base
        self._tracker = EditTracker()
        self._status = EngineStatus.IDLE
        self._pending: Patch = {}
        self.history: List[Patch] = []

    @property
    def values(self) -> FormValues:
        return dict(self._values)

    @property
    def edit_state(self) -> EditState:
        return self._tracker.state.snapshot()

    @property
    def tracker(self) -> EditTracker:
        return self._tracker

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def pending_patch(self) -> Patch:
        """Patch computed while suspended, applied on blur."""
        return dict(self._pending)

    def get(self, name: str, default: Any = None) -> Any:
        describe(name)
        return self._values.get(name, default)

    def initialize(self) -> Patch:
        """Run the first pass over defaults and seed values."""
        return self._run(trigger=None)

    def focus(self, name: str) -> None:
        self._tracker.record_focus(name)
        self._status = EngineStatus.SUSPENDED

    def blur(self) -> Patch:
        was_suspended = self._status is EngineStatus.SUSPENDED or self._tracker.focused_field is not None
        self._tracker.record_blur()
        if not was_suspended:
            return {}
        self._status = EngineStatus.IDLE
        return self._run(trigger=self._tracker.last_changed_field)

    def change(self, name: str, value: Any) -> Patch:
        """Store a user edit and return the patch applied to other fields."""
        self._tracker.record_change(name)
        self._values[name] = value
        if self._status is EngineStatus.SUSPENDED:
            self._pending = derive(self._values, self._tracker.state, self._rules)
            logger.debug("deferred recompute while %s has focus: %s", self._tracker.focused_field, self._pending)
            return {}
        return self._run(trigger=name)

    def apply_values(self, values: Mapping[str, Any]) -> Patch:
        """Overwrite several values at once (e.g. a sample dataset) and recompute.

        Supplied auto-calculated outputs count as user choices and are kept.
        """
        for name, value in values.items():
            describe(name)
            self._values[name] = value
            self._tracker.mark_manual(name)
        return self._run(trigger=None)

    def reset(self, seed: Mapping[str, Any] | None = None) -> None:
        self._start(seed)

    def _run(self, trigger: str | None) -> Patch:
        if self._tracker.focused_field is not None:
            # Still suspended: keep the patch for blur instead of applying it.
            self._status = EngineStatus.SUSPENDED
            self._pending = derive(self._values, self._tracker.state, self._rules)
            return {}

        patch: Patch = {}
        self._status = EngineStatus.RECOMPUTING
        try:
            patch = recompute(self._values, self._tracker.state, self._rules)
            if patch:
                self._values.update(patch)
                self.history.append(dict(patch))
                logger.debug("applied patch after %s: %s", trigger or "initial load", patch)
        finally:
            self._pending = {}
            self._status = EngineStatus.IDLE
        return patch


__all__ = ["EngineStatus", "Patch", "RecalculationEngine", "derive", "recompute"]
