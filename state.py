"""Utilities for managing Streamlit session state defaults and resets."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping

import streamlit as st

from calc import RecalculationEngine
from validators import coerce_seed

logger = logging.getLogger(__name__)

StateFactory = Callable[[], Any]
TypeHint = type | tuple[type, ...] | None


@dataclass(frozen=True)
class StateSpec:
    """Definition of a session state entry."""

    default_factory: StateFactory
    type_hint: TypeHint
    description: str

    def create_default(self) -> Any:
        """Return a new default value for the state entry."""
        return self.default_factory()

    def is_valid(self, value: Any) -> bool:
        """Check whether *value* matches the declared type hint."""
        if self.type_hint is None:
            return True
        hints = self.type_hint if isinstance(self.type_hint, tuple) else (self.type_hint,)
        return isinstance(value, hints)


def new_form_engine(seed: Mapping[str, Any] | None = None) -> RecalculationEngine:
    """Create a form session from *seed* (or the stored seed) and run the first pass."""

    if seed is None:
        seed = st.session_state.get("form_seed", {})
    engine = RecalculationEngine(coerce_seed(seed))
    engine.initialize()
    return engine


STATE_SPECS: Dict[str, StateSpec] = {
    "form_seed": StateSpec(dict, dict, "PDF解析などから取り込んだ初期値"),
    "form_engine": StateSpec(new_form_engine, RecalculationEngine, "入力値と自動計算の状態"),
    "validation_issues": StateSpec(list, list, "送信前チェックのエラー一覧"),
    "submission_result": StateSpec(lambda: None, (dict, type(None)), "査定APIのレスポンス"),
    "submission_error": StateSpec(lambda: "", str, "送信エラーメッセージ"),
}


def ensure_session_defaults(overrides: Mapping[str, Any] | None = None) -> None:
    """Populate :mod:`st.session_state` with defaults and type-validate entries."""

    overrides = overrides or {}
    for key, spec in STATE_SPECS.items():
        if key in overrides:
            st.session_state[key] = overrides[key]
            continue
        if key not in st.session_state or not spec.is_valid(st.session_state[key]):
            st.session_state[key] = spec.create_default()


def reset_session_keys(keys: Iterable[str] | None = None) -> None:
    """Reset selected state keys to their default values."""

    target_keys = list(keys) if keys is not None else list(STATE_SPECS.keys())
    for key in target_keys:
        if key in STATE_SPECS:
            st.session_state[key] = STATE_SPECS[key].create_default()
        elif key in st.session_state:
            del st.session_state[key]


def reset_form_state(seed: Mapping[str, Any] | None = None, *, widget_prefix: str = "field__") -> None:
    """Start a fresh form session, optionally from a new seed.

    Widget values are dropped too so that inputs re-render from the engine.
    """

    for key in [k for k in st.session_state.keys() if str(k).startswith(widget_prefix)]:
        del st.session_state[key]
    if seed is not None:
        st.session_state["form_seed"] = dict(seed)
    reset_session_keys(["form_engine", "validation_issues", "submission_error"])
    logger.info("form state reset (seeded=%s)", bool(st.session_state.get("form_seed")))


def load_form_engine() -> RecalculationEngine:
    """Return the current form engine, creating it on first access."""

    engine = st.session_state.get("form_engine")
    if not isinstance(engine, RecalculationEngine):
        engine = new_form_engine()
        st.session_state["form_engine"] = engine
    return engine


__all__ = [
    "StateSpec",
    "STATE_SPECS",
    "ensure_session_defaults",
    "load_form_engine",
    "new_form_engine",
    "reset_form_state",
    "reset_session_keys",
]
