"""Streamlit rendering of the investment form wired to the recalculation engine."""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable

import streamlit as st

from calc import RecalculationEngine
from formatting import format_number_display, parse_numeric_input
from models import FIELD_CATALOG, SAMPLE_FORM_VALUES, FieldDescriptor, FieldKind
from state import load_form_engine
from validators import to_number

WIDGET_PREFIX = "field__"
DATE_MIN = date(1950, 1, 1)
DATE_MAX = date(2100, 12, 31)

SECTIONS = (
    ("物件情報", ("purchase_date", "total_price", "land_price", "building_price", "purchase_expenses",
                 "building_age", "structure")),
    ("収支条件", ("gross_yield", "current_yield", "vacancy_rate", "rent_decline_rate", "annual_operating_expenses")),
    ("資金計画", ("own_capital", "loan_amount", "loan_term_years", "interest_rate", "loan_type")),
    ("売却・お客様情報", ("expected_rate_of_return", "expected_sale_year", "expected_sale_price", "sale_expenses",
                   "owner_type", "annual_income")),
)


def widget_key(name: str) -> str:
    return f"{WIDGET_PREFIX}{name}"


def display_value(descriptor: FieldDescriptor, value: Any) -> Any:
    """Convert a stored value to what the widget for *descriptor* expects."""

    kind = descriptor.kind
    if kind is FieldKind.CURRENCY:
        return format_number_display(value)
    if kind in (FieldKind.PERCENTAGE, FieldKind.INTEGER):
        number = to_number(descriptor.name, value)
        if number is None:
            return None
        return int(number) if kind is FieldKind.INTEGER else float(number)
    if kind is FieldKind.DATE:
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value)) if value else None
        except ValueError:
            return None
    return value if value in descriptor.options else None


def read_widget(descriptor: FieldDescriptor, raw: Any) -> Any:
    """Convert a widget value back to the stored representation."""

    kind = descriptor.kind
    if kind is FieldKind.CURRENCY:
        return parse_numeric_input(raw)
    if kind in (FieldKind.PERCENTAGE, FieldKind.INTEGER):
        return to_number(descriptor.name, raw)
    if kind is FieldKind.DATE:
        return raw.isoformat() if isinstance(raw, date) else None
    return raw or None


def sync_widgets(engine: RecalculationEngine, names: Iterable[str] | None = None) -> None:
    for name in names if names is not None else FIELD_CATALOG:
        st.session_state[widget_key(name)] = display_value(FIELD_CATALOG[name], engine.get(name))


def _on_field_change(name: str) -> None:
    engine = load_form_engine()
    descriptor = FIELD_CATALOG[name]
    value = read_widget(descriptor, st.session_state.get(widget_key(name)))
    patch = engine.change(name, value)
    sync_widgets(engine, [name, *patch])


def _apply_sample_data() -> None:
    engine = load_form_engine()
    engine.apply_values(SAMPLE_FORM_VALUES)
    sync_widgets(engine)


def _label(descriptor: FieldDescriptor) -> str:
    return f"{descriptor.label} *" if descriptor.required else descriptor.label


def render_field(descriptor: FieldDescriptor, engine: RecalculationEngine) -> None:
    key = widget_key(descriptor.name)
    if key not in st.session_state:
        st.session_state[key] = display_value(descriptor, engine.get(descriptor.name))
    common = {"key": key, "on_change": _on_field_change, "args": (descriptor.name,)}
    label = _label(descriptor)

    if descriptor.kind is FieldKind.CURRENCY:
        st.text_input(label, placeholder="0", **common)
    elif descriptor.kind is FieldKind.PERCENTAGE:
        st.number_input(
            label,
            min_value=float(descriptor.min_value or 0.0),
            max_value=float(descriptor.max_value) if descriptor.max_value is not None else None,
            step=float(descriptor.step or 0.1),
            format="%.2f",
            **common,
        )
    elif descriptor.kind is FieldKind.INTEGER:
        st.number_input(
            label,
            min_value=int(descriptor.min_value or 0),
            max_value=int(descriptor.max_value) if descriptor.max_value is not None else None,
            step=1,
            **common,
        )
    elif descriptor.kind is FieldKind.DATE:
        st.date_input(label, min_value=DATE_MIN, max_value=DATE_MAX, **common)
    else:
        st.selectbox(label, options=list(descriptor.options), placeholder="選択してください", **common)

    if descriptor.formula:
        note = "手動入力値を優先しています" if descriptor.name in engine.tracker.manually_edited else "自動計算"
        st.caption(f"初期値: {descriptor.formula}（{note}）")
    if descriptor.description:
        st.caption(descriptor.description)


def render_form(engine: RecalculationEngine, *, show_sample_button: bool = False) -> bool:
    """Render every section and return ``True`` when the submit button is pressed."""

    for title, names in SECTIONS:
        st.subheader(title)
        columns = st.columns(2)
        for index, name in enumerate(names):
            with columns[index % 2]:
                render_field(FIELD_CATALOG[name], engine)

    if show_sample_button:
        st.button("テストデータを入力", on_click=_apply_sample_data)
    return st.button("送信", type="primary")


__all__ = [
    "SECTIONS",
    "WIDGET_PREFIX",
    "display_value",
    "read_widget",
    "render_field",
    "render_form",
    "sync_widgets",
    "widget_key",
]
