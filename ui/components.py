"""Reusable UI helpers for result cards and notices."""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Sequence, Tuple

import streamlit as st

from formatting import format_man_yen, format_percent, format_years


@dataclass(frozen=True)
class MetricCard:
    label: str
    value: str
    help: str | None = None


RESULT_METRICS: Sequence[Tuple[str, str, Callable[[Any], str], str]] = (
    ("internal_rate_of_return", "全期間利回り（IRR）", format_percent, "内部収益率"),
    ("cash_on_cash_return", "自己資金配当率（CCR）", format_percent, "税引前CF ÷ 自己資金"),
    ("free_clearly_return", "総収益率（FCR）", format_percent, "NOI ÷ 総投資額"),
    ("noi_yield", "NOI利回り", format_percent, "NOI ÷ 物件価格"),
    ("payback_period", "自己資金回収期間", format_years, None),
    ("debt_service_coverage_ratio", "返済余裕率（DSCR）", lambda v: f"{float(v):.2f}", None),
    ("loan_to_value", "融資比率（LTV）", format_percent, None),
    ("total_pl", "全期間収支", format_man_yen, None),
)


def summarize_result(result: Mapping[str, Any]) -> List[MetricCard]:
    """Pick the headline indicators present in a valuation response."""

    cards: List[MetricCard] = []
    for key, label, formatter, help_text in RESULT_METRICS:
        value = result.get(key)
        if value is None:
            continue
        cards.append(MetricCard(label=label, value=formatter(value), help=help_text))
    return cards


def render_metric_cards(cards: Sequence[MetricCard], *, per_row: int = 4) -> None:
    if not cards:
        return
    for start in range(0, len(cards), per_row):
        columns = st.columns(per_row)
        for column, card in zip(columns, cards[start : start + per_row]):
            column.metric(card.label, card.value, help=card.help)


def render_callout(*, title: str, body: str, tone: str = "neutral") -> None:
    """Render a boxed notice; newlines in *body* become line breaks."""

    body_html = "<br>".join(html.escape(line) for line in body.splitlines())
    st.markdown(
        f"""
        <div class="callout callout--{html.escape(tone)}" role="note">
            <strong class="callout__title">{html.escape(title)}</strong>
            <p>{body_html}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


__all__ = ["MetricCard", "RESULT_METRICS", "render_callout", "render_metric_cards", "summarize_result"]
