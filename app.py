"""Streamlit entry point for the real-estate investment simulation form."""
from __future__ import annotations

import logging

import streamlit as st

from config import settings
from services.valuation import FormValidationError, ValuationAPIError, ValuationClient
from state import ensure_session_defaults, load_form_engine, reset_form_state
from ui.components import render_callout, render_metric_cards, summarize_result
from ui.form import render_form
from validators import collect_error_messages

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

st.set_page_config(
    page_title="不動産投資シミュレーション",
    page_icon=":house:",
    layout="centered",
)

ensure_session_defaults()
engine = load_form_engine()

st.title("不動産投資シミュレーション")
st.caption("物件価格を入力すると、購入諸費用・自己資金・借入金額などの初期値を自動で計算します。")

submitted = render_form(
    engine,
    show_sample_button=settings.SHOW_TEST_DATA_BUTTON and settings.ENV != "prod",
)

if submitted:
    st.session_state["validation_issues"] = []
    st.session_state["submission_error"] = ""
    with st.spinner("処理中..."):
        try:
            result = ValuationClient().submit(engine.values)
        except FormValidationError as exc:
            st.session_state["validation_issues"] = exc.issues
        except ValuationAPIError as exc:
            logger.warning("submission failed: %s", exc)
            st.session_state["submission_error"] = f"送信中にエラーが発生しました: {exc}"
        else:
            st.session_state["submission_result"] = result
            reset_form_state(seed={})
            st.rerun()

issues = st.session_state.get("validation_issues", [])
if issues:
    render_callout(title="入力内容を確認してください", body=collect_error_messages(issues), tone="caution")

error_message = st.session_state.get("submission_error", "")
if error_message:
    render_callout(title="エラー", body=error_message, tone="negative")

result = st.session_state.get("submission_result")
if result:
    st.subheader("分析結果")
    render_metric_cards(summarize_result(result))
