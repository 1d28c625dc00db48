"""Formula catalog for the derived price and cost fields."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Mapping, Tuple

from models import ensure_known

from .tracking import EditState

Values = Mapping[str, Any]
RuleOutput = Dict[str, float]

PURCHASE_EXPENSE_RATIO = 0.08
DOWN_PAYMENT_RATIO = 0.10
LOAN_TO_PRICE_RATIO = 0.90
OPERATING_EXPENSE_RATIO = 0.07
SALE_EXPENSE_RATIO = 0.04

PRICE_COMPONENTS = ("land_price", "building_price")


def numeric(value: Any) -> float | None:
    """Return *value* as a float when it can drive a formula, else ``None``.

    Zero counts as empty, matching how the form treats an untouched input.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    number = float(value)
    if not math.isfinite(number) or number == 0:
        return None
    return number


def round_yen(amount: float) -> int:
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DerivationRule:
    """Pure mapping from a subset of fields to derived values."""

    name: str
    outputs: Tuple[str, ...]
    inputs: Tuple[str, ...]
    compute: Callable[[Values, EditState], RuleOutput]
    applies_if: Callable[[Values, EditState], bool]

    def __post_init__(self) -> None:
        ensure_known(self.outputs)
        ensure_known(self.inputs)

    def evaluate(self, values: Values, edit: EditState) -> RuleOutput:
        if not self.applies_if(values, edit):
            return {}
        produced = self.compute(values, edit)
        return {name: value for name, value in produced.items() if name in self.outputs}


def _decompose_price(values: Values, edit: EditState) -> RuleOutput:
    total = numeric(values.get("total_price"))
    land = numeric(values.get("land_price"))
    building = numeric(values.get("building_price"))

    last = edit.last_changed_field
    if last in PRICE_COMPONENTS:
        if last == "land_price":
            edited, counterpart = land, "building_price"
        else:
            edited, counterpart = building, "land_price"
        if total is not None and edited is not None:
            return {counterpart: total - edited}
        if total is None and land is not None and building is not None:
            return {"total_price": land + building}
        return {}

    if last == "total_price" and total is None:
        # A cleared total stays cleared.
        return {}
    if total is None:
        if land is not None and building is not None:
            return {"total_price": land + building}
        return {}
    if land is None and building is None:
        half = total * 0.5
        return {"land_price": half, "building_price": half}
    # Building is the anchor whenever it is known; land absorbs the difference.
    if building is not None:
        return {"land_price": total - building}
    return {"building_price": total - land}


def _has_total(values: Values, edit: EditState) -> bool:
    return numeric(values.get("total_price")) is not None


def _has_total_and_yield(values: Values, edit: EditState) -> bool:
    return _has_total(values, edit) and numeric(values.get("gross_yield")) is not None


def _has_sale_price(values: Values, edit: EditState) -> bool:
    return numeric(values.get("expected_sale_price")) is not None


def _always(values: Values, edit: EditState) -> bool:
    return True


def _purchase_expenses(values: Values, edit: EditState) -> RuleOutput:
    total = numeric(values["total_price"])
    return {"purchase_expenses": total * PURCHASE_EXPENSE_RATIO}


def _own_capital(values: Values, edit: EditState) -> RuleOutput:
    total = numeric(values["total_price"])
    expenses = numeric(values.get("purchase_expenses")) or 0.0
    return {"own_capital": total * DOWN_PAYMENT_RATIO + expenses}


def _loan_amount(values: Values, edit: EditState) -> RuleOutput:
    total = numeric(values["total_price"])
    return {"loan_amount": total * LOAN_TO_PRICE_RATIO}


def _expected_sale_price(values: Values, edit: EditState) -> RuleOutput:
    return {"expected_sale_price": numeric(values["total_price"])}


def _annual_operating_expenses(values: Values, edit: EditState) -> RuleOutput:
    total = numeric(values["total_price"])
    gross_yield = numeric(values["gross_yield"]) / 100
    full_occupancy_income = total * gross_yield
    return {"annual_operating_expenses": round_yen(full_occupancy_income * OPERATING_EXPENSE_RATIO)}


def _sale_expenses(values: Values, edit: EditState) -> RuleOutput:
    return {"sale_expenses": numeric(values["expected_sale_price"]) * SALE_EXPENSE_RATIO}


PRICE_DECOMPOSITION = DerivationRule(
    name="price_decomposition",
    outputs=("total_price", "land_price", "building_price"),
    inputs=("total_price", "land_price", "building_price"),
    compute=_decompose_price,
    applies_if=_always,
)

DEFAULT_RULES: Tuple[DerivationRule, ...] = (
    PRICE_DECOMPOSITION,
    DerivationRule(
        name="purchase_expenses",
        outputs=("purchase_expenses",),
        inputs=("total_price",),
        compute=_purchase_expenses,
        applies_if=_has_total,
    ),
    DerivationRule(
        name="own_capital",
        outputs=("own_capital",),
        inputs=("total_price", "purchase_expenses"),
        compute=_own_capital,
        applies_if=_has_total,
    ),
    DerivationRule(
        name="loan_amount",
        outputs=("loan_amount",),
        inputs=("total_price",),
        compute=_loan_amount,
        applies_if=_has_total,
    ),
    DerivationRule(
        name="expected_sale_price",
        outputs=("expected_sale_price",),
        inputs=("total_price",),
        compute=_expected_sale_price,
        applies_if=_has_total,
    ),
    DerivationRule(
        name="annual_operating_expenses",
        outputs=("annual_operating_expenses",),
        inputs=("total_price", "gross_yield"),
        compute=_annual_operating_expenses,
        applies_if=_has_total_and_yield,
    ),
    DerivationRule(
        name="sale_expenses",
        outputs=("sale_expenses",),
        inputs=("expected_sale_price",),
        compute=_sale_expenses,
        applies_if=_has_sale_price,
    ),
)


__all__ = [
    "DEFAULT_RULES",
    "DOWN_PAYMENT_RATIO",
    "DerivationRule",
    "LOAN_TO_PRICE_RATIO",
    "OPERATING_EXPENSE_RATIO",
    "PRICE_DECOMPOSITION",
    "PURCHASE_EXPENSE_RATIO",
    "SALE_EXPENSE_RATIO",
    "numeric",
    "round_yen",
]
