"""Pydantic model for a completed investment form and its default values."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .fields import (
    FIELD_CATALOG,
    LOAN_TYPE_OPTIONS,
    OWNER_TYPE_OPTIONS,
    STRUCTURE_OPTIONS,
)

PRICE_TOLERANCE = 1.0  # yen

FormValues = Dict[str, Any]


class InvestmentForm(BaseModel):
    """Validated form contents. Percentages are kept in the 0–100 display domain."""

    model_config = ConfigDict(extra="forbid")

    purchase_date: date
    total_price: float
    land_price: float
    building_price: float
    purchase_expenses: float | None = None
    building_age: int
    structure: str
    gross_yield: float
    current_yield: float
    vacancy_rate: float | None = None
    rent_decline_rate: float | None = None
    annual_operating_expenses: float | None = None
    own_capital: float | None = None
    loan_amount: float | None = None
    loan_term_years: int | None = None
    interest_rate: float
    loan_type: str
    expected_rate_of_return: float
    expected_sale_year: date
    expected_sale_price: float
    sale_expenses: float | None = None
    owner_type: str
    annual_income: float

    @field_validator("structure")
    @classmethod
    def _check_structure(cls, value: str) -> str:
        if value not in STRUCTURE_OPTIONS:
            raise ValueError("建物構造を選択してください。")
        return value

    @field_validator("loan_type")
    @classmethod
    def _check_loan_type(cls, value: str) -> str:
        if value not in LOAN_TYPE_OPTIONS:
            raise ValueError("ローンタイプは『元利均等』か『元金均等』を選択してください。")
        return value

    @field_validator("owner_type")
    @classmethod
    def _check_owner_type(cls, value: str) -> str:
        if value not in OWNER_TYPE_OPTIONS:
            raise ValueError("お客様の分類は『個人』か『法人』を選択してください。")
        return value

    @model_validator(mode="after")
    def _check_ranges(self) -> "InvestmentForm":
        for name, descriptor in FIELD_CATALOG.items():
            if not descriptor.is_numeric:
                continue
            value = getattr(self, name)
            if value is None:
                continue
            if descriptor.min_value is not None and value < descriptor.min_value:
                raise ValueError(f"{descriptor.label}は{descriptor.min_value:g}以上で入力してください。")
            if descriptor.max_value is not None and value > descriptor.max_value:
                raise ValueError(f"{descriptor.label}は{descriptor.max_value:g}以下で入力してください。")
        return self

    @model_validator(mode="after")
    def _check_price_breakdown(self) -> "InvestmentForm":
        if self.total_price <= 0:
            raise ValueError("物件価格 総計は正の値を入力してください。")
        if abs(self.land_price + self.building_price - self.total_price) > PRICE_TOLERANCE:
            raise ValueError("物件価格の土地と建物の合計が総計と一致しません。")
        return self

    @model_validator(mode="after")
    def _check_sale_after_purchase(self) -> "InvestmentForm":
        if self.expected_sale_year <= self.purchase_date:
            raise ValueError("売却想定時期は購入年月より後の日付を入力してください。")
        return self


def default_expected_sale_year(today: date | None = None) -> str:
    today = today or date.today()
    return date(today.year + 30, 1, 1).isoformat()


def default_form_values(today: date | None = None) -> FormValues:
    """Return the initial values of a fresh form."""
    return {
        "vacancy_rate": 0.05,
        "loan_term_years": 35,
        "rent_decline_rate": 0.01,
        "owner_type": "個人",
        "loan_type": "元利均等",
        "expected_rate_of_return": 0.05,
        "expected_sale_year": default_expected_sale_year(today),
    }


SAMPLE_FORM_VALUES: FormValues = {
    "purchase_date": "2025-01-01",
    "total_price": 100000000,
    "land_price": 40000000,
    "building_price": 60000000,
    "purchase_expenses": 8000000,
    "building_age": 10,
    "structure": "重量鉄骨造(S)",
    "gross_yield": 8.0,
    "current_yield": 8.0,
    "vacancy_rate": 5.0,
    "rent_decline_rate": 1.0,
    "annual_operating_expenses": 560000,
    "own_capital": 18000000,
    "loan_amount": 90000000,
    "loan_term_years": 35,
    "interest_rate": 2.5,
    "loan_type": "元利均等",
    "expected_rate_of_return": 3.0,
    "expected_sale_year": "2055-01-01",
    "expected_sale_price": 60000000,
    "sale_expenses": 2400000,
    "owner_type": "個人",
    "annual_income": 10000000,
}
