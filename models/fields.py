"""Static catalog describing every input field of the investment form."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple


class UnknownFieldError(KeyError):
    """Raised when a field name is not registered in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"未登録のフィールドです: {self.name!r}"


class FieldKind(str, Enum):
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    INTEGER = "integer"
    DATE = "date"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldDescriptor:
    """Definition of a single form field."""

    name: str
    kind: FieldKind
    label: str
    required: bool = False
    formula: str | None = None
    description: str | None = None
    options: Tuple[str, ...] = ()
    step: float | None = None
    min_value: float | None = None
    max_value: float | None = None

    @property
    def is_numeric(self) -> bool:
        return self.kind in (FieldKind.CURRENCY, FieldKind.PERCENTAGE, FieldKind.INTEGER)


STRUCTURE_OPTIONS: Tuple[str, ...] = (
    "木造(W)",
    "軽量鉄骨造",
    "重量鉄骨造(S)",
    "ブロック造(B)",
    "鉄筋コンクリート造(RC)",
    "鉄骨鉄筋コンクリート造(SRC)",
    "アルミ造(AL)",
    "コンクリート充填鋼管構造(CFT)",
    "コンクリートブロック造(CB)",
    "プレキャストコンクリート構造(PC)",
    "鉄骨プレキャストコンクリート造(HPC)",
)
LOAN_TYPE_OPTIONS: Tuple[str, ...] = ("元利均等", "元金均等")
OWNER_TYPE_OPTIONS: Tuple[str, ...] = ("個人", "法人")


_FIELDS: Sequence[FieldDescriptor] = (
    FieldDescriptor("purchase_date", FieldKind.DATE, "購入年月", required=True),
    FieldDescriptor("total_price", FieldKind.CURRENCY, "物件価格 総計（円）", required=True, min_value=0),
    FieldDescriptor("land_price", FieldKind.CURRENCY, "物件価格 土地（円）", required=True, min_value=0),
    FieldDescriptor("building_price", FieldKind.CURRENCY, "物件価格 建物（円）", required=True, min_value=0),
    FieldDescriptor(
        "purchase_expenses",
        FieldKind.CURRENCY,
        "購入諸費用（円）",
        formula="物件価格 × 8%",
        min_value=0,
    ),
    FieldDescriptor("building_age", FieldKind.INTEGER, "築年数（年）", required=True, min_value=0, max_value=150),
    FieldDescriptor("structure", FieldKind.ENUM, "建物構造", required=True, options=STRUCTURE_OPTIONS),
    FieldDescriptor("gross_yield", FieldKind.PERCENTAGE, "表面利回り（％）", required=True, min_value=0, max_value=100),
    FieldDescriptor("current_yield", FieldKind.PERCENTAGE, "現況利回り（％）", required=True, min_value=0, max_value=100),
    FieldDescriptor("vacancy_rate", FieldKind.PERCENTAGE, "空室率（％）", step=0.01, min_value=0, max_value=100),
    FieldDescriptor(
        "rent_decline_rate", FieldKind.PERCENTAGE, "家賃下落率/年（％）", step=0.01, min_value=0, max_value=100
    ),
    FieldDescriptor(
        "annual_operating_expenses",
        FieldKind.CURRENCY,
        "年間運営経費（円）",
        formula="満室時賃料収入 × 7%",
        min_value=0,
    ),
    FieldDescriptor(
        "own_capital",
        FieldKind.CURRENCY,
        "自己資金（円）",
        formula="物件価格 × 10% + 購入諸費用",
        min_value=0,
    ),
    FieldDescriptor("loan_amount", FieldKind.CURRENCY, "借入金額（円）", formula="物件価格 × 90%", min_value=0),
    FieldDescriptor("loan_term_years", FieldKind.INTEGER, "借入期間（年）", min_value=1, max_value=50),
    FieldDescriptor(
        "interest_rate", FieldKind.PERCENTAGE, "ローン金利（％）", required=True, step=0.01, min_value=0, max_value=20
    ),
    FieldDescriptor("loan_type", FieldKind.ENUM, "ローンタイプ", required=True, options=LOAN_TYPE_OPTIONS),
    FieldDescriptor(
        "expected_rate_of_return",
        FieldKind.PERCENTAGE,
        "期待収益率（％）",
        required=True,
        min_value=0,
        max_value=100,
        description="今回の不動産投資においてトータルでどれほどの収益率を期待されているかご入力ください。",
    ),
    FieldDescriptor(
        "expected_sale_year",
        FieldKind.DATE,
        "売却想定時期",
        required=True,
        description="将来に渡るトータル収益を計算するため、想定の売却時期をご入力ください。",
    ),
    FieldDescriptor(
        "expected_sale_price",
        FieldKind.CURRENCY,
        "売却想定価格（円）",
        required=True,
        min_value=0,
        description="将来に渡るトータル収益を計算するため、想定の売却金額をご入力ください。",
    ),
    FieldDescriptor(
        "sale_expenses",
        FieldKind.CURRENCY,
        "売却諸費用（円）",
        formula="想定売却価格 × 4%",
        min_value=0,
    ),
    FieldDescriptor("owner_type", FieldKind.ENUM, "お客様の分類", required=True, options=OWNER_TYPE_OPTIONS),
    FieldDescriptor("annual_income", FieldKind.CURRENCY, "お客様の概算年収（円）", required=True, min_value=0),
)


def _build_catalog(fields: Iterable[FieldDescriptor]) -> Dict[str, FieldDescriptor]:
    catalog: Dict[str, FieldDescriptor] = {}
    for descriptor in fields:
        if descriptor.name in catalog:
            raise ValueError(f"フィールド名が重複しています: {descriptor.name}")
        catalog[descriptor.name] = descriptor
    return catalog


FIELD_CATALOG: Dict[str, FieldDescriptor] = _build_catalog(_FIELDS)

# Outputs of the derivation rules that the user may still overwrite by hand.
AUTO_CALCULATED_FIELDS: frozenset[str] = frozenset(
    {
        "purchase_expenses",
        "own_capital",
        "loan_amount",
        "expected_sale_price",
        "annual_operating_expenses",
        "sale_expenses",
    }
)

LARGE_NUMBER_FIELDS: Tuple[str, ...] = tuple(
    name for name, descriptor in FIELD_CATALOG.items() if descriptor.kind is FieldKind.CURRENCY
)


def describe(name: str) -> FieldDescriptor:
    """Return the descriptor registered for *name*."""
    try:
        return FIELD_CATALOG[name]
    except KeyError:
        raise UnknownFieldError(name) from None


def is_known(name: str) -> bool:
    return name in FIELD_CATALOG


def ensure_known(names: Iterable[str]) -> None:
    for name in names:
        describe(name)


def field_names() -> List[str]:
    return list(FIELD_CATALOG.keys())


def fields_of_kind(*kinds: FieldKind) -> Tuple[str, ...]:
    return tuple(name for name, descriptor in FIELD_CATALOG.items() if descriptor.kind in kinds)


PERCENTAGE_FIELDS: Tuple[str, ...] = fields_of_kind(FieldKind.PERCENTAGE)
NUMERIC_FIELDS: Tuple[str, ...] = fields_of_kind(FieldKind.CURRENCY, FieldKind.PERCENTAGE, FieldKind.INTEGER)


__all__ = [
    "AUTO_CALCULATED_FIELDS",
    "FIELD_CATALOG",
    "FieldDescriptor",
    "FieldKind",
    "LARGE_NUMBER_FIELDS",
    "LOAN_TYPE_OPTIONS",
    "NUMERIC_FIELDS",
    "OWNER_TYPE_OPTIONS",
    "PERCENTAGE_FIELDS",
    "STRUCTURE_OPTIONS",
    "UnknownFieldError",
    "describe",
    "ensure_known",
    "field_names",
    "fields_of_kind",
    "is_known",
]
