"""Validation helpers for user supplied form inputs."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from pydantic import ValidationError

from models import FIELD_CATALOG, FieldKind, InvestmentForm

logger = logging.getLogger(__name__)


class NonNumericInputError(ValueError):
    """Raised when text typed into a numeric field cannot be read as a number."""

    def __init__(self, field: str, raw: Any) -> None:
        super().__init__(f"{field}: 数値として解釈できません ({raw!r})")
        self.field = field
        self.raw = raw


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a validation error for a specific field."""

    field: str
    message: str


def to_number(name: str, value: Any, *, strict: bool = False) -> float | int | None:
    """Coerce a raw input for the numeric field *name*.

    Blank input yields ``None``. Unreadable input, or a fraction typed into a
    whole-number field, raises
    :class:`NonNumericInputError` when *strict*, otherwise it becomes ``None``.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        if isinstance(value, bool):
            raise TypeError(value)
        if isinstance(value, str):
            number = float(value.replace(",", "").strip())
        else:
            number = float(value)
        if not math.isfinite(number):
            raise ValueError(value)
    except (TypeError, ValueError):
        if strict:
            raise NonNumericInputError(name, value) from None
        return None
    if number.is_integer():
        return int(number)
    if FIELD_CATALOG[name].kind is FieldKind.INTEGER:
        # Whole-number fields reject fractions instead of truncating them.
        if strict:
            raise NonNumericInputError(name, value)
        return None
    return number


def coerce_value(name: str, value: Any) -> Any:
    descriptor = FIELD_CATALOG[name]
    if descriptor.is_numeric:
        return to_number(name, value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_seed(seed: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Normalise an externally supplied partial form (e.g. OCR extraction)."""

    coerced: Dict[str, Any] = {}
    for name, value in (seed or {}).items():
        if name not in FIELD_CATALOG:
            logger.warning("ignoring unknown seed field %s", name)
            continue
        converted = coerce_value(name, value)
        if converted is not None:
            coerced[name] = converted
    return coerced


def _issues_from_error(error: ValidationError) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "不正な値です。")
        if detail.get("type") == "missing":
            message = "必須項目です。"
        issues.append(ValidationIssue(field=path or "form", message=message))
    return issues


def validate_form(values: Mapping[str, Any]) -> Tuple[InvestmentForm | None, List[ValidationIssue]]:
    """Validate the full set of form values before submission."""

    data: Dict[str, Any] = {}
    issues: List[ValidationIssue] = []
    for name, value in values.items():
        if name not in FIELD_CATALOG:
            issues.append(ValidationIssue(field=name, message="未登録の項目です。"))
            continue
        if FIELD_CATALOG[name].is_numeric:
            try:
                value = to_number(name, value, strict=True)
            except NonNumericInputError:
                issues.append(ValidationIssue(field=name, message="数値を入力してください。"))
                continue
        if value is not None and value != "":
            data[name] = value
    if issues:
        return None, issues

    try:
        form = InvestmentForm(**data)
    except ValidationError as exc:
        return None, _issues_from_error(exc)
    return form, []


def collect_error_messages(issues: Iterable[ValidationIssue]) -> str:
    lines = []
    for issue in issues:
        label = FIELD_CATALOG[issue.field].label if issue.field in FIELD_CATALOG else issue.field
        lines.append(f"[{label}] {issue.message}")
    return "\n".join(lines)


__all__ = [
    "NonNumericInputError",
    "ValidationIssue",
    "coerce_seed",
    "coerce_value",
    "collect_error_messages",
    "to_number",
    "validate_form",
]
