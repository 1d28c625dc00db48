"""Model package exports."""

from .fields import (
    AUTO_CALCULATED_FIELDS,
    FIELD_CATALOG,
    FieldDescriptor,
    FieldKind,
    LARGE_NUMBER_FIELDS,
    LOAN_TYPE_OPTIONS,
    NUMERIC_FIELDS,
    OWNER_TYPE_OPTIONS,
    PERCENTAGE_FIELDS,
    STRUCTURE_OPTIONS,
    UnknownFieldError,
    describe,
    ensure_known,
    field_names,
    fields_of_kind,
    is_known,
)
from .form import (
    SAMPLE_FORM_VALUES,
    FormValues,
    InvestmentForm,
    default_expected_sale_year,
    default_form_values,
)

__all__ = [
    "AUTO_CALCULATED_FIELDS",
    "FIELD_CATALOG",
    "FieldDescriptor",
    "FieldKind",
    "FormValues",
    "InvestmentForm",
    "LARGE_NUMBER_FIELDS",
    "LOAN_TYPE_OPTIONS",
    "NUMERIC_FIELDS",
    "OWNER_TYPE_OPTIONS",
    "PERCENTAGE_FIELDS",
    "SAMPLE_FORM_VALUES",
    "STRUCTURE_OPTIONS",
    "UnknownFieldError",
    "default_expected_sale_year",
    "default_form_values",
    "describe",
    "ensure_known",
    "field_names",
    "fields_of_kind",
    "is_known",
]
