import pytest

from calc import EditTracker
from models import UnknownFieldError


def test_change_on_driver_field_is_not_a_manual_override():
    tracker = EditTracker()
    tracker.record_change("total_price")

    assert tracker.last_changed_field == "total_price"
    assert tracker.manually_edited == frozenset()
    assert tracker.is_overridable("total_price")


def test_change_on_auto_calculated_field_is_permanent():
    tracker = EditTracker()
    tracker.record_change("loan_amount")
    tracker.record_change("loan_amount")
    tracker.record_change("total_price")

    assert tracker.manually_edited == frozenset({"loan_amount"})
    assert not tracker.is_overridable("loan_amount")
    assert tracker.last_changed_field == "total_price"


def test_focus_and_blur():
    tracker = EditTracker()
    tracker.record_focus("land_price")
    assert tracker.focused_field == "land_price"

    tracker.record_focus("building_price")
    assert tracker.focused_field == "building_price"

    tracker.record_blur()
    assert tracker.focused_field is None


def test_mark_manual_leaves_last_changed_alone():
    tracker = EditTracker()
    tracker.record_change("gross_yield")
    tracker.mark_manual("sale_expenses")
    tracker.mark_manual("structure")

    assert tracker.last_changed_field == "gross_yield"
    assert tracker.manually_edited == frozenset({"sale_expenses"})


@pytest.mark.parametrize("operation", ["record_change", "record_focus", "is_overridable"])
def test_unknown_fields_are_rejected(operation):
    tracker = EditTracker()
    with pytest.raises(UnknownFieldError):
        getattr(tracker, operation)("price")
