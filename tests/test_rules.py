from __future__ import annotations

import unittest

from calc import DEFAULT_RULES, PRICE_DECOMPOSITION, DerivationRule, EditState, numeric, round_yen
from models import UnknownFieldError


def _split(values, last=None):
    return PRICE_DECOMPOSITION.evaluate(values, EditState(last_changed_field=last))


class PriceDecompositionTests(unittest.TestCase):
    def test_total_edit_without_components_splits_evenly(self) -> None:
        self.assertEqual(
            _split({"total_price": 60000000}, "total_price"),
            {"land_price": 30000000, "building_price": 30000000},
        )

    def test_total_edit_derives_missing_component(self) -> None:
        self.assertEqual(
            _split({"total_price": 60000000, "land_price": 20000000}, "total_price"),
            {"building_price": 40000000},
        )
        self.assertEqual(
            _split({"total_price": 60000000, "building_price": 25000000}, "total_price"),
            {"land_price": 35000000},
        )

    def test_total_edit_with_both_components_keeps_building(self) -> None:
        result = _split(
            {"total_price": 70000000, "land_price": 30000000, "building_price": 30000000}, "total_price"
        )
        self.assertEqual(result, {"land_price": 40000000})

    def test_component_edit_rederives_counterpart(self) -> None:
        values = {"total_price": 100000000, "land_price": 45000000, "building_price": 50000000}
        self.assertEqual(_split(values, "land_price"), {"building_price": 55000000})
        self.assertEqual(_split(values, "building_price"), {"land_price": 50000000})

    def test_component_edit_without_total_fills_total(self) -> None:
        values = {"land_price": 45000000, "building_price": 50000000}
        self.assertEqual(_split(values, "land_price"), {"total_price": 95000000})
        self.assertEqual(_split({"land_price": 45000000}, "land_price"), {})

    def test_cleared_component_abstains(self) -> None:
        self.assertEqual(_split({"total_price": 100000000, "land_price": None}, "land_price"), {})

    def test_cleared_total_stays_cleared(self) -> None:
        values = {"total_price": None, "land_price": 50000000, "building_price": 50000000}
        self.assertEqual(_split(values, "total_price"), {})
        self.assertEqual(_split(values), {"total_price": 100000000})

    def test_missing_total_and_components_abstain(self) -> None:
        self.assertEqual(_split({}), {})
        self.assertEqual(_split({"total_price": "abc"}), {})


class FormulaTests(unittest.TestCase):
    def _run(self, values, edit=None):
        edit = edit or EditState()
        working = dict(values)
        produced = {}
        for rule in DEFAULT_RULES[1:]:
            out = rule.evaluate(working, edit)
            working.update(out)
            produced.update(out)
        return produced

    def test_rules_abstain_without_total(self) -> None:
        self.assertEqual(self._run({"gross_yield": 8}), {})

    def test_own_capital_uses_fresh_purchase_expenses(self) -> None:
        produced = self._run({"total_price": 50000000, "purchase_expenses": 1})
        self.assertAlmostEqual(produced["purchase_expenses"], 4000000)
        self.assertAlmostEqual(produced["own_capital"], 9000000)

    def test_sale_expenses_follow_fresh_sale_price(self) -> None:
        produced = self._run({"total_price": 50000000, "expected_sale_price": 10})
        self.assertAlmostEqual(produced["sale_expenses"], 2000000)

    def test_sale_expenses_from_sale_price_alone(self) -> None:
        self.assertAlmostEqual(self._run({"expected_sale_price": 30000000})["sale_expenses"], 1200000)

    def test_rule_order_is_fixed(self) -> None:
        self.assertEqual(
            [rule.name for rule in DEFAULT_RULES],
            [
                "price_decomposition",
                "purchase_expenses",
                "own_capital",
                "loan_amount",
                "expected_sale_price",
                "annual_operating_expenses",
                "sale_expenses",
            ],
        )

    def test_rule_fields_must_exist(self) -> None:
        with self.assertRaises(UnknownFieldError):
            DerivationRule(
                name="broken",
                outputs=("no_such_field",),
                inputs=("total_price",),
                compute=lambda values, edit: {},
                applies_if=lambda values, edit: True,
            )


class HelperTests(unittest.TestCase):
    def test_numeric_treats_blank_and_zero_as_unset(self) -> None:
        self.assertIsNone(numeric(None))
        self.assertIsNone(numeric(0))
        self.assertIsNone(numeric("100"))
        self.assertIsNone(numeric(True))
        self.assertIsNone(numeric(float("nan")))
        self.assertEqual(numeric(12), 12.0)

    def test_round_yen_rounds_half_up(self) -> None:
        self.assertEqual(round_yen(2.5), 3)
        self.assertEqual(round_yen(560000.0000000001), 560000)
        self.assertEqual(round_yen(1234.49), 1234)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
