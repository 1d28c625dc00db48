from __future__ import annotations

import unittest
from datetime import date

from models import FIELD_CATALOG
from ui.components import summarize_result
from ui.form import SECTIONS, display_value, read_widget, widget_key


class WidgetConversionTests(unittest.TestCase):
    def test_currency_fields_render_as_separated_text(self) -> None:
        descriptor = FIELD_CATALOG["own_capital"]
        self.assertEqual(display_value(descriptor, 18000000.000000004), "18,000,000")
        self.assertEqual(display_value(descriptor, None), "")
        self.assertEqual(read_widget(descriptor, "18,500,000"), 18500000)
        self.assertIsNone(read_widget(descriptor, ""))

    def test_percentage_and_integer_fields(self) -> None:
        self.assertEqual(display_value(FIELD_CATALOG["gross_yield"], 8), 8.0)
        self.assertIsInstance(display_value(FIELD_CATALOG["gross_yield"], 8), float)
        self.assertEqual(display_value(FIELD_CATALOG["loan_term_years"], 35.0), 35)
        self.assertIsNone(display_value(FIELD_CATALOG["building_age"], None))
        self.assertEqual(read_widget(FIELD_CATALOG["interest_rate"], 2.5), 2.5)

    def test_date_fields_round_trip_iso_strings(self) -> None:
        descriptor = FIELD_CATALOG["expected_sale_year"]
        self.assertEqual(display_value(descriptor, "2055-01-01"), date(2055, 1, 1))
        self.assertIsNone(display_value(descriptor, "not a date"))
        self.assertEqual(read_widget(descriptor, date(2055, 1, 1)), "2055-01-01")
        self.assertIsNone(read_widget(descriptor, None))

    def test_enum_fields_only_accept_known_options(self) -> None:
        descriptor = FIELD_CATALOG["structure"]
        self.assertEqual(display_value(descriptor, "木造(W)"), "木造(W)")
        self.assertIsNone(display_value(descriptor, "鉄筋コンクリート"))
        self.assertIsNone(read_widget(descriptor, ""))

    def test_sections_cover_every_field_once(self) -> None:
        names = [name for _, fields in SECTIONS for name in fields]
        self.assertEqual(sorted(names), sorted(FIELD_CATALOG))
        self.assertEqual(widget_key("total_price"), "field__total_price")


class ResultSummaryTests(unittest.TestCase):
    def test_summary_picks_available_metrics(self) -> None:
        cards = summarize_result(
            {"internal_rate_of_return": 0.0512, "payback_period": 12.5, "total_pl": 123456789, "noi_yield": None}
        )
        self.assertEqual([card.label for card in cards], ["全期間利回り（IRR）", "自己資金回収期間", "全期間収支"])
        self.assertEqual(cards[0].value, "5.12%")
        self.assertEqual(cards[2].value, "12,346万円")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
