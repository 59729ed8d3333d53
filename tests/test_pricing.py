import unittest

from petdesk.core.pricing import (
    cost_of_goods,
    effective_price,
    markup_percent,
    order_profit,
    order_total,
    price_from_markup,
)


class PricingTest(unittest.TestCase):
    def test_markup_percent(self):
        self.assertAlmostEqual(markup_percent(1200, 850), 41.176470, places=4)
        self.assertEqual(markup_percent(100, 0), 0.0)

    def test_price_from_markup_rounds_to_cents(self):
        self.assertEqual(price_from_markup(850, 40), 1190.0)
        self.assertEqual(price_from_markup(33.33, 10), 36.66)

    def test_price_from_markup_needs_purchase_price(self):
        with self.assertRaises(ValueError):
            price_from_markup(0, 25)

    def test_effective_price_prefers_promotion(self):
        self.assertEqual(effective_price(450, 399), 399.0)
        self.assertEqual(effective_price(450, None), 450.0)
        self.assertEqual(effective_price(450, 0), 450.0)

    def test_order_total_applies_per_unit_discount(self):
        items = [
            {"price": 1200, "quantity": 2, "discount": 50},
            {"price": 120, "quantity": 1},
        ]
        self.assertEqual(order_total(items), 2420.0)

    def test_order_profit(self):
        items = [{"product_id": 1, "quantity": 2}, {"product_id": 9, "quantity": 1}]
        cogs = cost_of_goods(items, {1: 850.0})
        self.assertEqual(cogs, 1700.0)

        result = order_profit(2400, cogs, shipping_cost=100, bank_commission=1.5)
        self.assertAlmostEqual(result["bank_fee"], 36.0)
        self.assertAlmostEqual(result["profit"], 564.0)
        self.assertAlmostEqual(result["margin_percent"], 23.5)

    def test_order_profit_without_revenue(self):
        result = order_profit(0, 0)
        self.assertEqual(result["profit"], 0.0)
        self.assertEqual(result["margin_percent"], 0.0)


if __name__ == "__main__":
    unittest.main()
