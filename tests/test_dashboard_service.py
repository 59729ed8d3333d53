import unittest
from datetime import date, datetime
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.expense import Expense
from petdesk.models.order import Order, OrderItem
from petdesk.models.product import Product
from petdesk.models.receipt import WarehouseReceipt
from petdesk.models.store_settings import StoreSettings
from petdesk.services import dashboard_service

NOW = datetime(2024, 3, 13, 15, 0)


def _order(number, when, status, price, quantity=1, shipping=None):
    return Order(
        order_number=number,
        customer_name="Test",
        status=status,
        order_date=when,
        shipping_cost=shipping,
        total=price * quantity,
        items=[OrderItem(position=0, product_id=1, product_name="Food", quantity=quantity, price=price)],
    )


class DashboardServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.db.add(StoreSettings(bank_commission=0.0))
        self.db.add(Product(id=1, sku="DOG-FOOD-001", name_ru="Корм", price=1000, purchase_price=600))
        self.db.add_all(
            [
                _order("ORD-1", datetime(2024, 3, 13, 10, 0), "new", 1000, shipping=50),
                _order("ORD-2", datetime(2024, 3, 12, 11, 0), "delivered", 1000, quantity=2),
                _order("ORD-3", datetime(2024, 3, 13, 12, 0), "canceled", 1000),
                _order("ORD-4", datetime(2024, 2, 20, 9, 0), "accepted", 500),
            ]
        )
        self.db.add_all(
            [
                WarehouseReceipt(supplier_name="ZooTrade LLC", payment_due_date=date(2024, 3, 13), total_amount=700),
                WarehouseReceipt(supplier_name="ZooTrade LLC", payment_due_date=date(2024, 3, 20), total_amount=300),
                WarehouseReceipt(
                    supplier_name="ZooTrade LLC", payment_due_date=date(2024, 3, 13), total_amount=999, is_paid=True
                ),
            ]
        )
        self.db.add(Expense(category="Rent", amount=800, expense_date=date(2024, 3, 13)))
        self.db.commit()

    def tearDown(self):
        self.db.close()

    def test_global_metrics(self):
        metrics = dashboard_service.global_metrics(self.db)

        self.assertEqual(metrics["total_sales"], 4500.0)
        self.assertEqual(metrics["total_orders"], 4)
        self.assertEqual(metrics["average_check"], 1125.0)
        self.assertEqual(metrics["pending_orders"], 2)
        self.assertEqual(metrics["accounts_payable"], 1000.0)
        # canceled order is left out of profit
        self.assertAlmostEqual(metrics["net_profit"], (1000 - 600 - 50) + (2000 - 1200) + (500 - 600))

    def test_today_compares_with_yesterday(self):
        metrics = dashboard_service.period_metrics(self.db, "today", NOW)

        self.assertEqual(metrics["granularity"], "hour")
        self.assertEqual(metrics["total_orders"], 2)
        self.assertEqual(metrics["total_sales"], 2000.0)
        self.assertEqual(metrics["previous_sales"], 2000.0)
        self.assertEqual(metrics["previous_orders"], 1)
        self.assertEqual(metrics["sales_change_percent"], 0.0)
        self.assertEqual(metrics["accounts_payable"], 700.0)
        self.assertEqual(metrics["expenses"], 800.0)
        self.assertEqual(len(metrics["chart"]), 24)
        self.assertEqual(metrics["chart"][11]["previous_sales"], 2000.0)

    def test_all_has_no_comparison(self):
        metrics = dashboard_service.period_metrics(self.db, "all", NOW)

        self.assertIsNone(metrics["start"])
        self.assertIsNone(metrics["sales_change_percent"])
        self.assertEqual(metrics["total_orders"], 4)
        self.assertEqual(metrics["accounts_payable"], 1000.0)

    def test_unknown_period(self):
        with self.assertRaises(ValueError):
            dashboard_service.period_metrics(self.db, "decade", NOW)

    @patch("petdesk.services.copywriter_service.generate_text", return_value="- Stock more food")
    def test_analysis_sends_summary(self, generate_text):
        result = dashboard_service.analyze_period(self.db, "month", NOW)

        self.assertEqual(result["analysis"], "- Stock more food")
        self.assertIn("Revenue: 4000.00 UAH", result["summary"])
        self.assertIn(result["summary"], generate_text.call_args[0][0])


if __name__ == "__main__":
    unittest.main()
