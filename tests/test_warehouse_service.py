import unittest
from datetime import date

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.core.errors import NotFoundError
from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.directory import Supplier
from petdesk.models.product import Product
from petdesk.models.receipt import WarehouseReceipt
from petdesk.services.warehouse_service import build_preview, finalize_receipt


class WarehouseServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.db.add(Supplier(id=1, name="ZooTrade LLC"))
        self.db.add_all(
            [
                Product(id=1, sku="DOG-LEASH-002", name_ru="Поводок", name_uk="Повідець", price=450, purchase_price=260, stock=2),
                Product(id=2, sku="DOG-BED-004", name_ru="Лежак", name_uk="Лежак", price=980, purchase_price=610, stock=0),
            ]
        )
        self.db.commit()
        self.items = [
            {"product_id": 1, "quantity": 10, "supplier_unit_price": 10.0},
            {"product_id": 2, "quantity": 5, "supplier_unit_price": 10.0},
        ]

    def tearDown(self):
        self.db.close()

    def test_preview_does_not_touch_stock(self):
        preview = build_preview(self.db, self.items, 30, language="ru")

        self.assertEqual(preview["total_supplier_value"], 150.0)
        self.assertEqual(preview["total_landed_value"], 180.0)
        self.assertEqual(preview["items"][0]["product_name"], "Поводок")
        self.assertAlmostEqual(preview["items"][0]["allocated_extra"], 20.0)
        self.assertEqual(self.db.get(Product, 1).stock, 2)

    def test_preview_unknown_product(self):
        with self.assertRaises(NotFoundError):
            build_preview(self.db, [{"product_id": 42, "quantity": 1, "supplier_unit_price": 1.0}])

    def test_finalize_with_supplier_records_receipt(self):
        result = finalize_receipt(
            self.db,
            self.items,
            extra_costs=30,
            supplier_id=1,
            payment_due_date=date(2024, 4, 1),
            today=date(2024, 3, 13),
        )

        leash = self.db.get(Product, 1)
        self.assertEqual(leash.stock, 12)
        self.assertEqual(leash.purchase_price, 12.0)
        self.assertEqual(result["updated_products"], 2)

        receipt = result["receipt"]
        self.assertEqual(receipt.supplier_name, "ZooTrade LLC")
        self.assertEqual(receipt.receipt_date, date(2024, 3, 13))
        self.assertEqual(receipt.payment_due_date, date(2024, 4, 1))
        self.assertEqual(receipt.total_amount, 150.0)
        self.assertEqual(receipt.extra_costs, 30.0)
        self.assertFalse(receipt.is_paid)
        self.assertEqual(receipt.items_count, 15)
        self.assertEqual(len(receipt.items), 2)

    def test_purchase_price_is_rounded_to_cents(self):
        finalize_receipt(
            self.db,
            [{"product_id": 2, "quantity": 3, "supplier_unit_price": 10.0}],
            extra_costs=1,
        )
        self.assertEqual(self.db.get(Product, 2).purchase_price, 10.33)

    def test_finalize_without_supplier_skips_receipt(self):
        result = finalize_receipt(self.db, self.items)

        self.assertIsNone(result["receipt"])
        self.assertEqual(self.db.get(Product, 2).stock, 5)
        self.assertEqual(self.db.execute(select(WarehouseReceipt)).scalars().all(), [])

    def test_unknown_supplier_changes_nothing(self):
        with self.assertRaises(NotFoundError):
            finalize_receipt(self.db, self.items, supplier_id=99)
        self.assertEqual(self.db.get(Product, 1).stock, 2)

    def test_due_date_defaults_to_today(self):
        result = finalize_receipt(self.db, self.items, supplier_id=1, today=date(2024, 3, 13))
        self.assertEqual(result["receipt"].payment_due_date, date(2024, 3, 13))


if __name__ == "__main__":
    unittest.main()
