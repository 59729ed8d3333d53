import unittest
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.receipt import WarehouseReceipt
from petdesk.services import settlement_service

TODAY = date(2024, 3, 13)


def _receipt(supplier_id, name, amount, due, paid=False):
    return WarehouseReceipt(
        supplier_id=supplier_id,
        supplier_name=name,
        receipt_date=date(2024, 3, 1),
        payment_due_date=due,
        total_amount=amount,
        is_paid=paid,
    )


class SettlementServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.db.add_all(
            [
                _receipt(None, "ZooTrade LLC", 1000.0, date(2024, 3, 10)),
                _receipt(None, "ZooTrade LLC", 400.0, date(2024, 3, 20)),
                _receipt(None, "PetFood Import", 2500.0, date(2024, 3, 13)),
                _receipt(None, "ZooTrade LLC", 300.0, date(2024, 2, 1), paid=True),
            ]
        )
        self.db.commit()

    def tearDown(self):
        self.db.close()

    def test_filters(self):
        self.assertEqual(len(settlement_service.list_receipts(self.db)), 3)
        self.assertEqual(len(settlement_service.list_receipts(self.db, "paid")), 1)
        self.assertEqual(len(settlement_service.list_receipts(self.db, "all")), 4)
        with self.assertRaises(ValueError):
            settlement_service.list_receipts(self.db, "late")

    def test_overdue_only_before_today_and_unpaid(self):
        receipts = {r.total_amount: r for r in settlement_service.list_receipts(self.db, "all")}

        self.assertTrue(settlement_service.is_overdue(receipts[1000.0], TODAY))
        self.assertFalse(settlement_service.is_overdue(receipts[2500.0], TODAY))
        self.assertFalse(settlement_service.is_overdue(receipts[300.0], TODAY))
        self.assertTrue(settlement_service.serialize_receipt(receipts[1000.0], TODAY)["is_overdue"])

    def test_mark_paid_moves_receipt_out_of_payables(self):
        unpaid = settlement_service.list_receipts(self.db)
        self.assertEqual(settlement_service.accounts_payable(unpaid), 3900.0)

        settlement_service.mark_paid(self.db, unpaid[0])

        self.assertEqual(settlement_service.accounts_payable(settlement_service.list_receipts(self.db)), 2900.0)

    def test_supplier_balances(self):
        balances = settlement_service.supplier_balances(self.db, TODAY)

        self.assertEqual([entry["supplier_name"] for entry in balances], ["PetFood Import", "ZooTrade LLC"])
        zoo = balances[1]
        self.assertEqual(zoo["outstanding"], 1400.0)
        self.assertEqual(zoo["overdue"], 1000.0)
        self.assertEqual(zoo["paid"], 300.0)
        self.assertEqual(zoo["unpaid_receipts"], 2)
        self.assertEqual(zoo["paid_receipts"], 1)

    def test_delete_receipt(self):
        receipt = settlement_service.list_receipts(self.db, "paid")[0]
        settlement_service.delete_receipt(self.db, receipt)
        self.assertEqual(len(settlement_service.list_receipts(self.db, "all")), 3)


if __name__ == "__main__":
    unittest.main()
