import unittest
from unittest.mock import patch

from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.core.errors import NotFoundError
from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.product import Product
from petdesk.schemas.product import ProductCreate, ProductUpdate
from petdesk.services import copywriter_service, product_service


class ProductServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.db.add_all(
            [
                Product(
                    id=1,
                    sku="DOG-FOOD-001",
                    barcode="4820000000011",
                    name_ru="Корм для собак",
                    name_uk="Корм для собак UA",
                    price=1200,
                    purchase_price=800,
                    category="Food",
                ),
                Product(
                    id=2,
                    sku="CAT-TOY-003",
                    name_ru="Игрушка Мышка",
                    name_uk="Іграшка Мишка",
                    price=120,
                    purchase_price=60,
                    promotional_price=99,
                    category="Toys",
                ),
            ]
        )
        self.db.commit()

    def tearDown(self):
        self.db.close()

    def test_list_filters_by_query_and_category(self):
        self.assertEqual([p.id for p in product_service.list_products(self.db)], [2, 1])
        self.assertEqual([p.id for p in product_service.list_products(self.db, query="cat-toy")], [2])
        self.assertEqual([p.id for p in product_service.list_products(self.db, query="48200")], [1])
        self.assertEqual([p.id for p in product_service.list_products(self.db, category="Food")], [1])
        self.assertEqual(len(product_service.list_products(self.db, category="all")), 2)

    def test_search_ignores_blank_query(self):
        self.assertEqual(product_service.search_products(self.db, "  "), [])
        self.assertEqual([p.id for p in product_service.search_products(self.db, "DOG")], [1])

    def test_categories_are_distinct_and_sorted(self):
        self.db.add(Product(sku="X-1", name_ru="X", category="Food"))
        self.db.commit()
        self.assertEqual(product_service.list_categories(self.db), ["Food", "Toys"])

    def test_create_rejects_duplicate_sku(self):
        with self.assertRaises(ValueError):
            product_service.create_product(self.db, {"sku": "DOG-FOOD-001", "name_ru": "Copy"})

    def test_update_allows_own_sku(self):
        product = product_service.get_product(self.db, 1)
        updated = product_service.update_product(self.db, product, {"sku": "DOG-FOOD-001", "price": 1300})
        self.assertEqual(updated.price, 1300)
        with self.assertRaises(ValueError):
            product_service.update_product(self.db, product, {"sku": "CAT-TOY-003"})

    def test_get_missing_product(self):
        with self.assertRaises(NotFoundError):
            product_service.get_product(self.db, 99)

    def test_serialize_adds_markup_and_effective_price(self):
        data = product_service.serialize_product(product_service.get_product(self.db, 2))
        self.assertEqual(data["markup_percent"], 100.0)
        self.assertEqual(data["effective_price"], 99.0)

    def test_calculate_markup(self):
        self.assertEqual(
            product_service.calculate_markup(800, markup=50),
            {"purchase_price": 800.0, "price": 1200.0, "markup_percent": 50.0},
        )
        self.assertEqual(product_service.calculate_markup(800, price=1000)["markup_percent"], 25.0)
        with self.assertRaises(ValueError):
            product_service.calculate_markup(800)

    def test_update_ignores_nulls_for_required_columns(self):
        product = product_service.get_product(self.db, 2)

        updated = product_service.update_product(
            self.db,
            product,
            {"price": None, "name_ru": None, "stock": 7, "promotional_price": None},
        )

        self.assertEqual(updated.price, 120)
        self.assertEqual(updated.name_ru, "Игрушка Мышка")
        self.assertEqual(updated.stock, 7)
        self.assertIsNone(updated.promotional_price)

    def test_schemas_reject_negative_stock(self):
        with self.assertRaises(ValidationError):
            ProductCreate(sku="NEG-1", name_ru="Neg", stock=-1)
        with self.assertRaises(ValidationError):
            ProductUpdate(stock=-3)

    @patch("petdesk.services.product_service.copywriter_service.draft_product_description")
    def test_generate_description_saves_in_language(self, draft):
        draft.return_value = "Smachnyi korm"
        product = product_service.get_product(self.db, 1)

        text = product_service.generate_description(self.db, product, "uk", save=True)

        self.assertEqual(text, "Smachnyi korm")
        draft.assert_called_once_with("Корм для собак UA", "Food", "uk")
        self.assertEqual(product.description_uk, "Smachnyi korm")
        self.assertEqual(product.description_ru or "", "")

    @patch("petdesk.services.copywriter_service.generate_text", side_effect=RuntimeError("GEMINI_API_KEY is not configured"))
    def test_failed_generation_keeps_saved_description(self, _generate_text):
        product = product_service.get_product(self.db, 1)
        product.description_uk = "Real text"
        self.db.commit()

        with self.assertLogs("petdesk.services.copywriter_service", level="ERROR"):
            text = product_service.generate_description(self.db, product, "uk", save=True)

        self.assertEqual(text, copywriter_service.DESCRIPTION_FAILED)
        self.db.refresh(product)
        self.assertEqual(product.description_uk, "Real text")

    @patch("petdesk.services.product_service.copywriter_service.draft_product_description", return_value="")
    def test_empty_generation_is_not_saved(self, _draft):
        product = product_service.get_product(self.db, 1)
        product.description_uk = "Real text"
        self.db.commit()

        text = product_service.generate_description(self.db, product, "uk", save=True)

        self.assertEqual(text, copywriter_service.DESCRIPTION_EMPTY)
        self.assertEqual(product.description_uk, "Real text")


if __name__ == "__main__":
    unittest.main()
