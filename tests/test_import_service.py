from pathlib import Path
import tempfile
import unittest

from openpyxl import Workbook
from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.core.constants import DEFAULT_PRODUCT_IMAGE
from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.product import Product
from petdesk.schemas.product import ImportPreviewRow
from petdesk.services.import_service import (
    apply_import,
    build_import_preview,
    normalize_header,
    read_product_file,
    suggest_mapping,
)
from petdesk.services.product_service import find_by_sku


class ImportServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.db.add(
            Product(sku="DOG-FOOD-001", name_ru="Корм", name_uk="Корм", price=1200, purchase_price=850, stock=24)
        )
        self.db.commit()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def tearDown(self):
        self.db.close()

    def _csv(self, text):
        path = Path(self.tmp.name) / "products.csv"
        path.write_text(text, encoding="utf-8")
        return path

    def test_header_aliases(self):
        self.assertEqual(normalize_header("Article"), "sku")
        self.assertEqual(normalize_header("Name UA"), "name_uk")
        self.assertEqual(normalize_header(" Sale Price "), "price")
        self.assertEqual(
            suggest_mapping(["Article", "Title", "Qty", "Notes"]),
            {"sku": "Article", "name_ru": "Title", "stock": "Qty"},
        )

    def test_csv_preview_marks_new_and_updated_rows(self):
        path = self._csv(
            "Article;Name;Price;Qty\n"
            "DOG-FOOD-001;Корм;1 300,00;20\n"
            "CAT-BOWL-010;Миска;150;8\n"
            "CAT-BAD-011;Брак;abc;1\n"
        )

        preview = build_import_preview(self.db, path)

        self.assertEqual(preview["mapping"]["sku"], "Article")
        self.assertEqual(preview["errors"], ["row 4: price must be a number"])
        update, new = preview["rows"]
        self.assertEqual(update["type"], "update")
        self.assertEqual(update["changes"], ["Price: 1200.0 -> 1300.0", "Stock: 24 -> 20"])
        self.assertEqual(new["type"], "new")
        self.assertEqual(new["values"]["price"], 150.0)

        stats = apply_import(self.db, preview["rows"])

        self.assertEqual(stats, {"inserted": 1, "updated": 1, "skipped": 0})
        self.assertEqual(find_by_sku(self.db, "DOG-FOOD-001").price, 1300.0)
        bowl = find_by_sku(self.db, "CAT-BOWL-010")
        self.assertEqual(bowl.name_uk, "Миска")
        self.assertEqual(bowl.purchase_price, 0.0)
        self.assertEqual(bowl.image_url, DEFAULT_PRODUCT_IMAGE)

    def test_negative_price_and_stock_are_row_errors(self):
        path = self._csv("sku,name,price,stock\nN2,Bone,-12,3\nN3,Ball,40,-1\nN4,Rope,55,2\n")

        preview = build_import_preview(self.db, path)

        self.assertEqual(
            preview["errors"],
            ["row 2: price must not be negative", "row 3: stock must not be negative"],
        )
        self.assertEqual([row["sku"] for row in preview["rows"]], ["N4"])

    def test_apply_rejects_negative_values_and_rolls_back(self):
        rows = [
            {"type": "new", "sku": "OK-1", "values": {"sku": "OK-1", "name_ru": "Good", "price": 10.0}},
            {"type": "new", "sku": "BAD-1", "values": {"sku": "BAD-1", "name_ru": "Bad", "price": -5.0}},
        ]

        with self.assertRaises(ValueError):
            apply_import(self.db, rows)

        self.assertIsNone(find_by_sku(self.db, "OK-1"))
        self.assertIsNone(find_by_sku(self.db, "BAD-1"))

    def test_apply_ignores_null_values(self):
        rows = [{"type": "update", "sku": "DOG-FOOD-001", "values": {"sku": "DOG-FOOD-001", "price": None, "stock": 30}}]

        self.assertEqual(apply_import(self.db, rows), {"inserted": 0, "updated": 1, "skipped": 0})
        product = find_by_sku(self.db, "DOG-FOOD-001")
        self.assertEqual(product.price, 1200)
        self.assertEqual(product.stock, 30)

    def test_preview_row_schema_rejects_negative_values(self):
        with self.assertRaises(ValidationError):
            ImportPreviewRow(type="new", sku="N2", values={"sku": "N2", "price": -5})
        with self.assertRaises(ValidationError):
            ImportPreviewRow(type="new", sku="N2", values={"sku": "N2", "stock": -1})

    def test_unselected_rows_are_skipped(self):
        path = self._csv("sku,name,price\nNEW-1,Leash,99\n")
        rows = build_import_preview(self.db, path)["rows"]
        rows[0]["selected"] = False

        self.assertEqual(apply_import(self.db, rows), {"inserted": 0, "updated": 0, "skipped": 1})
        self.assertIsNone(find_by_sku(self.db, "NEW-1"))

    def test_explicit_mapping_must_match_headers(self):
        path = self._csv("code,title\nA-1,Toy\n")
        with self.assertRaises(ValueError):
            build_import_preview(self.db, path, mapping={"sku": "Code"})
        with self.assertRaises(ValueError):
            build_import_preview(self.db, path, mapping={"name_ru": "title"})

    def test_xlsx_rows(self):
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = "Catalog"
        worksheet.append(["SKU", "Name RU", "Price", "Stock", "Category"])
        worksheet.append(["CAT-TOY-003", "Мышка", 120, 60, "Toys"])
        worksheet.append([None, None, None, None, None])
        path = Path(self.tmp.name) / "catalog.xlsx"
        workbook.save(path)

        headers, rows = read_product_file(path, sheet="Catalog")

        self.assertEqual(headers, ["SKU", "Name RU", "Price", "Stock", "Category"])
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["Category"], "Toys")

    def test_unsupported_and_missing_files(self):
        with self.assertRaises(FileNotFoundError):
            read_product_file(Path(self.tmp.name) / "nope.csv")
        other = Path(self.tmp.name) / "catalog.json"
        other.write_text("{}", encoding="utf-8")
        with self.assertRaises(ValueError):
            read_product_file(other)


if __name__ == "__main__":
    unittest.main()
