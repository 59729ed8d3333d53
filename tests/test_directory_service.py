import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petdesk.core.errors import NotFoundError
from petdesk.database.base import Base
from petdesk.models import import_all_models
from petdesk.models.directory import Category, Supplier
from petdesk.services import directory_service


class DirectoryServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        engine = create_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        self.db = sessionmaker(bind=engine, expire_on_commit=False)()
        self.dogs = directory_service.create_record(self.db, Category, {"name_ru": "Собаки", "name_uk": "Собаки"})
        self.food = directory_service.create_record(
            self.db, Category, {"name_ru": "Корм", "name_uk": "Корм", "parent_id": self.dogs.id}
        )
        self.dry = directory_service.create_record(
            self.db, Category, {"name_ru": "Сухой", "name_uk": "Сухий", "parent_id": self.food.id}
        )

    def tearDown(self):
        self.db.close()

    def test_tree_levels(self):
        tree = directory_service.category_tree(self.db)

        self.assertEqual(len(tree), 1)
        self.assertEqual(tree[0]["name_ru"], "Собаки")
        self.assertEqual(tree[0]["level"], 0)
        food = tree[0]["children"][0]
        self.assertEqual(food["level"], 1)
        self.assertEqual(food["children"][0]["name_uk"], "Сухий")
        self.assertEqual(food["children"][0]["level"], 2)

    def test_parent_cycles_are_rejected(self):
        with self.assertRaises(ValueError):
            directory_service.update_record(self.db, self.dogs, {"parent_id": self.dogs.id})
        with self.assertRaises(ValueError):
            directory_service.update_record(self.db, self.dogs, {"parent_id": self.dry.id})
        with self.assertRaises(NotFoundError):
            directory_service.create_record(self.db, Category, {"name_ru": "X", "parent_id": 404})

    def test_moving_to_root(self):
        directory_service.update_record(self.db, self.dry, {"parent_id": None})
        roots = [node["id"] for node in directory_service.category_tree(self.db)]
        self.assertEqual(roots, [self.dogs.id, self.dry.id])

    def test_delete_reparents_children(self):
        directory_service.delete_record(self.db, self.food)

        self.assertEqual(self.db.get(Category, self.dry.id).parent_id, self.dogs.id)
        tree = directory_service.category_tree(self.db)
        self.assertEqual(tree[0]["children"][0]["id"], self.dry.id)

    def test_supplier_crud(self):
        supplier = directory_service.create_record(self.db, Supplier, {"name": "ZooTrade LLC", "phone": "+380"})
        directory_service.update_record(self.db, supplier, {"contact_person": "Olena"})

        self.assertEqual(directory_service.get_record(self.db, Supplier, supplier.id).contact_person, "Olena")
        directory_service.delete_record(self.db, supplier)
        with self.assertRaises(NotFoundError):
            directory_service.get_record(self.db, Supplier, supplier.id)


if __name__ == "__main__":
    unittest.main()
