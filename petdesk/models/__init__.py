import importlib

from petdesk.models.directory import Category, Customer, Supplier
from petdesk.models.expense import Expense
from petdesk.models.order import Order, OrderItem
from petdesk.models.product import Product
from petdesk.models.receipt import ReceiptItem, WarehouseReceipt
from petdesk.models.store_settings import StoreSettings


def import_all_models() -> None:
    for module_name in (
        "petdesk.models.directory",
        "petdesk.models.expense",
        "petdesk.models.order",
        "petdesk.models.product",
        "petdesk.models.receipt",
        "petdesk.models.store_settings",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Category",
    "Customer",
    "Expense",
    "Order",
    "OrderItem",
    "Product",
    "ReceiptItem",
    "StoreSettings",
    "Supplier",
    "WarehouseReceipt",
    "import_all_models",
]
