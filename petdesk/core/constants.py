from typing import Literal, get_args

Language = Literal["ru", "uk"]
OrderSource = Literal["my_dog", "rozetka", "prom", "manual"]
OrderStatus = Literal["new", "accepted", "processing", "shipped", "delivered", "canceled", "return"]
PaymentStatus = Literal["paid", "not_paid", "partially_paid"]
PaymentMethod = Literal["cash", "card", "iban", "cod", "on_receipt"]
DeliveryService = Literal["nova_poshta", "rozetka_delivery", "ukrposhta", "self_pickup"]
Period = Literal["today", "tomorrow", "week", "last_week", "month", "last_month", "all"]
SettlementFilter = Literal["unpaid", "paid", "all"]

PERIODS = get_args(Period)

PENDING_ORDER_STATUSES = ("new", "accepted")
NON_REVENUE_ORDER_STATUSES = ("canceled", "return")

DEFAULT_PRODUCT_IMAGE = "https://picsum.photos/200/200"
PRODUCT_SEARCH_LIMIT = 5
IMPORT_FIELDS = ("sku", "name_ru", "name_uk", "price", "stock", "category")

SHIPPING_QUOTE_MIN = 60
SHIPPING_QUOTE_MAX = 150
