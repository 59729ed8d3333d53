from petdesk.routers.assistant import router as assistant_router
from petdesk.routers.dashboard import router as dashboard_router
from petdesk.routers.directories import router as directories_router
from petdesk.routers.expenses import router as expenses_router
from petdesk.routers.health import router as health_router
from petdesk.routers.orders import router as orders_router
from petdesk.routers.products import router as products_router
from petdesk.routers.settings import router as settings_router
from petdesk.routers.settlements import router as settlements_router
from petdesk.routers.warehouse import router as warehouse_router

__all__ = [
    "assistant_router",
    "dashboard_router",
    "directories_router",
    "expenses_router",
    "health_router",
    "orders_router",
    "products_router",
    "settings_router",
    "settlements_router",
    "warehouse_router",
]
