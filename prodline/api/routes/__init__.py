"""API route modules."""

from prodline.api.routes.cutting import router as cutting_router
from prodline.api.routes.health import router as health_router
from prodline.api.routes.orders import router as orders_router
from prodline.api.routes.partners import router as partners_router
from prodline.api.routes.requirements import router as requirements_router
from prodline.api.routes.stages import router as stages_router
from prodline.api.routes.stock import router as stock_router

__all__ = [
    "health_router",
    "orders_router",
    "cutting_router",
    "stages_router",
    "stock_router",
    "requirements_router",
    "partners_router",
]
