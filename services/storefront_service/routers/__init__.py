"""Storefront service routers package."""

from services.storefront_service.routers.admin import router as admin_router
from services.storefront_service.routers.auth import router as auth_router
from services.storefront_service.routers.blog import router as blog_router
from services.storefront_service.routers.categories import (
    router as categories_router,
)
from services.storefront_service.routers.contact import router as contact_router
from services.storefront_service.routers.orders import router as orders_router
from services.storefront_service.routers.products import router as products_router
from services.storefront_service.routers.projects import router as projects_router
from services.storefront_service.routers.reviews import router as reviews_router
from services.storefront_service.routers.tags import router as tags_router

__all__ = [
    "admin_router",
    "auth_router",
    "blog_router",
    "categories_router",
    "contact_router",
    "orders_router",
    "products_router",
    "projects_router",
    "reviews_router",
    "tags_router",
]
