"""FastAPI application for the FurniCraft storefront service."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import add_rate_limiting, limiter
from services.storefront_service.routers import (
    admin_router,
    auth_router,
    blog_router,
    categories_router,
    contact_router,
    orders_router,
    products_router,
    projects_router,
    reviews_router,
    tags_router,
)


def create_app() -> FastAPI:
    """Create and configure the storefront FastAPI app."""
    settings = get_settings()
    app = FastAPI(
        title="FurniCraft Storefront Service",
        version="0.1.0",
        description="Furniture storefront - catalog, reviews, orders, blog and contact.",
    )

    add_exception_handlers(app)
    add_rate_limiting(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_observability_middleware(app)

    @app.get("/health", tags=["system"])
    @limiter.exempt
    async def health_check(request: Request) -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": "storefront",
            "environment": settings.ENVIRONMENT,
        }

    app.include_router(auth_router, prefix="/auth")
    app.include_router(products_router, prefix="/products")
    app.include_router(categories_router, prefix="/categories")
    app.include_router(tags_router, prefix="/tags")
    app.include_router(reviews_router, prefix="/reviews")
    app.include_router(orders_router, prefix="/orders")
    app.include_router(blog_router, prefix="/blog")
    app.include_router(projects_router, prefix="/projects")
    app.include_router(contact_router, prefix="/contact")
    app.include_router(admin_router, prefix="/admin")

    return app


app = create_app()
