# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Restaurant Inventory API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    RestaurantAPIException,
    restaurant_api_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    billing,
    business_profile,
    dishes,
    health,
    image_proxy,
    inventory,
    members,
    notes,
    reports,
    sales,
    shopping_list,
    suppliers,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Nothing is opened eagerly; the Supabase client is created on first use.
    """
    logger.info(f"Starting Restaurant Inventory API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if settings.image_proxy_allowed_hosts_list:
        logger.info(f"Image proxy limited to: {settings.image_proxy_allowed_hosts_list}")

    yield

    logger.info("Shutting down Restaurant Inventory API")


# Create FastAPI application
app = FastAPI(
    title="Restaurant Inventory API",
    description="""
## Restaurant Inventory, Sales and Supplier Management

A thin HTTP layer over Supabase for running a restaurant's back office.
Every record belongs to a **business profile**; the profile is resolved from
the caller's bearer token.

### Resources

| Area | What it covers |
|------|----------------|
| **Business Profile** | Restaurant details, tax settings, currency |
| **Team Members** | Who works in the business, and their roles |
| **Inventory** | Stock items, low-stock and expiry tracking, exports |
| **Suppliers** | Supplier directory and the items they deliver |
| **Dishes** | Menu items, recipes and food cost |
| **Sales** | Recorded sales, per-dish summaries, exports |
| **Shopping List** | Items to buy, generated from low stock |
| **Notes** | Tagged notes about the business, items, suppliers and sales |
| **Reports** | Sales overview, top dishes, dashboard |
| **Billing** | Subscription plans and subscription state |

### Authentication

Send the Supabase access token as `Authorization: Bearer <token>`.
Health checks and the image proxy are public.
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify tokens and list memberships"},
        {"name": "Business Profile", "description": "The restaurant tenant record"},
        {"name": "Team Members", "description": "Business profile users and roles"},
        {"name": "Inventory", "description": "Stock items, filters, stats and exports"},
        {"name": "Suppliers", "description": "Supplier directory"},
        {"name": "Dishes", "description": "Menu items and recipes"},
        {"name": "Sales", "description": "Recorded sales and exports"},
        {"name": "Shopping List", "description": "Items to purchase"},
        {"name": "Notes", "description": "Entity notes and the tag palette"},
        {"name": "Reports", "description": "Sales analytics and dashboard"},
        {"name": "Billing", "description": "Subscription plans and status"},
        {"name": "Image Proxy", "description": "Relay remote images with caching headers"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(RestaurantAPIException)
async def handle_restaurant_api_exception(request: Request, exc: RestaurantAPIException):
    """Handle custom API exceptions."""
    return await restaurant_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Missing or malformed request fields."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (router carries the /auth prefix)
app.include_router(
    auth_routes.router,
    prefix="/api/v1",
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Business profile endpoints
app.include_router(
    business_profile.router,
    prefix="/api/v1/business-profile",
    tags=["Business Profile"]
)

# Team membership endpoints (share the business profile prefix)
app.include_router(
    members.router,
    prefix="/api/v1/business-profile",
    tags=["Team Members"]
)

# Inventory endpoints
app.include_router(
    inventory.router,
    prefix="/api/v1/inventory",
    tags=["Inventory"]
)

# Supplier endpoints
app.include_router(
    suppliers.router,
    prefix="/api/v1/suppliers",
    tags=["Suppliers"]
)

# Dish endpoints
app.include_router(
    dishes.router,
    prefix="/api/v1/dishes",
    tags=["Dishes"]
)

# Sales endpoints
app.include_router(
    sales.router,
    prefix="/api/v1/sales",
    tags=["Sales"]
)

# Shopping list endpoints
app.include_router(
    shopping_list.router,
    prefix="/api/v1/shopping-list",
    tags=["Shopping List"]
)

# Report endpoints
app.include_router(
    reports.router,
    prefix="/api/v1/reports",
    tags=["Reports"]
)

# Note endpoints
app.include_router(
    notes.router,
    prefix="/api/v1/notes",
    tags=["Notes"]
)

# Billing endpoints
app.include_router(
    billing.router,
    prefix="/api/v1/billing",
    tags=["Billing"]
)

# Image proxy (public)
app.include_router(
    image_proxy.router,
    prefix="/api/v1/image-proxy",
    tags=["Image Proxy"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Restaurant Inventory API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
