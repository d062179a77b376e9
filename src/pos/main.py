import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos.api.errors import register_exception_handlers
from pos.api.v1 import categories, orders, payments, products, users
from pos.core.config import settings
from pos.core.database import engine
from pos.core.logging import setup_logging
from pos.core.redis import close_redis, get_redis
from pos.middleware.metrics import PrometheusMiddleware, metrics_endpoint

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    setup_logging()

    # Startup
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")
    await get_redis()

    yield

    # Shutdown
    logger.info("Closing Redis and database connections")
    await close_redis()
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Point of Sale backend",
    lifespan=lifespan,
)

# Prometheus Metrics Middleware (must be first to capture all requests)
app.add_middleware(PrometheusMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(users.router, prefix="/v1/users", tags=["users"])
app.include_router(payments.router, prefix="/v1/payments", tags=["payments"])
app.include_router(categories.router, prefix="/v1/categories", tags=["categories"])
app.include_router(products.router, prefix="/v1/products", tags=["products"])
app.include_router(orders.router, prefix="/v1/orders", tags=["orders"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Prometheus metrics endpoint
app.add_route("/metrics", metrics_endpoint)
