import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from pawmarket.api.core.exceptions.base import register_exception_handlers
from pawmarket.api.core.middleware.access_gate import access_gate_middleware
from pawmarket.api.core.middleware.auth import auth_middleware
from pawmarket.api.core.middleware.logging import logging_middleware
from pawmarket.api.core.middleware.security import (
    SecurityHeadersMiddleware,
    PayloadSizeMiddleware,
)
from pawmarket.api.router import api_router
from pawmarket.database.connection import AsyncSessionLocal, create_tables
from pawmarket.modules.payment.gateway import RazorpayGateway
from pawmarket.modules.storage.service import build_storage
from pawmarket.utils.settings.access_gate import AccessGateSettings
from pawmarket.utils.settings.app import AppSettings
from pawmarket.utils.settings.database import DatabaseSettings
from pawmarket.utils.settings.storage import StorageSettings
from pawmarket.utils.logger import setup_logging


is_production = AppSettings().ENVIRONMENT.upper() == "PROD"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger = setup_logging(is_production)
    logger.info("Starting PawMarket API...")
    AppSettings().validate_prod()

    if DatabaseSettings().DATABASE_CREATE_TABLES:
        await create_tables()

    app.state.session_factory = AsyncSessionLocal
    app.state.access_gate_settings = AccessGateSettings()
    # Raises when the Razorpay key id or secret is missing
    app.state.payment_gateway = RazorpayGateway.from_settings()
    app.state.image_storage = build_storage()
    logger.info("Database, payment gateway and storage added to app state")

    yield

    # Shutdown
    logger.info("Shutting down PawMarket API...")


# Create app with production settings
app = FastAPI(
    title="PawMarket API",
    description="Pet adoption and breeder marketplace",
    version=AppSettings().API_VERSION,
    lifespan=lifespan,
    # Security: Disable docs in production
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
)

# Register global exception handlers
register_exception_handlers(app)


# Last registered runs first: CORS -> security headers -> payload size
# -> logging -> auth -> access gate. Auth and gate rejections therefore
# still carry CORS and security headers.
app.middleware("http")(access_gate_middleware)
app.middleware("http")(auth_middleware)
app.middleware("http")(logging_middleware)

app_settings = AppSettings()
app.add_middleware(
    PayloadSizeMiddleware,
    max_request_size=app_settings.MAX_REQUEST_SIZE,
)
app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
# Configure CORS middleware with explicit settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.include_router(api_router)

storage_settings = StorageSettings()
if storage_settings.STORAGE_BACKEND.lower() == "local":
    app.mount(
        storage_settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=storage_settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )


def run_dev_server():
    """Run development server with auto-reload."""
    uvicorn.run(
        "pawmarket.main:app", host="0.0.0.0", port=8010, reload=True, access_log=False
    )


def run_prod_server():
    """Run production server."""
    uvicorn.run(
        "pawmarket.main:app", host="0.0.0.0", port=8010, reload=False, access_log=False
    )
