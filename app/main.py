# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import device_router, register_exception_handlers
from .core.config import get_settings
from .di.container import get_container
from .domain.repositories.device_repository import DeviceRepository
from .infrastructure.db import MongoDeviceRepository, close_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    
    Builds the DI container, creates the device indexes when MongoDB is the
    store, and closes the Mongo client on shutdown.
    """
    settings = get_settings()
    
    try:
        repository = get_container().get(DeviceRepository)
        if isinstance(repository, MongoDeviceRepository):
            await repository.ensure_indexes()
            logger.info("Device collection indexes ensured")
    except Exception as e:
        # The API still starts; requests will surface store failures individually
        logger.error(f"Failed to prepare device store: {e}", exc_info=True)
    
    logger.info(f"Device inventory started with '{settings.device_store_backend}' store")
    
    yield
    
    if settings.device_store_backend == "mongo":
        close_database()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.
    
    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - Error body handlers
    - API route registration
    
    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)
    
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    
    # Create FastAPI app
    application = FastAPI(
        title="Device Inventory API",
        version="1.0.0",
        description="Device lifecycle and inventory management",
        lifespan=lifespan
    )
    
    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_exception_handlers(application)
    
    # Register API routers
    application.include_router(device_router, prefix="/api/v1/devices")
    
    @application.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}
    
    return application


# Create application instance
app = create_application()
