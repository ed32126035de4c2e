"""FastAPI main application."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from exceptions import (
    ConfigurationError,
    InvalidStatusTransitionError,
    LoadNotFoundError,
    TemplateNotFoundError,
    TripNotFoundError,
    ValidationError,
)
from logging_config import get_logger, setup_logging
from services.demo_data import seed_demo_data
from services.store import LogisticsStore
from api.middleware import setup_middleware
from api.routes import clients, health, loads, reports, transactions, trips, trucks

setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    # Startup
    logger.info("Starting Logistics Ledger API", app_env=settings.app_env)

    errors = settings.validate_required_settings()
    if errors:
        for error in errors:
            logger.error("Invalid setting", error=error)
        raise ConfigurationError("; ".join(errors))

    app.state.store = LogisticsStore(settings.database_url)
    logger.info("Store initialized")

    if settings.seed_demo_data:
        counts = seed_demo_data(app.state.store)
        logger.info("Demo data seeded", **counts)

    yield

    # Shutdown
    app.state.store.close()
    logger.info("Shutting down Logistics Ledger API")


# Create FastAPI app
app = FastAPI(
    title="Logistics Ledger",
    description="Bookkeeping for a truck-brokerage business: loads, trips, payments and dues",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Input that passed the schema but failed sanitization."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidStatusTransitionError)
async def transition_exception_handler(request: Request, exc: InvalidStatusTransitionError):
    """Backward, skipping or past-the-end trip status moves."""
    logger.warning("Rejected trip status move", error=str(exc))
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(TripNotFoundError)
@app.exception_handler(LoadNotFoundError)
@app.exception_handler(TemplateNotFoundError)
async def not_found_exception_handler(request: Request, exc: Exception):
    """Handle lookups of records that do not exist."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(clients.router, prefix="/api", tags=["Clients"])
app.include_router(trucks.router, prefix="/api", tags=["Trucks"])
app.include_router(loads.router, prefix="/api", tags=["Loads"])
app.include_router(trips.router, prefix="/api", tags=["Trips"])
app.include_router(transactions.router, prefix="/api", tags=["Transactions"])
app.include_router(reports.router, prefix="/api", tags=["Reports"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Logistics Ledger",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
