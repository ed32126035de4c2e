"""Health check endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_store
from exceptions import StoreError
from logging_config import get_logger
from services.store import LogisticsStore

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health")
async def health_check(store: LogisticsStore = Depends(get_store)):
    """Health check endpoint."""
    try:
        # Check database connection
        store.db.execute(text("SELECT 1"))
        counts = {
            "clients": store.clients.count(),
            "loads": store.loads.count(),
            "trucks": store.trucks.count(),
            "trips": store.trips.count(),
            "transactions": store.transactions.count(),
        }
        store_status = "healthy"
    except (SQLAlchemyError, StoreError) as e:
        logger.error("Store health check failed", error=str(e))
        counts = {}
        store_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if store_status == "healthy" else "degraded",
        "store": store_status,
        "counts": counts,
    }
