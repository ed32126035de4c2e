"""Dashboard, dues, reports and integrity endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_metrics, get_store
from api.routes.transactions import TransactionResponse
from config import get_settings
from metrics import MetricsCollector
from services.store import LogisticsStore

router = APIRouter()


@router.get("/dashboard")
async def dashboard(
    days: Optional[int] = Query(None, ge=1),
    metrics: MetricsCollector = Depends(get_metrics)
):
    """Stat cards and the recent active trips panel."""
    data = metrics.get_dashboard_metrics(days=days).to_dict()
    data["currency"] = get_settings().currency_code
    return data


@router.get("/dashboard/client-dues")
async def client_dues(
    days: Optional[int] = Query(None, ge=1),
    metrics: MetricsCollector = Depends(get_metrics)
):
    """Outstanding client freight, per load."""
    return [due.to_dict() for due in metrics.get_client_dues(days=days)]


@router.get("/dashboard/truck-dues")
async def truck_dues(
    days: Optional[int] = Query(None, ge=1),
    metrics: MetricsCollector = Depends(get_metrics)
):
    """Outstanding truck freight and driver commission, per trip."""
    return [due.to_dict() for due in metrics.get_truck_dues(days=days)]


@router.get("/reports")
async def reports(
    days: Optional[int] = Query(None, ge=1),
    metrics: MetricsCollector = Depends(get_metrics)
):
    """Reports page, over all records or the last ``days`` days."""
    report = metrics.get_report(days=days)

    return {
        "currency": get_settings().currency_code,
        "window_days": report.window_days,
        "totals": report.totals.to_dict(),
        "client_wise_summary": [row.to_dict() for row in report.client_wise_summary],
        "trip_profitability": [row.to_dict() for row in report.trip_profitability],
        "pending_receivables": [
            TransactionResponse.model_validate(t).model_dump(mode="json")
            for t in report.pending_receivables
        ],
        "pending_payables": [
            TransactionResponse.model_validate(t).model_dump(mode="json")
            for t in report.pending_payables
        ],
    }


@router.get("/integrity/orphans")
async def orphans(store: LogisticsStore = Depends(get_store)):
    """Records whose referenced load, truck, client or trip was deleted."""
    report = store.orphaned_records()
    return {"clean": report.is_clean, **report.to_dict()}
