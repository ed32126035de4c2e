"""Business logic services."""
from services.store import LogisticsStore, OrphanReport
from services.ledger import LedgerSnapshot
from services.demo_data import seed_demo_data

__all__ = ["LogisticsStore", "OrphanReport", "LedgerSnapshot", "seed_demo_data"]
