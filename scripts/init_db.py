#!/usr/bin/env python
"""Build a store, fill it with the demo dataset and print what it holds."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exceptions import LogisticsLedgerException
from logging_config import setup_logging
from metrics import MetricsCollector
from services import LogisticsStore, seed_demo_data


def main():
    """Seed a store and print the dashboard figures."""
    setup_logging()
    print("🗄️  Initializing store...")

    try:
        with LogisticsStore() as store:
            counts = seed_demo_data(store)
            for collection, count in counts.items():
                print(f"✅ {collection}: {count}")

            totals = MetricsCollector(store).get_dashboard_metrics().totals
            for name, value in totals.to_dict().items():
                print(f"   {name}: {value:,.2f}")

        print("✅ Store initialization complete!")

    except LogisticsLedgerException as e:
        print(f"❌ Error initializing store: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
