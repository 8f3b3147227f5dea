"""
Database seeding script for reference data.

Registers the transaction kinds (CASH_IN, CASH_OUT, SEAT_PAYMENT, EXPENSE)
and the default categories. Run this after the database is set up and
before the first transaction is recorded.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from seatfund.app.core.config import settings
from seatfund.app.core.observability import configure_logging
from seatfund.app.db.session import Database
from seatfund.app.services.reference_data import seed_reference_data


async def main():
    configure_logging(settings.log_level, settings.log_json)
    database = Database.from_settings(settings)
    try:
        await database.create_all()
        async with database.session() as session:
            created = await seed_reference_data(session)
        print(f"Transaction types created: {created['transaction_types']}")
        print(f"Categories created: {created['categories']}")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
