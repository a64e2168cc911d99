"""Sample data for an empty subscriptions table (local development, demos)."""
import logging
import uuid
from datetime import datetime

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from subscription_service.models import Subscription

logger = logging.getLogger(__name__)

_ALICE = uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")
_BOB = uuid.UUID("7a1c7a3e-98f5-4b1e-9c2d-2f5a0d6b1e44")

SEED_SUBSCRIPTIONS: list[dict] = [
    {"user_id": _ALICE, "service_name": "Yandex Plus", "price": 400,
     "start_date": datetime(2025, 7, 1), "end_date": None},
    {"user_id": _ALICE, "service_name": "Netflix", "price": 799,
     "start_date": datetime(2025, 1, 1), "end_date": datetime(2025, 6, 1)},
    {"user_id": _BOB, "service_name": "Spotify", "price": 299,
     "start_date": datetime(2024, 11, 1), "end_date": None},
    {"user_id": _BOB, "service_name": "Netflix", "price": 799,
     "start_date": datetime(2025, 3, 1), "end_date": datetime(2025, 12, 1)},
]


async def seed_subscriptions(db: AsyncSession) -> int:
    """
    Insert ``SEED_SUBSCRIPTIONS`` when the table is empty.

    Returns the number of rows added (0 when the table already had data).
    The caller owns the commit.
    """
    count: int = (await db.execute(select(func.count()).select_from(Subscription))).scalar_one()
    if count:
        logger.info("Table already contains %d subscription(s), skipping seeds", count)
        return 0

    await db.execute(insert(Subscription), SEED_SUBSCRIPTIONS)
    logger.info("Seeds applied: added %d subscription(s)", len(SEED_SUBSCRIPTIONS))
    return len(SEED_SUBSCRIPTIONS)
