from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from subscription_service.database import Base


# ---------------------------------------------------------------------------
# Subscription
# ---------------------------------------------------------------------------
class Subscription(Base):
    __tablename__ = "subscriptions"

    # Composite key: (user_id, service_name). Neither part is ever updated.
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    service_name: Mapped[str] = mapped_column(Text, primary_key=True)

    price: Mapped[int] = mapped_column(Integer, nullable=False)
    # Month granularity: always the 1st at midnight, no time zone.
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    # NULL means open-ended (still active).
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=False), nullable=True)
