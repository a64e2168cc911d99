"""
Subscription service: the store operations for the Subscription table.

Design notes
------------
- Every public function issues exactly one SQL statement.  Writes use
  ``RETURNING`` so the stored row comes back in the same round trip, and
  "not found" is derived from the statement returning no row rather than
  from a separate existence check.
- Input is validated (UUID syntax, ``MM-YYYY`` dates, price, service name)
  before any storage access; failures raise ``ValidationError``.
- Storage failures are translated at this boundary: a unique-key violation
  on insert becomes ``ConflictError``, anything else ``InternalError``.
- Service functions do not commit; the transaction boundary is owned by
  the ``get_db`` dependency in the router layer.
"""
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from subscription_service.dates import (
    format_month_year,
    parse_month_year,
    parse_optional_month_year,
    parse_user_id,
)
from subscription_service.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from subscription_service.models import Subscription
from subscription_service.schemas import MAX_PRICE, SubscriptionRequest

logger = logging.getLogger(__name__)

# Column order shared by every statement that returns full records.
_RECORD_COLUMNS = (
    Subscription.service_name,
    Subscription.price,
    Subscription.user_id,
    Subscription.start_date,
    Subscription.end_date,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@contextmanager
def _storage_errors(action: str, conflict_on_integrity: bool = False, **context):
    """
    Translate SQLAlchemy failures raised inside the block into domain errors.

    *context* is only used for the log line.
    """
    try:
        yield
    except IntegrityError as exc:
        if not conflict_on_integrity:
            logger.error("Database error on %s: %s %s", action, exc, context)
            raise InternalError() from exc
        logger.info("Subscription already exists on %s: %s", action, context)
        raise ConflictError() from exc
    except SQLAlchemyError as exc:
        logger.error("Database error on %s: %s %s", action, exc, context)
        raise InternalError() from exc


def _validated_fields(data: SubscriptionRequest) -> tuple[datetime, datetime | None]:
    """Check the request body and return the normalised (start, end) dates."""
    if not data.service_name:
        raise ValidationError("service_name is required")
    price = data.price
    if type(price) is not int or not 0 <= price <= MAX_PRICE:
        raise ValidationError(f"price must be an integer between 0 and {MAX_PRICE}")
    start_date = parse_month_year(data.start_date, "start_date")
    end_date = parse_optional_month_year(data.end_date, "end_date")
    return start_date, end_date


def _optional_filter(value: str | None) -> str | None:
    return value or None


def _record_to_dict(row) -> dict:
    """Serialise a returned row to the wire shape; end_date is omitted when NULL."""
    data = {
        "service_name": row.service_name,
        "price": row.price,
        "user_id": str(row.user_id),
        "start_date": format_month_year(row.start_date),
    }
    if row.end_date is not None:
        data["end_date"] = format_month_year(row.end_date)
    return data


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def create_subscription(
    db: AsyncSession,
    user_id: str | uuid.UUID,
    data: SubscriptionRequest,
) -> dict:
    """
    Insert a new subscription for *user_id* and return the stored record.

    The body's ``service_name`` is the one stored.  Raises
    ``ConflictError`` when the (user_id, service_name) key already exists.
    """
    try:
        uid = parse_user_id(user_id)
        start_date, end_date = _validated_fields(data)
    except ValidationError as exc:
        logger.warning("Rejected subscription create: %s (user_id=%s)", exc.message, user_id)
        raise

    logger.debug(
        "Attempting to create subscription: user_id=%s service_name=%s price=%s",
        uid, data.service_name, data.price,
    )
    stmt = (
        insert(Subscription)
        .values(
            user_id=uid,
            service_name=data.service_name,
            price=data.price,
            start_date=start_date,
            end_date=end_date,
        )
        .returning(*_RECORD_COLUMNS)
    )
    with _storage_errors(
        "subscription creation", conflict_on_integrity=True,
        user_id=str(uid), service_name=data.service_name,
    ):
        row = (await db.execute(stmt)).one()

    logger.info("Subscription created: user_id=%s service_name=%s", uid, row.service_name)
    return _record_to_dict(row)


async def update_subscription(
    db: AsyncSession,
    user_id: str | uuid.UUID,
    data: SubscriptionRequest,
) -> dict:
    """
    Replace price, start_date and end_date of an existing subscription.

    The key is (user_id, ``data.service_name``) and is never modified.  An
    empty ``end_date`` clears it.  Raises ``NotFoundError`` when no row
    matches.
    """
    try:
        uid = parse_user_id(user_id)
        start_date, end_date = _validated_fields(data)
    except ValidationError as exc:
        logger.warning("Rejected subscription update: %s (user_id=%s)", exc.message, user_id)
        raise

    logger.debug(
        "Attempting to update subscription: user_id=%s service_name=%s price=%s",
        uid, data.service_name, data.price,
    )
    stmt = (
        update(Subscription)
        .where(Subscription.user_id == uid, Subscription.service_name == data.service_name)
        .values(price=data.price, start_date=start_date, end_date=end_date)
        .returning(*_RECORD_COLUMNS)
        .execution_options(synchronize_session=False)
    )
    with _storage_errors("subscription update", user_id=str(uid), service_name=data.service_name):
        row = (await db.execute(stmt)).one_or_none()

    if row is None:
        logger.info("Subscription not found for update: user_id=%s service_name=%s", uid, data.service_name)
        raise NotFoundError()

    logger.info("Subscription updated: user_id=%s service_name=%s", uid, row.service_name)
    return _record_to_dict(row)


async def get_subscription(db: AsyncSession, user_id: str | uuid.UUID, service_name: str) -> dict:
    """Return the record for (user_id, service_name) or raise ``NotFoundError``."""
    uid = parse_user_id(user_id)
    logger.debug("Fetching subscription: user_id=%s service_name=%s", uid, service_name)

    q = select(*_RECORD_COLUMNS).where(
        Subscription.user_id == uid, Subscription.service_name == service_name
    )
    with _storage_errors("subscription fetch", user_id=str(uid), service_name=service_name):
        row = (await db.execute(q)).one_or_none()

    if row is None:
        logger.info("Subscription not found: user_id=%s service_name=%s", uid, service_name)
        raise NotFoundError()
    return _record_to_dict(row)


async def delete_subscription(db: AsyncSession, user_id: str | uuid.UUID, service_name: str) -> dict:
    """
    Delete the subscription for (user_id, service_name).

    Returns a confirmation payload echoing the key, or raises
    ``NotFoundError`` when nothing was deleted.
    """
    uid = parse_user_id(user_id)
    logger.debug("Deleting subscription: user_id=%s service_name=%s", uid, service_name)

    stmt = (
        delete(Subscription)
        .where(Subscription.user_id == uid, Subscription.service_name == service_name)
        .returning(Subscription.service_name)
        .execution_options(synchronize_session=False)
    )
    with _storage_errors("subscription deletion", user_id=str(uid), service_name=service_name):
        deleted_name = (await db.execute(stmt)).scalar_one_or_none()

    if deleted_name is None:
        logger.info("Subscription not found for deletion: user_id=%s service_name=%s", uid, service_name)
        raise NotFoundError()

    logger.info("Subscription deleted: user_id=%s service_name=%s", uid, deleted_name)
    return {
        "message": "subscription deleted",
        "service_name": deleted_name,
        "user_id": str(uid),
    }


async def list_subscriptions(
    db: AsyncSession,
    user_id: str | uuid.UUID | None = None,
    service_name: str | None = None,
) -> list[dict]:
    """
    Return every subscription matching the supplied filters.

    Both filters are optional (empty strings count as absent); with no
    filter the whole table is returned.  There is no pagination.
    """
    user_id = _optional_filter(user_id)
    service_name = _optional_filter(service_name)
    uid = parse_user_id(user_id) if user_id is not None else None
    logger.debug("Listing subscriptions: user_id=%s service_name=%s", uid, service_name)

    q = select(*_RECORD_COLUMNS)
    if uid is not None:
        q = q.where(Subscription.user_id == uid)
    if service_name is not None:
        q = q.where(Subscription.service_name == service_name)
    q = q.order_by(Subscription.user_id, Subscription.service_name)

    with _storage_errors("subscription listing", user_id=user_id, service_name=service_name):
        rows = (await db.execute(q)).all()

    logger.debug("Returning subscriptions list: count=%d", len(rows))
    return [_record_to_dict(r) for r in rows]


async def get_total_cost(
    db: AsyncSession,
    start_date: str | None,
    end_date: str | None,
    user_id: str | uuid.UUID | None = None,
    service_name: str | None = None,
) -> int:
    """
    Sum ``price`` over subscriptions overlapping the requested period.

    A subscription overlaps ``[start_date, end_date]`` (both ``MM-YYYY``,
    both required) when it starts no later than the period's last month
    and either has no end date or ends no earlier than the period's first
    month.  Returns 0 when nothing matches.
    """
    try:
        period_start = parse_month_year(start_date, "start_date")
        period_end = parse_month_year(end_date, "end_date")
        user_id = _optional_filter(user_id)
        uid = parse_user_id(user_id) if user_id is not None else None
    except ValidationError as exc:
        logger.warning("Rejected total cost request: %s", exc.message)
        raise
    service_name = _optional_filter(service_name)

    logger.debug(
        "Calculating total cost: period=%s..%s user_id=%s service_name=%s",
        start_date, end_date, uid, service_name,
    )
    q = select(func.coalesce(func.sum(Subscription.price), 0)).where(
        Subscription.start_date <= period_end,
        or_(Subscription.end_date >= period_start, Subscription.end_date.is_(None)),
    )
    if uid is not None:
        q = q.where(Subscription.user_id == uid)
    if service_name is not None:
        q = q.where(Subscription.service_name == service_name)

    with _storage_errors("total cost calculation", user_id=user_id, service_name=service_name):
        total = (await db.execute(q)).scalar_one()

    total = int(total)
    logger.info(
        "Total cost calculated: total_cost=%d user_id=%s service_name=%s",
        total, uid, service_name,
    )
    return total
