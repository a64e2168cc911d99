import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from subscription_service.database import get_db
from subscription_service.dependencies import SubscriptionFilterParams, TotalCostParams
from subscription_service.schemas import (
    DeleteResponse,
    ErrorResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    TotalCostResponse,
)
from subscription_service.services import subscription_service

logger = logging.getLogger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"], responses=_ERRORS)


def _log_key_mismatch(path_name: str, data: SubscriptionRequest) -> None:
    # The body's service_name is the one stored / matched.
    if path_name != data.service_name:
        logger.debug(
            "Path service_name %r differs from body service_name %r; using body",
            path_name, data.service_name,
        )


@router.get("", response_model=list[SubscriptionResponse], response_model_exclude_none=True)
async def list_subscriptions(
    filters: SubscriptionFilterParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_service.list_subscriptions(db, filters.user_id, filters.service_name)

@router.get("/total", response_model=TotalCostResponse, tags=["analytics"])
async def get_total_cost(params: TotalCostParams = Depends(), db: AsyncSession = Depends(get_db)):
    total = await subscription_service.get_total_cost(
        db,
        params.start_date,
        params.end_date,
        user_id=params.user_id,
        service_name=params.service_name,
    )
    return {"total_cost": total}

@router.post(
    "/{user_id}/{service_name}",
    status_code=201,
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
    responses={409: {"model": ErrorResponse}},
)
async def create_subscription(
    user_id: str, service_name: str, data: SubscriptionRequest, db: AsyncSession = Depends(get_db)
):
    _log_key_mismatch(service_name, data)
    return await subscription_service.create_subscription(db, user_id, data)

@router.put("/{user_id}/{service_name}", response_model=SubscriptionResponse, response_model_exclude_none=True)
async def update_subscription(
    user_id: str, service_name: str, data: SubscriptionRequest, db: AsyncSession = Depends(get_db)
):
    _log_key_mismatch(service_name, data)
    return await subscription_service.update_subscription(db, user_id, data)

@router.get("/{user_id}/{service_name}", response_model=SubscriptionResponse, response_model_exclude_none=True)
async def get_subscription(user_id: str, service_name: str, db: AsyncSession = Depends(get_db)):
    return await subscription_service.get_subscription(db, user_id, service_name)

@router.delete("/{user_id}/{service_name}", response_model=DeleteResponse)
async def delete_subscription(user_id: str, service_name: str, db: AsyncSession = Depends(get_db)):
    return await subscription_service.delete_subscription(db, user_id, service_name)
