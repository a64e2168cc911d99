from fastapi import Query


class SubscriptionFilterParams:
    """
    Reusable FastAPI dependency for the optional list filters.

    Usage in a router::

        @router.get("")
        async def list_subscriptions(filters: SubscriptionFilterParams = Depends()):
            ...

    Empty values are passed through unchanged; the service layer treats
    them as "no filter" and validates ``user_id`` syntax.
    """

    def __init__(
        self,
        user_id: str | None = Query(
            None,
            description="Filter by user UUID.",
        ),
        service_name: str | None = Query(
            None,
            description="Filter by service name.",
        ),
    ) -> None:
        self.user_id = user_id
        self.service_name = service_name


class TotalCostParams(SubscriptionFilterParams):
    """
    Filters plus the requested period for ``GET /subscriptions/total``.

    ``start_date`` and ``end_date`` are required by the service; they are
    declared optional here so a missing value produces the same
    ``{"error": ...}`` 400 as a malformed one.
    """

    def __init__(
        self,
        user_id: str | None = Query(None, description="Filter by user UUID."),
        service_name: str | None = Query(None, description="Filter by service name."),
        start_date: str | None = Query(None, description="First month of the period, MM-YYYY."),
        end_date: str | None = Query(None, description="Last month of the period, MM-YYYY."),
    ) -> None:
        super().__init__(user_id=user_id, service_name=service_name)
        self.start_date = start_date
        self.end_date = end_date
