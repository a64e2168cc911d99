from pydantic import BaseModel, Field

# Upper bound of the INTEGER price column.
MAX_PRICE = 2_147_483_647


# --- Subscription ---

class SubscriptionRequest(BaseModel):
    service_name: str = Field(min_length=1)
    price: int = Field(ge=0, le=MAX_PRICE, strict=True, description="Price in the smallest currency unit.")
    start_date: str = Field(description="First billed month, MM-YYYY.")
    end_date: str | None = Field(None, description="Last billed month, MM-YYYY. Omit for open-ended.")


class SubscriptionResponse(BaseModel):
    service_name: str
    price: int
    user_id: str
    start_date: str
    end_date: str | None = None


class DeleteResponse(BaseModel):
    message: str
    service_name: str
    user_id: str


# --- Aggregates ---

class TotalCostResponse(BaseModel):
    total_cost: int


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str
