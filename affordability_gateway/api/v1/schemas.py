"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Any, Dict, List, Optional

from affordability_gateway.domain.models import AffordabilityResult


class AffordabilityRequest(BaseModel):
    """Request body for POST /v1/affordability"""

    # Raw statement entries; malformed entries are tolerated by the engine
    transactions: Optional[List[Any]] = Field(default=None, description="Statement entries as returned by Mono")
    today: Optional[date] = Field(default=None, description="Reference date, defaults to today")


class AffordabilityResponse(BaseModel):
    """Affordability figures derived from a statement"""

    model_config = ConfigDict(from_attributes=True)

    average_salary: int
    payday_detected: bool
    max_loan_amount: int
    expense_ratio: float
    salary_transactions_count: int

    @classmethod
    def from_result(cls, result: AffordabilityResult) -> "AffordabilityResponse":
        return cls.model_validate(result)


class LinkAccountRequest(BaseModel):
    """Request body for POST /v1/accounts/link"""

    code: str = Field(..., min_length=1, description="One-time code from the Mono Connect widget")


class LinkAccountResponse(BaseModel):
    """Response for POST /v1/accounts/link"""

    account_id: str
    max_loan_amount: int
    average_salary: int
    payday_detected: bool
    expense_ratio: float


class ErrorResponse(BaseModel):
    detail: str


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid code or unknown account"},
    500: {"model": ErrorResponse, "description": "Bank data provider not configured"},
    503: {"model": ErrorResponse, "description": "Bank data provider unavailable"},
}
