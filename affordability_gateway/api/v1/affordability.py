"""POST /v1/affordability - score a statement supplied by the caller"""

from fastapi import APIRouter

from affordability_gateway.api.v1.schemas import AffordabilityRequest, AffordabilityResponse
from affordability_gateway.domain.scoring import calculate_affordability

router = APIRouter()


@router.post("/affordability", response_model=AffordabilityResponse)
def score_statement(request_body: AffordabilityRequest):
    """Run the affordability engine over raw statement entries. Pure computation, nothing stored."""
    result = calculate_affordability(request_body.transactions, today=request_body.today)
    return AffordabilityResponse.from_result(result)
