"""POST /v1/accounts/link - link a bank account and derive its loan limit"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from affordability_gateway.api.v1.schemas import ERROR_RESPONSES, LinkAccountRequest, LinkAccountResponse
from affordability_gateway.api.dependencies import get_mono_client, get_request_id
from affordability_gateway.infrastructure.clients.mono import MonoClient
from affordability_gateway.services.linking import link_bank_account
from affordability_gateway.domain.exceptions import (
    AccountNotFoundError,
    InvalidCredentialsError,
    ProviderConfigurationError,
    ProviderUnavailableError,
)

router = APIRouter()


@router.post("/accounts/link", response_model=LinkAccountResponse, responses=ERROR_RESPONSES)
async def link_account(
    request_body: LinkAccountRequest,
    request: Request,
    mono_client: MonoClient = Depends(get_mono_client),
):
    """
    Link a Mono account and calculate the holder's loan limit.

    Flow:
    1. Exchange the Mono Connect code for an account ID
    2. Fetch the account statement
    3. Calculate affordability
    4. Return the loan limit and supporting figures
    """
    request_id = get_request_id(request)

    try:
        linked = await link_bank_account(mono_client, request_body.code, request_id=request_id)

    except (InvalidCredentialsError, AccountNotFoundError) as e:
        logging.warning(f"Bank link rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except ProviderUnavailableError as e:
        logging.error(f"Mono API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Bank data provider unavailable")

    except ProviderConfigurationError as e:
        logging.error(f"Provider misconfigured: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    affordability = linked.affordability
    return LinkAccountResponse(
        account_id=linked.account_id,
        max_loan_amount=affordability.max_loan_amount,
        average_salary=affordability.average_salary,
        payday_detected=affordability.payday_detected,
        expense_ratio=affordability.expense_ratio,
    )
