"""Bank account linking workflow: exchange code, fetch statement, score affordability"""

import time
from datetime import date
from typing import List, Optional, Protocol

from affordability_gateway.domain.models import LinkedAccount, Transaction
from affordability_gateway.domain.scoring import calculate_affordability
from affordability_gateway.infrastructure.observability.logging import log_account_linked, log_affordability
from affordability_gateway.infrastructure.observability.metrics import record_affordability


class BankDataProvider(Protocol):
    """Bank data source able to link an account and return its statement"""

    async def exchange_token(self, code: str) -> str:
        ...

    async def get_statement(self, account_id: str) -> List[Transaction]:
        ...


async def link_bank_account(
    provider: BankDataProvider,
    code: str,
    request_id: str = "unknown",
    today: Optional[date] = None,
) -> LinkedAccount:
    """
    Link a bank account and derive its loan limit.

    Flow:
    1. Exchange the one-time code for an account ID
    2. Fetch the account statement
    3. Calculate affordability from the statement
    4. Emit audit log events and metrics

    Provider errors (BankProviderError subclasses) propagate to the caller.
    Nothing is persisted here; storing the result is the caller's concern.
    """
    start_time = time.time()

    account_id = await provider.exchange_token(code)
    transactions = await provider.get_statement(account_id)
    log_account_linked(request_id, account_id, len(transactions))

    affordability = calculate_affordability(transactions, today=today)

    duration_ms = (time.time() - start_time) * 1000
    record_affordability(affordability)
    log_affordability(request_id, account_id, affordability, duration_ms)

    return LinkedAccount(account_id=account_id, affordability=affordability)
