"""Shared builders for test data"""

from datetime import date
from affordability_gateway.domain.models import Transaction
from affordability_gateway.utils.date_utils import subtract_months

# Fixed reference date so window boundaries are deterministic
TODAY = date(2024, 5, 20)


def make_transaction(
    narration: str = "SALARY PAYMENT",
    amount: int = 50000,
    type: str = "credit",
    on: date = TODAY,
    transaction_id: str = "txn",
) -> Transaction:
    """Build a Transaction with sensible defaults"""
    return Transaction(
        transaction_id=transaction_id,
        type=type,
        amount=amount,
        narration=narration,
        date=on,
        balance=amount,
    )


def months_ago(months: int, day: int | None = None, today: date = TODAY) -> date:
    """Date `months` before today, optionally pinned to a day of month"""
    if day is not None:
        return subtract_months(today.replace(day=1), months).replace(day=day)
    return subtract_months(today, months)
