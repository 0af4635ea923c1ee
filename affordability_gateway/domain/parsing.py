"""Lenient conversion of provider transaction payloads into domain Transactions"""

import math
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from affordability_gateway.domain.models import Transaction
from affordability_gateway.utils.date_utils import to_calendar_date

Number = Union[int, float]


def _as_number(value: Any) -> Optional[Number]:
    """Read an int, float, Decimal or numeric string; None for anything else"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if isinstance(value, (str, Decimal)):
        try:
            parsed = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            return None
        if not parsed.is_finite():
            return None
        return int(parsed) if parsed == parsed.to_integral_value() else float(parsed)
    return None


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_transaction(payload: Mapping[str, Any]) -> Transaction:
    """
    Build a Transaction from a raw statement entry.

    Never raises: missing or malformed fields fall back to values the scoring
    engine ignores (empty text, zero amount, no date). Negative amounts are
    treated as malformed since direction is carried by ``type``.
    """
    amount = _as_number(payload.get("amount"))
    balance = _as_number(payload.get("balance"))

    return Transaction(
        transaction_id=_as_text(payload.get("_id", payload.get("transaction_id"))),
        type=_as_text(payload.get("type")),
        amount=amount if amount is not None and amount >= 0 else 0,
        narration=_as_text(payload.get("narration")),
        date=to_calendar_date(payload.get("date")),
        balance=balance if balance is not None else 0,
    )


def parse_transactions(payloads: Optional[Iterable[Any]]) -> List[Transaction]:
    """Parse a statement, skipping entries that are not JSON objects"""
    if not isinstance(payloads, Iterable) or isinstance(payloads, (str, bytes, Mapping)):
        return []
    return [parse_transaction(p) for p in payloads if isinstance(p, Mapping)]
