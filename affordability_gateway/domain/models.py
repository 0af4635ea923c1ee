"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class Transaction:
    """Bank transaction from the account statement"""

    transaction_id: str
    type: str  # "credit" or "debit"
    amount: int  # smallest currency unit
    narration: str
    date: Optional[date]  # None when the provider sent an unparseable date
    balance: int = 0

    @property
    def is_credit(self) -> bool:
        return self.type == "credit"

    @property
    def is_debit(self) -> bool:
        return self.type == "debit"


@dataclass(frozen=True)
class AffordabilityRules:
    """Tunable constants of the affordability heuristics"""

    salary_keywords: Tuple[str, ...] = ("SALARY", "PAYROLL", "WAGES", "PAY")
    lookback_months: int = 3
    payday_tolerance_days: int = 2
    min_consistent_payments: int = 2
    loan_limit_percentage: Decimal = Decimal("0.33")
    days_in_cycle: int = 31


DEFAULT_RULES = AffordabilityRules()


@dataclass(frozen=True)
class AffordabilityResult:
    """Output of affordability analysis"""

    average_salary: int = 0
    payday_detected: bool = False
    max_loan_amount: int = 0
    expense_ratio: float = 0.0
    salary_transactions_count: int = 0


@dataclass(frozen=True)
class LinkedAccount:
    """Outcome of linking a bank account and scoring its statement"""

    account_id: str
    affordability: AffordabilityResult = field(default_factory=AffordabilityResult)
