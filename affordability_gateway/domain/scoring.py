"""Affordability scoring engine - core business logic for loan limits"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from affordability_gateway.domain.models import (
    DEFAULT_RULES,
    AffordabilityResult,
    AffordabilityRules,
    Transaction,
)
from affordability_gateway.domain.parsing import parse_transaction
from affordability_gateway.utils.date_utils import circular_day_distance, subtract_months


def normalize_transactions(transactions: Any) -> List[Transaction]:
    """
    Re-read every record through the lenient parser.

    Accepts Transactions or raw statement mappings; anything else is dropped,
    as is a non-iterable input.
    """
    if not isinstance(transactions, Iterable) or isinstance(transactions, (str, bytes, Mapping)):
        return []

    records = []
    for item in transactions:
        if isinstance(item, Transaction):
            records.append(parse_transaction(asdict(item)))
        elif isinstance(item, Mapping):
            records.append(parse_transaction(item))
    return records


def filter_recent_transactions(
    transactions: Iterable[Transaction],
    today: date,
    months: int,
) -> List[Transaction]:
    """Keep transactions dated on or after the cutoff `months` before today"""
    cutoff = subtract_months(today, months)
    return [t for t in transactions if t.date is not None and t.date >= cutoff]


def partition_transactions(
    transactions: Iterable[Transaction],
) -> Tuple[List[Transaction], List[Transaction]]:
    """Split into (credits, debits); unknown types land in neither"""
    credits = [t for t in transactions if t.is_credit]
    debits = [t for t in transactions if t.is_debit]
    return credits, debits


def detect_salary_transactions(
    credits: Iterable[Transaction],
    rules: AffordabilityRules = DEFAULT_RULES,
) -> List[Transaction]:
    """
    Pick credits whose narration looks like a salary payment.

    Plain substring match on the upper-cased narration, so "PAY" also hits
    "PAYMENT" or "PAYPAL". Word-boundary matching would reclassify accounts.
    """
    return [
        t for t in credits
        if any(keyword in t.narration.upper() for keyword in rules.salary_keywords)
    ]


def calculate_average_salary(salary_transactions: List[Transaction]) -> int:
    """Mean salary amount rounded half-up to a whole unit"""
    if not salary_transactions:
        return 0

    total = sum(Decimal(str(t.amount)) for t in salary_transactions)
    average = total / len(salary_transactions)
    return int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def detect_payday_pattern(
    salary_transactions: List[Transaction],
    rules: AffordabilityRules = DEFAULT_RULES,
) -> bool:
    """
    Check whether salary lands on roughly the same day each month.

    Days are grouped greedily in input order: each day joins the first group
    whose key (the day that opened it) is within tolerance, else opens a new
    group. Order matters on borderline inputs, so the days are not sorted.
    """
    if len(salary_transactions) < rules.min_consistent_payments:
        return False

    pay_days = [t.date.day for t in salary_transactions]

    # group key (first-seen day) -> member count; dicts keep insertion order
    day_groups: Dict[int, int] = {}
    for day in pay_days:
        for group_day in day_groups:
            distance = circular_day_distance(day, group_day, rules.days_in_cycle)
            if distance <= rules.payday_tolerance_days:
                day_groups[group_day] += 1
                break
        else:
            day_groups[day] = 1

    return any(count >= rules.min_consistent_payments for count in day_groups.values())


def calculate_expense_ratio(credits: List[Transaction], debits: List[Transaction]) -> float:
    """Total debits over total credits, rounded half-up to 2 decimal places"""
    total_credits = sum(Decimal(str(t.amount)) for t in credits)
    total_debits = sum(Decimal(str(t.amount)) for t in debits)

    if total_credits <= 0:
        return 0.0

    ratio = total_debits / total_credits
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_max_loan_amount(average_salary: int, rules: AffordabilityRules = DEFAULT_RULES) -> int:
    """Loan ceiling as a share of average salary, always floored"""
    # str() keeps a float percentage such as 0.29 at its written value
    percentage = Decimal(str(rules.loan_limit_percentage))
    return math.floor(Decimal(average_salary) * percentage)


def calculate_affordability(
    transactions: Optional[Iterable[Any]],
    today: Optional[date] = None,
    rules: AffordabilityRules = DEFAULT_RULES,
) -> AffordabilityResult:
    """
    Main entry point: estimate salary and loan ceiling from a statement.

    Pipeline: recency filter -> credit/debit split -> salary detection ->
    average salary -> payday pattern -> expense ratio -> loan ceiling.

    Never raises. Missing or empty input gives the all-zero result.
    """
    records = normalize_transactions(transactions)
    if not records:
        return AffordabilityResult()

    today = today or date.today()
    recent = filter_recent_transactions(records, today, rules.lookback_months)
    credits, debits = partition_transactions(recent)

    salary_transactions = detect_salary_transactions(credits, rules)
    average_salary = calculate_average_salary(salary_transactions)

    return AffordabilityResult(
        average_salary=average_salary,
        payday_detected=detect_payday_pattern(salary_transactions, rules),
        max_loan_amount=calculate_max_loan_amount(average_salary, rules),
        expense_ratio=calculate_expense_ratio(credits, debits),
        salary_transactions_count=len(salary_transactions),
    )
