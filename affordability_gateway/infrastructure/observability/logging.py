"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from affordability_gateway.config import settings
from affordability_gateway.domain.models import AffordabilityResult


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_account_linked(request_id: str, account_id: str, transaction_count: int) -> None:
    """Audit event: provider account linked and statement retrieved"""
    logging.info(
        "FinancialDataLinked",
        extra={
            "request_id": request_id,
            "account_id": account_id,
            "step": "account_linked",
            "transaction_count": transaction_count,
        },
    )


def log_affordability(
    request_id: str,
    account_id: str,
    result: AffordabilityResult,
    duration_ms: float,
) -> None:
    """Audit event: loan limit derived from the statement"""
    logging.info(
        "LoanLimitCalculated",
        extra={
            "request_id": request_id,
            "account_id": account_id,
            "step": "loan_limit_calculated",
            "max_loan_amount": result.max_loan_amount,
            "average_salary": result.average_salary,
            "payday_detected": result.payday_detected,
            "expense_ratio": result.expense_ratio,
            "salary_transactions_count": result.salary_transactions_count,
            "duration_ms": duration_ms,
        },
    )
