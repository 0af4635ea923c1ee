"""Unit tests for the account linking workflow"""

import logging
import pytest
from affordability_gateway.domain.exceptions import AccountNotFoundError, InvalidCredentialsError
from affordability_gateway.services.linking import link_bank_account
from tests.factories import TODAY, make_transaction, months_ago


class StubProvider:
    """In-memory bank data provider"""

    def __init__(self, statement=None, exchange_error=None, statement_error=None):
        self.statement = statement or []
        self.exchange_error = exchange_error
        self.statement_error = statement_error
        self.calls = []

    async def exchange_token(self, code):
        self.calls.append(("exchange_token", code))
        if self.exchange_error:
            raise self.exchange_error
        return f"acct_for_{code}"

    async def get_statement(self, account_id):
        self.calls.append(("get_statement", account_id))
        if self.statement_error:
            raise self.statement_error
        return self.statement


async def test_link_bank_account_scores_statement():
    provider = StubProvider(
        statement=[
            make_transaction(amount=120000, on=months_ago(0, 28)),
            make_transaction(amount=120000, on=months_ago(1, 30)),
            make_transaction(type="debit", narration="RENT", amount=60000, on=months_ago(1, 2)),
        ]
    )

    linked = await link_bank_account(provider, "code_1", today=TODAY)

    assert provider.calls == [("exchange_token", "code_1"), ("get_statement", "acct_for_code_1")]
    assert linked.account_id == "acct_for_code_1"
    assert linked.affordability.average_salary == 120000
    assert linked.affordability.payday_detected is True
    assert linked.affordability.max_loan_amount == 39600
    assert linked.affordability.expense_ratio == 0.25


async def test_link_bank_account_logs_audit_events(caplog):
    caplog.set_level(logging.INFO)
    provider = StubProvider(statement=[make_transaction(amount=90000)])

    await link_bank_account(provider, "code_2", request_id="req-9", today=TODAY)

    events = {record.getMessage(): record for record in caplog.records}
    assert "FinancialDataLinked" in events
    assert events["FinancialDataLinked"].transaction_count == 1
    limit_event = events["LoanLimitCalculated"]
    assert limit_event.request_id == "req-9"
    assert limit_event.max_loan_amount == 29700
    assert limit_event.payday_detected is False


async def test_link_bank_account_propagates_exchange_errors():
    provider = StubProvider(exchange_error=InvalidCredentialsError("bad code"))

    with pytest.raises(InvalidCredentialsError):
        await link_bank_account(provider, "code_3", today=TODAY)
    assert provider.calls == [("exchange_token", "code_3")]


async def test_link_bank_account_propagates_statement_errors():
    provider = StubProvider(statement_error=AccountNotFoundError("gone"))

    with pytest.raises(AccountNotFoundError):
        await link_bank_account(provider, "code_4", today=TODAY)
