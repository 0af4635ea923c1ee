"""
E2E tests for account personas served by the mock Mono API.

The gateway app runs with its Mono dependency pointed at the in-process
mock server (mocks/mono_server), so every request goes through the real
client, parser, engine and HTTP layer.

Personas (keyed by one-time code):
- code_salaried: monthly salary on the 25th, rent and groceries
- code_irregular: ad-hoc transfers only, no salary
- code_empty: linked account with an empty statement
"""

from fastapi.testclient import TestClient


def test_salaried_account_gets_loan_limit(linked_client: TestClient):
    """
    code_salaried: three salaries of 250,000 on a steady payday
    Expected: loan limit of 33% of salary, payday detected
    """
    response = linked_client.post("/v1/accounts/link", json={"code": "code_salaried"})

    assert response.status_code == 200
    assert response.json() == {
        "account_id": "acct_salaried",
        "max_loan_amount": 82500,
        "average_salary": 250000,
        "payday_detected": True,
        "expense_ratio": 0.4,  # 300,000 spent / 750,000 received
    }


def test_irregular_account_gets_no_limit(linked_client: TestClient):
    """
    code_irregular: transfers and a refund, nothing salary-like
    Expected: zero loan limit, spending still measured
    """
    response = linked_client.post("/v1/accounts/link", json={"code": "code_irregular"})

    assert response.status_code == 200
    data = response.json()
    assert data["account_id"] == "acct_irregular"
    assert data["max_loan_amount"] == 0
    assert data["average_salary"] == 0
    assert data["payday_detected"] is False
    assert data["expense_ratio"] == 0.18  # 10,000 / 55,000


def test_empty_statement_gets_zero_result(linked_client: TestClient):
    response = linked_client.post("/v1/accounts/link", json={"code": "code_empty"})

    assert response.status_code == 200
    assert response.json() == {
        "account_id": "acct_empty",
        "max_loan_amount": 0,
        "average_salary": 0,
        "payday_detected": False,
        "expense_ratio": 0.0,
    }


def test_unknown_code_rejected(linked_client: TestClient):
    response = linked_client.post("/v1/accounts/link", json={"code": "code_forged"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid Mono code or credentials"


def test_link_recorded_in_metrics(linked_client: TestClient):
    linked_client.post("/v1/accounts/link", json={"code": "code_salaried"})

    metrics = linked_client.get("/metrics").text

    assert 'affordability_calculations_total{payday="detected"}' in metrics
    assert 'affordability_loan_limit_bucket_total{bucket="50k-200k"}' in metrics
