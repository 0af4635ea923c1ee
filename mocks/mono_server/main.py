"""Mock Mono API serving token exchange and statements for local runs and tests"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel

from affordability_gateway.utils.date_utils import subtract_months

app = FastAPI(title="Mock Mono API", version="1.0.0")

SECRET_KEY = "test_sk_mock"

# one-time code -> account id
ACCOUNTS = {
    "code_salaried": "acct_salaried",
    "code_irregular": "acct_irregular",
    "code_empty": "acct_empty",
}


class AuthRequest(BaseModel):
    code: str


def _txn(txn_id: str, txn_type: str, amount: int, narration: str, on: date, balance: int) -> dict:
    return {
        "_id": txn_id,
        "type": txn_type,
        "amount": amount,
        "narration": narration,
        "date": f"{on.isoformat()}T00:00:00.000Z",
        "balance": balance,
    }


def _payday(today: date, months_back: int, day: int) -> date:
    anchor = subtract_months(today.replace(day=1), months_back)
    return anchor.replace(day=min(day, 28))


def salaried_statement(today: date) -> List[dict]:
    """Three monthly salaries on the 25th plus everyday spending"""
    entries = []
    for month in range(3):
        payday = _payday(today, month, 25)
        entries.append(_txn(f"sal_{month}", "credit", 250000, "SALARY ACME LTD", payday, 300000))
        entries.append(_txn(f"rent_{month}", "debit", 80000, "RENT TRANSFER", payday + timedelta(days=1), 220000))
        entries.append(_txn(f"pos_{month}", "debit", 20000, "POS SHOPRITE", payday + timedelta(days=2), 200000))
    return entries


def irregular_statement(today: date) -> List[dict]:
    """Ad-hoc transfers, nothing salary-like"""
    return [
        _txn("tr_1", "credit", 40000, "TRANSFER FROM JOHN", today - timedelta(days=3), 40000),
        _txn("tr_2", "credit", 15000, "REFUND", today - timedelta(days=40), 55000),
        _txn("atm_1", "debit", 10000, "ATM WITHDRAWAL", today - timedelta(days=10), 45000),
    ]


STATEMENTS = {
    "acct_salaried": salaried_statement,
    "acct_irregular": irregular_statement,
    "acct_empty": lambda today: [],
}


def _check_key(key: Optional[str]) -> None:
    if key != SECRET_KEY:
        raise HTTPException(status_code=401, detail="invalid secret key")


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/account/auth")
def exchange_token(body: AuthRequest, mono_sec_key: Optional[str] = Header(default=None)) -> Dict[str, str]:
    _check_key(mono_sec_key)
    account_id = ACCOUNTS.get(body.code)
    if account_id is None:
        raise HTTPException(status_code=400, detail="invalid code")
    return {"id": account_id}


@app.get("/accounts/{account_id}/statement")
def get_statement(account_id: str, mono_sec_key: Optional[str] = Header(default=None)):
    _check_key(mono_sec_key)
    build = STATEMENTS.get(account_id)
    if build is None:
        raise HTTPException(status_code=404, detail="account not found")
    return {"data": build(date.today())}
