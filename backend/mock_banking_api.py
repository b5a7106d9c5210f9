"""Mock banking service with static demo accounts.

Serves the same read-only endpoints as the real structured-data service so
the gateway can be run locally end to end:

    python mock_banking_api.py
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import MOCK_BANKING_PORT

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mock Banking API",
    description="Static account and transaction data for local development",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

MOCK_ACCOUNTS = {
    "12345": {
        "accountId": "12345",
        "accountName": "John Doe Checking",
        "balance": 15230.75,
        "currency": "USD",
        "type": "Checking",
    },
    "67890": {
        "accountId": "67890",
        "accountName": "John Doe Savings",
        "balance": 45000.0,
        "currency": "USD",
        "type": "Savings",
    },
    "98765": {
        "accountId": "98765",
        "accountName": "Jane Smith Business",
        "balance": 120000.5,
        "currency": "USD",
        "type": "Business Checking",
    },
}

MOCK_TRANSACTIONS = {
    "12345": [
        {"id": "t001", "date": "2024-06-28", "description": "Grocery Store", "amount": -75.2, "type": "debit"},
        {"id": "t002", "date": "2024-06-27", "description": "Salary Deposit", "amount": 3500.0, "type": "credit"},
        {"id": "t003", "date": "2024-06-26", "description": "Online Subscription", "amount": -15.99, "type": "debit"},
        {"id": "t004", "date": "2024-06-25", "description": "Restaurant", "amount": -45.0, "type": "debit"},
    ],
    "67890": [
        {"id": "t005", "date": "2024-06-29", "description": "Interest Earned", "amount": 12.5, "type": "credit"},
        {"id": "t006", "date": "2024-06-20", "description": "Transfer to Checking", "amount": -1000.0, "type": "debit"},
        {"id": "t007", "date": "2024-06-15", "description": "Deposit", "amount": 500.0, "type": "credit"},
    ],
    "98765": [
        {"id": "t008", "date": "2024-06-30", "description": "Client Payment", "amount": 15000.0, "type": "credit"},
        {"id": "t009", "date": "2024-06-28", "description": "Office Supplies", "amount": -210.5, "type": "debit"},
        {"id": "t010", "date": "2024-06-25", "description": "Utilities Bill", "amount": -350.0, "type": "debit"},
    ],
}

VALID_IDS_HINT = "Please provide a valid account ID (e.g., 12345, 67890, 98765)."


@app.get("/account-balance/{account_id}")
async def account_balance(account_id: str):
    account = MOCK_ACCOUNTS.get(account_id)
    if account is None:
        logger.warning(f"Account not found: {account_id}")
        return JSONResponse(
            status_code=404,
            content={"status": "error", "message": f"Account not found. {VALID_IDS_HINT}"}
        )
    logger.info(f"Returning balance for account: {account_id}")
    return {"status": "success", "data": account}


@app.get("/transaction-history/{account_id}")
async def transaction_history(account_id: str):
    transactions = MOCK_TRANSACTIONS.get(account_id)
    if transactions is None:
        logger.warning(f"Transactions not found for account: {account_id}")
        return JSONResponse(
            status_code=404,
            content={
                "status": "error",
                "message": f"No transaction history found for this account. {VALID_IDS_HINT}"
            }
        )
    logger.info(f"Returning transaction history for account: {account_id}")
    return {"status": "success", "data": transactions}


@app.get("/accounts")
async def accounts():
    logger.info("Returning all mock accounts")
    return {"status": "success", "data": list(MOCK_ACCOUNTS.values())}


@app.get("/health", response_class=PlainTextResponse)
async def health():
    return "Mock Banking API is healthy"


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Mock Banking API on port {MOCK_BANKING_PORT}")
    uvicorn.run(app, host="0.0.0.0", port=MOCK_BANKING_PORT)
