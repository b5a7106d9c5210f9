"""Banking data models as returned by the structured-data service."""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Account:
    """A bank account record."""
    account_id: str
    account_name: str
    balance: float
    currency: str
    type: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            account_id=str(data["accountId"]),
            account_name=data.get("accountName", ""),
            balance=data["balance"],
            currency=data.get("currency", ""),
            type=data.get("type", ""),
        )


@dataclass(frozen=True)
class Transaction:
    """A single posted transaction. ``amount`` is negative for debits."""
    id: str
    date: str
    description: str
    amount: float
    type: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(data.get("id", "")),
            date=data["date"],
            description=data.get("description", ""),
            amount=data["amount"],
            type=data.get("type", ""),
        )
