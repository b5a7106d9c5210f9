"""Response composer: turns banking or model results into reply text."""
from typing import Callable, Dict, Optional, Union

from models.results import BankingResult, LLMResult
from services.intent_classifier import Intent

Result = Union[BankingResult, LLMResult]


def format_amount(value) -> str:
    """Render a number the way JSON clients display it (45000.0 -> "45000")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ResponseComposer:
    """Pure formatting layer; performs no I/O."""

    def __init__(self):
        self._composers: Dict[Intent, Callable[[Result, str], str]] = {
            Intent.BALANCE: self._compose_balance,
            Intent.TRANSACTION_HISTORY: self._compose_transactions,
            Intent.LIST_ACCOUNTS: self._compose_accounts,
            Intent.ACCOUNT_DETAILS: self._compose_account_details,
            Intent.GENERAL: self._compose_general,
        }

    def compose(self, intent: Intent, result: Result, account_id: str) -> str:
        """
        Build the user-facing reply for an intent.

        Args:
            intent: Classified intent of the message
            result: BankingResult for banking intents, LLMResult for general
            account_id: Account identifier used for the lookup

        Returns:
            Reply text
        """
        return self._composers[Intent(intent)](result, account_id)

    @staticmethod
    def _apology(prefix: str, result: Result, fallback: str) -> str:
        message: Optional[str] = result.error.message if result.error else None
        return f"{prefix} {message or fallback}"

    def _compose_balance(self, result: BankingResult, account_id: str) -> str:
        if result.ok and result.data is not None:
            account = result.data
            return (
                f"Your account {account_id} balance is: "
                f"{format_amount(account.balance)} {account.currency}."
            )
        return self._apology(
            "I couldn't retrieve the account balance.",
            result,
            "Please ensure the account ID is valid."
        )

    def _compose_transactions(self, result: BankingResult, account_id: str) -> str:
        if result.ok and result.data:
            lines = "\n".join(
                f"{t.date}: {t.description} ({format_amount(t.amount)} {t.type})"
                for t in result.data
            )
            return f"Here are your recent transactions for account {account_id}:\n{lines}"
        return self._apology(
            "I couldn't retrieve transaction history.",
            result,
            "No transactions found or invalid account ID."
        )

    def _compose_accounts(self, result: BankingResult, account_id: str) -> str:
        if result.ok and result.data:
            lines = "\n".join(
                f"{a.account_name} (ID: {a.account_id}, "
                f"Balance: {format_amount(a.balance)} {a.currency})"
                for a in result.data
            )
            return f"Here are your available accounts:\n{lines}"
        return self._apology(
            "I couldn't retrieve available accounts.",
            result,
            "No accounts found."
        )

    def _compose_account_details(self, result: BankingResult, account_id: str) -> str:
        if result.ok and result.data is not None:
            account = result.data
            return (
                f"Details for account {account.account_id}:\n"
                f"Name: {account.account_name}\n"
                f"Balance: {format_amount(account.balance)} {account.currency}\n"
                f"Type: {account.type}"
            )
        return self._apology(
            f"I couldn't find details for account {account_id}.",
            result,
            "Please provide a valid account ID."
        )

    def _compose_general(self, result: LLMResult, account_id: str) -> str:
        if result.ok and result.text is not None:
            return result.text
        return self._apology(
            "I apologize, but I'm having trouble understanding.",
            result,
            "The language model is unavailable."
        )
