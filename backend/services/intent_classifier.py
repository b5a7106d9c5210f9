"""
Intent Classifier for the Banking Chat Gateway.

This module implements deterministic keyword-based intent detection. Each
message is mapped to one intent from a closed set plus a candidate account
identifier; the intent decides whether the banking service or the language
model answers the message.
"""

from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Optional, Tuple

from config import DEFAULT_ACCOUNT_ID

logger = logging.getLogger(__name__)


class Intent(str, Enum):
    """Closed set of message intents."""
    BALANCE = "balance"
    TRANSACTION_HISTORY = "transaction-history"
    LIST_ACCOUNTS = "list-accounts"
    ACCOUNT_DETAILS = "account-details"
    GENERAL = "general"


@dataclass
class Classification:
    """
    Result of message classification.

    Attributes:
        intent: The detected intent
        account_id: First 5-digit token in the message, or the default id
        rule_triggered: Which rule of the table matched ("default" if none)
        matched_keyword: The keyword that triggered the rule, if any
    """
    intent: Intent
    account_id: str
    rule_triggered: str = "default"
    matched_keyword: Optional[str] = None


class IntentClassifier:
    """
    Maps raw message text to an intent and an account identifier.

    Rules are evaluated in table order and the first match wins, so a message
    mentioning both "balance" and "history" resolves to ``Intent.BALANCE``.
    """

    ACCOUNT_ID_PATTERN = re.compile(r"\b(\d{5})\b", re.ASCII)

    # Ordered (intent, keywords) table; order is precedence
    INTENT_RULES: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
        (Intent.BALANCE, ("balance", "money")),
        (Intent.TRANSACTION_HISTORY, ("transaction", "history")),
        (Intent.LIST_ACCOUNTS, ("list available accounts", "all accounts", "my accounts")),
        (Intent.ACCOUNT_DETAILS, ("account details", "account info")),
    )

    def __init__(self, default_account_id: str = DEFAULT_ACCOUNT_ID):
        self.default_account_id = default_account_id

    def classify(self, message: str) -> Classification:
        """
        Classify a message using the ordered keyword table.

        Args:
            message: Raw user message

        Returns:
            Classification with intent, account id and the rule that fired
        """
        account_id = self.extract_account_id(message)

        if not message or not message.strip():
            logger.warning("Empty message received, classifying as general")
            return Classification(intent=Intent.GENERAL, account_id=account_id)

        message_lower = message.lower()

        for intent, keywords in self.INTENT_RULES:
            keyword = self._first_match(message_lower, keywords)
            if keyword is not None:
                logger.info(f"Classification: {intent.value} (keyword '{keyword}') - {message[:50]}")
                return Classification(
                    intent=intent,
                    account_id=account_id,
                    rule_triggered=intent.value,
                    matched_keyword=keyword
                )

        logger.info(f"Classification: {Intent.GENERAL.value} (default) - {message[:50]}")
        return Classification(intent=Intent.GENERAL, account_id=account_id)

    def extract_account_id(self, message: Optional[str]) -> str:
        """Return the first standalone 5-digit token, or the default id."""
        match = self.ACCOUNT_ID_PATTERN.search(message or "")
        return match.group(1) if match else self.default_account_id

    @staticmethod
    def _first_match(message_lower: str, keywords: Tuple[str, ...]) -> Optional[str]:
        for keyword in keywords:
            if keyword in message_lower:
                return keyword
        return None
