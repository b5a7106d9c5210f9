"""
Unit tests for IntentClassifier.

Tests keyword precedence and account id extraction.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from services.intent_classifier import IntentClassifier, Intent, Classification


class TestIntentClassifier:
    """Test suite for IntentClassifier."""

    @pytest.fixture
    def classifier(self):
        """Create an IntentClassifier with a known default account."""
        return IntentClassifier(default_account_id="12345")

    # Account id extraction

    def test_extracts_five_digit_account_id(self, classifier):
        """Test that a 5-digit token is used as the account id."""
        result = classifier.classify("What is my balance for 67890?")
        assert result.account_id == "67890"

    def test_uses_first_five_digit_token(self, classifier):
        """Test that the first of several 5-digit tokens wins."""
        result = classifier.classify("compare 98765 and 67890 balance")
        assert result.account_id == "98765"

    def test_default_account_id_when_missing(self, classifier):
        """Test the default id is used when no 5-digit token is present."""
        result = classifier.classify("What is my balance?")
        assert result.account_id == "12345"

    @pytest.mark.parametrize("message", [
        "balance for 1234",
        "balance for 123456",
        "balance for acct12345x",
        "balance for ６７８９０",
    ])
    def test_ignores_tokens_that_are_not_five_digits(self, classifier, message):
        """Test that shorter, longer, embedded or non-ASCII digit runs are not account ids."""
        assert classifier.classify(message).account_id == "12345"

    def test_custom_default_account_id(self):
        """Test that the default id is configurable."""
        classifier = IntentClassifier(default_account_id="98765")
        assert classifier.classify("show my balance").account_id == "98765"

    # Intent rules

    @pytest.mark.parametrize("message", ["What is my balance?", "How much MONEY do I have"])
    def test_balance_intent(self, classifier, message):
        """Test balance keywords."""
        result = classifier.classify(message)
        assert result.intent == Intent.BALANCE
        assert result.rule_triggered == "balance"

    @pytest.mark.parametrize("message", ["show my transactions", "account history please"])
    def test_transaction_history_intent(self, classifier, message):
        """Test transaction history keywords."""
        assert classifier.classify(message).intent == Intent.TRANSACTION_HISTORY

    @pytest.mark.parametrize("message", [
        "list available accounts",
        "list all accounts",
        "what are my accounts",
    ])
    def test_list_accounts_intent(self, classifier, message):
        """Test account listing keywords."""
        assert classifier.classify(message).intent == Intent.LIST_ACCOUNTS

    @pytest.mark.parametrize("message", ["account details for 98765", "Account Info"])
    def test_account_details_intent(self, classifier, message):
        """Test account details keywords."""
        assert classifier.classify(message).intent == Intent.ACCOUNT_DETAILS

    def test_general_intent(self, classifier):
        """Test that unmatched messages fall through to general."""
        result = classifier.classify("hi there")
        assert result.intent == Intent.GENERAL
        assert result.rule_triggered == "default"
        assert result.matched_keyword is None

    # Precedence

    def test_balance_takes_precedence_over_history(self, classifier):
        """Test a message with balance and history keywords resolves to balance."""
        result = classifier.classify("show balance and transaction history")
        assert result.intent == Intent.BALANCE
        assert result.matched_keyword == "balance"

    def test_history_takes_precedence_over_account_listing(self, classifier):
        """Test transaction keywords win over 'all accounts'."""
        result = classifier.classify("transactions for all accounts")
        assert result.intent == Intent.TRANSACTION_HISTORY

    def test_account_details_with_balance_resolves_to_balance(self, classifier):
        """Test that 'account details' loses to the earlier balance rule."""
        result = classifier.classify("account details and balance")
        assert result.intent == Intent.BALANCE

    # Edge cases

    def test_empty_message_is_general(self, classifier):
        """Test that classification is total for empty input."""
        result = classifier.classify("")
        assert isinstance(result, Classification)
        assert result.intent == Intent.GENERAL
        assert result.account_id == "12345"

    def test_classification_is_deterministic(self, classifier):
        """Test that the same message always yields the same result."""
        first = classifier.classify("money in 67890")
        second = classifier.classify("money in 67890")
        assert first == second
