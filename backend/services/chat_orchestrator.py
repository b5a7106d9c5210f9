"""
Chat Orchestrator for the Banking Chat Gateway.

Runs the per-request pipeline behind ``POST /chat``:
1. Validate the request
2. Store the user turn (best-effort)
3. Classify intent and extract the account id
4. Fetch banking data, or build context and call the language model
5. Compose the reply text
6. Store the assistant turn (best-effort)
7. Return the reply with any raw banking payload
"""
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, Optional

from models.conversation import Role
from models.results import BankingResult
from services.banking_client import BankingClient
from services.context_assembler import ContextAssembler
from services.exceptions import ConfigurationError, PersistenceError, ValidationError
from services.history_store import HistoryStore
from services.intent_classifier import Intent, IntentClassifier
from services.llm_client import LLMClient
from services.response_composer import ResponseComposer

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    """Outcome of one chat request."""
    response: str
    banking_data: Optional[Dict[str, Any]]
    intent: Intent
    account_id: str


class ChatOrchestrator:
    """Composes classifier, adapters and composer into one request cycle.

    All collaborators are injected so that tests can substitute any of them.
    """

    def __init__(
        self,
        history_store: Optional[HistoryStore],
        banking_client: BankingClient,
        llm_client: LLMClient,
        classifier: Optional[IntentClassifier] = None,
        context_assembler: Optional[ContextAssembler] = None,
        composer: Optional[ResponseComposer] = None
    ):
        self.history_store = history_store
        self.banking_client = banking_client
        self.llm_client = llm_client
        self.classifier = classifier or IntentClassifier()
        self.context_assembler = context_assembler or (
            ContextAssembler(history_store) if history_store is not None else None
        )
        self.composer = composer or ResponseComposer()

        self._banking_lookups: Dict[Intent, Callable[[str], BankingResult]] = {
            Intent.BALANCE: banking_client.get_account_balance,
            Intent.TRANSACTION_HISTORY: banking_client.get_transaction_history,
            Intent.LIST_ACCOUNTS: lambda account_id: banking_client.list_accounts(),
            # Details reuse the balance endpoint, which returns the full account
            Intent.ACCOUNT_DETAILS: banking_client.get_account_balance,
        }

    def handle(self, user_id: Optional[str], message: Optional[str]) -> ChatReply:
        """
        Process one inbound chat message.

        Args:
            user_id: Conversation owner
            message: Free-text user message

        Returns:
            ChatReply with the composed text and optional banking payload

        Raises:
            ValidationError: If user_id or message is missing or empty
            ConfigurationError: If no history store is configured
        """
        self._validate(user_id, message)

        if self.history_store is None:
            raise ConfigurationError("Chat history store is not configured.")

        logger.info(f"Processing chat message: {message[:100]}...", extra={"user_id": user_id})

        self._store_turn(user_id, Role.USER, message)

        classification = self.classifier.classify(message)
        intent = classification.intent
        account_id = classification.account_id

        banking_data: Optional[Dict[str, Any]] = None
        if intent == Intent.GENERAL:
            context = self.context_assembler.build_context(user_id, message)
            result = self.llm_client.generate(context)
        else:
            result = self._banking_lookups[intent](account_id)
            banking_data = result.raw()

        if not result.ok:
            logger.warning(
                f"Upstream failure for {intent.value}: {result.error.code.value}",
                extra={
                    "user_id": user_id,
                    "intent": intent.value,
                    "account_id": account_id,
                    "error_code": result.error.code.value
                }
            )

        response_text = self.composer.compose(intent, result, account_id)

        self._store_turn(user_id, Role.ASSISTANT, response_text)

        logger.info(
            f"Chat message handled with intent {intent.value}",
            extra={"user_id": user_id, "intent": intent.value, "account_id": account_id}
        )
        return ChatReply(
            response=response_text,
            banking_data=banking_data,
            intent=intent,
            account_id=account_id
        )

    @staticmethod
    def _validate(user_id: Optional[str], message: Optional[str]) -> None:
        if not isinstance(user_id, str) or not user_id:
            raise ValidationError("User ID and message are required.", field="userId")
        if not isinstance(message, str) or not message:
            raise ValidationError("User ID and message are required.", field="message")

    def _store_turn(self, user_id: str, role: Role, message: str) -> None:
        """Persist a turn; failures are logged and never abort the request."""
        try:
            self.history_store.append_turn(user_id, role, message)
        except PersistenceError as e:
            logger.error(
                f"Error saving {role.value} message, continuing: {e.details or e.message}",
                extra={"user_id": user_id, "error_code": e.error_code}
            )
