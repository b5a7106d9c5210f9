"""Services for the Banking Chat Gateway."""
from .exceptions import ChatGatewayError, ValidationError, ConfigurationError, PersistenceError
from .intent_classifier import IntentClassifier, Intent, Classification
from .banking_client import BankingClient
from .llm_client import LLMClient
from .history_store import HistoryStore
from .context_assembler import ContextAssembler
from .response_composer import ResponseComposer
from .chat_orchestrator import ChatOrchestrator, ChatReply

__all__ = ['ChatGatewayError', 'ValidationError', 'ConfigurationError', 'PersistenceError', 'IntentClassifier', 'Intent', 'Classification', 'BankingClient', 'LLMClient', 'HistoryStore', 'ContextAssembler', 'ResponseComposer', 'ChatOrchestrator', 'ChatReply']
