"""Data models for the Banking Chat Gateway."""
from .conversation import Role, ConversationTurn, ContextTurn
from .banking import Account, Transaction
from .results import ErrorKind, ServiceError, BankingResult, LLMResult
from .api import ChatRequest, ChatResponse, ErrorResponse

__all__ = [
    "Role",
    "ConversationTurn",
    "ContextTurn",
    "Account",
    "Transaction",
    "ErrorKind",
    "ServiceError",
    "BankingResult",
    "LLMResult",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
]
