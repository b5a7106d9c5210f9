"""Conversation data models."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class Role(str, Enum):
    """Speaker of a stored conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """A single stored message in a user's chat history."""
    user_id: str
    role: Role
    message: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ContextTurn:
    """One turn of the context sent to the language model."""
    role: str  # "user" or "model"
    text: str

    def to_content(self) -> Dict[str, Any]:
        """Render as a Gemini ``contents`` entry."""
        return {"role": self.role, "parts": [{"text": self.text}]}
