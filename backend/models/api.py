"""Request and response models for the chat API."""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Inbound chat message.

    Both fields are optional at the schema level so that missing values
    reach the orchestrator and are reported as a 400 with an ``error`` body.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    message: Optional[str] = None


class ChatResponse(BaseModel):
    """Reply text plus any raw banking payload for display."""
    model_config = ConfigDict(populate_by_name=True)

    response: str
    banking_data: Optional[Dict[str, Any]] = Field(default=None, alias="bankingData")


class ErrorResponse(BaseModel):
    error: str
