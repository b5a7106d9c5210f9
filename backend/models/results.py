"""Tagged results returned by the outbound service adapters.

Adapters never raise on upstream trouble. They return a result carrying
either a payload or a :class:`ServiceError`, and callers branch on ``ok``.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Failure categories for outbound calls."""
    CONFIGURATION = "configuration_error"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    MALFORMED_RESPONSE = "malformed_upstream_response"


@dataclass
class ServiceError:
    """Structured error from an outbound service.

    ``message`` is safe to show to end users; raw transport detail only
    ever goes into ``details`` and the logs.
    """
    code: ErrorKind
    message: Optional[str]
    status_code: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BankingResult:
    """Outcome of a banking service call."""
    data: Any = None
    error: Optional[ServiceError] = None
    payload: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raw(self) -> Dict[str, Any]:
        """Payload to hand back to API callers for display."""
        if self.payload is not None:
            return self.payload
        if self.error is not None:
            return {"status": "error", "message": self.error.message, "code": self.error.code.value}
        return {"status": "success", "data": self.data}


@dataclass
class LLMResult:
    """Outcome of a language model call."""
    text: Optional[str] = None
    error: Optional[ServiceError] = None
    latency_ms: int = 0
    model_used: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None
