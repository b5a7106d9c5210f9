"""Builds the conversational context sent to the language model."""
import logging
from typing import List

from config import HISTORY_CONTEXT_LIMIT
from models.conversation import ContextTurn, Role
from services.exceptions import PersistenceError
from services.history_store import HistoryStore

logger = logging.getLogger(__name__)

USER_ROLE = "user"
MODEL_ROLE = "model"


class ContextAssembler:
    """Turns stored history plus the current message into model context."""

    def __init__(self, history_store: HistoryStore, limit: int = HISTORY_CONTEXT_LIMIT):
        self.history_store = history_store
        self.limit = limit

    def build_context(self, user_id: str, message: str) -> List[ContextTurn]:
        """
        Assemble recent history, oldest first, followed by ``message``.

        The chat pipeline stores the user's turn before calling this, so the
        current message normally appears both in the fetched history and as
        the appended final turn.

        Args:
            user_id: Owner of the conversation
            message: Current user message

        Returns:
            Ordered list of ContextTurn ending with the current message
        """
        try:
            history = self.history_store.get_recent_turns(user_id, limit=self.limit)
        except PersistenceError as e:
            logger.error(
                f"Could not load history for context, continuing without it: {e.message}",
                extra={"user_id": user_id, "error_code": e.error_code}
            )
            history = []

        context = [
            ContextTurn(
                role=MODEL_ROLE if turn.role == Role.ASSISTANT else USER_ROLE,
                text=turn.message
            )
            for turn in history
        ]
        context.append(ContextTurn(role=USER_ROLE, text=message))

        logger.debug(f"Built context for user {user_id}: {len(context)} turns")
        return context
