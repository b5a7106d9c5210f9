"""Chat history storage backed by Supabase PostgreSQL."""
import logging
from datetime import datetime
from typing import Optional, List
from supabase import create_client, Client

from models.conversation import ConversationTurn, Role
from config import SUPABASE_URL, SUPABASE_KEY, HISTORY_TABLE
from services.exceptions import ConfigurationError, PersistenceError

logger = logging.getLogger(__name__)


class HistoryStore:
    """Appends and retrieves per-user conversation turns.

    Timestamps are assigned by the database on insert, so the ordering of a
    user's turns is the order in which they were written.
    """

    def __init__(
        self,
        client: Optional[Client] = None,
        table: str = HISTORY_TABLE
    ):
        """
        Initialize the history store.

        Args:
            client: Existing Supabase client (created from SUPABASE_URL and
                SUPABASE_KEY when omitted)
            table: Name of the chat history table

        Raises:
            ConfigurationError: If no client is given and credentials are missing
        """
        if client is None:
            if not SUPABASE_URL or not SUPABASE_KEY:
                raise ConfigurationError(
                    "Chat history store is not configured.",
                    details="SUPABASE_URL and SUPABASE_KEY must be set in environment variables"
                )
            client = create_client(SUPABASE_URL, SUPABASE_KEY)

        self.client: Client = client
        self.table = table
        logger.info(f"HistoryStore initialized with Supabase table '{table}'")

    def append_turn(self, user_id: str, role: Role, message: str) -> None:
        """
        Insert one turn for a user.

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            self.client.table(self.table).insert({
                "user_id": user_id,
                "role": Role(role).value,
                "message": message
            }).execute()
        except Exception as e:
            logger.error(f"Error saving {Role(role).value} message for user {user_id}: {e}")
            raise PersistenceError("Failed to save chat message", details=str(e)) from e

        logger.debug(f"Stored {Role(role).value} turn for user {user_id}")

    def get_recent_turns(self, user_id: str, limit: int = 10) -> List[ConversationTurn]:
        """
        Retrieve the most recent turns for a user, oldest first.

        Args:
            user_id: Owner of the conversation
            limit: Maximum number of turns to return

        Returns:
            List of ConversationTurn ordered by timestamp ascending

        Raises:
            PersistenceError: If the query fails or a row cannot be read
        """
        try:
            result = (
                self.client.table(self.table)
                .select("id, user_id, role, message, timestamp")
                .eq("user_id", user_id)
                .order("timestamp", desc=True)
                .order("id", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching chat history for user {user_id}: {e}")
            raise PersistenceError("Failed to fetch chat history", details=str(e)) from e

        rows = list(reversed(result.data or []))
        try:
            turns = [
                ConversationTurn(
                    user_id=row.get("user_id", user_id),
                    role=Role.USER if row.get("role") == Role.USER.value else Role.ASSISTANT,
                    message=row["message"],
                    timestamp=self._parse_timestamp(row.get("timestamp"))
                )
                for row in rows
            ]
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Error reading chat history row for user {user_id}: {e}")
            raise PersistenceError("Failed to read chat history", details=str(e)) from e

        logger.debug(f"Retrieved {len(turns)} turns for user {user_id}")
        return turns

    @staticmethod
    def _parse_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
        """
        Parse a timestamp string from Supabase.

        PostgreSQL can return fractional seconds with fewer or more than six
        digits, which older ``fromisoformat`` implementations reject, so the
        fraction is normalised to microseconds first.
        """
        if not timestamp_str:
            return None

        timestamp_str = timestamp_str.replace("Z", "+00:00")

        if "." in timestamp_str:
            head, tail = timestamp_str.split(".", 1)
            offset = ""
            for sign in ("+", "-"):
                if sign in tail:
                    tail, tz = tail.split(sign, 1)
                    offset = f"{sign}{tz}"
                    break
            timestamp_str = f"{head}.{tail[:6].ljust(6, '0')}{offset}"

        return datetime.fromisoformat(timestamp_str)
