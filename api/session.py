"""Signed session ids and the in-memory table registry."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from blackjack.game.table import BlackjackTable
from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


class TableRegistry:
    """
    Live tables keyed by session id, each with an expiry.

    Tables live only as long as the process; there is no persistence.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._tables: dict[str, tuple[BlackjackTable, datetime]] = {}

    def __len__(self) -> int:
        return len(self._tables)

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    async def create(self, table: BlackjackTable) -> str:
        """Register a table under a new session id."""
        session_id = str(uuid4())
        await self.set(session_id, table)
        return session_id

    async def get(self, session_id: str) -> BlackjackTable | None:
        """Get a live table, refreshing its expiry."""
        entry = self._tables.get(session_id)
        if entry is None:
            return None

        table, expiry = entry
        if expiry < datetime.now():
            del self._tables[session_id]
            logger.info("Session %s expired", session_id)
            return None

        self._tables[session_id] = (table, self._expiry())
        return table

    async def set(self, session_id: str, table: BlackjackTable) -> None:
        """Store a table."""
        self._tables[session_id] = (table, self._expiry())

    async def delete(self, session_id: str) -> None:
        """Delete a table."""
        self._tables.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired tables."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._tables.items() if expiry < now]
        for sid in expired:
            del self._tables[sid]
        if expired:
            logger.info("Removed %d expired sessions", len(expired))
        return len(expired)


# Global instances
_session_signer: SessionSigner | None = None
_registry: TableRegistry | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def get_registry() -> TableRegistry:
    """Get or create the table registry."""
    global _registry
    if _registry is None:
        _registry = TableRegistry()
    return _registry
