"""Abstract repository for ReceivingSession aggregates.

Items and their scan logs are stored with the session that owns them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.receiving import ReceivingSession


class ReceivingSessionRepository(ABC):

    @abstractmethod
    def get_by_id(self, session_id: str) -> ReceivingSession | None:
        """Return a session by its ID, or None."""

    @abstractmethod
    def list_all(self) -> list[ReceivingSession]:
        """Return every session."""

    @abstractmethod
    def save(self, session: ReceivingSession) -> None:
        """Persist a new or updated session with its items and scans."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session together with its items and scans."""
