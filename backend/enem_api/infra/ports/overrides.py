from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OverrideSourcePort(ABC):
    @abstractmethod
    async def fetch_published(self, year: int, question_id: str) -> dict[str, Any] | None:
        """Return the published replacement for a question, or None.

        Raises OverrideUnavailableError when the source cannot answer.
        """
