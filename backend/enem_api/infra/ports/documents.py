from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ExamDocumentPort(ABC):
    @abstractmethod
    async def question_exists(self, year: int, key: str) -> bool:
        """Return True when a question document is stored under ``key``."""

    @abstractmethod
    async def read_question(self, year: int, key: str) -> dict[str, Any]:
        """Load a question document. Raises DocumentReadError."""

    @abstractmethod
    async def read_manifest(self, year: int) -> dict[str, Any]:
        """Load the per-year exam manifest. Raises DocumentReadError."""

    @abstractmethod
    async def read_exam_index(self) -> Any:
        """Load the list of available exams. Raises DocumentReadError."""
