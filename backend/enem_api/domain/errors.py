from __future__ import annotations


class NotFoundError(LookupError):
    """No source could supply the requested exam or question."""

    def __init__(self, year: int, question_id: str | None = None):
        self.year = year
        self.question_id = question_id
        if question_id is None:
            message = f"Exam not found: {year}"
        else:
            message = f"Question not found: {year}/{question_id}"
        super().__init__(message)


class DocumentReadError(Exception):
    """A local exam document is missing, unreadable, or not valid JSON."""


class OverrideUnavailableError(Exception):
    """The published-override source could not give an answer."""
