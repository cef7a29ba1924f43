"""Question resolution across the published / localized / default tiers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from enem_api.domain.errors import DocumentReadError, NotFoundError, OverrideUnavailableError
from enem_api.domain.models import Question, is_supported_language, variant_key
from enem_api.infra.ports.documents import ExamDocumentPort
from enem_api.infra.ports.overrides import OverrideSourcePort

logger = logging.getLogger(__name__)

TierLookup = Callable[[int, str, str | None], Awaitable[Question | None]]


@dataclass(frozen=True)
class Tier:
    name: str
    lookup: TierLookup


class QuestionResolver:
    """Picks exactly one source for a question.

    Tiers are tried in order and the first one that returns a payload wins.
    Every tier turns its own failures into "absent"; only running out of
    tiers is an error.
    """

    def __init__(
        self,
        *,
        documents: ExamDocumentPort,
        overrides: OverrideSourcePort,
        max_concurrency: int = 8,
    ):
        self.documents = documents
        self.overrides = overrides
        self.max_concurrency = max(1, int(max_concurrency))
        self.tiers: list[Tier] = [
            Tier("published", self._from_published),
            Tier("language", self._from_language_variant),
            Tier("default", self._from_default),
        ]

    async def _fetch_override(self, year: int, question_id: str) -> Question | None:
        try:
            return await self.overrides.fetch_published(year, question_id)
        except OverrideUnavailableError as exc:
            logger.warning("Override lookup failed for %s/%s: %s", year, question_id, exc)
            return None

    async def _read_local(self, year: int, key: str) -> Question | None:
        if not await self.documents.question_exists(year, key):
            return None
        try:
            return await self.documents.read_question(year, key)
        except DocumentReadError as exc:
            logger.warning("Skipping unreadable question %s/%s: %s", year, key, exc)
            return None

    async def _from_published(self, year: int, question_id: str, language: str | None) -> Question | None:
        return await self._fetch_override(year, question_id)

    async def _from_language_variant(self, year: int, question_id: str, language: str | None) -> Question | None:
        if not is_supported_language(language):
            return None
        return await self._read_local(year, variant_key(question_id, language))

    async def _from_default(self, year: int, question_id: str, language: str | None) -> Question | None:
        return await self._read_local(year, question_id)

    async def resolve(self, year: int, question_id: str, language: str | None = None) -> Question:
        for tier in self.tiers:
            question = await tier.lookup(year, question_id, language)
            if question is not None:
                logger.debug("Resolved %s/%s from %s tier", year, question_id, tier.name)
                return question
        raise NotFoundError(year, question_id)

    async def has_override(self, year: int, question_id: str) -> bool:
        return await self._fetch_override(year, question_id) is not None

    async def get_metadata(self, year: int, question_id: str) -> dict[str, Any] | None:
        _, metadata = await self.describe_override(year, question_id)
        return metadata

    async def describe_override(self, year: int, question_id: str) -> tuple[bool, dict[str, Any] | None]:
        """Return ``(has_override, _admin block)`` from a single lookup."""
        published = await self._fetch_override(year, question_id)
        if published is None:
            return False, None
        metadata = published.get("_admin")
        return True, metadata if isinstance(metadata, dict) else None

    async def _resolve_or_none(self, year: int, question_id: str) -> Question | None:
        try:
            return await self.resolve(year, question_id)
        except NotFoundError as exc:
            logger.warning("Failed to load question %s: %s", question_id, exc)
            return None

    async def _resolve_many(self, year: int, question_ids: list[str]) -> list[Question | None]:
        # Results line up with question_ids whatever order they finish in.
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(question_id: str) -> Question | None:
            async with semaphore:
                return await self._resolve_or_none(year, question_id)

        return list(await asyncio.gather(*(_bounded(qid) for qid in question_ids)))

    async def _manifest_entries(self, year: int) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        manifest = await self.documents.read_manifest(year)
        entries = manifest.get("questions")
        if not isinstance(entries, list):
            raise DocumentReadError(f"Exam {year} manifest has no question list")
        return manifest, [entry for entry in entries if isinstance(entry, dict)]

    async def load_all_for_year(self, year: int) -> list[Question]:
        try:
            _, entries = await self._manifest_entries(year)
        except DocumentReadError as exc:
            logger.error("Failed to load exam %s: %s", year, exc)
            return []

        indices = [str(entry.get("index")) for entry in entries if entry.get("index") is not None]
        results = await self._resolve_many(year, indices)
        return [question for question in results if question is not None]

    async def load_exam_details(self, year: int) -> tuple[dict[str, Any], list[Question]]:
        """Return the manifest and one entry per listed question.

        Questions that cannot be resolved keep their manifest entry.
        """
        try:
            manifest, entries = await self._manifest_entries(year)
        except DocumentReadError as exc:
            logger.error("Failed to load exam %s: %s", year, exc)
            raise NotFoundError(year) from exc

        indexed = [entry for entry in entries if entry.get("index") is not None]
        resolved = await self._resolve_many(year, [str(entry["index"]) for entry in indexed])
        by_entry = {id(entry): question for entry, question in zip(indexed, resolved)}

        questions: list[Question] = []
        for entry in entries:
            question = by_entry.get(id(entry))
            questions.append(question if question is not None else dict(entry))
        return manifest, questions

    async def load_selection(self, year: int, question_ids: list[str]) -> list[Question]:
        results = await self._resolve_many(year, question_ids)
        return [question for question in results if question is not None]
