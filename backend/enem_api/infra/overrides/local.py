from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from enem_api.domain.errors import DocumentReadError, OverrideUnavailableError
from enem_api.infra.ports.overrides import OverrideSourcePort
from enem_api.infra.storage.local import read_json_file

_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,128}")


class LocalPublishedOverrideSource(OverrideSourcePort):
    """Reads corrections the admin backend wrote to a shared directory."""

    def __init__(self, published_dir: Path):
        self.published_dir = published_dir

    def _path(self, year: int, question_id: str) -> Path | None:
        if not _SAFE_ID.fullmatch(question_id or ""):
            return None
        return self.published_dir / str(int(year)) / f"{question_id}.json"

    async def fetch_published(self, year: int, question_id: str) -> dict[str, Any] | None:
        path = self._path(year, question_id)
        if path is None:
            return None
        try:
            exists = await asyncio.to_thread(path.is_file)
        except OSError as exc:
            raise OverrideUnavailableError(f"Cannot stat {path}: {exc}") from exc
        if not exists:
            return None

        try:
            data = await asyncio.to_thread(read_json_file, path)
        except DocumentReadError as exc:
            raise OverrideUnavailableError(str(exc)) from exc
        if not isinstance(data, dict):
            raise OverrideUnavailableError(f"Published question is not an object: {path}")
        return data


class DisabledOverrideSource(OverrideSourcePort):
    async def fetch_published(self, year: int, question_id: str) -> dict[str, Any] | None:
        return None
