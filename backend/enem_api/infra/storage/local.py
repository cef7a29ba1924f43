from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from enem_api.domain.errors import DocumentReadError
from enem_api.infra.ports.documents import ExamDocumentPort

_SAFE_KEY = re.compile(r"[A-Za-z0-9_-]{1,128}")


def read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise DocumentReadError(f"Failed to read {path}: {exc}") from exc


class LocalExamFiles(ExamDocumentPort):
    """Exam data laid out on disk as published by the scraper.

    data_dir/
        exams.json
        exams/{year}/details.json
        exams/{year}/questions/{key}/details.json
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    def _year_dir(self, year: int) -> Path:
        return self.data_dir / "exams" / str(int(year))

    def _question_path(self, year: int, key: str) -> Path | None:
        if not _SAFE_KEY.fullmatch(key or ""):
            return None
        return self._year_dir(year) / "questions" / key / "details.json"

    async def question_exists(self, year: int, key: str) -> bool:
        path = self._question_path(year, key)
        if path is None:
            return False
        try:
            return await asyncio.to_thread(path.is_file)
        except OSError:
            return False

    async def read_question(self, year: int, key: str) -> dict[str, Any]:
        path = self._question_path(year, key)
        if path is None:
            raise DocumentReadError(f"Invalid question key: {key!r}")
        data = await asyncio.to_thread(read_json_file, path)
        if not isinstance(data, dict):
            raise DocumentReadError(f"Question document is not an object: {path}")
        return data

    async def read_manifest(self, year: int) -> dict[str, Any]:
        path = self._year_dir(year) / "details.json"
        data = await asyncio.to_thread(read_json_file, path)
        if not isinstance(data, dict):
            raise DocumentReadError(f"Exam manifest is not an object: {path}")
        return data

    async def read_exam_index(self) -> Any:
        return await asyncio.to_thread(read_json_file, self.data_dir / "exams.json")
