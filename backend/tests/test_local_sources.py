import asyncio
from pathlib import Path

import pytest

from enem_api.domain.errors import DocumentReadError, OverrideUnavailableError
from enem_api.infra.overrides.local import DisabledOverrideSource, LocalPublishedOverrideSource
from enem_api.infra.storage.local import LocalExamFiles
from tests.exam_data import write_json, write_manifest, write_published, write_question


def test_local_exam_files_read_questions_and_manifest(tmp_path: Path):
    write_question(tmp_path, 2020, "5", {"title": "Y"})
    write_manifest(tmp_path, 2020, ["5"])
    write_json(tmp_path / "exams.json", [{"year": 2020}])
    files = LocalExamFiles(tmp_path)

    assert asyncio.run(files.question_exists(2020, "5")) is True
    assert asyncio.run(files.question_exists(2020, "6")) is False
    assert asyncio.run(files.read_question(2020, "5")) == {"title": "Y"}
    assert asyncio.run(files.read_manifest(2020))["questions"] == [{"index": "5", "title": "Questão 5"}]
    assert asyncio.run(files.read_exam_index()) == [{"year": 2020}]


def test_local_exam_files_raise_document_errors(tmp_path: Path):
    write_json(tmp_path / "exams" / "2020" / "questions" / "list" / "details.json", [1, 2])
    files = LocalExamFiles(tmp_path)

    with pytest.raises(DocumentReadError):
        asyncio.run(files.read_manifest(2020))
    with pytest.raises(DocumentReadError):
        asyncio.run(files.read_question(2020, "list"))
    with pytest.raises(DocumentReadError):
        asyncio.run(files.read_question(2020, "../secret"))
    with pytest.raises(DocumentReadError):
        asyncio.run(files.read_exam_index())


def test_published_directory_source(tmp_path: Path):
    write_published(tmp_path, 2020, "5", {"title": "X", "_admin": {"editor": "ana"}})
    source = LocalPublishedOverrideSource(tmp_path)

    assert asyncio.run(source.fetch_published(2020, "5")) == {"title": "X", "_admin": {"editor": "ana"}}
    assert asyncio.run(source.fetch_published(2020, "6")) is None
    assert asyncio.run(source.fetch_published(2020, "../2020/5")) is None


def test_corrupt_published_file_is_unavailable(tmp_path: Path):
    path = tmp_path / "2020" / "5.json"
    path.parent.mkdir(parents=True)
    path.write_text("{", encoding="utf-8")
    source = LocalPublishedOverrideSource(tmp_path)

    with pytest.raises(OverrideUnavailableError):
        asyncio.run(source.fetch_published(2020, "5"))


def test_disabled_source_never_has_overrides():
    assert asyncio.run(DisabledOverrideSource().fetch_published(2020, "5")) is None


def test_published_source_rejects_odd_ids(tmp_path: Path):
    write_published(tmp_path, 2020, "5", {"title": "X"})
    source = LocalPublishedOverrideSource(tmp_path)

    assert asyncio.run(source.fetch_published(2020, "5\n")) is None
    assert asyncio.run(source.fetch_published(2020, "a" * 300)) is None


def test_unstattable_published_file_is_unavailable(tmp_path: Path, monkeypatch):
    write_published(tmp_path, 2020, "5", {"title": "X"})

    def _is_file(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "is_file", _is_file)
    source = LocalPublishedOverrideSource(tmp_path)

    with pytest.raises(OverrideUnavailableError):
        asyncio.run(source.fetch_published(2020, "5"))


def test_unstattable_question_does_not_exist(tmp_path: Path, monkeypatch):
    write_question(tmp_path, 2020, "5", {"title": "Y"})

    def _is_file(self):
        raise OSError(36, "File name too long", str(self))

    monkeypatch.setattr(Path, "is_file", _is_file)

    assert asyncio.run(LocalExamFiles(tmp_path).question_exists(2020, "5")) is False


@pytest.mark.parametrize("key", ["5\n", "a" * 129, ""])
def test_question_keys_must_be_plain_and_short(tmp_path: Path, key):
    files = LocalExamFiles(tmp_path)

    assert asyncio.run(files.question_exists(2020, key)) is False
    with pytest.raises(DocumentReadError, match="Invalid question key"):
        asyncio.run(files.read_question(2020, key))
