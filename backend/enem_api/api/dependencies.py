from __future__ import annotations

from functools import lru_cache

from enem_api.application.resolver import QuestionResolver
from enem_api.core.config import Settings, get_settings
from enem_api.infra.overrides.local import DisabledOverrideSource, LocalPublishedOverrideSource
from enem_api.infra.overrides.remote import RemoteOverrideSource
from enem_api.infra.ports.documents import ExamDocumentPort
from enem_api.infra.ports.overrides import OverrideSourcePort
from enem_api.infra.storage.local import LocalExamFiles


@lru_cache(maxsize=1)
def get_documents() -> ExamDocumentPort:
    return LocalExamFiles(data_dir=get_settings().data_dir)


@lru_cache(maxsize=1)
def get_overrides() -> OverrideSourcePort:
    settings = get_settings()
    if settings.override_source == "local":
        return LocalPublishedOverrideSource(published_dir=settings.published_dir)
    if settings.override_source == "none":
        return DisabledOverrideSource()
    return RemoteOverrideSource(
        base_url=settings.admin_base_url,
        timeout_seconds=settings.override_timeout_seconds,
    )


def get_resolver() -> QuestionResolver:
    return QuestionResolver(
        documents=get_documents(),
        overrides=get_overrides(),
        max_concurrency=get_settings().resolve_concurrency,
    )


def clear_caches() -> None:
    get_settings.cache_clear()
    get_documents.cache_clear()
    get_overrides.cache_clear()


async def provide_settings() -> Settings:
    return get_settings()


async def provide_documents() -> ExamDocumentPort:
    return get_documents()


async def provide_resolver() -> QuestionResolver:
    return get_resolver()
