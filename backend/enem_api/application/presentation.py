from __future__ import annotations

import re
from typing import Any

import markdown

from enem_api.domain.models import Question

_ENEM_DEV_URL = re.compile(r"https://enem\.dev/(.+)")


def rewrite_media_url(value: str, base: str) -> str:
    """Point ``https://enem.dev/<path>`` links at ``<base>/<path>``."""
    prefix = base.rstrip("/")
    return _ENEM_DEV_URL.sub(lambda match: f"{prefix}/{match.group(1)}", value)


def render_context(context: str, media_base: str) -> str:
    return markdown.markdown(rewrite_media_url(context, media_base))


def _rewrite_alternative(alternative: Any, files_media_base: str) -> Any:
    if not isinstance(alternative, dict):
        return alternative
    file_url = alternative.get("file")
    if not isinstance(file_url, str) or not file_url:
        return dict(alternative)
    return {**alternative, "file": rewrite_media_url(file_url, files_media_base)}


def present_question(
    question: Question,
    *,
    context_media_base: str,
    files_media_base: str,
    year: int | None = None,
) -> Question:
    out = dict(question)
    if year is not None:
        out["year"] = int(year)

    context = out.get("context")
    if isinstance(context, str) and context:
        out["context"] = render_context(context, context_media_base)

    files = out.get("files")
    if isinstance(files, list):
        out["files"] = [
            rewrite_media_url(item, files_media_base) if isinstance(item, str) else item for item in files
        ]

    alternatives = out.get("alternatives")
    if isinstance(alternatives, list):
        out["alternatives"] = [_rewrite_alternative(item, files_media_base) for item in alternatives]

    return out
