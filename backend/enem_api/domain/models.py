from __future__ import annotations

from typing import Any

# Question payloads are opaque JSON documents; only a few fields are read
# after resolution (context, files, alternatives[].file).
Question = dict[str, Any]

LANGUAGES: frozenset[str] = frozenset({"ingles", "espanhol"})


def is_supported_language(language: str | None) -> bool:
    return isinstance(language, str) and language in LANGUAGES


def variant_key(question_id: str, language: str) -> str:
    return f"{question_id}-{language}"
