"""Parsing of LLM question-generation output.

Models do not always honour the JSON response format: output may be
wrapped in prose or code fences, or truncated. Parsing is layered:

1. strict ``json.loads`` of the whole text;
2. otherwise the largest ``{...}`` substring that decodes as a JSON object;
3. otherwise nothing (the caller falls back to a default question).
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_QUESTION_KEYS = ("questionText", "question_text", "question")
_ANSWER_KEYS = ("answerText", "answer_text", "answer")


@dataclass(frozen=True)
class GeneratedQuestion:
    """A question/answer pair produced from a note."""

    question_text: str
    answer_text: str


def extract_largest_json_object(text: str) -> dict[str, Any] | None:
    """Return the longest substring of text that decodes as a JSON object."""
    decoder = json.JSONDecoder()
    best: dict[str, Any] | None = None
    best_len = 0

    start = text.find("{")
    while start != -1:
        try:
            value, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value, end = None, start
        if isinstance(value, dict) and end - start > best_len:
            best, best_len = value, end - start
            # Nested objects inside this span cannot be longer
            start = text.find("{", end)
        else:
            start = text.find("{", start + 1)

    return best


def load_payload(text: str) -> Any:
    """Strict JSON parse, falling back to the largest embedded object."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass
    return extract_largest_json_object(text or "")


def _first_text(item: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_generated_questions(text: str | None, max_questions: int) -> list[GeneratedQuestion]:
    """
    Turn raw model output into question/answer pairs.

    Accepts ``{"questions": [...]}``, a bare list of items, or a single
    item object. Items missing either text are dropped. Never raises.

    Args:
        text: Raw model output
        max_questions: Maximum number of pairs to return

    Returns:
        Up to max_questions GeneratedQuestion objects (possibly empty)
    """
    if not text:
        return []

    payload = load_payload(text)
    if payload is None:
        logger.warning("LLM output is not parseable JSON", extra={"output_chars": len(text)})
        return []

    if isinstance(payload, dict) and isinstance(payload.get("questions"), list):
        items = payload["questions"]
    elif isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        items = [payload]
    else:
        return []

    questions = []
    for item in items:
        if not isinstance(item, dict):
            continue
        question_text = _first_text(item, _QUESTION_KEYS)
        answer_text = _first_text(item, _ANSWER_KEYS)
        if question_text and answer_text:
            questions.append(GeneratedQuestion(question_text=question_text, answer_text=answer_text))

    return questions[:max_questions]
