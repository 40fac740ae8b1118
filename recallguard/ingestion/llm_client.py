"""Question generators: turn note text into recall question/answer pairs."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from recallguard.core.config import Settings, settings
from recallguard.ingestion.parsing import GeneratedQuestion, parse_generated_questions

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a learning assistant. Extract 1 to {max_questions} key recall questions "
    "and precise answers from the provided text. Return JSON as "
    '{{ "questions": [ {{ "questionText": "...", "answerText": "..." }} ] }}.'
)


class LLMDisabledError(Exception):
    """Raised when no LLM API key is configured."""


class QuestionGenerator(ABC):
    """Base interface for question generators."""

    @abstractmethod
    def generate(self, content: str) -> list[GeneratedQuestion]:
        """
        Generate question/answer pairs for a note.

        May raise on transport or provider errors; callers treat any
        failure like an empty result.
        """


class NullQuestionGenerator(QuestionGenerator):
    """Generates nothing; every note gets the fallback question."""

    def generate(self, content: str) -> list[GeneratedQuestion]:
        return []


class LLMQuestionGenerator(QuestionGenerator):
    """OpenAI-compatible chat-completions client (OpenAI, OpenRouter, ...)."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config or settings
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.config.LLM_API_KEY}"}
        if self.config.LLM_HTTP_REFERER:
            headers["HTTP-Referer"] = self.config.LLM_HTTP_REFERER
        if self.config.LLM_APP_TITLE:
            headers["X-Title"] = self.config.LLM_APP_TITLE
        return headers

    def build_payload(self, content: str) -> dict:
        return {
            "model": self.config.LLM_MODEL,
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT.format(
                        max_questions=self.config.INGESTION_MAX_QUESTIONS
                    ),
                },
                {"role": "user", "content": content},
            ],
            "response_format": {"type": "json_object"},
        }

    def complete(self, content: str) -> str:
        """
        POST the note to /chat/completions and return the raw message text.

        Raises:
            LLMDisabledError: if LLM_API_KEY is not set
            httpx.HTTPError: on request failure or non-2xx status
        """
        if not self.config.LLM_API_KEY:
            raise LLMDisabledError("LLM_API_KEY is not set")

        base = self.config.LLM_BASE_URL.rstrip("/")
        with httpx.Client(
            timeout=self.config.LLM_TIMEOUT_SECONDS,
            transport=self._transport,
        ) as client:
            resp = client.post(
                f"{base}/chat/completions",
                json=self.build_payload(content),
                headers=self._headers(),
            )
            resp.raise_for_status()
            data = resp.json()

        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    def generate(self, content: str) -> list[GeneratedQuestion]:
        if not self.config.LLM_API_KEY:
            logger.info("LLM disabled, skipping generation")
            return []
        raw = self.complete(content)
        questions = parse_generated_questions(raw, self.config.INGESTION_MAX_QUESTIONS)
        logger.info(
            "LLM questions generated",
            extra={"model": self.config.LLM_MODEL, "question_count": len(questions)},
        )
        return questions


def get_question_generator() -> QuestionGenerator:
    """Dependency: LLM generator when configured, otherwise the null generator."""
    if settings.llm_enabled:
        return LLMQuestionGenerator()
    return NullQuestionGenerator()
