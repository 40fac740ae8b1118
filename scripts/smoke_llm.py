#!/usr/bin/env python3
"""Smoke test for the configured LLM question generator.

Sends a sample note to the provider and prints the raw completion and
the parsed question/answer pairs.
"""

import argparse
import sys
from pathlib import Path

import httpx

# Add parent directory to path to import recallguard modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from recallguard.core.config import settings
from recallguard.ingestion.llm_client import LLMQuestionGenerator
from recallguard.ingestion.parsing import parse_generated_questions

SAMPLE_NOTE = (
    "Photosynthesis converts light energy into chemical energy. It takes place in "
    "the chloroplasts, uses carbon dioxide and water, and releases oxygen."
)


def smoke_test(content: str) -> None:
    """Run the generator once and print what came back."""
    if not settings.llm_enabled:
        print("LLM_API_KEY is not set; nothing to test.")
        sys.exit(1)

    print(f"Provider: {settings.LLM_BASE_URL}")
    print(f"Model:    {settings.LLM_MODEL}")

    generator = LLMQuestionGenerator()
    try:
        raw = generator.complete(content)
    except httpx.HTTPError as e:
        print(f"\nLLM request failed: {e}")
        sys.exit(1)

    print("\nRaw output:")
    print(raw)

    questions = parse_generated_questions(raw, settings.INGESTION_MAX_QUESTIONS)
    print(f"\nParsed {len(questions)} question(s):")
    for i, q in enumerate(questions, start=1):
        print(f"{i}. Q: {q.question_text}")
        print(f"   A: {q.answer_text}")

    if not questions:
        print("\nNo usable questions; ingestion would fall back to the default question.")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the LLM question generator on sample text")
    parser.add_argument("--text", type=str, default=SAMPLE_NOTE, help="Note text to send")
    args = parser.parse_args()

    smoke_test(args.text)
