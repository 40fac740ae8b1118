"""RecallGuard: spaced-repetition flashcards from free-text notes."""

__version__ = "1.0.0"
