"""Constants for the review scheduling engine."""

from enum import IntEnum

# SM-2 defaults
DEFAULT_INTERVAL_DAYS = 1
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

# Quality bounds and the pass/lapse threshold
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# Fixed intervals for the first two successful repetitions
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6

FALLBACK_QUESTION_TEXT = "What are the key points of this note?"


class Quality(IntEnum):
    """Named review quality grades (0-5)."""

    BLACKOUT = 0
    INCORRECT = 1
    INCORRECT_EASY_RECALL = 2
    HARD = 3
    GOOD = 4
    PERFECT = 5
