import re
from typing import FrozenSet, Optional

STOP_WORDS_VERSION = 1

# Weather vocabulary and filler words removed before treating the rest as a place name
STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "weather",
        "forecast",
        "temperature",
        "humidity",
        "rain",
        "sunny",
        "cloudy",
        "wind",
        "hot",
        "cold",
        "in",
        "at",
        "for",
        "of",
        "the",
    }
)

FORECAST_KEYWORDS = ("forecast", "next days")

MIN_CANDIDATE_LENGTH = 3

_STOP_WORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(sorted(STOP_WORDS, key=len, reverse=True)) + r")\b"
)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def extract_location_from_query(query: str) -> Optional[str]:
    """
    Guess the place name in a free-text weather question.

    The query is lower-cased, whole stop words are removed and whitespace is
    collapsed. Whatever remains is the candidate location.

    Args:
        query: Raw user utterance

    Returns:
        Candidate location, or None when fewer than three characters remain
    """
    cleaned = _STOP_WORD_PATTERN.sub(" ", query.lower())
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned).strip()

    if len(cleaned) < MIN_CANDIDATE_LENGTH:
        return None
    return cleaned


def is_forecast_query(query: str) -> bool:
    lowered = query.lower()
    return any(keyword in lowered for keyword in FORECAST_KEYWORDS)
