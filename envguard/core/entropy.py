"""Keyword and shape heuristic for secret-looking values."""

import math
import re
from typing import Dict

SECRET_KEYWORDS = (
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "auth",
    "private",
    "credential",
    "key",
)

MIN_SECRET_LENGTH = 16

# Any one character from this class satisfies the shape test.
_RE_SECRET_CHAR = re.compile(r"[A-Za-z0-9+/=]")


def has_secret_keyword(key: str) -> bool:
    lower_key = key.lower()
    return any(keyword in lower_key for keyword in SECRET_KEYWORDS)


def looks_like_secret(key: str, value: str) -> bool:
    """
    Guess whether a variable holds a secret when no signature matched.

    The key must contain a sensitive keyword and the value must be longer
    than 16 characters and contain at least one base64-alphabet character.
    Recall is preferred over precision here.
    """
    if not has_secret_keyword(key):
        return False
    return len(value) > MIN_SECRET_LENGTH and _RE_SECRET_CHAR.search(value) is not None


def shannon_entropy(data: str) -> float:
    """
    Calculate Shannon entropy of a string.

    Args:
        data: String to analyze

    Returns:
        Entropy in bits per character (higher = more random)
    """
    if not data:
        return 0.0

    frequencies: Dict[str, int] = {}
    for char in data:
        frequencies[char] = frequencies.get(char, 0) + 1

    entropy = 0.0
    length = len(data)
    for count in frequencies.values():
        probability = count / length
        entropy -= probability * math.log2(probability)

    return entropy
