"""
Write-time masking of a fixed list of words in chirp bodies.
"""

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def filter_profanity(body: str) -> str:
    """
    Replace denylisted words with a mask.

    The body is split on single spaces and each word is compared
    case-insensitively as a whole, so "Kerfuffle" is masked while
    "kerfuffle!" is not. Spacing is preserved on the way back.
    """
    words = body.split(" ")
    return " ".join(MASK if word.lower() in PROFANE_WORDS else word for word in words)
