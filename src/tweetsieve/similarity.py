"""Edit distance between tweet texts."""

from rapidfuzz.distance import Levenshtein


def distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Operates on Unicode code points, so multi-byte characters count once.
    """
    return Levenshtein.distance(a, b)


def is_correction(a: str, b: str, threshold: int) -> bool:
    """True when ``a`` and ``b`` are at most ``threshold`` edits apart."""
    # With score_cutoff rapidfuzz returns threshold + 1 once the bound is exceeded
    return Levenshtein.distance(a, b, score_cutoff=threshold) <= threshold
