"""String similarity used by every fuzzy-match step.

Two metrics:
- Token Jaccard: word-set overlap, tokens shorter than 3 characters dropped.
  Good for product names where word order and pack-size noise vary.
- Levenshtein ratio: ``(len(longer) - edit_distance) / len(longer)`` on the
  lower-cased strings, floored at 0.
  Good for near-identical names with typos.
"""

from __future__ import annotations

MIN_TOKEN_LENGTH = 3


def tokenize(text: str) -> set[str]:
    """Lower-case, split on whitespace, drop short tokens."""
    return {t for t in text.lower().split() if len(t) >= MIN_TOKEN_LENGTH}


def token_jaccard(a: str | None, b: str | None) -> float:
    """Jaccard similarity of the token sets of ``a`` and ``b``."""
    if not a or not b:
        return 0.0
    set_a = tokenize(a)
    set_b = tokenize(b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


# Names used by the barcode and stock-update callers
calculate_string_similarity = token_jaccard
calculate_name_similarity = token_jaccard


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for substitution, insertion and deletion."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,   # insertion
                    previous[j] + 1,      # deletion
                ))
        previous = current
    return previous[-1]


def levenshtein_similarity(a: str | None, b: str | None) -> float:
    """Edit-distance similarity in [0, 1].

    Both empty → 1.0; one empty or missing → 0.0.
    """
    if a is None or b is None:
        return 0.0
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    # Lower-case first: "İ".lower() is two code points.
    a, b = a.lower(), b.lower()
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    distance = levenshtein_distance(longer, shorter)
    return max(0.0, (len(longer) - distance) / len(longer))


calculate_similarity = levenshtein_similarity
