"""Rule-based lemmatizer.

Maps a surface token to its dictionary key with a fixed set of suffix
rules. This is a heuristic, not a linguistic lemmatizer: "boss" becomes
"bos" and "ran" stays "ran". Stored article statistics depend on these
exact outputs, so the rules must not change.
"""

from typing import Optional


def _undo_double(base: str) -> str:
    """Drop a doubled final letter ("runn" -> "run", "stopp" -> "stop")."""
    if len(base) > 1 and base[-1] == base[-2]:
        return base[:-1]
    return base


def lemmatize(token: Optional[str]) -> str:
    """Reduce a token to its lemma.

    Rules are checked in order on the lowercased token; the first one
    whose suffix and length guard both match wins:

    1. ``-ies`` (len > 3) -> ``-y``
    2. ``-ing`` (len > 5) -> strip, undo doubled final letter
    3. ``-ed`` (len > 4) -> strip, undo doubled final letter
    4. ``-es`` (len > 4) -> strip
    5. ``-s`` (len > 3) -> strip
    6. otherwise unchanged

    Args:
        token: Surface form (any case); None yields ""

    Returns:
        Lowercase lemma

    Example:
        >>> lemmatize("Studies")
        'study'
        >>> lemmatize("running")
        'run'
        >>> lemmatize("ran")
        'ran'
    """
    if token is None:
        return ""
    t = token.lower()
    n = len(t)

    if n > 3:
        if t.endswith("ies"):
            return t[:-3] + "y"
        if t.endswith("ing") and n > 5:
            return _undo_double(t[:-3])
        if t.endswith("ed") and n > 4:
            return _undo_double(t[:-2])
        if t.endswith("es") and n > 4:
            return t[:-2]
        if t.endswith("s"):
            return t[:-1]

    return t
