"""Text normalization utilities."""
import re


def normalize_title(title: str) -> str:
    """
    Normalize a series title for duplicate detection.

    - Lowercase
    - Trim
    - Collapse whitespace runs to a single space

    Punctuation and digits are kept, so "One Piece" and "One, Piece"
    remain distinct keys.
    """
    if not title:
        return ""

    return re.sub(r"\s+", " ", title.lower()).strip()


def normalize_query(query: str) -> str:
    """Normalize free-text search input."""
    if not query:
        return ""
    return query.lower().strip()
