"""Plain-text features: word counts, keywords, sentiment and number parsing"""

import re
from collections import Counter
from typing import Iterable, Optional

from doclayout.core.models import Sentiment


_NON_ALNUM_RE = re.compile(r'[^a-z0-9\s]')
_NUMERIC_CELL_RE = re.compile(r'^[0-9$€£¥%,.\s-]+$')
_NUMBER_STRIP_RE = re.compile(r'[$€£¥%,\s]')


def count_words(text: str) -> int:
    return len(text.split())


def extract_keywords(text: str, stopwords: Iterable[str], limit: int = 5) -> list[str]:
    """Return the most frequent words longer than 3 chars; ties keep first occurrence."""
    stop = set(stopwords)
    words = [
        w for w in _NON_ALNUM_RE.sub(' ', text.lower()).split()
        if len(w) > 3 and w not in stop
    ]
    return [w for w, _ in Counter(words).most_common(limit)]


def analyze_sentiment(text: str, positive: Iterable[str], negative: Iterable[str]) -> Sentiment:
    """Lexicon hit count: +1 per positive word present, -1 per negative word present."""
    lower = text.lower()
    score = sum(1 for w in positive if w in lower) - sum(1 for w in negative if w in lower)
    if score > 0:
        return "positive"
    if score < 0:
        return "negative"
    return "neutral"


def contains_any(text: str, needles: Iterable[str]) -> bool:
    lower = text.lower()
    return any(n in lower for n in needles)


def looks_numeric(cell: str) -> bool:
    """True for cells made only of digits, currency, percent and separators."""
    cell = cell.strip()
    return bool(cell) and bool(_NUMERIC_CELL_RE.match(cell)) and any(c.isdigit() for c in cell)


def parse_number(cell: str) -> Optional[float]:
    """Parse '1,200', '$3.5', '42%' and friends; None when the cell is not a number."""
    cleaned = _NUMBER_STRIP_RE.sub('', cell.strip())
    if not any(c.isdigit() for c in cleaned):
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None
