from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, List

from .text import split_words, strip_special

# Frequency table over the raw input, independent of any transform options.
# Tokens are lowercased and stripped of characters outside [A-Za-z0-9] and whitespace before counting.
# Equal counts keep the order in which each keyword first appeared.


@dataclass(frozen=True)
class FrequencyEntry:
    keyword: str
    frequency: int

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def analyze_frequency(raw_text: str) -> List[FrequencyEntry]:
    if not raw_text or not raw_text.strip():
        return []
    cleaned = strip_special(raw_text.lower())
    freq: Dict[str, int] = {}
    for token in split_words(cleaned):
        freq[token] = freq.get(token, 0) + 1
    # sorted() is stable, so ties stay in first-occurrence order
    ranked = sorted(freq.items(), key=lambda kv: -kv[1])
    return [FrequencyEntry(keyword=k, frequency=n) for k, n in ranked]

__all__ = ["FrequencyEntry", "analyze_frequency"]
