from __future__ import annotations
from typing import List
import re

# Word splitting shared by the pipeline and the frequency table.
# Whitespace is the browser regex class: ASCII whitespace, NBSP, the Unicode space
# separators, line/paragraph separators and the BOM. Python's \s differs (it also
# matches \x1c-\x1f and \x85 but not \ufeff), so the class is spelled out as regex source.

WHITESPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

_SPLIT_RE = re.compile(f"[{WHITESPACE}]+")
_SPECIAL_RE = re.compile(f"[^a-zA-Z0-9{WHITESPACE}]")


def split_words(text: str) -> List[str]:
    if not text:
        return []
    return [w for w in _SPLIT_RE.split(text) if w]


def strip_special(text: str) -> str:
    """Drop every character outside [A-Za-z0-9] and whitespace."""
    return _SPECIAL_RE.sub("", text)


def utf16_length(text: str) -> int:
    # length as a browser counts it: astral characters take two code units
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2

__all__ = ["WHITESPACE", "split_words", "strip_special", "utf16_length"]
