from __future__ import annotations
from collections import Counter
from typing import List, Optional, Tuple
import re

from .options import Options, SortOrder
from .stopwords import is_common
from .text import split_words, strip_special, utf16_length

# Keyword transform pipeline.
# Stage order is fixed; options only decide which stages run:
#  1. tokenize on whitespace runs
#  2. normalize: lowercase -> uppercase -> strip special chars -> drop words with digits
#  3. remove: duplicates -> common -> uncommon -> single letters -> multi letters -> blocklist
#  4. sort: alphabetical -> length -> frequency (each a full re-sort, last one wins)
#  5. format: prefix -> suffix
#  6. join with the configured separator

_DIGIT_RE = re.compile(r"[0-9]")


def tokenize(text: str) -> List[str]:
    return split_words(text)


def collation_key(word: str) -> Tuple[str, str]:
    # Case-insensitive primary order, lowercase ahead of uppercase on ties (a < A < b)
    return word.casefold(), word.swapcase()


def _apply_case(words: List[str], options: Options) -> List[str]:
    if options.to_lower_case:
        words = [w.lower() for w in words]
    if options.to_upper_case:
        words = [w.upper() for w in words]
    return words


def _normalize(words: List[str], options: Options) -> List[str]:
    words = _apply_case(words, options)
    if options.remove_special_chars:
        words = [strip_special(w) for w in words]
    if options.remove_numbers:
        words = [w for w in words if not _DIGIT_RE.search(w)]
    return words


def _remove(words: List[str], options: Options) -> List[str]:
    if options.remove_duplicates:
        words = list(dict.fromkeys(words))
    if options.remove_common:
        words = [w for w in words if not is_common(w)]
    if options.remove_uncommon:
        # counts the list as filtered so far, not the raw input
        freq = Counter(words)
        words = [w for w in words if freq[w] > 1]
    if options.remove_single_letters:
        words = [w for w in words if len(w) > 1]
    if options.remove_multi_letters:
        words = [w for w in words if len(w) <= 1]
    if options.remove_specific_words:
        blocked = options.blocklist()
        if blocked:
            words = [w for w in words if w.lower() not in blocked]
    return words


def _sort(words: List[str], raw_text: str, options: Options) -> List[str]:
    if options.sort_alphabetically == SortOrder.ASCENDING:
        words = sorted(words, key=collation_key)
    elif options.sort_alphabetically == SortOrder.DESCENDING:
        words = sorted(words, key=collation_key, reverse=True)
    if options.sort_by_length == SortOrder.ASCENDING:
        words = sorted(words, key=len)
    elif options.sort_by_length == SortOrder.DESCENDING:
        words = sorted(words, key=len, reverse=True)
    if options.sort_by_frequency:
        freq = Counter(_frequency_key(w, options) for w in tokenize(raw_text))
        words = sorted(words, key=lambda w: (-freq.get(w, 0), collation_key(w)))
    return words


def _frequency_key(word: str, options: Options) -> str:
    # one case conversion only, lowercase first; with both options on the
    # uppercased list finds no lowercase keys and every word counts 0
    if options.to_lower_case:
        return word.lower()
    if options.to_upper_case:
        return word.upper()
    return word


def _format(words: List[str], options: Options) -> List[str]:
    if options.add_prefix:
        words = [f"{options.prefix_value}{w}" for w in words]
    if options.add_suffix:
        words = [f"{w}{options.suffix_value}" for w in words]
    return words


def transform(raw_text: str, options: Optional[Options] = None) -> str:
    """Run raw text through every enabled stage and join the surviving words.

    Total over any string: empty or whitespace-only input yields "". A word emptied by
    special-character stripping stays in the list as "" unless a length filter drops it.
    """
    if options is None:
        options = Options()
    words = tokenize(raw_text)
    words = _normalize(words, options)
    words = _remove(words, options)
    words = _sort(words, raw_text or "", options)
    words = _format(words, options)
    return options.separator().join(words)


def count_output(processed: str) -> Tuple[int, int]:
    """(word_count, char_count) of a processed output string."""
    return len(tokenize(processed)), utf16_length(processed or "")

__all__ = ["tokenize", "transform", "count_output", "collation_key"]
