from __future__ import annotations
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Option schema consumed read-only by the transform pipeline.
# JSON payloads use the camelCase names of the web form (toLowerCase, prefixValue, ...);
# Python callers may use the snake_case field names directly.

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class SortOrder(str, Enum):
    NONE = "none"
    ASCENDING = "ascending"
    DESCENDING = "descending"


# Radio values posted by the web form, plus null for a cleared selection
_SORT_ALIASES = {
    "az": SortOrder.ASCENDING,
    "asc": SortOrder.ASCENDING,
    "za": SortOrder.DESCENDING,
    "desc": SortOrder.DESCENDING,
    "": SortOrder.NONE,
}


# Bits omitted from a supplied object are off; Options falls back to space-only.
class Separators(BaseModel):
    model_config = _MODEL_CONFIG

    space: bool = False
    comma: bool = False
    pipe: bool = False
    custom: bool = False


class Options(BaseModel):
    """Independent stage toggles for one pipeline run.

    Pairs such as to_lower_case/to_upper_case or remove_single_letters/remove_multi_letters
    are not validated against each other: the pipeline applies whichever are set in its
    fixed stage order.
    """
    model_config = _MODEL_CONFIG

    # normalize
    to_lower_case: bool = False
    to_upper_case: bool = False
    remove_special_chars: bool = False
    remove_numbers: bool = False
    # remove
    remove_duplicates: bool = False
    remove_common: bool = False
    remove_uncommon: bool = False
    remove_single_letters: bool = False
    remove_multi_letters: bool = False
    remove_specific_words: bool = False
    specific_words_to_remove: str = ""
    # sort
    sort_alphabetically: SortOrder = SortOrder.NONE
    sort_by_length: SortOrder = SortOrder.NONE
    sort_by_frequency: bool = False
    # format
    add_prefix: bool = False
    prefix_value: str = ""
    add_suffix: bool = False
    suffix_value: str = ""
    separators: Separators = Field(default_factory=lambda: Separators(space=True))
    custom_separator: str = ""

    @field_validator("sort_alphabetically", "sort_by_length", mode="before")
    @classmethod
    def _coerce_sort(cls, value: Any) -> Any:
        if value is None:
            return SortOrder.NONE
        if isinstance(value, str) and value.lower() in _SORT_ALIASES:
            return _SORT_ALIASES[value.lower()]
        return value

    @field_validator("specific_words_to_remove", "prefix_value", "suffix_value", "custom_separator", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def separator(self) -> str:
        """Join string: enabled separators in order space, comma, pipe, custom; single space if none."""
        sep = ""
        if self.separators.space:
            sep += " "
        if self.separators.comma:
            sep += ","
        if self.separators.pipe:
            sep += "|"
        if self.separators.custom:
            sep += self.custom_separator
        return sep or " "

    def blocklist(self) -> frozenset[str]:
        return frozenset(
            w.strip() for w in self.specific_words_to_remove.lower().split(",") if w.strip()
        )

    @classmethod
    def preset(cls) -> 'Options':
        """Initial state of the processing form."""
        return cls(remove_duplicates=True, remove_special_chars=True, to_lower_case=True)

__all__ = ["Options", "Separators", "SortOrder"]
