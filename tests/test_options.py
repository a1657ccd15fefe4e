from keywordforge.core.options import Options, Separators, SortOrder


def test_defaults():
    opts = Options()
    assert not opts.to_lower_case and not opts.remove_duplicates
    assert opts.sort_alphabetically == SortOrder.NONE
    assert opts.separators == Separators(space=True)
    assert opts.separator() == " "

def test_separator_order():
    opts = Options(separators=Separators(space=True, comma=True, pipe=True, custom=True), custom_separator="::")
    assert opts.separator() == " ,|::"
    assert Options(separators=Separators(pipe=True, comma=True)).separator() == ",|"

def test_separator_falls_back_to_space():
    assert Options(separators=Separators()).separator() == " "
    # custom enabled with an empty string contributes nothing
    assert Options(separators=Separators(custom=True)).separator() == " "

def test_camel_case_payload():
    opts = Options.model_validate({
        "toLowerCase": True,
        "sortAlphabetically": "za",
        "sortByLength": None,
        "specificWordsToRemove": None,
        "separators": {"comma": True},
    })
    assert opts.to_lower_case
    assert opts.sort_alphabetically == SortOrder.DESCENDING
    assert opts.sort_by_length == SortOrder.NONE
    assert opts.specific_words_to_remove == ""
    assert opts.separator() == ","

def test_sort_aliases():
    assert Options(sort_by_length="asc").sort_by_length == SortOrder.ASCENDING
    assert Options(sort_alphabetically="az").sort_alphabetically == SortOrder.ASCENDING
    assert Options(sort_alphabetically="descending").sort_alphabetically == SortOrder.DESCENDING

def test_blocklist_parsing():
    opts = Options(specific_words_to_remove=" Free, new ,, SALE ")
    assert opts.blocklist() == frozenset({"free", "new", "sale"})

def test_preset():
    p = Options.preset()
    assert p.remove_duplicates and p.remove_special_chars and p.to_lower_case
    assert not p.to_upper_case and not p.sort_by_frequency

def test_options_are_frozen():
    import pytest
    from pydantic import ValidationError
    opts = Options()
    with pytest.raises(ValidationError):
        opts.to_lower_case = True

def test_dumps_camel_case():
    data = Options.preset().model_dump(mode="json", by_alias=True)
    assert data["toLowerCase"] is True
    assert data["sortAlphabetically"] == "none"
    assert data["separators"] == {"space": True, "comma": False, "pipe": False, "custom": False}
