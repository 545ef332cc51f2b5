# tests/test_slur_filter.py
"""Tests for banned-term screening."""

import pytest

from forum_stage.core.errors import PolicyError
from forum_stage.services.moderation import SlurFilter


@pytest.fixture()
def slurs() -> SlurFilter:
    return SlurFilter(["badword", "nastyterm"])


def test_clean_text_has_no_matches(slurs) -> None:
    assert slurs.check("A perfectly pleasant site") == []
    assert slurs.check(None) == []
    assert slurs.check("") == []


def test_matches_are_case_insensitive_substrings(slurs) -> None:
    assert slurs.check("such a BadWordish name") == ["BadWord"]


def test_matches_keep_order_and_drop_repeats(slurs) -> None:
    text = "nastyterm then badword then NASTYTERM again"

    assert slurs.check(text) == ["nastyterm", "badword"]


def test_empty_term_list_matches_nothing() -> None:
    assert SlurFilter([]).check("badword") == []


def test_ensure_clean_reports_every_match(slurs) -> None:
    with pytest.raises(PolicyError) as excinfo:
        slurs.ensure_clean("fine", "badword and nastyterm")

    assert excinfo.value.code == "No slurs - badword, nastyterm"
    assert excinfo.value.matches == ["badword", "nastyterm"]


def test_ensure_clean_accepts_missing_fields(slurs) -> None:
    slurs.ensure_clean("Stage", None)


def test_terms_inside_longer_matches_are_reported() -> None:
    slurs = SlurFilter(["word", "badword"])

    assert slurs.check("a BADWORD here") == ["BADWORD", "WORD"]
