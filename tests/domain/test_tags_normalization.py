"""Tests for tag id normalization and display names."""

import pytest

from storefront.domain.service.tags import normalize_tag_id, tag_display_name


class TestNormalizeTagId:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("second-brain", "second-brain"),
            ("Second Brain", "second-brain"),
            ("PKM", "pkm"),
            ("AI & Prompts", "ai-prompts"),
            ("note_taking", "note-taking"),
            ("GTD!!", "gtd-"),
            ("  para  ", "-para-"),
            ("", ""),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_tag_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["Second Brain", "--x--", "Ünïcode Tag", "a__b  c", "already-normal", "!!!"],
    )
    def test_idempotent(self, raw):
        once = normalize_tag_id(raw)
        assert normalize_tag_id(once) == once


class TestTagDisplayName:

    def test_title_cases_words(self):
        assert tag_display_name("second-brain") == "Second Brain"

    def test_acronyms_upper_case(self):
        assert tag_display_name("pkm") == "PKM"
        assert tag_display_name("ai") == "AI"
