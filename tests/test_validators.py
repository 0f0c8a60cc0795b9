"""
Tests for input validation and survey normalization rules.
"""
from datetime import datetime, timezone

import pytest

from civic_chat.core.validators import (
    DETRACTOR,
    NEUTRAL,
    PROMOTER,
    classify_score,
    parse_submitted_at,
    resolve_classification,
    sanitize_reasons,
    validate_message,
)

NOW = datetime(2026, 10, 18, 15, 30, 0, tzinfo=timezone.utc)


class TestValidateMessage:

    @pytest.mark.parametrize("message", [None, "", "   ", "\n\t"])
    def test_blank_rejected(self, message):
        is_valid, error = validate_message(message)
        assert not is_valid
        assert "message" in error

    def test_long_message_accepted_unchanged(self):
        assert validate_message("a" * 20000) == (True, None)

    def test_valid(self):
        assert validate_message("Quem é o presidente da Câmara?") == (True, None)


class TestClassification:

    @pytest.mark.parametrize("score,expected", [
        (0, DETRACTOR), (1, DETRACTOR), (2, DETRACTOR), (3, DETRACTOR),
        (4, DETRACTOR), (5, DETRACTOR), (6, DETRACTOR),
        (7, NEUTRAL), (8, NEUTRAL),
        (9, PROMOTER), (10, PROMOTER),
    ])
    def test_classify_score(self, score, expected):
        assert classify_score(score) == expected

    def test_client_value_overridden(self):
        assert resolve_classification(3, "promoter") == DETRACTOR

    def test_matching_client_value_kept(self):
        assert resolve_classification(10, "Promoter") == PROMOTER

    def test_missing_client_value(self):
        assert resolve_classification(7, None) == NEUTRAL


class TestSanitizeReasons:

    def test_trim_dedup_and_order(self):
        reasons = ["  Clareza ", "Rapidez", "Clareza", "", "   ", "Neutralidade"]
        assert sanitize_reasons(reasons) == ["Clareza", "Rapidez", "Neutralidade"]

    def test_capped_at_five(self):
        reasons = [f"r{i}" for i in range(8)]
        assert sanitize_reasons(reasons) == ["r0", "r1", "r2", "r3", "r4"]

    def test_duplicates_do_not_count_toward_cap(self):
        reasons = ["a", "a", "b", "b", "c", "d", "e", "f"]
        assert sanitize_reasons(reasons) == ["a", "b", "c", "d", "e"]

    def test_case_sensitive(self):
        assert sanitize_reasons(["Clareza", "clareza"]) == ["Clareza", "clareza"]

    @pytest.mark.parametrize("reasons", [None, [], ["", "  "]])
    def test_empty_gives_none(self, reasons):
        assert sanitize_reasons(reasons) is None


class TestParseSubmittedAt:

    def test_utc_value(self):
        assert parse_submitted_at("2026-10-01T12:00:00Z", now=NOW) == "2026-10-01T12:00:00Z"

    def test_offset_converted_to_utc(self):
        assert parse_submitted_at("2026-10-01T09:00:00-03:00", now=NOW) == "2026-10-01T12:00:00Z"

    def test_fractional_seconds_dropped(self):
        assert parse_submitted_at("2026-10-01T12:00:00.750Z", now=NOW) == "2026-10-01T12:00:00Z"

    @pytest.mark.parametrize("value", [None, "", "ontem", "2026-13-45", "2026-10-01T12:00:00"])
    def test_fallback_to_now(self, value):
        assert parse_submitted_at(value, now=NOW) == "2026-10-18T15:30:00Z"
