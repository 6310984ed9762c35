"""Tests for the minutes <-> "HH:MM" codec and cutoff input suggestions."""

import pytest

from bedtime.core.sexagesimal import (
    MAX_MINUTES,
    CutoffSuggestions,
    Suggestion,
    clamp_to_valid_minutes,
    decode,
    encode,
    normalize,
    suggest,
)


class TestEncode:
    def test_pads_hours_and_minutes(self):
        assert encode(125) == "02:05"

    def test_zero(self):
        assert encode(0) == "00:00"

    def test_last_minute_of_day(self):
        assert encode(1439) == "23:59"

    def test_padding_is_a_minimum(self):
        assert encode(6000) == "100:00"


class TestDecode:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("59", 59),
            ("60", 60),
            ("90", 90),
            ("99", 99),
            ("100", 60),
            ("130", 90),
            ("1230", 750),
        ],
    )
    def test_microwave_style(self, text, expected):
        assert decode(text) == expected

    def test_punctuation_is_ignored(self):
        assert decode("12:30") == decode("1230") == decode("h1i2j3k0") == 750

    def test_spaces_and_letters(self):
        assert decode(" 4 : 00 am") == 240

    def test_no_digits_is_zero(self):
        assert decode("") == 0
        assert decode("abc") == 0
        assert decode(":") == 0

    def test_single_digit_is_minutes(self):
        assert decode("7") == 7

    def test_clamps_above_range(self):
        assert decode("9999") == MAX_MINUTES
        assert decode("24:00") == MAX_MINUTES

    def test_minus_sign_is_ignored(self):
        assert decode("-130") == 90

    def test_very_long_digit_run_clamps(self):
        assert decode("1" * 5000) == MAX_MINUTES

    def test_leading_zeros_do_not_count_as_hours(self):
        assert decode("0" * 5000 + "130") == 90

    def test_only_ascii_digits_count(self):
        # Arabic-Indic 1230
        assert decode("\u0661\u0662\u0663\u0660") == 0
        assert decode("1\u066230") == 90


class TestClamp:
    def test_negative(self):
        assert clamp_to_valid_minutes(-5) == 0

    def test_in_range(self):
        assert clamp_to_valid_minutes(240) == 240

    def test_too_large(self):
        assert clamp_to_valid_minutes(1440) == 1439


class TestRoundTrip:
    def test_decode_inverts_encode_for_every_minute_of_the_day(self):
        for minutes in range(0, 24 * 60):
            assert decode(encode(minutes)) == minutes

    @pytest.mark.parametrize(
        "text", ["", "4", "4:5", "99:99", "abc123", "9999", "1:2:3", "0430", "9" * 5000]
    )
    def test_normalize_is_a_fixpoint(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestSuggest:
    def test_first_suggestion_is_the_normalized_input(self):
        suggestions = list(suggest("430"))
        assert suggestions[0] == Suggestion(content="04:30", annotation="")

    def test_offers_raw_minutes_when_different(self):
        suggestions = list(suggest("130"))
        assert suggestions == [
            Suggestion(content="01:30"),
            Suggestion(content="02:10", annotation="= 130 minutes"),
        ]

    def test_single_suggestion_when_interpretations_coincide(self):
        assert list(suggest("90")) == [Suggestion(content="01:30")]

    def test_no_raw_minutes_when_query_has_colon(self):
        assert list(suggest("1:30")) == [Suggestion(content="01:30")]

    def test_no_raw_minutes_for_zero(self):
        assert list(suggest("0")) == [Suggestion(content="00:00")]

    def test_no_raw_minutes_for_non_numeric(self):
        assert list(suggest("abc")) == [Suggestion(content="00:00")]

    def test_negative_raw_minutes_clamp_to_zero_and_are_dropped(self):
        assert list(suggest("-130")) == [Suggestion(content="01:30")]

    def test_leading_integer_is_used(self):
        suggestions = list(suggest("300 min"))
        assert suggestions[0].content == "03:00"
        assert suggestions[1] == Suggestion(content="05:00", annotation="= 300 minutes")

    def test_raw_minutes_are_clamped(self):
        suggestions = list(suggest("5000"))
        assert suggestions[0].content == "23:59"
        # 5000 raw minutes also clamps to 23:59, so it is a duplicate
        assert len(suggestions) == 1

    def test_very_long_digit_run(self):
        assert list(suggest("1" * 5000)) == [Suggestion(content="23:59")]

    def test_very_long_leading_integer_followed_by_text(self):
        suggestions = list(suggest("9" * 5000 + " min"))
        assert suggestions == [Suggestion(content="23:59")]

    def test_very_long_negative_integer(self):
        assert list(suggest("-" + "7" * 5000)) == [Suggestion(content="23:59")]

    def test_non_ascii_digits_are_not_an_integer(self):
        assert list(suggest("\u0661\u0663\u0660")) == [Suggestion(content="00:00")]

    def test_restartable(self):
        suggestions = suggest("130")
        assert isinstance(suggestions, CutoffSuggestions)
        assert list(suggestions) == list(suggestions)
