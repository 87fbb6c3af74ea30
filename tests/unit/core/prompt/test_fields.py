"""Tests for prompt field accessors and their placeholders."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from rhi.core.prompt import fields as f


class TestBlankValues:
    @pytest.mark.parametrize(
        "value", [None, "", "  ", "null", "undefined", float("nan"), []]
    )
    def test_blank_values_render_placeholder(self, value):
        assert f.text({"k": value}, "k") == f.NOT_SPECIFIED

    def test_none_answer_is_a_real_value(self):
        assert f.text({"contraception": "none"}, "contraception") == "none"
        assert f.count({"symptoms": ["none"]}, "symptoms") == 1

    def test_zero_is_a_real_value(self):
        assert f.text({"k": 0}, "k") == "0"
        assert f.number({"k": 0}, "k") == 0.0

    def test_missing_key_and_non_dict_entry(self):
        assert f.text({}, "k", "Not recorded") == "Not recorded"
        assert f.text(None, "k") == f.NOT_SPECIFIED


class TestRendering:
    def test_lists_are_joined_without_blanks(self):
        entry = {"k": ["hot flashes", None, "", "insomnia"]}
        assert f.joined(entry, "k") == "hot flashes, insomnia"

    def test_empty_list_uses_none_placeholder(self):
        assert f.joined({"k": []}, "k") == f.NONE

    def test_integral_floats_drop_trailing_zero(self):
        assert f.text({"k": 28.0}, "k") == "28"
        assert f.text({"k": 97.4}, "k") == "97.4"

    def test_booleans_render_yes_no(self):
        assert f.text({"k": True}, "k") == "Yes"
        assert f.yes_no({"k": "true"}, "k") == "Yes"
        assert f.yes_no({"k": "no"}, "k") == "No"
        assert f.yes_no({}, "k") == "No"

    def test_dict_values_render_as_pairs(self):
        assert f.display({"a": 1, "b": None}) == "a: 1"


class TestNumbers:
    def test_numeric_strings_are_coerced(self):
        assert f.number({"k": "7.5"}, "k") == 7.5

    @pytest.mark.parametrize("value", ["abc", True, float("inf"), None])
    def test_non_numbers_use_default(self, value):
        assert f.number({"k": value}, "k", default=-1) == -1

    def test_scale_defaults_to_five(self):
        assert f.scale({}, "stress") == "5/10"
        assert f.scale({"stress": 8}, "stress") == "8/10"

    def test_count_and_items(self):
        entry = {"symptoms": ["a", "", "b"], "single": "x"}
        assert f.count(entry, "symptoms") == 2
        assert f.count(entry, "single") == 0
        assert f.items(entry, "symptoms") == ["a", "b"]
        assert f.items(entry, "single") == ["x"]
        assert f.items(entry, "missing") == []


class TestDates:
    def test_parse_iso_date_and_datetime_strings(self):
        assert f.parse_date("2024-03-01") == date(2024, 3, 1)
        assert f.parse_date("2024-03-01T10:20:00Z") == date(2024, 3, 1)
        assert f.parse_date(datetime(2024, 3, 1, 8)) == date(2024, 3, 1)

    @pytest.mark.parametrize("value", ["not a date", "", None, 20240301, "2024-13-45"])
    def test_unparseable_dates_are_none(self, value):
        assert f.parse_date(value) is None

    def test_format_range(self):
        assert f.format_range(date(2024, 3, 10), date(2024, 3, 16)) == "2024-03-10 to 2024-03-16"
        assert f.format_range(None, date(2024, 3, 16)) == f.NOT_CALCULATED


class TestRecords:
    def test_latest_entry_is_last(self):
        assert f.latest_entry([{"n": 1}, {"n": 2}]) == {"n": 2}

    @pytest.mark.parametrize("record", [[], None, "oops", [1, 2]])
    def test_latest_entry_of_unusable_record_is_empty(self, record):
        assert f.latest_entry(record) == {}

    def test_trailing_window(self):
        record = [{"n": i} for i in range(5)]
        assert [e["n"] for e in f.trailing(record, 3)] == [2, 3, 4]
        assert f.trailing(None) == []
