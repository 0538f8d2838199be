"""Unit tests for data models."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from laakhay.newsfeed.core import GenerationMode, PlanningInputError
from laakhay.newsfeed.models import DateRange, GenerationConfig, NewsItem


class TestNewsItem:
    def test_frozen(self):
        item = NewsItem(id="SYN-1", timestamp="2024-01-01", text="t", scope="S&P 500")
        with pytest.raises(ValidationError):
            item.text = "changed"

    def test_requires_id(self):
        with pytest.raises(ValidationError):
            NewsItem(id="", timestamp="2024-01-01", text="t", scope="S&P 500")

    def test_source_defaults_to_empty(self):
        item = NewsItem(id="SYN-1", timestamp="2024-01-01", text="t", scope="S&P 500")
        assert item.source == ""


class TestDateRange:
    def test_days(self):
        assert DateRange(date(2024, 1, 1), date(2024, 1, 10)).days == 9

    def test_empty(self):
        assert DateRange(date(2024, 1, 1), date(2024, 1, 1)).is_empty

    def test_datetimes_are_truncated_to_days(self):
        r = DateRange(datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 2, 0, 1))
        assert r.start == date(2024, 1, 1)
        assert r.days == 1

    def test_parse(self):
        r = DateRange.parse("2024-01-01", "2024-02-01")
        assert r.days == 31
        assert str(r) == "2024-01-01..2024-02-01"

    def test_parse_invalid(self):
        with pytest.raises(PlanningInputError, match="invalid date"):
            DateRange.parse("2024-13-01", "2024-12-01")


class TestGenerationConfig:
    def test_from_strings(self):
        config = GenerationConfig(
            scope="S&P 500 ESG Index",
            start_date="2024-01-01",
            end_date="2024-02-01",
            mode="LIVE_SEARCH",
            items_per_day=1.25,
        )
        assert config.mode is GenerationMode.LIVE_SEARCH
        assert config.date_range.days == 31

    def test_inverted_dates_raise_on_planning(self):
        config = GenerationConfig(
            scope="S&P 500", start_date=date(2024, 2, 1), end_date=date(2024, 1, 1)
        )
        with pytest.raises(PlanningInputError):
            config.date_range

    def test_scope_required(self):
        with pytest.raises(ValidationError):
            GenerationConfig(scope="  ", start_date=date(2024, 1, 1), end_date=date(2024, 1, 2))

    def test_mode_id_prefix(self):
        assert GenerationMode.LIVE_SEARCH.id_prefix == "WEB"
        assert GenerationMode.SYNTHETIC.id_prefix == "SYN"
