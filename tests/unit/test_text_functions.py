"""
Unit Tests for Text Functions
=============================

Unit tests for DATE/TIME macro expansion in card text.
"""

from datetime import datetime, timedelta, timezone

import pytest

from card_render.core.rendering.text_functions import (
    apply_text_functions,
    format_date,
    format_time,
)


class TestFormatting:
    """Test date and time formatting."""

    @pytest.fixture
    def moment(self):
        return datetime(2017, 2, 14, 6, 8, 39, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "hint,expected",
        [
            ("COMPACT", "2/14/2017"),
            ("SHORT", "Tue, Feb 14, 2017"),
            ("LONG", "Tuesday, February 14, 2017"),
            ("long", "Tuesday, February 14, 2017"),
        ],
    )
    def test_format_date(self, moment, hint, expected):
        assert format_date(moment, hint) == expected

    def test_format_time_morning(self, moment):
        assert format_time(moment) == "6:08 AM"

    def test_format_time_noon_and_midnight(self):
        assert format_time(datetime(2017, 2, 14, 12, 30)) == "12:30 PM"
        assert format_time(datetime(2017, 2, 14, 0, 5)) == "12:05 AM"


class TestApplyTextFunctions:
    """Test macro substitution."""

    def test_plain_text_unchanged(self):
        assert apply_text_functions("No macros here") == "No macros here"
        assert apply_text_functions("") == ""

    def test_date_default_is_compact(self):
        text = apply_text_functions("Due {{DATE(2017-02-14T06:08:39Z)}}")

        assert text == "Due 2/14/2017"

    def test_date_with_hint(self):
        text = apply_text_functions("{{DATE(2017-02-14T06:08:39Z, SHORT)}}")

        assert text == "Tue, Feb 14, 2017"

    def test_time(self):
        assert apply_text_functions("At {{TIME(2017-02-14T06:08:39Z)}}") == "At 6:08 AM"

    def test_offset_is_kept(self):
        """Test timestamps render in their own offset."""
        text = apply_text_functions("{{TIME(2017-02-14T18:45:00-08:00)}}")

        assert text == "6:45 PM"

    def test_multiple_macros(self):
        text = apply_text_functions(
            "{{DATE(2017-02-14T06:08:39Z, LONG)}} at {{TIME(2017-02-14T06:08:39Z)}}"
        )

        assert text == "Tuesday, February 14, 2017 at 6:08 AM"

    def test_unparseable_timestamp_left_as_written(self):
        text = "{{DATE(not-a-date, SHORT)}}"

        assert apply_text_functions(text) == text

    def test_generated_timestamp(self):
        moment = datetime(2020, 1, 1, tzinfo=timezone(timedelta(hours=2)))

        assert apply_text_functions(f"{{{{DATE({moment.isoformat()})}}}}") == "1/1/2020"
