"""Tests for note file name dates and archive eligibility."""

from datetime import date, datetime

import pytest

from notefold.core.dates import (
    is_archivable,
    is_note_file,
    month_key,
    month_start,
    parse_file_name,
)


class TestParseFileName:
    def test_strips_extension(self):
        assert parse_file_name("2024-04-05.txt", "%Y-%m-%d") == datetime(2024, 4, 5)

    def test_only_last_extension_is_stripped(self):
        assert parse_file_name("2024.04.05.md", "%Y.%m.%d") == datetime(2024, 4, 5)

    def test_custom_format(self):
        assert parse_file_name("05-04-2024.txt", "%d-%m-%Y") == datetime(2024, 4, 5)

    def test_ignores_directory(self):
        assert parse_file_name("notes/2024-04-05.txt", "%Y-%m-%d") == datetime(2024, 4, 5)

    @pytest.mark.parametrize("name", ["notes.txt", "archive-Apr2024.txt", "2024-13-01.txt", "2024-4-5.txt", ""])
    def test_unparsable(self, name):
        with pytest.raises(ValueError):
            parse_file_name(name, "%Y-%m-%d")

    def test_non_canonical_form_is_rejected(self):
        with pytest.raises(ValueError, match="canonical form '2024-04-05'"):
            parse_file_name("2024-4-5.txt", "%Y-%m-%d")


class TestIsNoteFile:
    def test_matching_name_and_extension(self):
        assert is_note_file("2024-04-05.txt", "txt", "%Y-%m-%d")

    def test_wrong_extension(self):
        assert not is_note_file("2024-04-05.md", "txt", "%Y-%m-%d")

    def test_archive_file(self):
        assert not is_note_file("archive-Apr2024.txt", "txt", "%Y-%m-%d")

    def test_hidden_temp_file(self):
        assert not is_note_file(".2024-04-05.txt.tmp", "txt", "%Y-%m-%d")

    def test_non_canonical_name(self):
        assert not is_note_file("2024-4-5.txt", "txt", "%Y-%m-%d")


class TestIsArchivable:
    @pytest.fixture
    def now(self):
        return datetime(2024, 4, 10)

    def test_older_than_threshold(self, now):
        assert is_archivable(datetime(2024, 4, 5), now, 3)

    def test_newer_than_threshold(self, now):
        assert not is_archivable(datetime(2024, 4, 9), now, 3)

    def test_exactly_at_threshold_is_kept(self, now):
        assert not is_archivable(datetime(2024, 4, 7), now, 3)

    def test_just_past_threshold(self):
        assert is_archivable(datetime(2024, 4, 7), datetime(2024, 4, 10, 0, 0, 1), 3)

    def test_zero_days_archives_anything_past(self, now):
        assert is_archivable(datetime(2024, 4, 9, 23), now, 0)
        assert not is_archivable(now, now, 0)

    def test_future_file_is_never_archivable(self, now):
        assert not is_archivable(datetime(2024, 5, 1), now, 0)


class TestMonthKey:
    def test_formats_month(self):
        assert month_key(datetime(2024, 4, 5), "%Y-%m") == "2024-04"
        assert month_key(date(2024, 4, 30), "%b%Y") == "Apr2024"

    def test_same_month_same_key(self):
        assert month_key(date(2024, 4, 1), "%b%Y") == month_key(date(2024, 4, 30), "%b%Y")

    def test_month_start(self):
        assert month_start(date(2024, 4, 17)) == date(2024, 4, 1)
        assert month_start(datetime(2024, 4, 17, 12)) == date(2024, 4, 1)
