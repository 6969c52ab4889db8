import unittest
from datetime import date, datetime, timezone

from models.utils import (
    parse_date_string,
    start_of_day,
    end_of_day,
    date_to_iso_instant,
    reference_instant,
)


class TestParseDateString(unittest.TestCase):

    def test_iso_date(self):
        """Test parse_date_string with a plain ISO date"""
        self.assertEqual(parse_date_string('2024-01-01'), date(2024, 1, 1))

    def test_iso_instant(self):
        """Test parse_date_string with an ISO instant"""
        self.assertEqual(parse_date_string('2025-09-17T00:00:00.000Z'), date(2025, 9, 17))

    def test_readable_format(self):
        """Test parse_date_string with readable format"""
        self.assertEqual(parse_date_string('September 17, 2025'), date(2025, 9, 17))

    def test_us_slash_format(self):
        self.assertEqual(parse_date_string('09/17/2025'), date(2025, 9, 17))

    def test_day_first_slash_format_when_month_invalid(self):
        """17/09 can only be day-first"""
        self.assertEqual(parse_date_string('17/09/2025'), date(2025, 9, 17))

    def test_surrounding_whitespace_ignored(self):
        self.assertEqual(parse_date_string('  2024-06-06 '), date(2024, 6, 6))

    def test_invalid_returns_none(self):
        """Test parse_date_string with values that are not dates"""
        for value in ['not-a-date', 'bad', 'Date', '', '   ', None, 42, 'T-shirt']:
            with self.subTest(value=value):
                self.assertIsNone(parse_date_string(value))


class TestDayBoundaries(unittest.TestCase):

    def test_start_of_day_is_midnight_utc(self):
        self.assertEqual(start_of_day(date(2024, 6, 6)),
                         datetime(2024, 6, 6, tzinfo=timezone.utc))

    def test_end_of_day_is_next_midnight(self):
        self.assertEqual(end_of_day(date(2024, 6, 6)),
                         datetime(2024, 6, 7, tzinfo=timezone.utc))

    def test_end_of_day_crosses_month(self):
        self.assertEqual(end_of_day(date(2024, 1, 31)),
                         datetime(2024, 2, 1, tzinfo=timezone.utc))

    def test_date_to_iso_instant(self):
        self.assertEqual(date_to_iso_instant(date(2024, 1, 1)), '2024-01-01T00:00:00.000Z')


class TestReferenceInstant(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2024, 6, 6, 23, 30, tzinfo=timezone.utc)

    def test_zero_offset_is_now(self):
        self.assertEqual(reference_instant(0, now=self.now), self.now)

    def test_east_of_utc_moves_forward(self):
        """UTC+2 reports -120; local time is two hours ahead"""
        self.assertEqual(reference_instant(-120, now=self.now),
                         datetime(2024, 6, 7, 1, 30, tzinfo=timezone.utc))

    def test_west_of_utc_moves_back(self):
        self.assertEqual(reference_instant(300, now=self.now),
                         datetime(2024, 6, 6, 18, 30, tzinfo=timezone.utc))

    def test_defaults_to_current_time(self):
        before = datetime.now(timezone.utc)
        result = reference_instant()
        self.assertGreaterEqual(result, before)
        self.assertIsNotNone(result.tzinfo)


if __name__ == '__main__':
    unittest.main()
