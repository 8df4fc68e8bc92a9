from __future__ import annotations

import datetime as dt
import unittest

from daygrid.model import TimeOfDay
from daygrid.presenter import (
    HOUR_BLOCK_HEIGHT,
    QUARTER_HOUR_BLOCK_HEIGHT,
    date_from_offset,
    format_time_string,
    offset_from_time,
    parse_time_string,
    time_from_offset,
)


class TestPresenterContract(unittest.TestCase):
    def test_offset_scenario(self) -> None:
        self.assertEqual(offset_from_time(100, 9, 30), 950.0)
        self.assertEqual(offset_from_time(100, 0, 0), 0.0)
        self.assertEqual(offset_from_time(HOUR_BLOCK_HEIGHT, 24, 0), 2400.0)

    def test_offset_is_monotonic(self) -> None:
        prev = -1.0
        for h in range(0, 24):
            for m in (0, 15, 30, 45):
                cur = offset_from_time(100, h, m)
                self.assertGreaterEqual(cur, prev)
                prev = cur

    def test_round_trip_at_quarter_hours(self) -> None:
        for hbh in (100.0, 60.0, 48.0, 70.0):
            for h in range(0, 24):
                for m in (0, 15, 30, 45):
                    y = offset_from_time(hbh, h, m)
                    got = time_from_offset(y, hbh / 4)
                    self.assertEqual(got, TimeOfDay(h, m), f"hbh={hbh} {h}:{m} y={y}")

    def test_time_from_offset_floors_to_quarter(self) -> None:
        self.assertEqual(time_from_offset(949.9, QUARTER_HOUR_BLOCK_HEIGHT), TimeOfDay(9, 15))
        self.assertEqual(time_from_offset(974.9, QUARTER_HOUR_BLOCK_HEIGHT), TimeOfDay(9, 30))

    def test_time_from_offset_clamps(self) -> None:
        self.assertEqual(time_from_offset(-40, 25), TimeOfDay(0, 0))
        self.assertEqual(time_from_offset(10_000, 25), TimeOfDay(24, 0))
        self.assertEqual(time_from_offset(float("inf"), 25), TimeOfDay(24, 0))
        self.assertEqual(time_from_offset(0, 25, min_hour=9, max_hour=17), TimeOfDay(9, 0))
        self.assertEqual(time_from_offset(2000, 25, min_hour=9, max_hour=17), TimeOfDay(17, 0))

    def test_date_from_offset_columns(self) -> None:
        base = dt.date(2024, 1, 1)
        kw = dict(width=300.0)
        # inside the label inset -> first column
        self.assertEqual(date_from_offset(10, 50, 3, base, **kw), dt.date(2024, 1, 1))
        self.assertEqual(date_from_offset(149.9, 50, 3, base, **kw), dt.date(2024, 1, 1))
        self.assertEqual(date_from_offset(150, 50, 3, base, **kw), dt.date(2024, 1, 2))
        self.assertEqual(date_from_offset(349.9, 50, 3, base, **kw), dt.date(2024, 1, 3))
        # rightmost boundary stays in the last column
        self.assertEqual(date_from_offset(350, 50, 3, base, **kw), dt.date(2024, 1, 3))
        self.assertEqual(date_from_offset(9999, 50, 3, base, **kw), dt.date(2024, 1, 3))

    def test_date_from_offset_accepts_iso_string_and_none(self) -> None:
        self.assertEqual(date_from_offset(260, 50, 3, "2024-02-28", width=300.0), dt.date(2024, 3, 1))
        self.assertIsNone(date_from_offset(260, 50, 3, None, width=300.0))

    def test_format_time_string(self) -> None:
        self.assertEqual(format_time_string(9, 5), "09:05")
        self.assertEqual(format_time_string(0, 0), "00:00")
        self.assertEqual(format_time_string(14, 45, dt.date(2024, 1, 2)), "2024-01-02 14:45")
        self.assertEqual(format_time_string(14, 45, "2024-01-02"), "2024-01-02 14:45")

    def test_parse_time_string_inverts_format(self) -> None:
        s = format_time_string(7, 30, dt.date(2023, 12, 31))
        self.assertEqual(parse_time_string(s), (TimeOfDay(7, 30), dt.date(2023, 12, 31)))
        self.assertEqual(parse_time_string("24:00"), (TimeOfDay(24, 0), None))
        with self.assertRaises(ValueError):
            parse_time_string("9:30 PM")


if __name__ == "__main__":
    unittest.main(verbosity=2)
