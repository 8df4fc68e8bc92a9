from __future__ import annotations

import datetime as dt
import json
import tempfile
import unittest
from pathlib import Path

from daygrid.config import ConfigValidationError, TimelineConfig, load_config, validate_config


class TestConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = TimelineConfig.from_dict({})
        self.assertEqual((cfg.start, cfg.end, cfg.number_of_days), (0, 24, 1))
        self.assertFalse(cfg.format24h)
        self.assertEqual(cfg.unavailable_hours, ())
        self.assertEqual(cfg.quarter_block_height, 25.0)

    def test_camel_case_options(self) -> None:
        cfg = TimelineConfig.from_dict(
            {
                "start": 9,
                "end": 17,
                "numberOfDays": 3,
                "timelineLeftInset": 72,
                "format24h": True,
                "unavailableHours": [
                    {"start": 12, "end": 13},
                    {"start": 0, "end": 9, "dayOfWeek": 5},
                    {"start": 8, "end": 10, "date": "2024-01-02"},
                ],
                "unavailableHoursColor": "#f0f0f0",
            }
        )
        self.assertEqual((cfg.start, cfg.end, cfg.number_of_days), (9, 17, 3))
        self.assertEqual(cfg.timeline_left_inset, 72.0)
        self.assertTrue(cfg.format24h)
        self.assertEqual(cfg.unavailable_hours_color, "#f0f0f0")
        self.assertEqual(len(cfg.unavailable_hours), 3)
        # dayOfWeek 5 is Friday in JS getDay() terms
        self.assertEqual(cfg.unavailable_hours[1].weekday, 4)
        self.assertEqual(cfg.unavailable_hours[2].date, dt.date(2024, 1, 2))
        self.assertEqual(cfg.total_height, 800.0)

    def test_weekday_keys_use_their_own_conventions(self) -> None:
        rules = TimelineConfig.from_dict(
            {
                "unavailableHours": [
                    {"start": 8, "end": 9, "weekday": 0},
                    {"start": 8, "end": 9, "dayOfWeek": 0},
                    {"start": 8, "end": 9, "dayOfWeek": 1},
                    {"start": 8, "end": 9, "weekday": 6, "dayOfWeek": 1},
                ]
            }
        ).unavailable_hours
        # Monday, Sunday, Monday; snake_case wins when both are present
        self.assertEqual([r.weekday for r in rules], [0, 6, 0, 6])

        joined = "\n".join(validate_config({"unavailableHours": [{"weekday": 7}, {"dayOfWeek": -1}]}))
        self.assertIn("unavailableHours[0].weekday must be an int 0..6 (Monday=0)", joined)
        self.assertIn("unavailableHours[1].dayOfWeek must be an int 0..6 (Sunday=0)", joined)

    def test_validate_collects_all_errors(self) -> None:
        errs = validate_config(
            {
                "start": 18,
                "end": 9,
                "numberOfDays": 0,
                "timelineLeftInset": -1,
                "format24h": "yes",
                "unavailableHours": [{"start": "noon"}, 3],
            }
        )
        joined = "\n".join(errs)
        self.assertIn("0 <= start < end <= 24", joined)
        self.assertIn("numberOfDays", joined)
        self.assertIn("timelineLeftInset", joined)
        self.assertIn("format24h", joined)
        self.assertIn("unavailableHours[0].start", joined)
        self.assertIn("unavailableHours[1] must be an object", joined)

    def test_from_dict_raises_on_invalid(self) -> None:
        with self.assertRaises(ConfigValidationError):
            TimelineConfig.from_dict({"end": 25})
        self.assertTrue(issubclass(ConfigValidationError, ValueError))

    def test_malformed_rule_hours_are_not_config_errors(self) -> None:
        # end <= start is configuration noise; the resolver drops it.
        self.assertEqual(validate_config({"unavailableHours": [{"start": 13, "end": 12}]}), [])

    def test_load_config(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cfg.json"
            p.write_text(json.dumps({"start": 6, "end": 22}), encoding="utf-8")
            cfg = load_config(p)
            self.assertEqual((cfg.start, cfg.end), (6, 22))

            p.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(ConfigValidationError):
                load_config(p)


if __name__ == "__main__":
    unittest.main(verbosity=2)
