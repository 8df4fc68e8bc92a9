from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from daygrid.model import EventInstance, TimeOfDay, UnavailableHoursRule
from daygrid.normalize import normalize_event
from daygrid.packer import pack_events
from daygrid.unavailable import build_unavailable_blocks


def _zero_event() -> EventInstance:
    return EventInstance(id="z", start=TimeOfDay(10, 0), end=TimeOfDay(10, 0))


class TestObservabilityContract(unittest.TestCase):
    def test_rejected_event_logs_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"DAYGRID_OBS_LOG": "1"}, clear=False), patch("daygrid.util.console.eprint") as ep:
            res = pack_events([_zero_event()])
        self.assertEqual(len(res.rejected), 1)
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[daygrid.packer] WARN: rejected event 'z'", combined)

    def test_rejected_event_is_silent_when_obs_disabled(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("daygrid.util.console.eprint") as ep:
            res = pack_events([_zero_event()])
        self.assertEqual(len(res.rejected), 1)
        self.assertFalse(ep.called)

    def test_malformed_rule_logs_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"DAYGRID_OBS_LOG": "yes"}, clear=False), patch("daygrid.util.console.eprint") as ep:
            blocks = build_unavailable_blocks([UnavailableHoursRule(13, 12)], day_start=0, day_end=24, width=1.0)
        self.assertEqual(blocks, [])
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[daygrid.unavailable] WARN: dropping malformed rule #0", combined)

    def test_normalize_skips_bad_records(self) -> None:
        with patch.dict(os.environ, {"DAYGRID_OBS_LOG": "1"}, clear=False), patch("daygrid.util.console.eprint") as ep:
            self.assertIsNone(normalize_event({"id": "x", "start": "9am", "end": "10:00"}))
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[daygrid.normalize] WARN: invalid start/end id='x'", combined)

    def test_normalize_event_fields(self) -> None:
        ev = normalize_event(
            {"uuid": "u1", "start": "09:30", "end": {"hour": 11, "minute": 0}, "date": "2024-01-03", "title": "Sync"},
            base_date="2024-01-01",
        )
        self.assertIsNotNone(ev)
        assert ev is not None
        self.assertEqual((ev.id, ev.start, ev.end, ev.day_index, ev.title), ("u1", TimeOfDay(9, 30), TimeOfDay(11, 0), 2, "Sync"))
        # a date cannot be placed without a base date
        self.assertIsNone(normalize_event({"id": "d", "start": "09:00", "end": "10:00", "date": "2024-01-03"}))


if __name__ == "__main__":
    unittest.main(verbosity=2)
