import pathlib
import sys
import tempfile
import unittest

import numpy as np

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from activitytracker.core.models import ActivityRecord  # noqa: E402
from activitytracker.dataio.csv_writer import write_activity_csv  # noqa: E402
from activitytracker.dataio.log_loader import (  # noqa: E402
    load_positions,
    load_records,
    parse_keys,
)


class LogLoaderTest(unittest.TestCase):
    def setUp(self):
        self.records = [
            ActivityRecord(1700000000, 100, 200, ("shift", "a")),
            ActivityRecord(1700000000, 101, 199, ()),
            ActivityRecord(1700000001, -20, 5, ('"', ",", "space")),
        ]

    def test_written_file_loads_back_in_order(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "task_1.csv"
            write_activity_csv(path, self.records)

            self.assertEqual(load_records(path), self.records)

    def test_load_positions_returns_int_array(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "task_2.csv"
            write_activity_csv(path, self.records)

            data = load_positions(path)

        np.testing.assert_array_equal(
            data,
            np.array([[1700000000, 100, 200], [1700000000, 101, 199], [1700000001, -20, 5]]),
        )

    def test_header_only_file_has_no_positions(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "empty.csv"
            path.write_text("timestamp,mouse_x,mouse_y,keys_pressed\n", encoding="utf-8")

            self.assertEqual(load_positions(path).shape, (0, 3))

    def test_rejects_foreign_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "other.csv"
            path.write_text("time,x,y\n1,2,3\n", encoding="utf-8")

            with self.assertRaises(ValueError):
                load_records(path)

    def test_parse_keys(self):
        self.assertEqual(parse_keys(""), ())
        self.assertEqual(parse_keys("ctrl_l+c"), ("ctrl_l", "c"))


if __name__ == "__main__":
    unittest.main()
