import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from hwglance_renderer.models import Metric
from hwglance_renderer.units import (
    GIB,
    TIB,
    format_size,
    format_temp,
    metric,
    percent_of,
    ratio_bar_percent,
    round_half_away,
)


class FormatSizeTests(unittest.TestCase):
    def test_unit_boundaries(self):
        self.assertEqual(format_size(0), "0B")
        self.assertEqual(format_size(1023), "1023B")
        self.assertEqual(format_size(1024), "1K")
        self.assertEqual(format_size(1536), "2K")
        self.assertEqual(format_size(1 << 20), "1M")
        self.assertEqual(format_size(1 << 30), "1G")

    def test_gib_keeps_one_decimal_below_100(self):
        self.assertEqual(format_size(GIB + GIB // 2), "1.5G")
        self.assertEqual(format_size(int(99.94 * GIB)), "99.9G")
        self.assertEqual(format_size(150 * GIB), "150G")

    def test_tib_band(self):
        self.assertEqual(format_size(TIB), "1.0T")
        self.assertEqual(format_size(TIB + TIB // 4), "1.3T")
        self.assertEqual(format_size(200 * TIB), "200T")


class PercentTests(unittest.TestCase):
    def test_percent_of_rounds_and_clamps(self):
        self.assertEqual(percent_of(5, 10), 50)
        self.assertEqual(percent_of(1, 8), 13)
        self.assertEqual(percent_of(11, 10), 100)

    def test_zero_total_is_zero(self):
        self.assertEqual(percent_of(0, 0), 0)
        self.assertEqual(percent_of(7, 0), 0)

    def test_percent_of_is_bounded(self):
        for used in range(0, 101):
            value = percent_of(used, 100)
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 100)

    def test_ratio_bar_percent_squares_ratio(self):
        self.assertEqual(ratio_bar_percent(50, 100), 25)
        self.assertEqual(ratio_bar_percent(100, 100), 100)
        self.assertEqual(ratio_bar_percent(300, 100), 100)
        self.assertEqual(ratio_bar_percent(10, 0), 0)


class RoundingTests(unittest.TestCase):
    def test_halves_round_away_from_zero(self):
        self.assertEqual(round_half_away(0.5), 1)
        self.assertEqual(round_half_away(2.5), 3)
        self.assertEqual(round_half_away(-2.5), -3)
        self.assertEqual(round_half_away(2.49), 2)

    def test_metric(self):
        self.assertEqual(metric(1536, 3072), Metric(raw=1536.0, unit_string="2K", percent=50))

    def test_format_temp(self):
        self.assertEqual(format_temp(None), 0)
        self.assertEqual(format_temp(54.5), 55)


if __name__ == "__main__":
    unittest.main()
