import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from hwglance_renderer.table import layout_rows, sized_rows, visible_len

RED = "\x1b[31m"
RESET = "\x1b[0m"


class LayoutRowsTests(unittest.TestCase):
    def test_columns_pad_to_widest_cell(self):
        self.assertEqual(layout_rows(["a;bb", "ccc;d"]), "a   bb\nccc d\n")

    def test_empty_input(self):
        self.assertEqual(layout_rows([]), "")

    def test_single_column(self):
        self.assertEqual(layout_rows(["x", "yyy"]), "x\nyyy\n")

    def test_cell_count_mismatch_fails_fast(self):
        with self.assertRaises(ValueError):
            layout_rows(["a;b", "c"])

    def test_custom_delimiter(self):
        self.assertEqual(layout_rows(["a|b", "cc|d"], delimiter="|"), "a  b\ncc d\n")

    def test_raw_width_counts_escape_sequences(self):
        colored = f"{RED}a{RESET}"
        out = layout_rows([f"{colored};b", "cc;d"])
        self.assertEqual(out, f"{colored} b\ncc{' ' * (len(colored) - 2)} d\n")

    def test_visible_width_ignores_escape_sequences(self):
        colored = f"{RED}a{RESET}"
        out = layout_rows([f"{colored};b", "cc;d"], visible_width=True)
        self.assertEqual(out, f"{colored}  b\ncc d\n")
        self.assertEqual(visible_len(colored), 1)


class SizedRowsTests(unittest.TestCase):
    def test_explicit_widths(self):
        self.assertEqual(sized_rows(["a;b"], [3, 1]), "a   b\n")

    def test_width_count_mismatch(self):
        with self.assertRaises(ValueError):
            sized_rows(["a;b"], [3])


if __name__ == "__main__":
    unittest.main()
