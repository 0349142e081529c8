import contextlib
import io
import os
import tempfile
import unittest

from rnasnap.cli import main, parse_colors
from rnasnap.config import ValidationError

try:
    import RNA
except ImportError:
    RNA = None


class TestCLI(unittest.TestCase):
    def test_no_command(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            self.assertEqual(main([]), 0)
        self.assertIn("plot", buf.getvalue())

    def test_bad_output_extension(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "diagram.txt")
            err = io.StringIO()
            with contextlib.redirect_stderr(err):
                code = main(["plot", "--structure", "(((...)))", "--out", path])
            self.assertEqual(code, 1)
            self.assertIn("Error:", err.getvalue())
            self.assertFalse(os.path.exists(path))

    def test_prob_needs_sequence(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main(["prob", "--structure", "(((...)))"])
        self.assertEqual(code, 1)
        self.assertIn("sequence", err.getvalue())

    def test_unbalanced_structure(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main(["plot", "--structure", "((.."])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err.getvalue())
        self.assertIn("unbalanced", err.getvalue())

    @unittest.skipIf(RNA is None, "ViennaRNA not installed")
    def test_unwritable_output(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "missing", "out.png")
            err = io.StringIO()
            with contextlib.redirect_stderr(err):
                code = main(["plot", "--structure", "(((...)))", "--out", path])
            self.assertEqual(code, 1)
            self.assertIn("Error:", err.getvalue())

    def test_parse_colors(self):
        self.assertIsNone(parse_colors(None))
        self.assertEqual(parse_colors("0,0.5,1"), [0.0, 0.5, 1.0])
        with self.assertRaises(ValidationError):
            parse_colors("0,a")


if __name__ == "__main__":
    unittest.main()
