import os
import tempfile
import time
import unittest

from matplotlib.figure import Figure

from rnasnap.config import ValidationError
from rnasnap.probability import render_structure_probabilities, supported_formats

from synthetic import BracketPairing, CircleLayout, FixedFolding


HAIRPIN = "(((...)))"
HAIRPIN_SEQ = "GGGAAACCC"


class TestProbabilityPlot(unittest.TestCase):
    def render(self, **kwargs):
        kwargs.setdefault("layout", CircleLayout())
        kwargs.setdefault("pairing", BracketPairing())
        kwargs.setdefault("folding", FixedFolding([(1, 9), (2, 8), (3, 7)], p=0.8))
        return render_structure_probabilities(HAIRPIN, **kwargs)

    def test_figure(self):
        fig = self.render(sequence=HAIRPIN_SEQ)
        self.assertIsInstance(fig, Figure)
        # plot and colorbar
        self.assertEqual(len(fig.axes), 2)
        ax = fig.axes[0]
        probs = list(ax.collections[0].get_array())
        expected = [0.8, 0.8, 0.8, 1.0, 1.0, 1.0, 0.8, 0.8, 0.8]
        for p, e in zip(probs, expected):
            self.assertAlmostEqual(p, e)
        self.assertEqual([t.get_text() for t in ax.texts], list(HAIRPIN_SEQ))
        # three base pair lines and the backbone
        self.assertEqual(len(ax.lines), 4)

    def test_save_formats(self):
        self.assertIn(".png", supported_formats())
        self.assertIn(".pdf", supported_formats())
        self.assertIn(".svg", supported_formats())
        with tempfile.TemporaryDirectory() as d:
            for ext in (".png", ".svg"):
                path = os.path.join(d, "prob" + ext)
                self.render(sequence=HAIRPIN_SEQ, savepath=path)
                self.assertGreater(os.path.getsize(path), 0)

    def test_saved_bytes_repeatable(self):
        with tempfile.TemporaryDirectory() as d:
            for ext in (".pdf", ".svg", ".png"):
                outputs = []
                for name in ("a", "b"):
                    path = os.path.join(d, name + ext)
                    self.render(sequence=HAIRPIN_SEQ, savepath=path)
                    with open(path, "rb") as f:
                        outputs.append(f.read())
                    time.sleep(1.1)
                self.assertEqual(outputs[0], outputs[1], ext)

    def test_bad_extension(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "prob.txt")
            with self.assertRaises(ValidationError):
                self.render(sequence=HAIRPIN_SEQ, savepath=path)
            self.assertFalse(os.path.exists(path))

    def test_sequence_required(self):
        with self.assertRaises(ValidationError):
            self.render()
        with self.assertRaises(ValidationError):
            self.render(sequence=" " * 9)
        with self.assertRaises(ValidationError):
            self.render(sequence="GGGAAA")

    def test_colorscheme(self):
        fig = self.render(sequence=HAIRPIN_SEQ, colorscheme="viridis")
        self.assertEqual(fig.axes[0].collections[0].get_cmap().name, "viridis")
        with self.assertRaises(ValidationError):
            self.render(sequence=HAIRPIN_SEQ, colorscheme="nope")


if __name__ == "__main__":
    unittest.main()
