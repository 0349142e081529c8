import sys
import unittest
from types import SimpleNamespace
from unittest import mock

from rnasnap.providers import (
    ViennaLayout,
    ViennaPairing,
    base_pair_probabilities,
    check_brackets,
    pairs_from_ptable,
)

try:
    import RNA
except ImportError:
    RNA = None


class TestProviders(unittest.TestCase):
    def test_pairs_from_ptable(self):
        pt = (9, 9, 8, 7, 0, 0, 0, 3, 2, 1)
        self.assertEqual(pairs_from_ptable(pt), [(1, 9), (2, 8), (3, 7)])
        self.assertEqual(pairs_from_ptable((4, 0, 0, 0, 0)), [])

    def test_base_pair_probabilities(self):
        n = 5
        bpp = [[0.0] * (n + 1) for _ in range(n + 1)]
        bpp[1][5] = 0.9
        bpp[2][4] = 0.25
        bpp[1][4] = 0.05
        probs = base_pair_probabilities(bpp, [(1, 5)], n)
        self.assertAlmostEqual(probs[0], 0.9)
        self.assertAlmostEqual(probs[4], 0.9)
        # unpaired bases: probability of not pairing with anything
        self.assertAlmostEqual(probs[1], 0.75)
        self.assertAlmostEqual(probs[2], 1.0)
        self.assertAlmostEqual(probs[3], 0.7)

    def test_check_brackets(self):
        check_brackets("(((...)))")
        check_brackets("((..[[))..]]")
        check_brackets("....")
        for bad in ("((..", "(..))", "((..]]", "..[[..", "<<..>"):
            with self.assertRaises(ValueError):
                check_brackets(bad)

    def test_pairing_rejects_unbalanced_before_engine(self):
        with mock.patch.dict(sys.modules, {"RNA": None}):
            with self.assertRaises(ValueError):
                ViennaPairing().pairs("((..")

    def test_probabilities_clamped(self):
        bpp = [[0.0] * 4 for _ in range(4)]
        bpp[1][2] = 0.7
        bpp[1][3] = 0.6
        probs = base_pair_probabilities(bpp, [], 3)
        self.assertEqual(probs[0], 0.0)


@unittest.skipIf(RNA is None, "ViennaRNA not installed")
class TestViennaProviders(unittest.TestCase):
    def test_pairing(self):
        from rnasnap.providers import ViennaPairing

        self.assertEqual(ViennaPairing().pairs("(((...)))"), [(1, 9), (2, 8), (3, 7)])

    def test_folding(self):
        from rnasnap.providers import ViennaFolding

        bpp = ViennaFolding().pair_probabilities("GGGGAAACCCC")
        self.assertEqual(len(bpp), 12)
        self.assertGreater(bpp[1][11], 0.0)

    def test_pairing_unbalanced(self):
        from rnasnap.providers import ViennaPairing

        for bad in ("((..", "(..))", "((..]]"):
            with self.assertRaises(ValueError):
                ViennaPairing().pairs(bad)

    def test_layout_keeps_plot_type(self):
        from rnasnap.providers import ViennaLayout

        before = RNA.cvar.rna_plot_type
        ViennaLayout().coordinates("((..))", "circular")
        self.assertEqual(RNA.cvar.rna_plot_type, before)


def fake_vienna(plot_type=1, fail=False):
    seen = []

    def get_xy_coordinates(structure):
        seen.append(rna.cvar.rna_plot_type)
        if fail:
            raise RuntimeError("layout failed")
        points = [SimpleNamespace(X=float(i), Y=0.0) for i in range(len(structure))]
        return SimpleNamespace(get=points.__getitem__)

    rna = SimpleNamespace(cvar=SimpleNamespace(rna_plot_type=plot_type), get_xy_coordinates=get_xy_coordinates)
    return rna, seen


class TestViennaLayoutPlotType(unittest.TestCase):
    def test_plot_type_restored(self):
        rna, seen = fake_vienna(plot_type=1)
        with mock.patch.dict(sys.modules, {"RNA": rna}):
            xs, ys = ViennaLayout().coordinates("((..))", "circular")
        self.assertEqual(seen, [2])
        self.assertEqual(rna.cvar.rna_plot_type, 1)
        self.assertEqual(xs, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])

    def test_plot_type_restored_on_error(self):
        rna, seen = fake_vienna(plot_type=0, fail=True)
        with mock.patch.dict(sys.modules, {"RNA": rna}):
            with self.assertRaises(RuntimeError):
                ViennaLayout().coordinates("((..))", "turtle")
        self.assertEqual(seen, [3])
        self.assertEqual(rna.cvar.rna_plot_type, 0)

    def test_unbalanced_layout_input(self):
        rna, seen = fake_vienna()
        with mock.patch.dict(sys.modules, {"RNA": rna}):
            with self.assertRaises(ValueError):
                ViennaLayout().coordinates("((..", "simple")
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
