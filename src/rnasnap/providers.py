"""
External layout, pairing and folding engines.

The renderers only talk to the three small protocols below. The default
implementations wrap the ViennaRNA Python bindings (``import RNA``), which
are imported on first use so the drawing code can be exercised with any
other provider.
"""
import threading
from typing import List, Protocol, Sequence, Tuple


PLOT_TYPES = {
    "simple": 0,
    "naview": 1,
    "circular": 2,
    "turtle": 3,
    "puzzler": 4,
}

BRACKETS = {")": "(", "]": "[", "}": "{", ">": "<"}

# ViennaRNA keeps the plot type in a process-wide variable
_plot_type_lock = threading.Lock()


class LayoutProvider(Protocol):
    def coordinates(self, structure: str, layout_type: str) -> Tuple[List[float], List[float]]:
        ...


class PairingProvider(Protocol):
    def pairs(self, structure: str) -> List[Tuple[int, int]]:
        ...


class FoldingProvider(Protocol):
    def pair_probabilities(self, sequence: str) -> Sequence[Sequence[float]]:
        ...


class ViennaLayout:
    def coordinates(self, structure: str, layout_type: str = "simple"):
        import RNA

        if layout_type not in PLOT_TYPES:
            raise ValueError(
                f"unknown layout type '{layout_type}', expected one of {', '.join(PLOT_TYPES)}"
            )
        check_brackets(structure)
        with _plot_type_lock:
            previous = RNA.cvar.rna_plot_type
            RNA.cvar.rna_plot_type = PLOT_TYPES[layout_type]
            try:
                coords = RNA.get_xy_coordinates(structure)
            finally:
                RNA.cvar.rna_plot_type = previous
        xs = []
        ys = []
        for i in range(len(structure)):
            c = coords.get(i)
            xs.append(float(c.X))
            ys.append(float(c.Y))
        return xs, ys


class ViennaPairing:
    def pairs(self, structure: str):
        # ptable_pk crashes the interpreter on unbalanced input
        check_brackets(structure)
        import RNA

        pt = RNA.ptable_pk(structure)
        if not pt or pt[0] != len(structure):
            raise ValueError(f"unbalanced brackets in structure '{structure}'")
        return pairs_from_ptable(pt)


class ViennaFolding:
    def __init__(self, temperature: float = None):
        self.temperature = temperature

    def pair_probabilities(self, sequence: str):
        import RNA

        if self.temperature is not None:
            md = RNA.md()
            md.temperature = self.temperature
            fc = RNA.fold_compound(sequence, md)
        else:
            fc = RNA.fold_compound(sequence)
        fc.pf()
        return fc.bpp()


def check_brackets(structure: str) -> None:
    """Raise ValueError unless every bracket type in structure is balanced"""
    stacks = {opening: [] for opening in BRACKETS.values()}
    for i, c in enumerate(structure, start=1):
        if c in stacks:
            stacks[c].append(i)
        elif c in BRACKETS:
            if not stacks[BRACKETS[c]]:
                raise ValueError(f"unbalanced brackets in structure '{structure}': unmatched '{c}' at {i}")
            stacks[BRACKETS[c]].pop()
    for opening, open_positions in stacks.items():
        if open_positions:
            raise ValueError(
                f"unbalanced brackets in structure '{structure}': unmatched '{opening}' at {open_positions[-1]}"
            )


def pairs_from_ptable(pt: Sequence[int]) -> List[Tuple[int, int]]:
    """Convert a 1-based pair table (pt[0] holds the length) into (i, j) tuples with i < j"""
    out: List[Tuple[int, int]] = []
    for i in range(1, pt[0] + 1):
        j = pt[i]
        if j > i:
            out.append((i, j))
    return out


def base_pair_probabilities(
    bpp: Sequence[Sequence[float]], pairs: Sequence[Tuple[int, int]], n: int
) -> List[float]:
    """
    Probability of each base being in the state the structure puts it in.

    Paired bases get the probability of their pair, unpaired bases the
    probability of staying unpaired. ``bpp`` is 1-based and upper
    triangular, as returned by ViennaRNA.
    """
    partner = {}
    for i, j in pairs:
        partner[i] = j
        partner[j] = i
    probs: List[float] = []
    for i in range(1, n + 1):
        if i in partner:
            a, b = min(i, partner[i]), max(i, partner[i])
            p = bpp[a][b]
        else:
            paired = 0.0
            for k in range(1, n + 1):
                if k < i:
                    paired += bpp[k][i]
                elif k > i:
                    paired += bpp[i][k]
            p = 1.0 - paired
        probs.append(min(1.0, max(0.0, p)))
    return probs
