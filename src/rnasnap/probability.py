import math
from typing import Optional, Tuple

import matplotlib
from matplotlib.backend_bases import FigureCanvasBase
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Normalize
from matplotlib.figure import Figure

from .config import ValidationError, check_lengths, check_savepath
from .logging_config import get_logger
from .providers import (
    FoldingProvider,
    LayoutProvider,
    PairingProvider,
    ViennaFolding,
    ViennaLayout,
    ViennaPairing,
    base_pair_probabilities,
)
from .styles import DEFAULT_PROB_COLORSCHEME, as_colormap

logger = get_logger(__name__)

AXIS_MARGIN = 20

# Leave out the timestamps matplotlib writes by default
SAVE_METADATA = {
    ".pdf": {"CreationDate": None},
    ".svg": {"Date": None},
}


def supported_formats() -> Tuple[str, ...]:
    """File extensions matplotlib can write, e.g. ('.png', '.pdf', '.svg', ...)"""
    return tuple(sorted("." + ext for ext in FigureCanvasBase.get_supported_filetypes()))


def render_structure_probabilities(
    structure: str,
    sequence: Optional[str] = None,
    savepath: Optional[str] = "",
    layout_type: str = "simple",
    colorscheme: str = DEFAULT_PROB_COLORSCHEME,
    layout: Optional[LayoutProvider] = None,
    pairing: Optional[PairingProvider] = None,
    folding: Optional[FoldingProvider] = None,
) -> Figure:
    """
    Plot a secondary structure with every base colored by its pairing probability.

    The probabilities come from the partition function of ``sequence``. The
    output format follows the extension of ``savepath`` (png, pdf, svg, ...).
    A horizontal colorbar for the probability range [0, 1] sits beneath the plot.
    """
    fmt = check_savepath(savepath, supported_formats())
    check_lengths(structure, sequence)
    if sequence is None or not sequence.strip():
        raise ValidationError("a sequence is required to compute base pair probabilities")
    cmap = as_colormap(colorscheme)

    folding = folding or ViennaFolding()
    pairing = pairing or ViennaPairing()
    layout = layout or ViennaLayout()
    n = len(structure)
    bpp = folding.pair_probabilities(sequence)
    pairs = pairing.pairs(structure)
    xs, ys = layout.coordinates(structure, layout_type)
    probs = base_pair_probabilities(bpp, pairs, n)

    markersize = 100 / math.sqrt(n)
    fig = Figure()
    gs = fig.add_gridspec(2, 1, height_ratios=[24, 1])
    ax = fig.add_subplot(gs[0])
    cax = fig.add_subplot(gs[1])
    ax.set_xlim(round(min(xs)) - AXIS_MARGIN, round(max(xs)) + AXIS_MARGIN)
    ax.set_ylim(round(min(ys)) - AXIS_MARGIN, round(max(ys)) + AXIS_MARGIN)

    for i, j in pairs:
        ax.plot(
            [xs[i - 1], xs[j - 1]],
            [ys[i - 1], ys[j - 1]],
            color="black",
            linestyle=":",
            linewidth=1,
            zorder=1,
        )
    ax.plot(xs, ys, color="black", linewidth=3, zorder=2)
    ax.scatter(
        xs, ys,
        s=markersize ** 2,
        c=probs,
        cmap=cmap,
        vmin=0.0,
        vmax=1.0,
        zorder=3,
    )
    for x, y, base in zip(xs, ys, sequence):
        ax.text(x, y, base, ha="center", va="center", fontsize=markersize / 2, zorder=4)

    ax.set_aspect("equal")
    ax.set_axis_off()
    fig.colorbar(
        ScalarMappable(norm=Normalize(vmin=0.0, vmax=1.0), cmap=cmap),
        cax=cax,
        orientation="horizontal",
    )
    logger.debug("probability plot n=%d pairs=%d layout=%s", n, len(pairs), layout_type)

    if fmt is not None:
        with matplotlib.rc_context({"svg.hashsalt": "rnasnap"}):
            fig.savefig(savepath, metadata=SAVE_METADATA.get(fmt))
        logger.debug("wrote %s", savepath)
    return fig
