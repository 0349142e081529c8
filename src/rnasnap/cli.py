import argparse
import sys

from .config import LAYOUT_TYPES, RenderConfig, ValidationError
from .logging_config import set_log_level
from .probability import render_structure_probabilities
from .renderer import render_structure


def add_common_args(parser):
    """Add arguments shared by the plot and prob commands"""
    parser.add_argument("--structure", required=True, help="Secondary structure in dot-bracket notation")
    parser.add_argument("--sequence", help="Nucleotide sequence, same length as the structure")
    parser.add_argument("--out", default="", help="Output file path (plot: .png, .svg, .pdf; prob: any matplotlib format)")
    parser.add_argument("--layout", choices=LAYOUT_TYPES, default="simple", help="Layout algorithm, [simple]")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug messages")


def parse_colors(text):
    if not text:
        return None
    try:
        return [float(v) for v in text.split(",")]
    except ValueError:
        raise ValidationError(f"--colors must be comma separated numbers, got '{text}'") from None


def run_plot(args):
    config = RenderConfig(
        base_radius=args.base_radius,
        font_size=args.font_size,
        font_path=args.font,
        show_legend=args.legend,
    )
    render_structure(
        args.structure,
        sequence=args.sequence,
        savepath=args.out,
        layout_type=args.layout,
        base_colors=parse_colors(args.colors),
        base_colorscheme=args.colorscheme,
        config=config,
    )


def run_prob(args):
    render_structure_probabilities(
        args.structure,
        sequence=args.sequence,
        savepath=args.out,
        layout_type=args.layout,
        colorscheme=args.colorscheme,
    )


def main(argv=None):
    p = argparse.ArgumentParser(description="rnasnap: RNA secondary structure drawing tool")
    sub = p.add_subparsers(dest="cmd")

    # plot command - circles and lines drawn with Pillow or as SVG
    plot_parser = sub.add_parser("plot", help="Draw a structure, optionally coloring bases by given values")
    add_common_args(plot_parser)
    plot_parser.add_argument("--colors", help="Comma separated base color values between 0 and 1")
    plot_parser.add_argument("--colorscheme", default="whitered", help="Color scale for --colors, [whitered]")
    plot_parser.add_argument("--legend", action="store_true", help="Draw a color scale bar below the structure")
    plot_parser.add_argument("--base-radius", type=int, default=10, help="Radius of the base circles (pixels), [10]")
    plot_parser.add_argument("--font-size", type=int, default=20, help="Font size of the base labels, [20]")
    plot_parser.add_argument("--font", help="TrueType font file for the base labels")

    # prob command - bases colored by base pair probability
    prob_parser = sub.add_parser("prob", help="Draw a structure with bases colored by pairing probability")
    add_common_args(prob_parser)
    prob_parser.add_argument("--colorscheme", default="lightrainbow", help="Color scale, [lightrainbow]")

    args = p.parse_args(argv)

    if args.cmd is None:
        p.print_help()
        return 0

    if args.verbose:
        set_log_level("DEBUG")

    try:
        if args.cmd == "plot":
            run_plot(args)
        elif args.cmd == "prob":
            run_prob(args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: Failed to render '{args.structure}': {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
