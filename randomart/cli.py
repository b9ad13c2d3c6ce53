"""Command line entry point: generate a random expression and render it."""

from __future__ import annotations

import argparse
import random
import sys

from randomart.grammar import GenerationError, default_grammar, generate_rule
from randomart.nodes import EvalError, format_node
from randomart.png import write_png
from randomart.render import render


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="randomart", description="Generate a random-art image from a random expression."
    )
    parser.add_argument("-o", "--output", default="output.png", help="PNG file to write")
    parser.add_argument("--width", type=int, default=800, help="image width in pixels")
    parser.add_argument("--height", type=int, default=800, help="image height in pixels")
    parser.add_argument("--depth", type=int, default=30, help="maximum generation depth")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser


def main(argv=None) -> int:
    """Run the generator; return the process exit status."""
    args = _parser().parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        print("ERROR: image dimensions must be positive", file=sys.stderr)
        return 1

    rng = random.Random(args.seed)
    try:
        tree = generate_rule(default_grammar(), 0, args.depth, rng)
    except GenerationError:
        print("ERROR: the generation process could not terminate", file=sys.stderr)
        return 1
    print(format_node(tree))

    try:
        pixels = render(tree, args.width, args.height)
    except EvalError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        write_png(args.output, pixels, args.width, args.height, 4)
    except OSError:
        print(f"[ERROR] Could not save image {args.output}", file=sys.stderr)
        return 1
    print(f"[INFO] Generated {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())