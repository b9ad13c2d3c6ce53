# randomart

Procedural "random art": a small probabilistic grammar grows a random
expression tree over the pixel coordinates `x` and `y`, and that expression
is evaluated for every pixel of the canvas to produce an RGB colour. Each run
gives a different picture unless a seed is given.

The package also contains small, dependency-free image encoders for PNG,
BMP, TGA, Radiance HDR and baseline JPEG, together with the zlib compressor
and checksums the PNG encoder uses.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
randomart
```

The command builds the default grammar, generates a random expression from
rule 0, prints the expression to standard output and renders it as an RGBA
PNG. Options:

* `-o`, `--output` – PNG file to write (default `output.png`)
* `--width`, `--height` – image size in pixels (default 800 × 800)
* `--depth` – maximum generation depth (default 30)
* `--seed` – seed for the random generator, for reproducible images

The command exits with status 1 if the width or height is not positive, if
the generator cannot produce an expression within the depth limit, if the
expression fails to evaluate, or if the image file cannot be written. On
success it reports `[INFO] Generated <file>` on standard error and exits
with status 0.

## Expressions

`randomart.nodes` defines `Node` (a frozen dataclass with a `NodeKind`, an
optional `value` and a tuple of `children`) and helpers to build trees:
`number`, `boolean`, `x`, `y`, `add`, `multi`, `mod`, `greater`, `triple`
and `if_`, plus the grammar-only leaves `random()` and `rule(index)`.

* `evaluate(node, x, y)` reduces a tree to a number, boolean or triple node.
  `mod` follows floating-point `fmod`, giving NaN where that is undefined.
* `eval_color(node, x, y)` requires the result to be a triple of three
  numbers and returns it as a tuple of floats.
* `format_node(node)` (also `str(node)`) gives the printed form, for example
  `(add(x, 0.500000), y, multi(x, y))`.

Type mismatches, and attempts to evaluate `rule` or `random` nodes, raise
`EvalError`.

## Grammars

A `randomart.grammar.Grammar` is a list of rules, each a list of weighted
`Branch(node, probability)` alternatives; `Grammar.add_rule(branches)`
appends a rule and returns its index. `default_grammar()` returns the
grammar used by the command:

* rule 0: a triple of three rule-2 expressions (the colour)
* rule 1: a random number in [-1, 1], `x` or `y`, each with probability 1/3
* rule 2: rule 1 (1/4), the sum of two rule-2 expressions (3/8), or their
  product (3/8)

`generate_rule(grammar, rule, depth, rng)` picks a branch by probability and
expands it with `generate_node`, retrying up to 100 times when a pick runs
out of depth; it raises `GenerationError` when no expression fits. An
unknown rule index or a rule without branches raises `ValueError`. `rng` is
any object with a `random()` method, such as `random.Random`.

## Rendering

`randomart.render.render(node, width, height)` evaluates the expression over
coordinates normalised to [-1, 1] and returns row-major RGBA bytes with
alpha 255. Each channel is mapped by `to_channel`, which sends [-1, 1] to
0–255, wraps values outside that range like a byte, and maps NaN or
infinity to 0.

## Image encoders

Each encoder takes 8-bit interleaved pixels with 1 (grey), 2 (grey + alpha),
3 (RGB) or 4 (RGBA) components, returns the file as `bytes`, and has a
matching `write_*` function that saves to a path:

* `randomart.png`: `encode_png` / `write_png`, with optional row stride,
  forced filter and compression level
* `randomart.bmp`: `encode_bmp` / `write_bmp` (24-bit, or 32-bit with alpha)
* `randomart.tga`: `encode_tga` / `write_tga`, raw or run-length encoded
* `randomart.jpeg`: `encode_jpeg` / `write_jpeg`, quality 1–100, chroma
  subsampled at quality 90 and below
* `randomart.hdr`: `encode_hdr` / `write_hdr` for linear float data, and
  `linear_to_rgbe`

All of them accept `flip_vertically`. Invalid sizes, component counts or
too-short buffers raise `ValueError`. `randomart.deflate.zlib_compress` and
`randomart.checksum` (`crc32`, `adler32`) are usable on their own.

## Example

```python
import random

from randomart.grammar import default_grammar, generate_rule
from randomart.nodes import format_node
from randomart.png import write_png
from randomart.render import render

expression = generate_rule(default_grammar(), 0, 30, random.Random(1))
print(format_node(expression))
write_png("art.png", render(expression, 256, 256), 256, 256, 4)
```

## What it does not do

The package only writes images; it cannot read or display them. Grammars
are built in Python code; there is no file format for loading them, and the
command always uses the default grammar and writes PNG.