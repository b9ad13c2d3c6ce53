"""Random art from a probabilistic expression grammar, with PNG, BMP, TGA, HDR and JPEG encoders."""

__version__ = "0.1.0"