[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "randomart"
version = "0.1.0"
description = "Generate random art from a probabilistic expression grammar, with pure-Python PNG, BMP, TGA, HDR and JPEG encoders"
requires-python = ">=3.10"
dependencies = []
keywords = ["random art", "procedural", "generative", "grammar", "png", "bmp", "tga", "jpeg", "hdr", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
randomart = "randomart.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["randomart"]

[tool.hatch.build.targets.sdist]
include = ["randomart", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
