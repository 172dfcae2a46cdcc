# Sphinx configuration for the corridor simulator API docs.
#
# Build with:  sphinx-build -b html docs/source docs/build

import os
import sys

# Project root on sys.path so autodoc can import corridor/ and viewer/.
sys.path.insert(0, os.path.abspath("../.."))

project = "Corridor Sim"
author = "Corridor Sim contributors"
release = "0.1"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",   # NumPy-style docstrings
    "sphinx.ext.viewcode",
    "sphinx_rtd_dark_mode",
]

templates_path = ["_templates"]
exclude_patterns = []

# -- HTML output ---------------------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = []

# The live view needs a display; document it without importing pygame.
autodoc_mock_imports = ["pygame"]
