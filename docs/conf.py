import synthlc

language = "en"
master_doc = "index"

extensions = [
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "autoapi.extension",
]

autoapi_dirs = ["../src"]
autoapi_ignore = ["*_version*", "*/types*", "*test_utils*"]
autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
]

suppress_warnings = ["autoapi.python_import_resolution"]

source_suffix = {".rst": "restructuredtext"}

# General information about the project.
project = "synthlc"
version = synthlc.__version__
release = synthlc.__version__

exclude_patterns = ["_build"]
html_theme = "sphinx_book_theme"
html_title = "synthlc documentation"
html_show_sourcelink = False
