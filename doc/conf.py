import datetime
import os
import sys

sys.path.insert(0, os.path.abspath(".."))

import csb

def copyright_years():
    this_year = datetime.date.today().year
    if this_year == 2026:
        return str(this_year)
    else:
        return "2026–%s" % this_year

project = "csb"
copyright = "%s, csb authors" % copyright_years()
author = "csb authors"
version = "0.1.0"
release = "0.1.0"
master_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx.ext.doctest",
]

# autodoc
autodoc_member_order = "bysource"

# doctest
doctest_global_setup = "import csb"

# intersphinx
intersphinx_mapping = {"python": ("https://docs.python.org/3", None)}

# html
html_theme = "python_docs_theme"
html_last_updated_fmt = "%b %d, %Y"
html_sidebars = {"**": ["localtoc.html", "sourcelink.html"]}
html_theme_options = {"collapsiblesidebar": True}
