"""
Catalog package for the confectionery search screen.

This package contains the Toriko API client, the schemas describing
its response, the view-model that holds the screen state, and the
route definitions that let a front-end (for example a mobile shell or
a web page) drive that state: search, refresh, select an item and
open its detail page.
"""

from .router import router as catalog_router  # noqa: F401
