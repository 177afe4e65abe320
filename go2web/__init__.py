"""go2web - fetch web pages and search results from the terminal."""

__version__ = "0.1.0"
