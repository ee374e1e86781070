"""reqline - send one HTTP request from the command line."""

__version__ = "0.1.0"
