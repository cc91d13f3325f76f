"""HTTP services that analyse plain-text files, fetch word clouds and store them in MongoDB."""

__version__ = "0.1.0"