"""lighttimer: a single-window countdown timer."""

__version__ = "0.1.0"
