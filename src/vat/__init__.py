"""Virtual assistant chat engine for a modelling host."""

__version__ = "0.1.0"
